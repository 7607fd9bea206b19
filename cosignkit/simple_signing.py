"""Container signature payloads in the "simple signing" JSON format."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_str(data: Mapping[str, Any], key: str, what: str) -> str:
    if key not in data:
        raise ValueError(f"{what}: missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{what}: field {key!r} must be a string")
    return value


def _annotation_text(value: Any) -> str | None:
    """Render a JSON scalar the way it is compared against an annotation."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


@dataclass
class Image:
    """The image a signature refers to."""

    docker_manifest_digest: str

    @classmethod
    def from_dict(cls, data: Any) -> "Image":
        data = _require_mapping(data, "image")
        return cls(_require_str(data, "docker-manifest-digest", "image"))

    def to_dict(self) -> dict[str, Any]:
        return {"docker-manifest-digest": self.docker_manifest_digest}


@dataclass
class Identity:
    """The reference the image was signed under."""

    docker_reference: str

    @classmethod
    def from_dict(cls, data: Any) -> "Identity":
        data = _require_mapping(data, "identity")
        return cls(_require_str(data, "docker-reference", "identity"))

    def to_dict(self) -> dict[str, Any]:
        return {"docker-reference": self.docker_reference}


@dataclass
class Critical:
    """The part of the payload every verifier must understand."""

    type_name: str
    image: Image
    identity: Identity

    @classmethod
    def from_dict(cls, data: Any) -> "Critical":
        data = _require_mapping(data, "critical")
        type_name = _require_str(data, "type", "critical")
        for key in ("image", "identity"):
            if key not in data:
                raise ValueError(f"critical: missing field {key!r}")
        return cls(
            type_name=type_name,
            image=Image.from_dict(data["image"]),
            identity=Identity.from_dict(data["identity"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "image": self.image.to_dict(),
            "identity": self.identity.to_dict(),
        }


@dataclass
class OptionalInfo:
    """Optional payload data: creator, timestamp and free-form annotations."""

    creator: str | None = None
    timestamp: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OptionalInfo":
        data = dict(_require_mapping(data, "optional"))
        creator = data.pop("creator", None)
        timestamp = data.pop("timestamp", None)
        if creator is not None and not isinstance(creator, str):
            raise ValueError("optional: field 'creator' must be a string")
        if timestamp is not None and (
            isinstance(timestamp, bool) or not isinstance(timestamp, int)
        ):
            raise ValueError("optional: field 'timestamp' must be an integer")
        return cls(creator=creator, timestamp=timestamp, extra=data)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "creator": self.creator,
            "timestamp": self.timestamp,
        }
        result.update(self.extra)
        return result

    def satisfies_annotations(self, annotations: Mapping[str, str]) -> bool:
        """Return True when every annotation is present with the same value."""
        if not self.extra:
            logger.info(
                "annotations %r not satisfied: the payload carries no annotations",
                annotations,
            )
            return False

        for key, expected in annotations.items():
            if key not in self.extra:
                logger.info(
                    "annotation %r missing from %r", key, self.extra
                )
                return False
            current = self.extra[key]
            rendered = _annotation_text(current)
            if rendered is None:
                logger.error(
                    "annotation %r has unsupported value %r (expected %r)",
                    key,
                    current,
                    expected,
                )
                return False
            if rendered != expected:
                logger.info(
                    "annotation %r not satisfied: expected %r, found %r",
                    key,
                    expected,
                    rendered,
                )
                return False
        return True


@dataclass
class SimpleSigning:
    """A container signature payload."""

    critical: Critical
    optional: OptionalInfo | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SimpleSigning":
        data = _require_mapping(data, "simple signing payload")
        if "critical" not in data:
            raise ValueError("simple signing payload: missing field 'critical'")
        optional = data.get("optional")
        return cls(
            critical=Critical.from_dict(data["critical"]),
            optional=None if optional is None else OptionalInfo.from_dict(optional),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "SimpleSigning":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "critical": self.critical.to_dict(),
            "optional": None if self.optional is None else self.optional.to_dict(),
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def satisfies_annotations(self, annotations: Mapping[str, str]) -> bool:
        """Return True when all the given annotations are satisfied."""
        if not annotations:
            logger.debug("no annotations have been provided")
            return True
        if self.optional is None:
            logger.info(
                "annotations %r not satisfied: payload has no optional section",
                annotations,
            )
            return False
        return self.optional.satisfies_annotations(annotations)

    def satisfies_manifest_digest(self, expected_digest: str) -> bool:
        """Return True when the signed manifest digest equals the expected one."""
        matches = self.critical.image.docker_manifest_digest == expected_digest
        if not matches:
            logger.info("expected digest %r not found", expected_digest)
        return matches