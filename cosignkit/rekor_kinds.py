"""Rekor entry kinds that carry a free-form JSON ``spec``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_present(data: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in data:
        raise ValueError(f"{what}: missing field {key!r}")
    return data[key]


def _require_str(data: Mapping[str, Any], key: str, what: str) -> str:
    value = _require_present(data, key, what)
    if not isinstance(value, str):
        raise ValueError(f"{what}: field {key!r} must be a string")
    return value


@dataclass
class TypedEntry:
    """An entry with a kind, an API version and a JSON spec."""

    kind: str = ""
    api_version: str = ""
    spec: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "TypedEntry":
        what = cls.__name__
        data = _require_mapping(data, what)
        return cls(
            kind=_require_str(data, "kind", what),
            api_version=_require_str(data, "apiVersion", what),
            spec=_require_present(data, "spec", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "apiVersion": self.api_version, "spec": self.spec}


@dataclass
class TypedEntryAllOf:
    """The kind-independent part of an entry: API version and JSON spec."""

    api_version: str = ""
    spec: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "TypedEntryAllOf":
        what = cls.__name__
        data = _require_mapping(data, what)
        return cls(
            api_version=_require_str(data, "apiVersion", what),
            spec=_require_present(data, "spec", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"apiVersion": self.api_version, "spec": self.spec}


@dataclass
class Alpine(TypedEntry):
    """Alpine package."""


@dataclass
class AlpineAllOf(TypedEntryAllOf):
    """Version and spec of an Alpine package entry."""


@dataclass
class HashedrekordAllOf(TypedEntryAllOf):
    """Version and spec of a hashed Rekord entry."""


@dataclass
class Helm(TypedEntry):
    """Helm chart."""


@dataclass
class HelmAllOf(TypedEntryAllOf):
    """Version and spec of a Helm chart entry."""


@dataclass
class Intoto(TypedEntry):
    """In-toto object."""


@dataclass
class IntotoAllOf(TypedEntryAllOf):
    """Version and spec of an in-toto entry."""


@dataclass
class Jar(TypedEntry):
    """Java Archive (JAR)."""


@dataclass
class JarAllOf(TypedEntryAllOf):
    """Version and spec of a JAR entry."""


@dataclass
class Rekord(TypedEntry):
    """Rekord object."""


@dataclass
class RekordAllOf(TypedEntryAllOf):
    """Version and spec of a Rekord entry."""


@dataclass
class Rfc3161(TypedEntry):
    """RFC 3161 timestamp."""


@dataclass
class Rfc3161AllOf(TypedEntryAllOf):
    """Version and spec of an RFC 3161 timestamp entry."""


@dataclass
class Rpm(TypedEntry):
    """RPM package."""


@dataclass
class RpmAllOf(TypedEntryAllOf):
    """Version and spec of an RPM package entry."""


@dataclass
class Tuf(TypedEntry):
    """TUF metadata."""


@dataclass
class TufAllOf(TypedEntryAllOf):
    """Version and spec of a TUF metadata entry."""