"""Rekor entries that can be proposed to the log, and search queries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypeVar
from urllib.parse import urlsplit

_E = TypeVar("_E", bound=Enum)

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_present(data: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in data:
        raise ValueError(f"{what}: missing field {key!r}")
    return data[key]


def _check_str(value: Any, key: str, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what}: field {key!r} must be a string")
    return value


def _req_str(data: Mapping[str, Any], key: str, what: str) -> str:
    return _check_str(_require_present(data, key, what), key, what)


def _opt_str(data: Mapping[str, Any], key: str, what: str) -> str | None:
    value = data.get(key)
    return None if value is None else _check_str(value, key, what)


def _opt_list(data: Mapping[str, Any], key: str, what: str) -> list[Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"{what}: field {key!r} must be a list")
    return value


def _check_i32(value: Any, key: str, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what}: field {key!r} must hold integers")
    if not -(1 << 31) <= value < (1 << 31):
        raise ValueError(f"{what}: field {key!r} does not fit in 32 bits")
    return value


def _to_enum(enum_cls: type[_E], value: Any, what: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ValueError(f"{what}: unknown value {value!r}, expected one of {allowed}") from None


class AlgorithmKind(Enum):
    """Hash algorithm used to digest an artifact."""

    SHA256 = "sha256"
    SHA1 = "sha1"


@dataclass
class Hash:
    """Algorithm and value of an artifact's hash."""

    algorithm: AlgorithmKind
    value: str

    def __post_init__(self) -> None:
        self.algorithm = _to_enum(AlgorithmKind, self.algorithm, "hash algorithm")

    @classmethod
    def from_dict(cls, data: Any) -> "Hash":
        what = "hash"
        data = _require_mapping(data, what)
        return cls(
            algorithm=_to_enum(
                AlgorithmKind, _require_present(data, "algorithm", what), "hash algorithm"
            ),
            value=_req_str(data, "value", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"algorithm": self.algorithm.value, "value": self.value}


@dataclass
class Data:
    """The hashed artifact and the URL it can be found at."""

    hash: Hash
    url: str

    def __post_init__(self) -> None:
        if not isinstance(self.url, str):
            raise ValueError("data: field 'url' must be a string")
        scheme = urlsplit(self.url).scheme
        if not scheme or not _SCHEME.fullmatch(scheme):
            raise ValueError(f"data: {self.url!r} is not an absolute URL")

    @classmethod
    def from_dict(cls, data: Any) -> "Data":
        what = "data"
        data = _require_mapping(data, what)
        return cls(
            hash=Hash.from_dict(_require_present(data, "hash", what)),
            url=_req_str(data, "url", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"hash": self.hash.to_dict(), "url": self.url}


@dataclass
class PublicKey:
    """The public key used to sign an artifact."""

    content: str

    @classmethod
    def from_dict(cls, data: Any) -> "PublicKey":
        what = "public key"
        data = _require_mapping(data, what)
        return cls(content=_req_str(data, "content", what))

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content}


@dataclass
class Signature:
    """Signature format, the signature itself and the key that made it."""

    format: str
    content: str
    public_key: PublicKey

    @classmethod
    def from_dict(cls, data: Any) -> "Signature":
        what = "signature"
        data = _require_mapping(data, what)
        return cls(
            format=_req_str(data, "format", what),
            content=_req_str(data, "content", what),
            public_key=PublicKey.from_dict(_require_present(data, "publicKey", what)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "content": self.content,
            "publicKey": self.public_key.to_dict(),
        }


@dataclass
class Spec:
    """Spec of a hashed Rekord: the signature and the signed data."""

    signature: Signature
    data: Data

    @classmethod
    def from_dict(cls, data: Any) -> "Spec":
        what = "spec"
        data = _require_mapping(data, what)
        return cls(
            signature=Signature.from_dict(_require_present(data, "signature", what)),
            data=Data.from_dict(_require_present(data, "data", what)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"signature": self.signature.to_dict(), "data": self.data.to_dict()}


@dataclass
class Hashedrekord:
    """Hashed Rekord object."""

    kind: str
    api_version: str
    spec: Spec

    @classmethod
    def from_dict(cls, data: Any) -> "Hashedrekord":
        what = "hashedrekord"
        data = _require_mapping(data, what)
        return cls(
            kind=_req_str(data, "kind", what),
            api_version=_req_str(data, "apiVersion", what),
            spec=Spec.from_dict(_require_present(data, "spec", what)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "apiVersion": self.api_version,
            "spec": self.spec.to_dict(),
        }


class EntryKind(Enum):
    """The kinds of entry the log accepts."""

    ALPINE = "alpine"
    HASHEDREKORD = "hashedrekord"
    HELM = "helm"
    INTOTO = "intoto"
    JAR = "jar"
    REKORD = "rekord"
    RFC3161 = "rfc3161"
    RPM = "rpm"
    TUF = "tuf"


@dataclass
class ProposedEntry:
    """An entry proposed to the log, tagged by its kind.

    For ``EntryKind.HASHEDREKORD`` the spec is a :class:`Spec`; for every
    other kind it is free-form JSON.
    """

    kind: EntryKind
    api_version: str
    spec: Any

    def __post_init__(self) -> None:
        self.kind = _to_enum(EntryKind, self.kind, "proposed entry kind")
        if self.kind is EntryKind.HASHEDREKORD and not isinstance(self.spec, Spec):
            self.spec = Spec.from_dict(self.spec)

    @classmethod
    def from_dict(cls, data: Any) -> "ProposedEntry":
        what = "proposed entry"
        data = _require_mapping(data, what)
        kind = _to_enum(
            EntryKind, _require_present(data, "kind", what), "proposed entry kind"
        )
        api_version = _req_str(data, "apiVersion", what)
        raw_spec = _require_present(data, "spec", what)
        spec = Spec.from_dict(raw_spec) if kind is EntryKind.HASHEDREKORD else raw_spec
        return cls(kind=kind, api_version=api_version, spec=spec)

    def to_dict(self) -> dict[str, Any]:
        spec = self.spec.to_dict() if isinstance(self.spec, Spec) else self.spec
        return {"kind": self.kind.value, "apiVersion": self.api_version, "spec": spec}


class Format(Enum):
    """The supported pluggable types to sign and upload data."""

    PGP = "pgp"
    X509 = "x509"
    MINISIGN = "minisign"
    SSH = "ssh"
    TUF = "tuf"


@dataclass
class SearchIndexPublicKey:
    """A public key to search the index by."""

    format: Format = Format.PGP
    content: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        self.format = _to_enum(Format, self.format, "public key format")

    @classmethod
    def from_dict(cls, data: Any) -> "SearchIndexPublicKey":
        what = "search index public key"
        data = _require_mapping(data, what)
        return cls(
            format=_to_enum(
                Format, _require_present(data, "format", what), "public key format"
            ),
            content=_opt_str(data, "content", what),
            url=_opt_str(data, "url", what),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"format": self.format.value}
        if self.content is not None:
            result["content"] = self.content
        if self.url is not None:
            result["url"] = self.url
        return result


@dataclass
class SearchIndex:
    """Query for the index: by e-mail, public key or artifact hash."""

    email: str | None = None
    public_key: SearchIndexPublicKey | None = None
    hash: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SearchIndex":
        what = "search index"
        data = _require_mapping(data, what)
        key = data.get("publicKey")
        return cls(
            email=_opt_str(data, "email", what),
            public_key=None if key is None else SearchIndexPublicKey.from_dict(key),
            hash=_opt_str(data, "hash", what),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.email is not None:
            result["email"] = self.email
        if self.public_key is not None:
            result["publicKey"] = self.public_key.to_dict()
        if self.hash is not None:
            result["hash"] = self.hash
        return result


@dataclass
class SearchLogQuery:
    """Query for log entries by UUID, log index or entry content."""

    entry_uuids: list[str] | None = None
    log_indexes: list[int] | None = None
    entries: list[ProposedEntry] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: Any) -> "SearchLogQuery":
        what = "search log query"
        data = _require_mapping(data, what)
        uuids = _opt_list(data, "entryUUIDs", what)
        indexes = _opt_list(data, "logIndexes", what)
        entries = _opt_list(data, "entries", what)
        return cls(
            entry_uuids=None
            if uuids is None
            else [_check_str(item, "entryUUIDs", what) for item in uuids],
            log_indexes=None
            if indexes is None
            else [_check_i32(item, "logIndexes", what) for item in indexes],
            entries=None
            if entries is None
            else [ProposedEntry.from_dict(item) for item in entries],
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.entry_uuids is not None:
            result["entryUUIDs"] = list(self.entry_uuids)
        if self.log_indexes is not None:
            result["logIndexes"] = list(self.log_indexes)
        if self.entries is not None:
            result["entries"] = [entry.to_dict() for entry in self.entries]
        return result