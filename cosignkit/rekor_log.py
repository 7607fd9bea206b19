"""Rekor transparency log records: log state, proofs and log entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


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


def _check_int(value: Any, key: str, what: str, bits: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what}: field {key!r} must be an integer")
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{what}: field {key!r} does not fit in {bits} bits")
    return value


def _req_str(data: Mapping[str, Any], key: str, what: str) -> str:
    return _check_str(_require_present(data, key, what), key, what)


def _opt_str(data: Mapping[str, Any], key: str, what: str) -> str | None:
    value = data.get(key)
    return None if value is None else _check_str(value, key, what)


def _req_int(data: Mapping[str, Any], key: str, what: str, bits: int) -> int:
    return _check_int(_require_present(data, key, what), key, what, bits)


def _opt_int(data: Mapping[str, Any], key: str, what: str, bits: int) -> int | None:
    value = data.get(key)
    return None if value is None else _check_int(value, key, what, bits)


def _req_str_list(data: Mapping[str, Any], key: str, what: str) -> list[str]:
    value = _require_present(data, key, what)
    if not isinstance(value, list):
        raise ValueError(f"{what}: field {key!r} must be a list")
    return [_check_str(item, key, what) for item in value]


@dataclass
class ConsistencyProof:
    """Hashes proving the log grew consistently between two tree sizes."""

    root_hash: str = ""
    hashes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ConsistencyProof":
        what = "consistency proof"
        data = _require_mapping(data, what)
        return cls(
            root_hash=_req_str(data, "rootHash", what),
            hashes=_req_str_list(data, "hashes", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"rootHash": self.root_hash, "hashes": list(self.hashes)}


@dataclass
class ErrorResponse:
    """An error body returned by the Rekor server."""

    code: int | None = None
    message: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ErrorResponse":
        what = "error"
        data = _require_mapping(data, what)
        return cls(
            code=_opt_int(data, "code", what, 32),
            message=_opt_str(data, "message", what),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.code is not None:
            result["code"] = self.code
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass
class InactiveShardLogInfo:
    """State of a log shard that no longer accepts entries."""

    root_hash: str = ""
    tree_size: int = 0
    signed_tree_head: str = ""
    tree_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "InactiveShardLogInfo":
        what = "inactive shard log info"
        data = _require_mapping(data, what)
        return cls(
            root_hash=_req_str(data, "rootHash", what),
            tree_size=_req_int(data, "treeSize", what, 32),
            signed_tree_head=_req_str(data, "signedTreeHead", what),
            tree_id=_req_str(data, "treeID", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rootHash": self.root_hash,
            "treeSize": self.tree_size,
            "signedTreeHead": self.signed_tree_head,
            "treeID": self.tree_id,
        }


@dataclass
class InclusionProof:
    """Hashes proving an entry is included in the log, from leaf to root."""

    log_index: int = 0
    root_hash: str = ""
    tree_size: int = 0
    hashes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "InclusionProof":
        what = "inclusion proof"
        data = _require_mapping(data, what)
        return cls(
            log_index=_req_int(data, "logIndex", what, 64),
            root_hash=_req_str(data, "rootHash", what),
            tree_size=_req_int(data, "treeSize", what, 64),
            hashes=_req_str_list(data, "hashes", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "logIndex": self.log_index,
            "rootHash": self.root_hash,
            "treeSize": self.tree_size,
            "hashes": list(self.hashes),
        }


@dataclass
class LogInfo:
    """Current root hash and size of the log's Merkle tree."""

    root_hash: str = ""
    tree_size: int = 0
    signed_tree_head: str = ""
    tree_id: str | None = None
    inactive_shards: list[InactiveShardLogInfo] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "LogInfo":
        what = "log info"
        data = _require_mapping(data, what)
        shards = data.get("inactiveShards")
        if shards is not None:
            if not isinstance(shards, list):
                raise ValueError(f"{what}: field 'inactiveShards' must be a list")
            shards = [InactiveShardLogInfo.from_dict(item) for item in shards]
        return cls(
            root_hash=_req_str(data, "rootHash", what),
            tree_size=_req_int(data, "treeSize", what, 32),
            signed_tree_head=_req_str(data, "signedTreeHead", what),
            tree_id=_opt_str(data, "treeID", what),
            inactive_shards=shards,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "rootHash": self.root_hash,
            "treeSize": self.tree_size,
            "signedTreeHead": self.signed_tree_head,
            "treeID": self.tree_id,
        }
        if self.inactive_shards is not None:
            result["inactiveShards"] = [s.to_dict() for s in self.inactive_shards]
        return result


@dataclass
class RekorVersion:
    """Version information reported by the Rekor server."""

    version: str = ""
    commit: str = ""
    treestate: str = ""
    builddate: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "RekorVersion":
        what = "rekor version"
        data = _require_mapping(data, what)
        return cls(
            version=_req_str(data, "version", what),
            commit=_req_str(data, "commit", what),
            treestate=_req_str(data, "treestate", what),
            builddate=_req_str(data, "builddate", what),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "commit": self.commit,
            "treestate": self.treestate,
            "builddate": self.builddate,
        }


@dataclass
class Attestation:
    """Attestation attached to a log entry; its content is not interpreted."""

    dummy: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Attestation":
        what = "attestation"
        data = _require_mapping(data, what)
        return cls(dummy=_opt_str(data, "dummy", what))

    def to_dict(self) -> dict[str, Any]:
        return {} if self.dummy is None else {"dummy": self.dummy}


@dataclass
class EntryInclusionProof:
    """Inclusion proof as it appears inside a log entry's verification."""

    hashes: list[str] = field(default_factory=list)
    log_index: int = 0
    root_hash: str = ""
    tree_size: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "EntryInclusionProof":
        what = "inclusion proof"
        data = _require_mapping(data, what)
        return cls(
            hashes=_req_str_list(data, "hashes", what),
            log_index=_req_int(data, "logIndex", what, 64),
            root_hash=_req_str(data, "rootHash", what),
            tree_size=_req_int(data, "treeSize", what, 64),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hashes": list(self.hashes),
            "logIndex": self.log_index,
            "rootHash": self.root_hash,
            "treeSize": self.tree_size,
        }


@dataclass
class Verification:
    """Signed entry timestamp and optional inclusion proof of an entry."""

    inclusion_proof: EntryInclusionProof | None = None
    signed_entry_timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Verification":
        what = "verification"
        data = _require_mapping(data, what)
        proof = data.get("inclusionProof")
        return cls(
            inclusion_proof=None if proof is None else EntryInclusionProof.from_dict(proof),
            signed_entry_timestamp=_req_str(data, "signedEntryTimestamp", what),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.inclusion_proof is not None:
            result["inclusionProof"] = self.inclusion_proof.to_dict()
        result["signedEntryTimestamp"] = self.signed_entry_timestamp
        return result


@dataclass
class LogEntry:
    """An entry of the transparency log as returned by the server."""

    uuid: str = ""
    attestation: Attestation | None = None
    body: str = ""
    integrated_time: int = 0
    log_id: str = ""
    log_index: int = 0
    verification: Verification = field(default_factory=Verification)

    @classmethod
    def from_dict(cls, data: Any) -> "LogEntry":
        what = "log entry"
        data = _require_mapping(data, what)
        attestation = data.get("attestation")
        return cls(
            uuid=_req_str(data, "uuid", what),
            attestation=None if attestation is None else Attestation.from_dict(attestation),
            body=_req_str(data, "body", what),
            integrated_time=_req_int(data, "integratedTime", what, 64),
            log_id=_req_str(data, "logID", what),
            log_index=_req_int(data, "logIndex", what, 64),
            verification=Verification.from_dict(
                _require_present(data, "verification", what)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"uuid": self.uuid}
        if self.attestation is not None:
            result["attestation"] = self.attestation.to_dict()
        result.update(
            {
                "body": self.body,
                "integratedTime": self.integrated_time,
                "logID": self.log_id,
                "logIndex": self.log_index,
                "verification": self.verification.to_dict(),
            }
        )
        return result