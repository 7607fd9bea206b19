"""Asynchronous calls to the Rekor transparency log REST API."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Sequence, TypeVar

import httpx

from cosignkit.rekor_config import (
    Configuration,
    DecodeError,
    ResponseError,
    TransportError,
    urlencode,
)
from cosignkit.rekor_entries import ProposedEntry, SearchIndex, SearchLogQuery
from cosignkit.rekor_log import (
    ConsistencyProof,
    ErrorResponse,
    LogEntry,
    LogInfo,
    RekorVersion,
)

_T = TypeVar("_T")

_UUID_END = 67
_BODY_START = 69


def parse_response(content: str) -> str:
    """Turn a ``{"<uuid>": {...}}`` response into a flat object with a ``uuid`` key."""
    if len(content) < _BODY_START + 2:
        raise DecodeError(f"log entry response is too short: {content!r}")
    uuid = content[1:_UUID_END]
    rest = content[_BODY_START:-2]
    return '{"uuid": ' + uuid + "," + rest


@asynccontextmanager
async def _open_client(configuration: Configuration) -> AsyncIterator[httpx.AsyncClient]:
    if configuration.client is not None:
        yield configuration.client
    else:
        async with httpx.AsyncClient() as client:
            yield client


def _error_entity(content: str) -> Any:
    try:
        value = json.loads(content)
    except ValueError:
        return None
    if isinstance(value, dict):
        try:
            return ErrorResponse.from_dict(value)
        except ValueError:
            return value
    return value


def _is_error_status(status: int) -> bool:
    return 400 <= status < 600


async def _request(
    configuration: Configuration,
    method: str,
    path: str,
    *,
    params: Sequence[tuple[str, str]] = (),
    body: Any = None,
) -> str:
    """Send a request and return the body of a successful response."""
    url = f"{configuration.base_path}{path}"
    kwargs: dict[str, Any] = {"headers": configuration.headers()}
    if params:
        kwargs["params"] = list(params)
    if body is not None:
        kwargs["json"] = body
    try:
        async with _open_client(configuration) as client:
            response = await client.request(method, url, **kwargs)
            content = response.text
    except httpx.HTTPError as exc:
        raise TransportError(f"request to {url} failed: {exc}") from exc

    if _is_error_status(response.status_code):
        raise ResponseError(response.status_code, content, _error_entity(content))
    return content


def _decode(content: str, build: Callable[[Any], _T]) -> _T:
    try:
        return build(json.loads(content))
    except ValueError as exc:
        raise DecodeError(f"cannot decode response: {exc}") from exc


def _string_list(data: Any) -> list[str]:
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ValueError("expected a list of strings")
    return list(data)


async def create_log_entry(
    configuration: Configuration, proposed_entry: ProposedEntry
) -> LogEntry:
    """Create an entry in the transparency log."""
    content = await _request(
        configuration, "POST", "/api/v1/log/entries", body=proposed_entry.to_dict()
    )
    return _decode(parse_response(content), LogEntry.from_dict)


async def get_log_entry_by_index(configuration: Configuration, log_index: int) -> LogEntry:
    """Fetch an entry of the log by its index."""
    content = await _request(
        configuration,
        "GET",
        "/api/v1/log/entries",
        params=[("logIndex", str(log_index))],
    )
    return _decode(parse_response(content), LogEntry.from_dict)


async def get_log_entry_by_uuid(configuration: Configuration, entry_uuid: str) -> LogEntry:
    """Fetch an entry of the log, with its inclusion proof, by its UUID."""
    content = await _request(
        configuration, "GET", f"/api/v1/log/entries/{urlencode(entry_uuid)}"
    )
    return _decode(parse_response(content), LogEntry.from_dict)


async def search_log_query(configuration: Configuration, entry: SearchLogQuery) -> str:
    """Search the log for entries; return the raw JSON text of the answer."""
    return await _request(
        configuration, "POST", "/api/v1/log/entries/retrieve", body=entry.to_dict()
    )


async def search_index(configuration: Configuration, query: SearchIndex) -> list[str]:
    """Search the index; return the UUIDs of matching entries."""
    content = await _request(
        configuration, "POST", "/api/v1/index/retrieve", body=query.to_dict()
    )
    return _decode(content, _string_list)


async def get_public_key(
    configuration: Configuration, tree_id: str | None = None
) -> str:
    """Return the public key that validates the signed tree head."""
    params = [] if tree_id is None else [("treeID", tree_id)]
    return await _request(configuration, "GET", "/api/v1/log/publicKey", params=params)


async def get_rekor_version(configuration: Configuration) -> RekorVersion:
    """Return the version of the Rekor server."""
    content = await _request(configuration, "GET", "/api/v1/version")
    return _decode(content, RekorVersion.from_dict)


async def get_log_info(configuration: Configuration) -> LogInfo:
    """Return the current root hash and size of the log's Merkle tree."""
    content = await _request(configuration, "GET", "/api/v1/log")
    return _decode(content, LogInfo.from_dict)


async def get_log_proof(
    configuration: Configuration,
    last_size: int,
    first_size: str | None = None,
    tree_id: str | None = None,
) -> ConsistencyProof:
    """Return hashes proving the log is consistent between two tree sizes."""
    params: list[tuple[str, str]] = []
    if first_size is not None:
        params.append(("firstSize", first_size))
    params.append(("lastSize", str(last_size)))
    if tree_id is not None:
        params.append(("treeID", tree_id))
    content = await _request(configuration, "GET", "/api/v1/log/proof", params=params)
    return _decode(content, ConsistencyProof.from_dict)