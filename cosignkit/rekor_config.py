"""Client configuration and errors for the Rekor transparency log API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus

import httpx

DEFAULT_BASE_PATH = "http://rekor.sigstore.dev"
DEFAULT_USER_AGENT = "OpenAPI-Generator/0.0.1/python"


def urlencode(value: str) -> str:
    """Encode a value the way HTML forms do: spaces become ``+``."""
    return quote_plus(value, safe="*").replace("~", "%7E")


@dataclass
class ApiKey:
    """An API key with an optional prefix."""

    key: str
    prefix: str | None = None


@dataclass
class Configuration:
    """Where the Rekor server lives and how to talk to it.

    ``client`` is an optional shared ``httpx.AsyncClient``; when it is None a
    client is created for each call.
    """

    base_path: str = DEFAULT_BASE_PATH
    user_agent: str | None = DEFAULT_USER_AGENT
    client: httpx.AsyncClient | None = None
    basic_auth: tuple[str, str | None] | None = None
    oauth_access_token: str | None = None
    bearer_access_token: str | None = None
    api_key: ApiKey | None = None

    def headers(self) -> dict[str, str]:
        """Return the headers sent with every request."""
        return {} if self.user_agent is None else {"User-Agent": self.user_agent}


class RekorError(Exception):
    """Base class of errors raised by Rekor API calls."""


class TransportError(RekorError):
    """The request could not be sent or the response could not be read."""


class DecodeError(RekorError):
    """A successful response body could not be decoded."""


class ResponseError(RekorError):
    """The server answered with a client or server error status."""

    def __init__(self, status: int, content: str, entity: Any = None) -> None:
        super().__init__(f"error in response: status code {status}")
        self.status = status
        self.content = content
        self.entity = entity