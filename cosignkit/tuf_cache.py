"""Fetch TUF targets, reusing a local on-disk cache when it is up to date."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping

from cosignkit.tuf_constants import REKOR_PUB_KEY_TARGET, is_fulcio_cert_target

logger = logging.getLogger(__name__)


class TufTargetNotFoundError(LookupError):
    """A target is not listed in, or cannot be read from, the TUF repository."""

    def __init__(self, target_name: str) -> None:
        super().__init__(f"TUF target not found: {target_name}")
        self.target_name = target_name


@dataclass
class TargetRepository:
    """Targets known from trusted TUF metadata, with a way to download them.

    ``hashes`` maps each target name to the hex SHA-256 digest recorded in the
    targets metadata. ``fetcher`` returns the raw bytes of a target, or None
    when the target cannot be found at its location.
    """

    hashes: Mapping[str, str]
    fetcher: Callable[[str], bytes | None]

    def target_sha256(self, target_name: str) -> bytes:
        """Return the SHA-256 digest recorded for a target."""
        try:
            digest = self.hashes[target_name]
        except KeyError:
            raise TufTargetNotFoundError(target_name) from None
        return bytes.fromhex(digest)

    def target_names(self) -> list[str]:
        """Return the names of all targets, in metadata order."""
        return list(self.hashes)

    def read_target(self, target_name: str) -> bytes | None:
        """Download a target, checking it against the recorded digest.

        Returns None for a target that the metadata does not list or that the
        fetcher cannot find. Raises ValueError when the content does not match.
        """
        if target_name not in self.hashes:
            return None
        data = self.fetcher(target_name)
        if data is None:
            return None
        if hashlib.sha256(data).digest() != self.target_sha256(target_name):
            raise ValueError(
                f"TUF target {target_name!r} does not match its recorded sha256 digest"
            )
        return data


def fetch_target(repository: TargetRepository, target_name: str) -> bytes:
    """Download a target from the repository."""
    data = repository.read_target(target_name)
    if data is None:
        raise TufTargetNotFoundError(target_name)
    return data


def is_local_file_outdated(
    repository: TargetRepository, target_name: str, local_file: Path | str
) -> tuple[bool, str | None]:
    """Compare a local file's checksum with the one in the TUF metadata.

    Returns ``(False, contents)`` when the local copy is current and
    ``(True, None)`` when it is missing or differs.
    """
    expected = repository.target_sha256(target_name)
    path = Path(local_file)
    if not path.exists():
        return True, None
    raw = path.read_bytes()
    text = raw.decode("utf-8")
    if hashlib.sha256(raw).digest() == expected:
        return False, text
    return True, None


def fetch_target_or_reuse_local_cache(
    repository: TargetRepository,
    target_name: str,
    local_file: Path | str | None,
) -> bytes:
    """Return a target's contents, using and refreshing ``local_file`` if given.

    The local copy is reused when its digest matches the metadata; otherwise
    the target is downloaded and, when a path was given, written there.
    """
    if local_file is None:
        outdated, contents = True, None
    else:
        outdated, contents = is_local_file_outdated(repository, target_name, local_file)

    if not outdated and contents is not None:
        return contents.encode("utf-8")

    data = fetch_target(repository, target_name)
    if local_file is not None:
        logger.debug("updating local copy of %s at %s", target_name, local_file)
        Path(local_file).write_bytes(data)
    return data


class RepositoryHelper:
    """Reads Fulcio certificates and the Rekor public key from a repository."""

    def __init__(
        self, repository: TargetRepository, checkout_dir: Path | str | None = None
    ) -> None:
        self.repository = repository
        self.checkout_dir = None if checkout_dir is None else Path(checkout_dir)

    def _local_path(self, target_name: str) -> Path | None:
        return None if self.checkout_dir is None else self.checkout_dir / target_name

    def fulcio_cert_target_names(self) -> list[str]:
        """Return the names of the targets holding Fulcio certificates."""
        return [
            name for name in self.repository.target_names() if is_fulcio_cert_target(name)
        ]

    def fulcio_certs(self) -> list[bytes]:
        """Return the PEM data of every Fulcio certificate."""
        return [
            fetch_target_or_reuse_local_cache(
                self.repository, name, self._local_path(name)
            )
            for name in self.fulcio_cert_target_names()
        ]

    def rekor_pub_key(self) -> bytes:
        """Return the Rekor public key."""
        return fetch_target_or_reuse_local_cache(
            self.repository,
            REKOR_PUB_KEY_TARGET,
            self._local_path(REKOR_PUB_KEY_TARGET),
        )