import gzip
import hashlib
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from .errors import ObjectNotFoundError

logger = logging.getLogger(__name__)

OBJECT_KINDS = ("blob", "commit")
DIGEST = re.compile(r"[0-9a-f]{40}")


def compute_digest(kind: str, data: bytes) -> str:
    hasher = hashlib.sha1()
    hasher.update(f"{kind} ".encode())
    hasher.update(data)
    return hasher.hexdigest()


class ObjectStore(ABC):
    """Immutable key-value store for blobs and commits.

    Writes are idempotent: putting bytes that are already present is a
    no-op. There is no delete.
    """

    def put(self, kind: str, data: bytes) -> str:
        """Store ``data`` under its digest and return the digest."""
        if kind not in OBJECT_KINDS:
            raise ValueError(f"unknown object kind: {kind}")
        if not isinstance(data, bytes):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        digest = compute_digest(kind, data)
        if self.contains(kind, digest):
            return digest
        self._write(kind, digest, data)
        logger.debug("stored %s %s (%d bytes)", kind, digest, len(data))
        return digest

    def get(self, kind: str, digest: str) -> bytes:
        """Return the stored bytes, raising ObjectNotFoundError if absent."""
        data = self._read(kind, digest)
        if data is None:
            raise ObjectNotFoundError(f"No {kind} with id {digest} exists.")
        return data

    @abstractmethod
    def contains(self, kind: str, digest: str) -> bool:
        """Check if an object of this kind exists."""

    @abstractmethod
    def digests(self, kind: str) -> Iterable[str]:
        """Iterate over every stored digest of one kind."""

    @abstractmethod
    def _read(self, kind: str, digest: str) -> bytes | None:
        """Read raw bytes, or None if not found."""

    @abstractmethod
    def _write(self, kind: str, digest: str, data: bytes) -> None:
        """Write raw bytes for a digest not yet stored."""


class MemoryObjectStore(ObjectStore):
    """Object store held in a dict. Nothing survives the process."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}

    def contains(self, kind: str, digest: str) -> bool:
        return (kind, digest) in self.objects

    def digests(self, kind: str) -> Iterable[str]:
        return sorted(d for k, d in self.objects if k == kind)

    def _read(self, kind: str, digest: str) -> bytes | None:
        return self.objects.get((kind, digest))

    def _write(self, kind: str, digest: str, data: bytes) -> None:
        self.objects[(kind, digest)] = data


class DiskObjectStore(ObjectStore):
    """Gzip-compressed objects at ``<directory>/<kind>/<digest[:2]>/<digest[2:]>``."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _object_path(self, kind: str, digest: str) -> Path:
        return self.directory / kind / digest[:2] / digest[2:]

    def contains(self, kind: str, digest: str) -> bool:
        if not DIGEST.fullmatch(digest):
            return False
        return self._object_path(kind, digest).is_file()

    def digests(self, kind: str) -> Iterable[str]:
        kind_dir = self.directory / kind
        if not kind_dir.is_dir():
            return
        for fanout in sorted(kind_dir.iterdir()):
            if not fanout.is_dir():
                continue
            for item in sorted(fanout.iterdir()):
                if item.suffix == ".tmp":
                    continue
                yield fanout.name + item.name

    def _read(self, kind: str, digest: str) -> bytes | None:
        if not self.contains(kind, digest):
            return None
        with gzip.open(self._object_path(kind, digest), "rb") as f:
            return f.read()

    def _write(self, kind: str, digest: str, data: bytes) -> None:
        dest_path = self._object_path(kind, digest)
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = dest_path.with_suffix(".tmp")
        with gzip.open(tmp_path, "wb") as f_out:
            f_out.write(data)
        tmp_path.replace(dest_path)
