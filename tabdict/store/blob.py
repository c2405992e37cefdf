"""Key to bytes storage backends."""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Set

from ..errors import StorageError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Minimal persistent key-value blob storage."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return whether a blob is stored under ``key``."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read the blob stored under ``key``."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Write ``data`` under ``key``, replacing any previous blob."""

    @abstractmethod
    def ensure_namespace(self, prefix: str) -> None:
        """Create the namespace (directory) ``prefix`` if needed."""


class LocalBlobStore(BlobStore):
    """Blobs stored as files below a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        root = self.root.resolve()
        if path != root and root not in path.parents:
            raise StorageError(f"Key escapes store root: {key}")
        return path

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def get(self, key: str) -> bytes:
        try:
            return self._path(key).read_bytes()
        except OSError as exc:
            raise StorageError(f"Cannot read blob {key}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as exc:
            raise StorageError(f"Cannot write blob {key}: {exc}") from exc
        # Readers see either the old blob or the complete new one.
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write blob {key}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def ensure_namespace(self, prefix: str) -> None:
        try:
            self._path(prefix).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create namespace {prefix}: {exc}") from exc


class MemoryBlobStore(BlobStore):
    """In-process blob store."""

    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}
        self.namespaces: Set[str] = set()

    def exists(self, key: str) -> bool:
        return key in self.blobs

    def get(self, key: str) -> bytes:
        try:
            return self.blobs[key]
        except KeyError:
            raise StorageError(f"No blob stored under {key}") from None

    def put(self, key: str, data: bytes) -> None:
        self.blobs[key] = bytes(data)

    def ensure_namespace(self, prefix: str) -> None:
        self.namespaces.add(prefix)
