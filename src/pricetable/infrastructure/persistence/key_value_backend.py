"""Raw string key/value storage underneath the collection store.

This is the local equivalent of a browser's ``localStorage``: string
keys, string values, synchronous access, an optional size quota.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from pricetable.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueBackend(ABC):

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored at *key*, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* at *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*; deleting an absent key is not an error."""


class FileKeyValueBackend(KeyValueBackend):
    """One UTF-8 ``<key>.json`` file per key inside *directory*.

    Writes go through a temporary file and ``os.replace`` so a crash
    never leaves a half-written value behind.
    """

    def __init__(self, directory: Path, quota_bytes: int | None = None) -> None:
        self._directory = directory
        self._quota_bytes = quota_bytes
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    # --- KeyValueBackend interface --------------------------------------------

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        encoded = value.encode("utf-8")
        self._check_quota(path, key, len(encoded))

        fd, tmp_name = tempfile.mkstemp(
            dir=self._directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write '{key}': {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(encoded), key)

    def remove_item(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Could not remove '{key}': {exc}") from exc

    # --- Internal helpers -----------------------------------------------------

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def _check_quota(self, target: Path, key: str, new_size: int) -> None:
        if self._quota_bytes is None:
            return
        used = sum(
            p.stat().st_size
            for p in self._directory.glob("*.json")
            if p != target
        )
        if used + new_size > self._quota_bytes:
            raise StorageError(
                f"Storage quota exceeded writing '{key}' "
                f"({used + new_size} of {self._quota_bytes} bytes)"
            )
