"""Persistence gateway for the resolved locale and currency.

Provides the protocol the resolver consumes (asynchronous get/set of two
opaque string slots) and two reference backends:

Components:
    PersistenceGateway - Protocol for storage backends (structural typing)
    MemoryStorage - Process-local dict backend (tests, ephemeral sessions)
    JSONFileStorage - Single JSON document on disk, I/O in a worker thread

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from localestate.diagnostics import ErrorTemplate, PersistenceReadError, PersistenceWriteError
from localestate.enums import StorageKey

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "JSONFileStorage",
    "MemoryStorage",
    "PersistenceGateway",
]

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """Protocol for storing the resolved locale and currency.

    Keys are StorageKey members ("defaultLocale", "currency"); values are
    opaque strings. Implementations signal failures with
    PersistenceReadError / PersistenceWriteError (OSError and ValueError
    are tolerated too). The resolver never lets either failure escape.

    This is a Protocol (structural typing) rather than ABC so any object
    with matching coroutine methods can be injected.

    Example:
        >>> class RedisStorage:
        ...     async def read(self, key: StorageKey) -> str | None:
        ...         return await redis.get(f"l10n:{key}")
        ...     async def write(self, key: StorageKey, value: str) -> None:
        ...         await redis.set(f"l10n:{key}", value)
    """

    async def read(self, key: StorageKey) -> str | None:
        """Read a slot.

        Args:
            key: Slot to read

        Returns:
            Stored value, or None when the slot was never written

        Raises:
            PersistenceReadError: If the backend cannot be read
        """
        ...

    async def write(self, key: StorageKey, value: str) -> None:
        """Write a slot.

        Args:
            key: Slot to write
            value: Value to store

        Raises:
            PersistenceWriteError: If the backend cannot be written
        """
        ...


class MemoryStorage:
    """Dict-backed PersistenceGateway.

    Example:
        >>> storage = MemoryStorage({StorageKey.LOCALE: "fr-CA"})
        >>> asyncio.run(storage.read(StorageKey.LOCALE))
        'fr-CA'
    """

    __slots__ = ("_values",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Initialize storage.

        Args:
            initial: Pre-populated slots (e.g., a previous session's state)
        """
        self._values: dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self._values[StorageKey(key)] = value

    @property
    def values(self) -> dict[str, str]:
        """Snapshot of the stored slots."""
        return dict(self._values)

    async def read(self, key: StorageKey) -> str | None:
        """Return the stored value or None."""
        return self._values.get(StorageKey(key))

    async def write(self, key: StorageKey, value: str) -> None:
        """Store ``value`` under ``key``."""
        self._values[StorageKey(key)] = value

    def clear(self) -> None:
        """Forget every slot."""
        self._values.clear()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MemoryStorage({self._values!r})"


class JSONFileStorage:
    """PersistenceGateway storing both slots in one JSON object file.

    File I/O runs in a worker thread via asyncio.to_thread so the event loop
    never blocks. Writes are read-modify-replace: the document is rewritten
    to a uniquely named sibling temporary file which atomically replaces
    the original.

    A missing file reads as "no slots stored". The parent directory is
    created on first write.

    Example:
        >>> storage = JSONFileStorage("~/.config/myapp/locale.json")
        >>> asyncio.run(storage.write(StorageKey.CURRENCY, "EUR"))

    Attributes:
        path: Resolved location of the JSON document
    """

    __slots__ = ("_lock", "path")

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Initialize storage.

        Args:
            path: JSON document location ("~" is expanded)
        """
        self.path = Path(path).expanduser()
        # Serializes read-modify-replace cycles from concurrent write tasks
        self._lock = threading.Lock()

    async def read(self, key: StorageKey) -> str | None:
        """Read a slot from the document.

        Raises:
            PersistenceReadError: If the file is unreadable, not a JSON
                object, or holds a non-string value for ``key``
        """
        key = StorageKey(key)
        document = await asyncio.to_thread(self._load_locked, key)
        value = document.get(key)
        if value is None or isinstance(value, str):
            return value
        raise PersistenceReadError(
            ErrorTemplate.storage_read_failed(key, f"expected string, got {type(value).__name__}"),
            key=key,
        )

    async def write(self, key: StorageKey, value: str) -> None:
        """Write a slot into the document.

        Raises:
            PersistenceWriteError: If the document cannot be replaced
        """
        await asyncio.to_thread(self._store, StorageKey(key), value)

    def _load_locked(self, key: str) -> dict[str, object]:
        with self._lock:
            return self._load(key)

    def _load(self, key: str) -> dict[str, object]:
        """Load the whole document (caller holds the lock)."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise PersistenceReadError(
                ErrorTemplate.storage_read_failed(key, str(e)), key=key
            ) from e
        try:
            document = json.loads(text)
        except ValueError as e:
            raise PersistenceReadError(
                ErrorTemplate.storage_read_failed(key, str(e)), key=key
            ) from e
        if not isinstance(document, dict):
            raise PersistenceReadError(
                ErrorTemplate.storage_read_failed(key, "document is not a JSON object"),
                key=key,
            )
        return document

    def _store(self, key: str, value: str) -> None:
        with self._lock:
            try:
                document = self._load(key)
            except PersistenceReadError as e:
                logger.warning("Discarding unreadable locale storage %s: %s", self.path, e)
                document = {}
            document[key] = value

            payload = json.dumps(document, indent=2, sort_keys=True)
            tmp_path: Path | None = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                # Unique name: other instances on the same path hold other locks
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.path.parent,
                    prefix=f"{self.path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as handle:
                    tmp_path = Path(handle.name)
                    handle.write(payload)
                os.replace(tmp_path, self.path)
            except OSError as e:
                if tmp_path is not None:
                    tmp_path.unlink(missing_ok=True)
                raise PersistenceWriteError(
                    ErrorTemplate.storage_write_failed(key, str(e)), key=key
                ) from e

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"JSONFileStorage({str(self.path)!r})"
