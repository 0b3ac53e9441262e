"""In-memory StoreAdapter implementation."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Sequence
from typing import Any

from .exceptions import ScriptUnknownError, StoreError
from .scripts import LOCK_VALUE, SCRIPTS
from .store import StoreAdapter


class _Entry:
    __slots__ = ("value", "expires_at")

    def __init__(self, value: str, ttl_ms: int) -> None:
        self.value = value
        self.expires_at = time.monotonic() + ttl_ms / 1000.0

    def is_expired(self) -> bool:
        return time.monotonic() >= self.expires_at


class InMemoryStoreAdapter(StoreAdapter):
    """In-process store for testing.

    Understands only the registered lock/unlock scripts. Like Redis, a script
    must be loaded before it can be executed by digest.
    """

    def __init__(self) -> None:
        self._scripts: dict[str, str] = {}
        self._data: dict[str, _Entry] = {}

    def load_script(self, source: str) -> str:
        sha = hashlib.sha1(source.encode("utf-8")).hexdigest()
        self._scripts[sha] = source
        return sha

    def flush_scripts(self) -> None:
        """Forget every loaded script, as after a store restart."""
        self._scripts.clear()

    def execute_by_hash(
        self,
        sha: str,
        keys: Sequence[str],
        args: Sequence[Any] = (),
    ) -> Any:
        source = self._scripts.get(sha)
        if source is None:
            raise ScriptUnknownError("NOSCRIPT No matching script. Please use EVAL.")
        if source == SCRIPTS["lock"].source:
            return self._set_nx_px(keys[0], args[0])
        if source == SCRIPTS["unlock"].source:
            self._data.pop(keys[0], None)
            return None
        raise StoreError(f"Unsupported script: {sha}")

    def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            del self._data[key]
            return None
        return entry.value

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def _set_nx_px(self, key: str, ttl: Any) -> str | None:
        try:
            ttl_ms = int(ttl)
        except (TypeError, ValueError) as e:
            raise StoreError("ERR value is not an integer or out of range") from e
        if ttl_ms <= 0:
            raise StoreError("ERR invalid expire time in 'set' command")
        if self.exists(key):
            return None
        self._data[key] = _Entry(LOCK_VALUE, ttl_ms)
        return "OK"
