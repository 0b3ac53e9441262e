"""Lease-backed lock coordinator."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from .config import LockConfig
from .exceptions import LockError, LockErrorCodes, ScriptUnknownError, StoreError
from .redis_store import RedisStoreAdapter
from .scripts import SCRIPTS, Script
from .store import StoreAdapter

if TYPE_CHECKING:
    from .settings import SimpleLockSettings

T = TypeVar("T")

NO_SCRIPT_MAX_RETRIES = 1

logger = logging.getLogger(__name__)


class SimpleLock:
    """Acquire and release named locks stored in a shared store.

    Mutual exclusion comes entirely from the store running the lock script
    atomically. No state is kept between calls; ``config`` is read on every
    call, so mutating it affects subsequent calls only.

    The unlock script deletes the key without checking who set it: any caller
    that knows the key can release it, including a holder whose lease already
    expired and was taken over.
    """

    def __init__(self, store: StoreAdapter, config: LockConfig | None = None) -> None:
        self.store = store
        self.config = config or LockConfig()

    @classmethod
    def from_settings(cls, settings: SimpleLockSettings) -> SimpleLock:
        """Build a Redis-backed lock from loaded settings (see ``load``)."""
        return cls(
            RedisStoreAdapter.from_settings(settings.redis),
            settings.lock.to_config(),
        )

    def lock(
        self,
        key: str,
        ttl: int,
        body: Callable[[bool], T] | None = None,
    ) -> bool | T:
        """Try to acquire ``key`` for ``ttl`` milliseconds.

        Makes up to ``retry_count + 1`` attempts, sleeping
        ``backoff_for_attempt(n)`` before retry ``n``. Returns whether the
        lock was acquired.

        When ``body`` is given it is called with that outcome and its result
        is returned instead; the lock, if acquired, is released however
        ``body`` exits.

        Raises:
            LockError: the store failed in a way NOSCRIPT recovery cannot fix
        """
        lock_key = self._namespaced(key)
        locked = self._acquire(lock_key, ttl)

        if body is None:
            return locked

        try:
            return body(locked)
        finally:
            if locked:
                self._release(lock_key)

    @contextmanager
    def locked(self, key: str, ttl: int) -> Iterator[bool]:
        """Context manager form of ``lock(key, ttl, body)``."""
        lock_key = self._namespaced(key)
        acquired = self._acquire(lock_key, ttl)
        try:
            yield acquired
        finally:
            if acquired:
                self._release(lock_key)

    def unlock(self, key: str) -> None:
        """Release ``key``. Never raises; an unreleased lock expires at its ttl."""
        self._release(self._namespaced(key))

    def load_scripts(self) -> None:
        """Upload every registered script to the store."""
        for name, script in SCRIPTS.items():
            try:
                self.store.load_script(script.source)
            except Exception as e:
                raise LockError(
                    code=LockErrorCodes.STORE_ERROR,
                    message=f"Failed to load script {name}: {e}",
                    cause=e,
                ) from e

    def backoff_for_attempt(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt``."""
        config = self.config
        if callable(config.retry_proc):
            delay = config.retry_proc(attempt)
        else:
            delay = config.retry_delay
        jitter = random.randrange(config.retry_jitter) if config.retry_jitter > 0 else 0
        return max(delay + jitter, 0) / 1000.0

    def _namespaced(self, key: str) -> str:
        return f"{self.config.key_prefix}{key}"

    def _acquire(self, lock_key: str, ttl: int) -> bool:
        attempts = self.config.retry_count + 1
        for attempt in range(attempts):
            if attempt > 0:
                delay = self.backoff_for_attempt(attempt)
                logger.debug(
                    "Waiting before lock retry",
                    extra={"key": lock_key, "attempt": attempt, "delay": delay},
                )
                time.sleep(delay)

            if self._exec_script(SCRIPTS["lock"], [lock_key], [ttl]) is not None:
                logger.debug("Lock acquired", extra={"key": lock_key, "attempt": attempt})
                return True

        logger.debug("Lock not acquired", extra={"key": lock_key, "attempts": attempts})
        return False

    def _release(self, lock_key: str) -> None:
        try:
            self._exec_script(SCRIPTS["unlock"], [lock_key])
        except Exception as e:
            logger.debug("Unlock failed", extra={"key": lock_key, "error": str(e)})

    def _exec_script(
        self,
        script: Script,
        keys: Sequence[str],
        args: Sequence[Any] = (),
    ) -> Any:
        retries = 0
        while True:
            try:
                return self.store.execute_by_hash(script.sha, keys, args)
            except ScriptUnknownError as e:
                retries += 1
                if retries > NO_SCRIPT_MAX_RETRIES:
                    raise LockError(
                        code=LockErrorCodes.SCRIPT_UNKNOWN,
                        message=str(e),
                        cause=e,
                    ) from e
                logger.warning("Script unknown to store, reloading", extra={"sha": script.sha})
                self.load_scripts()
            except StoreError as e:
                raise LockError(
                    code=LockErrorCodes.STORE_ERROR,
                    message=str(e),
                    cause=e,
                ) from e
            except Exception as e:
                raise LockError(
                    code=LockErrorCodes.STORE_ERROR,
                    message=f"{type(e).__name__}: {e}",
                    cause=e,
                ) from e
