"""redis-py based StoreAdapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import redis
from redis.exceptions import NoScriptError, RedisError

from .exceptions import ScriptUnknownError, StoreError
from .store import StoreAdapter

if TYPE_CHECKING:
    from .settings import RedisSection


class RedisStoreAdapter(StoreAdapter):
    """StoreAdapter backed by a synchronous ``redis.Redis`` client."""

    def __init__(self, client: redis.Redis | None = None) -> None:
        self._client = client if client is not None else redis.Redis()

    @classmethod
    def from_url(cls, url: str) -> RedisStoreAdapter:
        """Build an adapter from a ``redis://`` URL."""
        return cls(redis.Redis.from_url(url))

    @classmethod
    def from_settings(cls, section: RedisSection) -> RedisStoreAdapter:
        if section.url:
            return cls.from_url(section.url)
        return cls(
            redis.Redis(
                host=section.host,
                port=section.port,
                db=section.db,
                password=section.password or None,
            )
        )

    @property
    def client(self) -> redis.Redis:
        return self._client

    def execute_by_hash(
        self,
        sha: str,
        keys: Sequence[str],
        args: Sequence[Any] = (),
    ) -> Any:
        try:
            return self._client.evalsha(sha, len(keys), *keys, *args)
        except NoScriptError as e:
            raise ScriptUnknownError(str(e)) from e
        except RedisError as e:
            raise StoreError(str(e)) from e

    def load_script(self, source: str) -> str:
        try:
            return self._client.script_load(source)
        except RedisError as e:
            raise StoreError(str(e)) from e
