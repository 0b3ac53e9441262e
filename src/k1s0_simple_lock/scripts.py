"""Lua scripts executed atomically by the store."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import cached_property
from types import MappingProxyType

LOCK_VALUE = "1"


@dataclass(frozen=True)
class Script:
    """Script source identified by the SHA1 digest of its text."""

    source: str

    @cached_property
    def sha(self) -> str:
        """Digest used by EVALSHA. Computed once per instance."""
        return hashlib.sha1(self.source.encode("utf-8")).hexdigest()


# Sources must stay byte-identical: their digests are shared with every
# process already talking to the same store.
SCRIPTS: MappingProxyType[str, Script] = MappingProxyType(
    {
        "lock": Script(
            f"return redis.call('set', KEYS[1], {LOCK_VALUE}, 'NX', 'PX', ARGV[1])"
        ),
        "unlock": Script("redis.call('del', KEYS[1])"),
    }
)
