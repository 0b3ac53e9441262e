"""Lock tunables."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any

from .exceptions import ConfigError, ConfigErrorCodes

DEFAULT_KEY_PREFIX = "simple_lock:"


@dataclass
class LockConfig:
    """Retry and namespace settings, read by SimpleLock on every call.

    retry_delay and retry_jitter are milliseconds. retry_proc, when set,
    maps the retry number (1 for the first retry) to a delay in ms and
    replaces retry_delay.
    """

    retry_count: int = 3
    retry_delay: int = 200
    retry_jitter: int = 50
    retry_proc: Callable[[int], int] | None = None
    key_prefix: str = DEFAULT_KEY_PREFIX


@contextmanager
def override(config: LockConfig, **attributes: Any) -> Iterator[LockConfig]:
    """Temporarily set attributes on ``config``, restoring them on exit."""
    known = {f.name for f in fields(config)}
    unknown = sorted(set(attributes) - known)
    if unknown:
        raise ConfigError(
            code=ConfigErrorCodes.UNKNOWN_OPTION,
            message=f"Unknown lock option(s): {', '.join(unknown)}",
        )

    saved: dict[str, Any] = {}
    try:
        for name, value in attributes.items():
            saved[name] = getattr(config, name)
            setattr(config, name, value)
        yield config
    finally:
        for name, value in saved.items():
            setattr(config, name, value)
