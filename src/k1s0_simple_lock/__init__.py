"""k1s0 simple lock library."""

from .client import SimpleLock
from .config import LockConfig, override
from .exceptions import (
    ConfigError,
    ConfigErrorCodes,
    LockError,
    LockErrorCodes,
    ScriptUnknownError,
    StoreError,
)
from .loader import load
from .logger import new_logger
from .memory import InMemoryStoreAdapter
from .redis_store import RedisStoreAdapter
from .scripts import SCRIPTS, Script
from .settings import LockSection, RedisSection, SimpleLockSettings
from .store import StoreAdapter

__all__ = [
    "SimpleLock",
    "LockConfig",
    "override",
    "Script",
    "SCRIPTS",
    "StoreAdapter",
    "RedisStoreAdapter",
    "InMemoryStoreAdapter",
    "LockSection",
    "RedisSection",
    "SimpleLockSettings",
    "load",
    "new_logger",
    "LockError",
    "LockErrorCodes",
    "StoreError",
    "ScriptUnknownError",
    "ConfigError",
    "ConfigErrorCodes",
]

__version__ = "0.1.0"
