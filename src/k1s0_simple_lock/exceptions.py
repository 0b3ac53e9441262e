"""simple_lock exception types."""

from __future__ import annotations


class StoreError(Exception):
    """Store adapter failure (connection, script or command error)."""


class ScriptUnknownError(StoreError):
    """The store does not know the requested script hash (NOSCRIPT)."""


class LockError(Exception):
    """Domain error raised by SimpleLock for store faults it cannot recover from."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class LockErrorCodes:
    """LockError code constants."""

    SCRIPT_UNKNOWN: str = "SCRIPT_UNKNOWN"
    STORE_ERROR: str = "STORE_ERROR"


class ConfigError(Exception):
    """Configuration loading or override error."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    """ConfigError code constants."""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    UNKNOWN_OPTION: str = "UNKNOWN_OPTION"
