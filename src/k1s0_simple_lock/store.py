"""StoreAdapter abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class StoreAdapter(ABC):
    """Key-value store able to run cached scripts atomically."""

    @abstractmethod
    def execute_by_hash(
        self,
        sha: str,
        keys: Sequence[str],
        args: Sequence[Any] = (),
    ) -> Any:
        """Run the script identified by ``sha``.

        Raises:
            ScriptUnknownError: the store has no script cached under ``sha``
            StoreError: any other store failure
        """
        ...

    @abstractmethod
    def load_script(self, source: str) -> str:
        """Cache ``source`` in the store and return its digest."""
        ...
