"""Read-through cache of loaded instruction sets."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class InstructionCache(Generic[T]):
    """Caller-owned cache keyed by instruction-set identity.

    Each key is loaded at most once for the lifetime of the cache; pass the
    same instance to every call that should share results.
    """

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        """Return the value for ``key``, calling ``loader`` only on a miss."""
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
