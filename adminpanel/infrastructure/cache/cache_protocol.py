"""Cache protocol for the orchestrator (DIP)."""

from typing import Protocol, TypeVar

T = TypeVar("T")


class CacheCellProtocol(Protocol[T]):
    """Protocol for a single-slot cache with expiry. Used by the dashboard orchestrator."""

    def is_valid(self) -> bool:
        """Return True if an entry exists and has not expired."""
        ...

    def get(self) -> T | None:
        """Return the stored value or None."""
        ...

    def put(self, data: T) -> None:
        """Store value with a fresh timestamp, replacing any prior entry."""
        ...

    def clear(self) -> None:
        """Drop the entry."""
        ...

    def age(self) -> float | None:
        """Seconds since the entry was stored, or None when empty."""
        ...
