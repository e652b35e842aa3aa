"""Key-value persistence interface."""

from typing import Protocol

FOODS_KEY = "foods"
GOAL_KEY = "goal"


class Store(Protocol):
    """Persistence interface for JSON-compatible values."""

    def load(self, key: str) -> object | None:
        """Return the stored value, or None when absent or unreadable."""

    def save(self, key: str, value: object) -> None:
        """Replace the stored value for a key."""
