"""Key-value storage interface shared by the stores."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Persistence interface for string values addressed by key."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for ``key``, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing it atomically."""
