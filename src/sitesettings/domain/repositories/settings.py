"""Settings repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.configuration import ConfigurationEntry


class SettingsRepository(Protocol):
    """Row-level access to the settings table."""

    def table_exists(self) -> bool:
        """Return True when the settings table is present in storage."""
        ...

    def ensure_schema(self) -> None:
        """Create the settings table if it is missing. Safe to call repeatedly."""
        ...

    def fetch_all(self) -> list[ConfigurationEntry]:
        """Return every stored row, oldest first."""
        ...

    def insert(self, plugin: str, name: str, value: str, description: str) -> None:
        """Add a new row for (plugin, name)."""
        ...

    def update(self, plugin: str, name: str, value: str, description: str) -> None:
        """Overwrite value and description of the existing (plugin, name) row."""
        ...
