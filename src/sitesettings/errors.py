"""Exceptions raised by the settings store."""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for every settings failure."""


class SettingNotFoundError(SettingsError, LookupError):
    """A core setting was read that exists neither in the environment nor in storage."""

    def __init__(self, name: str) -> None:
        super().__init__(f"The value '{name}' does not exist in the core settings.")
        self.name = name


class InvalidSettingError(SettingsError, ValueError):
    """A setting was registered or submitted with arguments that cannot be honoured."""


class SettingsStorageError(SettingsError):
    """Reading from or writing to the settings table failed."""


__all__ = [
    "InvalidSettingError",
    "SettingNotFoundError",
    "SettingsError",
    "SettingsStorageError",
]
