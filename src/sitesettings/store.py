"""Site settings store: defaults merged with the configuration table.

Settings are partitioned by owning plugin; the core framework settings live
under the ``userfrosting`` plugin. A store is built per request, mutated in
memory through :meth:`SettingsStore.set`, and flushed with
:meth:`SettingsStore.store`, which inserts missing rows and updates changed
ones. Rows are never deleted.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .domain.repositories import SettingsRepository
from .environment import SiteEnvironment
from .errors import InvalidSettingError, SettingNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

CORE_PLUGIN = "userfrosting"

SettingsTable = Dict[str, Dict[str, str]]


class SettingType(str, Enum):
    """Widget used to edit a registered setting in the admin interface."""

    READONLY = "readonly"
    TEXT = "text"
    TOGGLE = "toggle"
    SELECT = "select"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass
class RegisteredSetting:
    """Display metadata for a setting shown in the admin interface."""

    plugin: str
    name: str
    label: str
    type: SettingType
    options: Dict[str, Any] = field(default_factory=dict)
    description: str = ""
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "type": self.type.value,
            "options": dict(self.options),
            "description": self.description,
            "value": self.value,
        }


@dataclass
class FetchedSettings:
    """Settings and descriptions as currently stored, grouped by plugin then name."""

    settings: SettingsTable = field(default_factory=dict)
    descriptions: SettingsTable = field(default_factory=dict)

    def has(self, plugin: str, name: str) -> bool:
        return name in self.settings.get(plugin, {})


def merge_settings(defaults: Mapping[str, Mapping[str, str]], stored: Mapping[str, Mapping[str, str]]) -> SettingsTable:
    """Merge two plugin -> name -> value tables; ``stored`` wins on every shared key.

    Entries only present in ``defaults`` are kept as they are. Values are replaced
    whole, never merged.
    """
    merged: SettingsTable = {plugin: dict(entries) for plugin, entries in defaults.items()}
    for plugin, entries in stored.items():
        merged.setdefault(plugin, {}).update(entries)
    return merged


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class SettingsStore:
    """In-memory view of the site settings backed by a :class:`SettingsRepository`.

    Not thread-safe. Build one per request and discard it afterwards.
    """

    def __init__(
        self,
        repository: SettingsRepository,
        settings: Optional[Mapping[str, Mapping[str, Any]]] = None,
        descriptions: Optional[Mapping[str, Mapping[str, str]]] = None,
        environment: Optional[SiteEnvironment] = None,
    ) -> None:
        self._repository = repository
        self._environment = environment
        self._settings: SettingsTable = {
            plugin: {name: _to_text(value) for name, value in entries.items()}
            for plugin, entries in (settings or {}).items()
        }
        self._descriptions: SettingsTable = {
            plugin: dict(entries) for plugin, entries in (descriptions or {}).items()
        }
        self._registered: Dict[str, Dict[str, RegisteredSetting]] = {}

        if not repository.table_exists():
            # Defaults only until the first store().
            logger.warning("Settings table missing; creating it and using defaults")
            repository.ensure_schema()
            return

        fetched = self.fetch_settings()
        self._settings = merge_settings(self._settings, fetched.settings)
        self._descriptions = merge_settings(self._descriptions, fetched.descriptions)
        logger.debug(
            "Loaded settings",
            extra={"plugins": len(self._settings), "stored_plugins": len(fetched.settings)},
        )

    @property
    def environment(self) -> Optional[SiteEnvironment]:
        return self._environment

    @property
    def settings(self) -> SettingsTable:
        """A copy of the current plugin -> name -> value table."""
        return copy.deepcopy(self._settings)

    @property
    def descriptions(self) -> SettingsTable:
        """A copy of the current plugin -> name -> description table."""
        return copy.deepcopy(self._descriptions)

    def fetch_settings(self) -> FetchedSettings:
        """Read every stored row, grouped by plugin then name.

        When a legacy table holds several rows for the same (plugin, name), the
        last one read wins.
        """
        fetched = FetchedSettings()
        for row in self._repository.fetch_all():
            if row.plugin not in fetched.settings:
                fetched.settings[row.plugin] = {}
                fetched.descriptions[row.plugin] = {}
            fetched.settings[row.plugin][row.name] = row.value
            fetched.descriptions[row.plugin][row.name] = row.description
        return fetched

    def is_consistent(self) -> bool:
        """Return True when every in-memory (plugin, name) has a stored row.

        Values are not compared.
        """
        if not self._repository.table_exists():
            return False

        stored = self.fetch_settings()
        for plugin, entries in self._settings.items():
            for name in entries:
                if not stored.has(plugin, name):
                    return False
        return True

    def get(self, plugin: str, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._settings.get(plugin, {}).get(name, default)

    def get_description(self, plugin: str, name: str) -> str:
        return self._descriptions.get(plugin, {}).get(name, "")

    def set(
        self,
        plugin: str,
        name: str,
        value: Any = None,
        description: Optional[str] = None,
    ) -> None:
        """Set a setting value and/or description.

        Omitted arguments never clobber what is already there; a brand-new key
        gets an empty string instead.
        """
        settings = self._settings.setdefault(plugin, {})
        descriptions = self._descriptions.setdefault(plugin, {})

        if value is not None:
            settings[name] = _to_text(value)
        else:
            settings.setdefault(name, "")

        if description is not None:
            descriptions[name] = description
        else:
            descriptions.setdefault(name, "")

    def has_core(self, name: str) -> bool:
        in_environment = self._environment is not None and name in self._environment
        return in_environment or name in self._settings.get(CORE_PLUGIN, {})

    def get_core(self, name: str) -> Any:
        """Read a core value, looking in the environment first, then the core settings."""
        if self._environment is not None and name in self._environment:
            return self._environment.lookup(name)
        core = self._settings.get(CORE_PLUGIN, {})
        if name in core:
            return core[name]
        raise SettingNotFoundError(name)

    def set_core(self, name: str, value: Any, description: Optional[str] = None) -> None:
        self.set(CORE_PLUGIN, name, value, description)

    def register(
        self,
        plugin: str,
        name: str,
        label: str,
        setting_type: str = "text",
        options: Optional[Mapping[str, Any]] = None,
    ) -> RegisteredSetting:
        """Expose an existing setting in the admin interface.

        Raises:
            InvalidSettingError: if the setting has not been created with
                :meth:`set` yet, or ``setting_type`` is not a known widget type.
        """
        if plugin not in self._settings:
            raise InvalidSettingError(
                f"The plugin '{plugin}' does not have any site settings. "
                "Be sure to add them first by calling set()."
            )
        if name not in self._settings[plugin]:
            raise InvalidSettingError(
                f"The plugin '{plugin}' does not have a value for '{name}'. "
                "Please add it first by calling set()."
            )
        if setting_type not in SettingType.values():
            allowed = ", ".join(f"'{value}'" for value in SettingType.values())
            raise InvalidSettingError(f"Type must be one of {allowed}; got '{setting_type}'.")

        registered = RegisteredSetting(
            plugin=plugin,
            name=name,
            label=label,
            type=SettingType(setting_type),
            options=dict(options or {}),
            description=self.get_description(plugin, name),
        )
        self._registered.setdefault(plugin, {})[name] = registered
        return registered

    def is_registered(self, plugin: str, name: str) -> bool:
        return name in self._registered.get(plugin, {})

    def get_registered_settings(self) -> Dict[str, Dict[str, RegisteredSetting]]:
        """Return a copy of the registry with every ``value`` refreshed from the live settings."""
        for plugin, entries in self._registered.items():
            for name, registered in entries.items():
                registered.value = self._settings[plugin][name]
        return {plugin: dict(entries) for plugin, entries in self._registered.items()}

    def store(self) -> bool:
        """Insert settings missing from storage and update the ones that changed.

        Each write commits on its own; rows for keys absent from memory are left alone.
        """
        stored = self.fetch_settings()
        inserted = updated = 0

        for plugin, entries in self._settings.items():
            for name, value in entries.items():
                description = self.get_description(plugin, name)
                if not stored.has(plugin, name):
                    self._repository.insert(plugin, name, value, description)
                    inserted += 1
                elif (
                    stored.settings[plugin][name] != value
                    or stored.descriptions[plugin][name] != description
                ):
                    self._repository.update(plugin, name, value, description)
                    updated += 1

        logger.info("Settings stored", extra={"inserted": inserted, "updated": updated})
        return True


__all__ = [
    "CORE_PLUGIN",
    "FetchedSettings",
    "RegisteredSetting",
    "SettingType",
    "SettingsStore",
    "SettingsTable",
    "merge_settings",
]
