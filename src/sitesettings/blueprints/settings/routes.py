"""Site settings routes: admin page data, updates, log viewer and health check."""

from __future__ import annotations

from typing import Any, Mapping

from flask import current_app, jsonify, request

from sitesettings.errors import (
    InvalidSettingError,
    SettingNotFoundError,
    SettingsStorageError,
)
from sitesettings.extensions import get_engine, get_settings_store
from sitesettings.logging_config import get_logger
from sitesettings.services.site_info import (
    list_locales,
    list_plugins,
    list_themes,
    read_log,
    system_info,
)
from sitesettings.store import SettingType

from . import bp

logger = get_logger(__name__)

_SCALAR_TYPES = (str, int, float, bool)


def _registered_payload() -> dict[str, dict[str, Any]]:
    registered = get_settings_store().get_registered_settings()
    return {
        plugin: {name: setting.to_dict() for name, setting in entries.items()}
        for plugin, entries in registered.items()
    }


def _submitted_settings() -> Mapping[str, Any]:
    """Read ``{plugin: {name: value}}`` from JSON, or ``plugin.name=value`` form fields."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise InvalidSettingError("Expected a JSON object mapping plugins to settings.")
        return payload

    submitted: dict[str, dict[str, str]] = {}
    for key, value in request.form.items():
        plugin, _, name = key.partition(".")
        if not name:
            raise InvalidSettingError(f"Form field '{key}' must be named 'plugin.setting'.")
        submitted.setdefault(plugin, {})[name] = value
    return submitted


@bp.errorhandler(SettingNotFoundError)
def _not_found(error: SettingNotFoundError):
    return jsonify({"error": "not_found", "message": str(error)}), 404


@bp.errorhandler(InvalidSettingError)
def _invalid(error: InvalidSettingError):
    return jsonify({"error": "invalid_setting", "message": str(error)}), 400


@bp.errorhandler(SettingsStorageError)
def _storage_failure(error: SettingsStorageError):
    logger.exception("Settings storage failure")
    return jsonify({"error": "storage_failure", "message": str(error)}), 500


@bp.get("/")
def index():
    """Return everything the site settings page displays."""
    config = current_app.config["SITESETTINGS_CONFIG"]
    store = get_settings_store()
    return jsonify(
        {
            "settings": _registered_payload(),
            "locales": sorted(list_locales(config.LOCALES_PATH)),
            "themes": sorted(list_themes(config.THEMES_PATH)),
            "plugins": sorted(list_plugins(config.PLUGINS_PATH)),
            "info": system_info(
                config,
                get_engine(),
                store.environment,
                request.environ.get("SERVER_SOFTWARE"),
            ),
        }
    )


@bp.post("/")
def update():
    """Apply submitted values to registered settings and persist them."""
    store = get_settings_store()
    registered = store.get_registered_settings()
    submitted = _submitted_settings()

    for plugin, entries in submitted.items():
        if not isinstance(entries, dict):
            raise InvalidSettingError(f"Settings for plugin '{plugin}' must be an object.")
        for name, value in entries.items():
            setting = registered.get(plugin, {}).get(name)
            if setting is None:
                raise InvalidSettingError(f"The setting '{plugin}.{name}' is not registered.")
            if setting.type is SettingType.READONLY:
                raise InvalidSettingError(f"The setting '{plugin}.{name}' is read-only.")
            if not isinstance(value, _SCALAR_TYPES):
                raise InvalidSettingError(
                    f"The setting '{plugin}.{name}' needs a string, number or boolean value."
                )
            store.set(plugin, name, value)

    store.store()
    logger.info("Site settings updated", extra={"plugins": sorted(submitted)})
    return jsonify({"settings": _registered_payload()})


@bp.get("/log")
def log():
    config = current_app.config["SITESETTINGS_CONFIG"]
    lines = request.args.get("lines", type=int)
    if lines is not None and lines < 0:
        raise InvalidSettingError(f"lines must be zero or positive; got {lines}.")
    return jsonify(read_log(config.LOG_FILE, config.LOG_ERRORS, lines))


@bp.get("/health")
def health():
    return jsonify({"consistent": get_settings_store().is_consistent()})


@bp.get("/core/<name>")
def core_value(name: str):
    """Return a single core value (environment values included)."""
    value = get_settings_store().get_core(name)
    if isinstance(value, Mapping):
        value = dict(value)
    return jsonify({"name": name, "value": value})


__all__ = ["bp"]
