"""Site settings application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig, resolve_config
from .errors import InvalidSettingError, SettingNotFoundError, SettingsError, SettingsStorageError
from .logging_config import setup_logging
from .store import CORE_PLUGIN, RegisteredSetting, SettingsStore, SettingType, merge_settings


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered by the application."""

    yield "sitesettings.blueprints.settings"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = resolve_config(config_name or app.config.get("ENV"))
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["SITESETTINGS_CONFIG"] = config_obj

    setup_logging(config_obj)
    _register_blueprints(app)

    # Imported lazily so model metadata is only touched when an app is built.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


__all__ = [
    "BaseConfig",
    "CORE_PLUGIN",
    "DevConfig",
    "InvalidSettingError",
    "RegisteredSetting",
    "SettingNotFoundError",
    "SettingType",
    "SettingsError",
    "SettingsStorageError",
    "SettingsStore",
    "TestConfig",
    "create_app",
    "merge_settings",
]
