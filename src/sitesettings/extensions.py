"""Database and request-scope wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app, g, request

from .config import BaseConfig
from .defaults import DEFAULT_DESCRIPTIONS, DEFAULT_SETTINGS, register_core_settings
from .environment import SiteEnvironment
from .infra.database import create_db_engine
from .infra.repositories import SQLModelSettingsRepository
from .services.site_info import list_locales, list_themes
from .store import SettingsStore

EXTENSION_KEY = "sitesettings"


def init_db(app: Flask) -> None:
    """Create the engine, bootstrap the settings table once and hook up per-request stores."""

    config: BaseConfig = app.config["SITESETTINGS_CONFIG"]
    engine = create_db_engine(config)
    repository = SQLModelSettingsRepository(engine)
    repository.ensure_schema()

    app.extensions[EXTENSION_KEY] = {"engine": engine, "repository": repository}

    @app.before_request
    def _prime_settings() -> None:
        """Attach a fresh settings store to the request context."""

        if "site_settings" not in g:
            g.site_settings = build_settings_store(SiteEnvironment.from_request(request))

    @app.teardown_appcontext
    def _discard_settings(exception: Exception | None) -> None:  # pragma: no cover
        g.pop("site_settings", None)


def get_engine():
    """Return the engine created for the current application."""

    return current_app.extensions[EXTENSION_KEY]["engine"]


def get_repository() -> SQLModelSettingsRepository:
    return current_app.extensions[EXTENSION_KEY]["repository"]


def build_settings_store(environment: SiteEnvironment | None = None) -> SettingsStore:
    """Build a settings store with the core defaults and register them for the admin page."""

    config: BaseConfig = current_app.config["SITESETTINGS_CONFIG"]
    store = SettingsStore(
        get_repository(),
        settings=DEFAULT_SETTINGS,
        descriptions=DEFAULT_DESCRIPTIONS,
        environment=environment,
    )
    register_core_settings(
        store,
        locales=list_locales(config.LOCALES_PATH),
        themes=list_themes(config.THEMES_PATH),
    )
    return store


def get_settings_store() -> SettingsStore:
    """Return the settings store of the current request, building it when needed."""

    if "site_settings" not in g:
        g.site_settings = build_settings_store()
    return g.site_settings
