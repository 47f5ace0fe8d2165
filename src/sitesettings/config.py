"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value:
        return default
    return Path(value).expanduser()


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SiteSettings"
    VERSION = "0.1.0"
    DB_FILENAME = "sitesettings.db"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SITESETTINGS_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("SITESETTINGS_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.APP_ROOT = _env_path("SITESETTINGS_APP_ROOT", Path.cwd())
        self.DATABASE_URL = os.getenv("SITESETTINGS_DATABASE_URL", self._build_sqlite_url())
        self.LOCALES_PATH = _env_path("SITESETTINGS_LOCALES_PATH", self.APP_ROOT / "locale")
        self.THEMES_PATH = _env_path("SITESETTINGS_THEMES_PATH", self.APP_ROOT / "templates" / "themes")
        self.PLUGINS_PATH = _env_path("SITESETTINGS_PLUGINS_PATH", self.APP_ROOT / "plugins")
        self.LOG_ERRORS = _env_bool("SITESETTINGS_LOG_ERRORS", default=True)
        self.LOG_FILE = _env_path("SITESETTINGS_LOG_FILE", self.DATA_DIR / "logs" / "sitesettings.log")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("SITESETTINGS_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SITESETTINGS_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; point SITESETTINGS_DATA_DIR at a temp dir."""

    TESTING = True


_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)
