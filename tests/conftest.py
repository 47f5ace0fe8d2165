"""Pytest configuration and shared fixtures for the site settings tests.

Each test gets a throw-away SQLite file so the settings table can be created,
dropped or pre-seeded without touching a real database.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest
from sqlmodel import create_engine

from sitesettings.infra.repositories import SQLModelSettingsRepository

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database with no tables.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def repository(db_engine) -> SQLModelSettingsRepository:
    """Repository over a database where the settings table does not exist yet."""
    return SQLModelSettingsRepository(db_engine)


@pytest.fixture
def ready_repository(repository) -> SQLModelSettingsRepository:
    """Repository whose settings table has already been created."""
    repository.ensure_schema()
    return repository


class RecordingSettingsRepository(SQLModelSettingsRepository):
    """Real repository that also remembers every insert and update issued."""

    def __init__(self, engine):
        super().__init__(engine)
        self.inserts: list[tuple[str, str, str, str]] = []
        self.updates: list[tuple[str, str, str, str]] = []

    def insert(self, plugin, name, value, description):
        self.inserts.append((plugin, name, value, description))
        super().insert(plugin, name, value, description)

    def update(self, plugin, name, value, description):
        self.updates.append((plugin, name, value, description))
        super().update(plugin, name, value, description)

    def reset(self) -> None:
        self.inserts.clear()
        self.updates.clear()


@pytest.fixture
def recording_repository(db_engine) -> RecordingSettingsRepository:
    repo = RecordingSettingsRepository(db_engine)
    repo.ensure_schema()
    return repo


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def site_dirs(tmp_path) -> dict[str, Path]:
    """Locale, theme and plugin directories with a couple of entries each."""
    locales = tmp_path / "locale"
    themes = tmp_path / "themes"
    plugins = tmp_path / "plugins"
    for directory in (locales, themes, plugins):
        directory.mkdir()
    (locales / "en_US.json").write_text("{}", encoding="utf-8")
    (locales / "fr_FR.json").write_text("{}", encoding="utf-8")
    (themes / "default").mkdir()
    (themes / "nyx").mkdir()
    (plugins / "blog").mkdir()
    return {"locales": locales, "themes": themes, "plugins": plugins}


@pytest.fixture
def app(tmp_path, monkeypatch, site_dirs):
    """Flask application configured against a temporary data directory."""
    from sitesettings import create_app

    data_dir = tmp_path / "instance"
    monkeypatch.setenv("SITESETTINGS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("SITESETTINGS_DATABASE_URL", f"sqlite:///{tmp_path / 'site.db'}")
    monkeypatch.setenv("SITESETTINGS_APP_ROOT", str(tmp_path))
    monkeypatch.setenv("SITESETTINGS_LOCALES_PATH", str(site_dirs["locales"]))
    monkeypatch.setenv("SITESETTINGS_THEMES_PATH", str(site_dirs["themes"]))
    monkeypatch.setenv("SITESETTINGS_PLUGINS_PATH", str(site_dirs["plugins"]))
    monkeypatch.setenv("SITESETTINGS_LOG_FILE", str(tmp_path / "logs" / "site.log"))
    monkeypatch.delenv("SITESETTINGS_LOG_ERRORS", raising=False)

    application = create_app("testing")
    yield application
    application.extensions["sitesettings"]["engine"].dispose()
    logging.getLogger("sitesettings").handlers.clear()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
