"""SQLModel implementation of the settings repository."""

from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, select

from ...errors import SettingsStorageError
from ...logging_config import get_logger
from ...models.configuration import ConfigurationEntry
from ..database import create_session_factory

logger = get_logger(__name__)


class SQLModelSettingsRepository:
    """SQLModel-based settings repository.

    Every write runs in its own session scope, so each insert or update commits
    on its own and a failure leaves earlier writes in place.
    """

    table_name = ConfigurationEntry.__tablename__

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    def table_exists(self) -> bool:
        try:
            return inspect(self.engine).has_table(self.table_name)
        except SQLAlchemyError as exc:
            raise SettingsStorageError(f"Could not inspect table '{self.table_name}': {exc}") from exc

    def ensure_schema(self) -> None:
        try:
            SQLModel.metadata.create_all(
                self.engine, tables=[ConfigurationEntry.__table__], checkfirst=True
            )
        except SQLAlchemyError as exc:
            raise SettingsStorageError(f"Could not create table '{self.table_name}': {exc}") from exc
        logger.info("Settings table ready", extra={"table": self.table_name})

    def fetch_all(self) -> list[ConfigurationEntry]:
        try:
            with self.session_factory() as session:
                statement = select(ConfigurationEntry).order_by(ConfigurationEntry.id)
                return list(session.exec(statement).all())
        except SQLAlchemyError as exc:
            raise SettingsStorageError(f"Could not read table '{self.table_name}': {exc}") from exc

    def insert(self, plugin: str, name: str, value: str, description: str) -> None:
        entry = ConfigurationEntry(plugin=plugin, name=name, value=value, description=description)
        try:
            with self.session_factory() as session:
                session.add(entry)
        except SQLAlchemyError as exc:
            raise SettingsStorageError(f"Could not insert setting {plugin}.{name}: {exc}") from exc

    def update(self, plugin: str, name: str, value: str, description: str) -> None:
        try:
            with self.session_factory() as session:
                statement = select(ConfigurationEntry).where(
                    ConfigurationEntry.plugin == plugin, ConfigurationEntry.name == name
                )
                for entry in session.exec(statement).all():
                    entry.value = value
                    entry.description = description
                    session.add(entry)
        except SQLAlchemyError as exc:
            raise SettingsStorageError(f"Could not update setting {plugin}.{name}: {exc}") from exc


__all__ = ["SQLModelSettingsRepository"]
