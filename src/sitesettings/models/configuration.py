"""Site configuration rows stored in the database."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field, SQLModel


class ConfigurationEntry(SQLModel, table=True):
    """One setting value owned by a plugin ('userfrosting' for core settings)."""

    __tablename__: ClassVar[str] = "configuration"
    __table_args__ = (UniqueConstraint("plugin", "name", name="uq_configuration_plugin_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    plugin: str = Field(nullable=False, max_length=50, index=True)
    name: str = Field(nullable=False, max_length=150)
    value: str = Field(default="", sa_column=Column(Text, nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
