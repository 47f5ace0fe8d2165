"""SQLModel table exports."""

from .configuration import ConfigurationEntry

__all__ = ["ConfigurationEntry"]
