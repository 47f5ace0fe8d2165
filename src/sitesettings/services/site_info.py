"""Filesystem and system introspection shown on the site settings page."""

from __future__ import annotations

import platform
from collections import deque
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine

from ..config import BaseConfig
from ..environment import SiteEnvironment
from ..models.configuration import ConfigurationEntry

UNAVAILABLE = "Unavailable"


def list_locales(path: Path | str) -> set[str]:
    """Return locale names: the basenames, without suffix, of the files in ``path``."""
    directory = Path(path)
    if not directory.is_dir():
        return set()
    return {entry.stem for entry in directory.iterdir() if entry.is_file() and not entry.name.startswith(".")}


def _list_subdirectories(path: Path | str) -> set[str]:
    directory = Path(path)
    if not directory.is_dir():
        return set()
    return {entry.name for entry in directory.iterdir() if entry.is_dir() and not entry.name.startswith(".")}


def list_themes(path: Path | str) -> set[str]:
    return _list_subdirectories(path)


def list_plugins(path: Path | str) -> set[str]:
    return _list_subdirectories(path)


def read_log(path: Optional[Path | str], enabled: bool = True, lines: Optional[int] = None) -> Dict[str, Any]:
    """Return the tail of the application log, newest line first.

    Args:
        path: Log file location; ``None`` when no log file is configured
        enabled: Whether error logging is switched on
        lines: Number of trailing lines to return; all lines when falsy

    Raises:
        ValueError: if ``lines`` is negative

    Returns:
        ``{"path": ..., "messages": [...]}``; ``messages`` holds a single
        explanatory line when the log cannot be shown.
    """
    if lines is not None and lines < 0:
        raise ValueError(f"lines must be zero or positive; got {lines}")

    if not path:
        return {
            "path": UNAVAILABLE,
            "messages": ["You do not seem to have an error log set up. Please check your configuration."],
        }

    log_path = Path(path)
    if not enabled:
        return {
            "path": str(log_path),
            "messages": ["Error logging appears to be disabled. Please check your configuration."],
        }
    if not log_path.is_file():
        return {"path": str(log_path), "messages": []}

    with log_path.open("r", encoding="utf-8", errors="replace") as handle:
        tail = deque(handle, maxlen=lines) if lines else list(handle)
    messages = [line.rstrip("\n") for line in tail]
    messages.reverse()
    return {"path": str(log_path), "messages": messages}


def _database_version(engine: Engine) -> str:
    version = engine.dialect.server_version_info
    if version is None:
        with engine.connect():
            version = engine.dialect.server_version_info
    return ".".join(str(part) for part in version or ())


def system_info(
    config: BaseConfig,
    engine: Engine,
    environment: Optional[SiteEnvironment] = None,
    server_software: Optional[str] = None,
) -> Dict[str, str]:
    """Summarise the runtime the site is served from."""
    db_name = engine.url.database or ""
    return {
        "Application Version": config.VERSION,
        "Web Server": server_software or UNAVAILABLE,
        "Python Version": platform.python_version(),
        "Database Version": f"{engine.dialect.name} {_database_version(engine)}".strip(),
        "Database Name": db_name,
        "Settings Table": ConfigurationEntry.__tablename__,
        "Application Root": str(config.APP_ROOT),
        "Document Root": environment.uri["public"] if environment is not None else UNAVAILABLE,
    }


__all__ = [
    "UNAVAILABLE",
    "list_locales",
    "list_plugins",
    "list_themes",
    "read_log",
    "system_info",
]
