"""Flask CLI commands for the site settings store."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("settings-init")
    def settings_init() -> None:
        """Create the settings table and persist the default settings."""

        from .extensions import build_settings_store

        store = build_settings_store()
        store.store()
        click.echo("Settings table initialized.")

    @app.cli.command("settings-show")
    @click.option("--plugin", default=None, help="Only show settings owned by this plugin")
    def settings_show(plugin: str | None) -> None:
        """Print the current settings, defaults merged with stored values."""

        from .extensions import build_settings_store

        settings = build_settings_store().settings
        for owner in sorted(settings):
            if plugin and owner != plugin:
                continue
            for name in sorted(settings[owner]):
                click.echo(f"{owner}.{name} = {settings[owner][name]}")

    @app.cli.command("settings-set")
    @click.argument("plugin")
    @click.argument("name")
    @click.argument("value")
    @click.option("--description", default=None, help="Replace the setting description")
    def settings_set(plugin: str, name: str, value: str, description: str | None) -> None:
        """Set a single setting and store it."""

        from .extensions import build_settings_store

        store = build_settings_store()
        store.set(plugin, name, value, description)
        store.store()
        click.echo(f"{plugin}.{name} = {store.get(plugin, name)}")
