"""Default core settings and their admin-interface registration."""

from __future__ import annotations

from typing import Iterable

from .store import CORE_PLUGIN, SettingsStore

DEFAULT_SETTINGS = {
    CORE_PLUGIN: {
        "site_title": "UserFrosting",
        "admin_email": "admin@example.com",
        "email_login": "1",
        "can_register": "1",
        "enable_captcha": "1",
        "require_activation": "1",
        "resend_activation_threshold": "0",
        "reset_password_timeout": "10800",
        "default_locale": "en_US",
        "guest_theme": "default",
        "minify_css": "0",
        "minify_js": "0",
        "version": "0.1.0",
        "author": "",
        "show_terms_on_register": "1",
        "site_location": "",
    }
}

DEFAULT_DESCRIPTIONS = {
    CORE_PLUGIN: {
        "site_title": "The title of the site. By default, displayed in the title tag, as well as the upper left corner of every user page.",
        "admin_email": "The administrative email for the site. Automated emails, such as verification emails and password reset links, will come from this address.",
        "email_login": "Specify whether users can login via email address or username instead of just username.",
        "can_register": "Specify whether public registration of new accounts is enabled. Enable if you have a service that users can sign up for, disable if you only want accounts to be created by you or an admin.",
        "enable_captcha": "Specify whether new users must complete a captcha code when registering for an account.",
        "require_activation": "Specify whether email activation is required for newly registered accounts. Accounts created on the admin side never need to be activated.",
        "resend_activation_threshold": "The time, in seconds, that a user must wait before requesting that the activation email be resent.",
        "reset_password_timeout": "The time, in seconds, that a user has to reset their password before the reset token expires.",
        "default_locale": "The default language for newly registered users.",
        "guest_theme": "The template theme to use for unauthenticated (guest) users.",
        "minify_css": "Specify whether to use concatenated, minified CSS (production) or raw CSS includes (dev).",
        "minify_js": "Specify whether to use concatenated, minified JS (production) or raw JS includes (dev).",
        "version": "The current version of the site software.",
        "author": "The author of the site. Will be used in the site's author meta tag.",
        "show_terms_on_register": "Specify whether or not to show terms and conditions when registering.",
        "site_location": "The nation or state in which legal jurisdiction for this site falls.",
    }
}

_TOGGLE_OPTIONS = {"1": "On", "0": "Off"}


def register_core_settings(store: SettingsStore, locales: Iterable[str] = (), themes: Iterable[str] = ()) -> None:
    """Register the core settings for display in the site settings page."""

    store.register(CORE_PLUGIN, "site_title", "Site Title")
    store.register(CORE_PLUGIN, "site_location", "Site Location")
    store.register(CORE_PLUGIN, "author", "Site Author")
    store.register(CORE_PLUGIN, "admin_email", "Account Management Email")
    store.register(CORE_PLUGIN, "default_locale", "Default Locale", "select", {name: name for name in sorted(locales)})
    store.register(CORE_PLUGIN, "guest_theme", "Guest Theme", "select", {name: name for name in sorted(themes)})
    store.register(CORE_PLUGIN, "minify_css", "Minify CSS", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "minify_js", "Minify JS", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "can_register", "Public Registration", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "enable_captcha", "Registration Captcha", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "show_terms_on_register", "Show TOS", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "require_activation", "Require Account Activation", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "email_login", "Email Login", "toggle", _TOGGLE_OPTIONS)
    store.register(CORE_PLUGIN, "resend_activation_threshold", "Resend Activation Email Cooloff (s)")
    store.register(CORE_PLUGIN, "reset_password_timeout", "Password Recovery Timeout (s)")
    store.register(CORE_PLUGIN, "version", "Version", "readonly")


__all__ = ["DEFAULT_DESCRIPTIONS", "DEFAULT_SETTINGS", "register_core_settings"]
