"""Tests for the read-only site environment."""

from __future__ import annotations

import dataclasses

import pytest

from sitesettings.environment import SiteEnvironment


def test_uris_derived_from_public_root():
    environment = SiteEnvironment("https", "example.com", "/portal/")

    assert dict(environment.uri) == {
        "public": "https://example.com/portal",
        "js": "https://example.com/portal/js/",
        "css": "https://example.com/portal/css/",
        "favicon": "https://example.com/portal/css/favicon.ico",
        "image": "https://example.com/portal/images/",
    }


def test_from_wsgi_environ():
    environ = {"wsgi.url_scheme": "http", "SERVER_NAME": "localhost", "SCRIPT_NAME": ""}

    environment = SiteEnvironment.from_wsgi_environ(environ)

    assert environment.uri["public"] == "http://localhost"
    assert environment.uri["js"] == "http://localhost/js/"


def test_environment_is_read_only():
    environment = SiteEnvironment("http", "localhost")

    with pytest.raises(dataclasses.FrozenInstanceError):
        environment.host = "elsewhere"  # type: ignore[misc]
    with pytest.raises(TypeError):
        environment.uri["public"] = "http://elsewhere"  # type: ignore[index]


def test_lookup():
    environment = SiteEnvironment("http", "localhost")

    assert "uri" in environment
    assert environment.lookup("uri") is environment.uri
    assert "site_title" not in environment
    with pytest.raises(KeyError):
        environment.lookup("site_title")
