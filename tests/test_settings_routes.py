"""Tests for the site settings blueprint."""

from __future__ import annotations

import pytest


def test_index_lists_registered_settings(client):
    response = client.get("/settings/")
    assert response.status_code == 200

    payload = response.get_json()
    core = payload["settings"]["userfrosting"]
    assert core["site_title"]["value"] == "UserFrosting"
    assert core["site_title"]["type"] == "text"
    assert core["version"]["type"] == "readonly"
    assert core["default_locale"]["options"] == {"en_US": "en_US", "fr_FR": "fr_FR"}
    assert core["guest_theme"]["options"] == {"default": "default", "nyx": "nyx"}
    assert payload["locales"] == ["en_US", "fr_FR"]
    assert payload["themes"] == ["default", "nyx"]
    assert payload["plugins"] == ["blog"]
    assert payload["info"]["Document Root"] == "http://localhost"
    assert payload["info"]["Settings Table"] == "configuration"


def test_update_persists_settings(client):
    response = client.post("/settings/", json={"userfrosting": {"site_title": "My Site", "minify_css": True}})
    assert response.status_code == 200
    assert response.get_json()["settings"]["userfrosting"]["site_title"]["value"] == "My Site"

    # next request builds a fresh store from the database
    core = client.get("/settings/").get_json()["settings"]["userfrosting"]
    assert core["site_title"]["value"] == "My Site"
    assert core["minify_css"]["value"] == "1"


def test_update_from_form_fields(client):
    response = client.post("/settings/", data={"userfrosting.admin_email": "root@example.org"})
    assert response.status_code == 200

    assert client.get("/settings/core/admin_email").get_json() == {
        "name": "admin_email",
        "value": "root@example.org",
    }


def test_update_rejects_unregistered_and_readonly(client):
    response = client.post("/settings/", json={"userfrosting": {"not_registered": "x"}})
    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_setting"

    response = client.post("/settings/", json={"userfrosting": {"version": "9.9.9"}})
    assert response.status_code == 400
    assert "read-only" in response.get_json()["message"]

    response = client.post("/settings/", data={"no_plugin_prefix": "x"})
    assert response.status_code == 400


def test_health_tracks_stored_keys(client):
    assert client.get("/settings/health").get_json() == {"consistent": False}

    client.post("/settings/", json={"userfrosting": {"site_title": "Stored"}})

    assert client.get("/settings/health").get_json() == {"consistent": True}


def test_core_values_include_environment(client):
    assert client.get("/settings/core/site_title").get_json()["value"] == "UserFrosting"
    assert client.get("/settings/core/uri").get_json()["value"]["css"] == "http://localhost/css/"

    response = client.get("/settings/core/does_not_exist")
    assert response.status_code == 404
    assert response.get_json()["error"] == "not_found"


def test_log_tail(client, app):
    response = client.get("/settings/log?lines=1")
    assert response.status_code == 200

    payload = response.get_json()
    assert payload["path"] == str(app.config["SITESETTINGS_CONFIG"].LOG_FILE)
    assert len(payload["messages"]) == 1


def test_log_rejects_negative_line_count(client):
    response = client.get("/settings/log?lines=-1")

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_setting"


@pytest.mark.parametrize("value", [["a", "b"], {"nested": "x"}, None])
def test_update_rejects_non_scalar_values(client, value):
    response = client.post("/settings/", json={"userfrosting": {"site_title": value}})

    assert response.status_code == 400
    assert "string, number or boolean" in response.get_json()["message"]
    core = client.get("/settings/").get_json()["settings"]["userfrosting"]
    assert core["site_title"]["value"] == "UserFrosting"
