import pytest

from fxmigrate.common.exceptions import ConfigReadError
from fxmigrate.config import (
    OldProjectSettings,
    load_old_settings,
    normalize_plugin_name,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("fx-resource-frontend-hosting", "frontend-hosting"),
        ("fx-resource-aad-app-for-teams", "aad"),
        ("fx-resource-azure-sql", "sql"),
        ("bot", "bot"),
        ("  FX-RESOURCE-Function ", "function"),
    ],
)
def test_normalize_plugin_name(raw, expected):
    assert normalize_plugin_name(raw) == expected


def test_from_legacy_solution_settings():
    settings = OldProjectSettings.from_dict(
        {
            "appName": "demo",
            "projectId": "p-1",
            "version": "2.1.0",
            "programmingLanguage": "javascript",
            "solutionSettings": {
                "hostType": "Azure",
                "capabilities": ["Tab", "Bot"],
                "activeResourcePlugins": [
                    "fx-resource-frontend-hosting",
                    "fx-resource-bot",
                    "fx-resource-aad-app-for-teams",
                ],
            },
            "pluginSettings": {"fx-resource-bot": {"host-type": "azure-functions"}},
            "isM365": True,
        }
    )

    assert settings.app_name == "demo"
    assert settings.project_id == "p-1"
    assert settings.active_plugins == ("frontend-hosting", "bot", "aad")
    assert settings.has_plugin("fx-resource-bot")
    assert settings.is_m365 is True
    assert settings.plugin_setting("bot", "host-type") == "azure-functions"


def test_from_short_form_and_defaults():
    settings = OldProjectSettings.from_dict(
        {"activePlugins": ["frontend-hosting", "bot", "bot"], "projectId": ""}
    )

    assert settings.active_plugins == ("frontend-hosting", "bot")
    assert settings.project_id is None
    assert settings.host_type == "Azure"
    assert settings.plugin_setting("bot", "host-type") is None


def test_settings_are_read_only():
    settings = OldProjectSettings.from_dict({"pluginSettings": {"bot": {"a": 1}}})

    with pytest.raises(AttributeError):
        settings.app_name = "changed"
    with pytest.raises(TypeError):
        settings.plugin_settings["bot"]["a"] = 2


def test_load_old_settings_errors(tmp_path):
    with pytest.raises(ConfigReadError, match="does not exist"):
        load_old_settings(tmp_path, "missing.json")

    (tmp_path / "bad.json").write_text("{", encoding="utf-8")
    with pytest.raises(ConfigReadError):
        load_old_settings(tmp_path, "bad.json")

    (tmp_path / "list.json").write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigReadError, match="JSON object"):
        load_old_settings(tmp_path, "list.json")
