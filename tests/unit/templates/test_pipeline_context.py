import json

from fxmigrate.config import OldProjectSettings
from fxmigrate.templates import build_pipeline_context


def make_settings(*plugins, **fields):
    data = {
        "appName": "myapp",
        "projectId": "abc-123",
        "programmingLanguage": "typescript",
        "solutionSettings": {"hostType": "Azure", "activeResourcePlugins": list(plugins)},
    }
    data.update(fields)
    return OldProjectSettings.from_dict(data)


def test_capability_flags_follow_active_plugins():
    settings = make_settings(
        "fx-resource-frontend-hosting", "fx-resource-aad-app-for-teams", "fx-resource-function"
    )

    context = build_pipeline_context(settings, "")

    assert context.has_tab is True
    assert context.has_sso is True
    assert context.has_function is True
    assert context.has_bot is False
    assert context.is_typescript is True
    assert context.default_function_name == "getUserProfile"
    assert context.placeholders == {}


def test_bot_hosting_flavour():
    function_bot = make_settings(
        "fx-resource-bot",
        pluginSettings={"fx-resource-bot": {"host-type": "azure-functions"}},
    )
    web_app_bot = make_settings("fx-resource-bot")

    ctx = build_pipeline_context(function_bot, "")
    assert ctx.is_function_bot and not ctx.is_web_app_bot

    ctx = build_pipeline_context(web_app_bot, "output botWebAppResourceId string = x")
    assert ctx.is_web_app_bot and not ctx.is_function_bot
    assert ctx.use_bot_web_app_resource_id is True


def test_names_are_read_from_manifests(tmp_path):
    (tmp_path / "appPackage").mkdir()
    (tmp_path / "aad.manifest.json").write_text(json.dumps({"name": "aad-name"}))
    (tmp_path / "appPackage" / "manifest.json").write_text(
        json.dumps({"name": {"short": "teams-name"}})
    )

    context = build_pipeline_context(make_settings(), "", tmp_path)

    assert context.aad_app_name == "aad-name"
    assert context.teams_app_name == "teams-name"


def test_broken_manifest_is_ignored(tmp_path):
    (tmp_path / "aad.manifest.json").write_text("{ not json")

    context = build_pipeline_context(make_settings(), "", tmp_path)

    assert context.aad_app_name is None
    assert context.teams_app_name is None


def test_placeholders_come_from_infra_document():
    infra = 'frontendHostingStorageResourceId = "/subscriptions/x/storage"'

    context = build_pipeline_context(make_settings("fx-resource-frontend-hosting"), infra)

    assert context.placeholders == {
        "frontendHostingStorageResourceId": "/subscriptions/x/storage"
    }


def test_function_name_only_when_a_function_exists():
    with_name = make_settings("fx-resource-function", defaultFunctionName="getItems")
    without_function = make_settings(defaultFunctionName="getItems")

    assert build_pipeline_context(with_name, "").default_function_name == "getItems"
    assert build_pipeline_context(without_function, "").default_function_name is None
