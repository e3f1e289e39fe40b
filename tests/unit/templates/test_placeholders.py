from textwrap import dedent

import pytest

from fxmigrate.needle import L
from fxmigrate.templates import (
    PIPELINE_PLACEHOLDERS,
    placeholder_to_output_name,
    resolve_placeholder,
    resolve_placeholders,
)

INFRA = dedent("""
    param resourceBaseName string
    frontendHostingStorageResourceId = "/subscriptions/sub/storage1"
    var botResourceId = '/subscriptions/sub/bot1'
    output functionFunctionAppResourceId string = functionApp.id
""")


@pytest.mark.parametrize(
    "placeholder, expected",
    [
        (
            "state.fx-resource-frontend-hosting.storageResourceId",
            "frontendHostingStorageResourceId",
        ),
        ("state.fx-resource-bot.botWebAppResourceId", "botBotWebAppResourceId"),
        ("state.fx-resource-function.functionEndpoint", "functionFunctionEndpoint"),
    ],
)
def test_output_names(placeholder, expected):
    assert placeholder_to_output_name(placeholder) == expected


@pytest.mark.parametrize(
    "placeholder", ["config.bot.id", "state.fx-resource-bot", "state..key"]
)
def test_invalid_placeholders_are_rejected(placeholder):
    with pytest.raises(ValueError):
        placeholder_to_output_name(placeholder)


def test_resolves_literal_assignments():
    assert (
        resolve_placeholder("state.fx-resource-frontend-hosting.storageResourceId", INFRA)
        == "/subscriptions/sub/storage1"
    )
    assert (
        resolve_placeholder("state.fx-resource-bot.resourceId", INFRA)
        == "/subscriptions/sub/bot1"
    )


def test_resolves_output_declarations_to_provision_outputs():
    assert (
        resolve_placeholder("state.fx-resource-function.functionAppResourceId", INFRA)
        == "${{PROVISIONOUTPUT__FUNCTIONFUNCTIONAPPRESOURCEID}}"
    )


def test_unknown_names_are_unresolved():
    assert resolve_placeholder("state.fx-resource-bot.functionAppResourceId", INFRA) is None
    assert resolve_placeholder("state.fx-resource-bot.resourceId", "") is None
    assert resolve_placeholder("not-a-placeholder", INFRA) is None


def test_prefix_of_a_longer_name_does_not_match():
    infra = 'frontendHostingStorageResourceIdSuffix = "wrong"'

    assert (
        resolve_placeholder("state.fx-resource-frontend-hosting.storageResourceId", infra)
        is None
    )


def test_resolve_placeholders_omits_unresolved(spy_bus):
    mapping = resolve_placeholders(PIPELINE_PLACEHOLDERS, INFRA)

    assert mapping == {
        "frontendHostingStorageResourceId": "/subscriptions/sub/storage1",
        "botResourceId": "/subscriptions/sub/bot1",
        "functionFunctionAppResourceId": "${{PROVISIONOUTPUT__FUNCTIONFUNCTIONAPPRESOURCEID}}",
    }
    unresolved = [
        m for m in spy_bus.get_messages() if m["id"] == str(L.template.placeholder.unresolved)
    ]
    assert len(unresolved) == len(PIPELINE_PLACEHOLDERS) - 3
