import re
from typing import Dict, Iterable, Optional

from fxmigrate.common import bus
from fxmigrate.config.legacy import PLUGIN_PREFIX
from fxmigrate.needle import L

STATE_PREFIX = "state."

# Placeholders the pipeline templates know how to consume.
PIPELINE_PLACEHOLDERS = (
    "state.fx-resource-frontend-hosting.storageResourceId",
    "state.fx-resource-frontend-hosting.endpoint",
    "state.fx-resource-frontend-hosting.resourceId",
    "state.fx-resource-frontend-hosting.indexPath",
    "state.fx-resource-bot.resourceId",
    "state.fx-resource-bot.functionAppResourceId",
    "state.fx-resource-bot.botWebAppResourceId",
    "state.fx-resource-function.functionAppResourceId",
    "state.fx-resource-function.functionEndpoint",
)


def placeholder_to_output_name(placeholder: str) -> str:
    """
    Map a legacy state placeholder onto the logical output name used by the
    infrastructure document.

    >>> placeholder_to_output_name("state.fx-resource-frontend-hosting.storageResourceId")
    'frontendHostingStorageResourceId'
    """
    parts = placeholder.split(".")
    if len(parts) != 3 or parts[0] + "." != STATE_PREFIX or not parts[2]:
        raise ValueError(f"Not a state placeholder: '{placeholder}'")

    plugin = parts[1]
    if plugin.startswith(PLUGIN_PREFIX):
        plugin = plugin[len(PLUGIN_PREFIX) :]
    words = [w for w in plugin.split("-") if w]
    if not words:
        raise ValueError(f"Not a state placeholder: '{placeholder}'")

    head = words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])
    key = parts[2]
    return head + key[:1].upper() + key[1:]


def _literal_pattern(name: str) -> "re.Pattern[str]":
    # name = 'value' | param name string = "value" | output name string = 'value'
    return re.compile(
        r"^[ \t]*(?:(?:param|var|output)[ \t]+)?"
        + re.escape(name)
        + r"(?:[ \t]+[A-Za-z_][\w.]*)?[ \t]*=[ \t]*(['\"])(?P<value>[^'\"\n]*)\1",
        re.MULTILINE,
    )


def _output_pattern(name: str) -> "re.Pattern[str]":
    return re.compile(r"^[ \t]*output[ \t]+" + re.escape(name) + r"\b", re.MULTILINE)


def resolve_placeholder(placeholder: str, infra_content: str) -> Optional[str]:
    try:
        name = placeholder_to_output_name(placeholder)
    except ValueError:
        return None

    literal = _literal_pattern(name).search(infra_content)
    if literal:
        return literal.group("value")

    if _output_pattern(name).search(infra_content):
        return "${{PROVISIONOUTPUT__" + name.upper() + "}}"

    return None


def resolve_placeholders(
    placeholders: Iterable[str], infra_content: str
) -> Dict[str, str]:
    """Resolve what can be resolved; anything else is left out of the mapping."""
    resolved: Dict[str, str] = {}
    for placeholder in placeholders:
        value = resolve_placeholder(placeholder, infra_content)
        if value is None:
            bus.debug(L.template.placeholder.unresolved, placeholder=placeholder)
            continue
        resolved[placeholder_to_output_name(placeholder)] = value
    return resolved
