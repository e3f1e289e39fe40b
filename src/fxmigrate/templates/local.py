from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from fxmigrate.config.legacy import OldProjectSettings
from .context import function_name_for, read_app_names

DEFAULT_TAB_PORT = 53000
DEFAULT_TAB_ENDPOINT = f"https://localhost:{DEFAULT_TAB_PORT}"
DEFAULT_FUNCTION_ENDPOINT = "http://localhost:7071"
# The tunnel address changes on every debug session, so it is never copied
# from the legacy local settings.
BOT_ENDPOINT_VARIABLE = "${{BOT_ENDPOINT}}"


@dataclass(frozen=True)
class DebugPlaceholderMapping:
    tab_endpoint: str = DEFAULT_TAB_ENDPOINT
    bot_endpoint: str = BOT_ENDPOINT_VARIABLE
    function_endpoint: str = DEFAULT_FUNCTION_ENDPOINT

    @classmethod
    def from_local_settings(cls, data: Mapping[str, Any]) -> "DebugPlaceholderMapping":
        """
        Read endpoints from a legacy `localSettings.json`.

        Only the `frontend.tabEndpoint` and `backend.functionEndpoint` entries
        are used; anything missing or not a non-empty string keeps its default.
        """

        def pick(section: str, key: str, default: str) -> str:
            value = (data.get(section) or {}).get(key)
            return value if isinstance(value, str) and value else default

        return cls(
            tab_endpoint=pick("frontend", "tabEndpoint", DEFAULT_TAB_ENDPOINT),
            function_endpoint=pick(
                "backend", "functionEndpoint", DEFAULT_FUNCTION_ENDPOINT
            ),
        )


@dataclass(frozen=True)
class LocalPipelineTemplateContext:
    app_name: Optional[str] = None
    aad_app_name: Optional[str] = None
    teams_app_name: Optional[str] = None
    function_name: Optional[str] = None
    tab_port: int = DEFAULT_TAB_PORT
    is_typescript: bool = False
    is_m365: bool = False
    has_tab: bool = False
    has_sso: bool = False
    has_bot: bool = False
    has_function: bool = False
    debug: DebugPlaceholderMapping = field(default_factory=DebugPlaceholderMapping)


def _port_of(endpoint: str) -> int:
    try:
        return urlparse(endpoint).port or DEFAULT_TAB_PORT
    except ValueError:
        return DEFAULT_TAB_PORT


def build_local_pipeline_context(
    settings: OldProjectSettings,
    local_settings: Mapping[str, Any],
    project_path: Optional[Path] = None,
) -> LocalPipelineTemplateContext:
    debug = DebugPlaceholderMapping.from_local_settings(local_settings)
    aad_app_name, teams_app_name = read_app_names(project_path)

    return LocalPipelineTemplateContext(
        app_name=settings.app_name,
        aad_app_name=aad_app_name,
        teams_app_name=teams_app_name,
        function_name=function_name_for(settings),
        tab_port=_port_of(debug.tab_endpoint),
        is_typescript=(settings.programming_language or "").lower() == "typescript",
        is_m365=settings.is_m365,
        has_tab=settings.has_plugin("frontend-hosting"),
        has_sso=settings.has_plugin("aad"),
        has_bot=settings.has_plugin("bot"),
        has_function=settings.has_plugin("function"),
        debug=debug,
    )
