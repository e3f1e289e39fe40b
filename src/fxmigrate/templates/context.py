import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fxmigrate.config.legacy import OldProjectSettings
from .placeholders import PIPELINE_PLACEHOLDERS, resolve_placeholders

AAD_MANIFEST_FILE = "aad.manifest.json"
TEAMS_MANIFEST_FILE = "appPackage/manifest.json"
DEFAULT_ENVIRONMENT_FOLDER = "env"
DEFAULT_FUNCTION_NAME = "getUserProfile"
DOTNET_PATH_VARIABLE = "DOTNET_PATH"
BOT_FUNCTION_HOST_TYPE = "azure-functions"


@dataclass(frozen=True)
class PipelineTemplateContext:
    app_name: Optional[str] = None
    aad_app_name: Optional[str] = None
    teams_app_name: Optional[str] = None
    default_function_name: Optional[str] = None
    environment_folder: str = DEFAULT_ENVIRONMENT_FOLDER
    dotnet_path: str = DOTNET_PATH_VARIABLE
    is_typescript: bool = False
    has_tab: bool = False
    has_sso: bool = False
    has_bot: bool = False
    has_function: bool = False
    is_function_bot: bool = False
    is_web_app_bot: bool = False
    use_bot_web_app_resource_id: bool = False
    placeholders: Dict[str, str] = field(default_factory=dict)


def _read_manifest(path: Path) -> Dict[str, Any]:
    # Manifests only contribute display names; a broken one is not fatal.
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def read_app_names(project_path: Optional[Path]) -> Tuple[Optional[str], Optional[str]]:
    """Return the (aad, teams) display names found in the project manifests."""
    if project_path is None:
        return None, None
    aad_app_name = _read_manifest(project_path / AAD_MANIFEST_FILE).get("name")
    name = _read_manifest(project_path / TEAMS_MANIFEST_FILE).get("name")
    teams_app_name = name.get("short") if isinstance(name, dict) else None
    return aad_app_name, teams_app_name


def function_name_for(settings: OldProjectSettings) -> Optional[str]:
    if not settings.has_plugin("function"):
        return None
    return settings.default_function_name or DEFAULT_FUNCTION_NAME


def build_pipeline_context(
    settings: OldProjectSettings,
    infra_content: str,
    project_path: Optional[Path] = None,
) -> PipelineTemplateContext:
    has_bot = settings.has_plugin("bot")
    is_function_bot = (
        has_bot and settings.plugin_setting("bot", "host-type") == BOT_FUNCTION_HOST_TYPE
    )
    is_web_app_bot = has_bot and not is_function_bot
    aad_app_name, teams_app_name = read_app_names(project_path)

    return PipelineTemplateContext(
        app_name=settings.app_name,
        aad_app_name=aad_app_name,
        teams_app_name=teams_app_name,
        default_function_name=function_name_for(settings),
        is_typescript=(settings.programming_language or "").lower() == "typescript",
        has_tab=settings.has_plugin("frontend-hosting"),
        has_sso=settings.has_plugin("aad"),
        has_bot=has_bot,
        has_function=settings.has_plugin("function"),
        is_function_bot=is_function_bot,
        is_web_app_bot=is_web_app_bot,
        use_bot_web_app_resource_id=is_web_app_bot
        and "botWebAppResourceId" in infra_content,
        placeholders=resolve_placeholders(PIPELINE_PLACEHOLDERS, infra_content),
    )
