import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from fxmigrate.common.exceptions import ConfigReadError

PLUGIN_PREFIX = "fx-resource-"

# Legacy plugin names that do not map 1:1 onto their short name.
PLUGIN_ALIASES = {
    "aad-app-for-teams": "aad",
    "azure-sql": "sql",
}


def normalize_plugin_name(name: str) -> str:
    short = name.strip().lower()
    if short.startswith(PLUGIN_PREFIX):
        short = short[len(PLUGIN_PREFIX) :]
    return PLUGIN_ALIASES.get(short, short)


@dataclass(frozen=True)
class OldProjectSettings:
    app_name: Optional[str] = None
    project_id: Optional[str] = None
    version: Optional[str] = None
    programming_language: Optional[str] = None
    host_type: str = "Azure"
    active_plugins: Tuple[str, ...] = ()
    default_function_name: Optional[str] = None
    plugin_settings: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    is_m365: bool = False

    def has_plugin(self, name: str) -> bool:
        return normalize_plugin_name(name) in self.active_plugins

    def plugin_setting(self, plugin: str, key: str) -> Any:
        return self.plugin_settings.get(normalize_plugin_name(plugin), {}).get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OldProjectSettings":
        solution = data.get("solutionSettings") or {}

        raw_plugins = data.get("activePlugins")
        if raw_plugins is None:
            raw_plugins = solution.get("activeResourcePlugins", [])
        plugins = []
        for name in raw_plugins:
            short = normalize_plugin_name(str(name))
            if short not in plugins:
                plugins.append(short)

        plugin_settings = {
            normalize_plugin_name(name): MappingProxyType(dict(value or {}))
            for name, value in (data.get("pluginSettings") or {}).items()
        }

        return cls(
            app_name=data.get("appName"),
            project_id=data.get("projectId") or None,
            version=data.get("version"),
            programming_language=data.get("programmingLanguage"),
            host_type=data.get("hostType") or solution.get("hostType") or "Azure",
            active_plugins=tuple(plugins),
            default_function_name=data.get("defaultFunctionName"),
            plugin_settings=MappingProxyType(plugin_settings),
            is_m365=bool(data.get("isM365", False)),
        )


def read_json_object(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigReadError(str(path), "file does not exist") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigReadError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigReadError(str(path), "expected a JSON object")
    return data


def load_old_settings(project_root: Path, settings_path: str) -> OldProjectSettings:
    return OldProjectSettings.from_dict(read_json_object(project_root / settings_path))
