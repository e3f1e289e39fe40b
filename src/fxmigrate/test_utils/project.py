import copy
import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List

import tomli_w

DEFAULT_LEGACY_SETTINGS: Dict[str, Any] = {
    "appName": "myapp",
    "projectId": "abc-123",
    "version": "2.1.0",
    "programmingLanguage": "typescript",
    "solutionSettings": {
        "name": "fx-solution-azure",
        "version": "1.0.0",
        "hostType": "Azure",
        "capabilities": ["Tab"],
        "activeResourcePlugins": [
            "fx-resource-frontend-hosting",
            "fx-resource-aad-app-for-teams",
            "fx-resource-appstudio",
        ],
    },
}


class LegacyProjectFactory:
    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULT_LEGACY_SETTINGS)
        self._files_to_create: List[Dict[str, Any]] = []
        self._config: Dict[str, Any] = {}

    def with_settings(self, **fields: Any) -> "LegacyProjectFactory":
        self._settings.update(fields)
        return self

    def without_setting(self, key: str) -> "LegacyProjectFactory":
        self._settings.pop(key, None)
        return self

    def with_plugins(self, *plugins: str) -> "LegacyProjectFactory":
        self._settings["solutionSettings"]["activeResourcePlugins"] = list(plugins)
        return self

    def with_host_type(self, host_type: str) -> "LegacyProjectFactory":
        self._settings["solutionSettings"]["hostType"] = host_type
        return self

    def with_infra(
        self, content: str, path: str = "templates/azure/provision.bicep"
    ) -> "LegacyProjectFactory":
        return self.with_source(path, content)

    def with_aad_manifest(self, name: str) -> "LegacyProjectFactory":
        return self.with_json("aad.manifest.json", {"name": name})

    def with_teams_manifest(self, short_name: str) -> "LegacyProjectFactory":
        return self.with_json(
            "appPackage/manifest.json", {"name": {"short": short_name}}
        )

    def with_local_settings(self, data: Dict[str, Any]) -> "LegacyProjectFactory":
        return self.with_json(".fx/configs/localSettings.json", data)

    def with_config(self, fxmigrate_config: Dict[str, Any]) -> "LegacyProjectFactory":
        self._config.update(fxmigrate_config)
        return self

    def with_source(self, path: str, content: str) -> "LegacyProjectFactory":
        self._files_to_create.append(
            {"path": path, "content": dedent(content), "format": "raw"}
        )
        return self

    def with_json(self, path: str, data: Dict[str, Any]) -> "LegacyProjectFactory":
        self._files_to_create.append({"path": path, "content": data, "format": "json"})
        return self

    def build(self) -> Path:
        files = [
            {
                "path": ".fx/configs/projectSettings.json",
                "content": self._settings,
                "format": "json",
            },
            *self._files_to_create,
        ]
        if self._config:
            files.append(
                {
                    "path": "fxmigrate.toml",
                    "content": {"fxmigrate": self._config},
                    "format": "toml",
                }
            )

        for file_spec in files:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fmt = file_spec["format"]
            content = file_spec["content"]

            if fmt == "toml":
                with output_path.open("wb") as f:
                    tomli_w.dump(content, f)
            elif fmt == "json":
                output_path.write_text(json.dumps(content, indent=4), encoding="utf-8")
            else:  # raw
                output_path.write_text(content, encoding="utf-8")

        return self.root_path
