import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from fxmigrate.common.exceptions import ConfigReadError

CONFIG_FILE_NAME = "fxmigrate.toml"


@dataclass
class MigratorConfig:
    legacy_folder: str = ".fx"
    settings_folder: str = "teamsfx"
    backup_folder: str = ".backup"
    infra_path: str = "templates/azure/provision.bicep"
    keep_backup: bool = True
    strict_create: bool = False
    lock_timeout: float = 10.0
    generate_local_yml: bool = True

    @property
    def legacy_settings_path(self) -> str:
        return f"{self.legacy_folder}/configs/projectSettings.json"

    @property
    def legacy_local_settings_path(self) -> str:
        return f"{self.legacy_folder}/configs/localSettings.json"

    @property
    def settings_file_path(self) -> str:
        return f"{self.settings_folder}/settings.json"

    @property
    def app_yml_path(self) -> str:
        return f"{self.settings_folder}/app.yml"

    @property
    def app_local_yml_path(self) -> str:
        return f"{self.settings_folder}/app.local.yml"


def load_config_from_path(project_root: Path) -> MigratorConfig:
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.is_file():
        return MigratorConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigReadError(str(config_path), str(e)) from e

    section: Dict[str, Any] = data.get("fxmigrate", {})
    known = {f.name for f in fields(MigratorConfig)}
    return MigratorConfig(**{k: v for k, v in section.items() if k in known})
