from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from fxmigrate.common.exceptions import ConfigReadError
from fxmigrate.config import MigratorConfig, read_json_object

# The only layout this engine knows how to upgrade. Supporting another source
# version means adding a rule here, not changing the pipeline.
MIGRATION_VERSION = "2.1.0"
CURRENT_VERSION = "3.0.0"


class VersionStatus(str, Enum):
    UNVERSIONED = "unversioned"
    UPGRADABLE = "upgradable"
    CURRENT = "current"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ProjectVersion:
    status: VersionStatus
    version: Optional[str] = None


class VersionOracle:
    def __init__(self, config: Optional[MigratorConfig] = None):
        self.config = config or MigratorConfig()

    def classify(self, project_path: Path) -> ProjectVersion:
        settings_path = project_path / self.config.settings_file_path
        if settings_path.is_file():
            version = read_json_object(settings_path).get("version")
            if version == CURRENT_VERSION:
                return ProjectVersion(VersionStatus.CURRENT, version)
            return ProjectVersion(
                VersionStatus.UNSUPPORTED, None if version is None else str(version)
            )

        legacy_path = project_path / self.config.legacy_settings_path
        if legacy_path.is_file():
            version = read_json_object(legacy_path).get("version")
            if version is None:
                return ProjectVersion(VersionStatus.UNVERSIONED)
            if version == MIGRATION_VERSION:
                return ProjectVersion(VersionStatus.UPGRADABLE, version)
            return ProjectVersion(VersionStatus.UNSUPPORTED, str(version))

        raise ConfigReadError(
            str(project_path), "no project settings found in any known location"
        )

    @staticmethod
    def is_migratable(version: ProjectVersion) -> bool:
        return (
            version.status == VersionStatus.UPGRADABLE
            and version.version == MIGRATION_VERSION
        )
