from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fxmigrate.common.exceptions import ConfigReadError
from fxmigrate.config import MigratorConfig, OldProjectSettings, load_old_settings
from fxmigrate.templates import TemplateRenderer
from fxmigrate.workspace import MigrationWorkspace
from .version import ProjectVersion


@dataclass
class MigrationContext:
    """
    State shared by the steps of a single migration attempt.

    Steps read the legacy settings and infra document through this object and
    publish their outputs (such as the tracking id) back onto it.
    """

    project_path: Path
    config: MigratorConfig
    workspace: MigrationWorkspace
    version: ProjectVersion
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer)
    infra_path: Optional[Path] = None
    tracking_id: Optional[str] = None
    _old_settings: Optional[OldProjectSettings] = field(
        default=None, init=False, repr=False
    )

    def old_settings(self) -> OldProjectSettings:
        if self._old_settings is None:
            self._old_settings = load_old_settings(
                self.project_path, self.config.legacy_settings_path
            )
        return self._old_settings

    def infra_content(self) -> str:
        path = self.infra_path or self.project_path / self.config.infra_path
        if not path.is_file():
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigReadError(str(path), str(e)) from e
