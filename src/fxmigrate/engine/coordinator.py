import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from fxmigrate.common import bus
from fxmigrate.common.exceptions import (
    FilesystemError,
    MigrationError,
    RollbackPartialFailureError,
)
from fxmigrate.config import MigratorConfig, load_config_from_path
from fxmigrate.needle import L
from fxmigrate.templates import TemplateRenderer
from fxmigrate.workspace import FileSystemAdapter, MigrationWorkspace, project_lock
from .context import MigrationContext
from .middleware import Middleware, NextFunction, run_middlewares
from .pipeline import StepPipeline
from .version import CURRENT_VERSION, ProjectVersion, VersionOracle

log = logging.getLogger(__name__)


@dataclass
class MigrationOutcome:
    migrated: bool
    version: ProjectVersion
    modified_paths: List[str] = field(default_factory=list)
    tracking_id: Optional[str] = None


def transactional(context: MigrationContext, next: NextFunction) -> Any:
    """Undo everything the pipeline did if a step fails or is interrupted."""
    try:
        return next()
    except BaseException as error:
        bus.warning(L.migration.run.rolling_back)
        try:
            context.workspace.rollback()
        except RollbackPartialFailureError as rollback_error:
            # Secondary: the user needs to see the original cause.
            log.warning("Rollback was incomplete: %s", rollback_error)
            bus.warning(L.migration.rollback.partial_failure, error=str(rollback_error))
            if isinstance(error, MigrationError):
                error.rollback_error = rollback_error
        else:
            bus.info(L.migration.run.rolled_back)
        raise


class MigrationCoordinator:
    def __init__(
        self,
        config: Optional[MigratorConfig] = None,
        pipeline: Optional[StepPipeline] = None,
        middlewares: Optional[Sequence[Middleware]] = None,
        renderer: Optional[TemplateRenderer] = None,
        infra_path: Optional[Path] = None,
        fs: Optional[FileSystemAdapter] = None,
    ):
        self.config = config
        self.pipeline = pipeline or StepPipeline()
        # transactional must stay outermost so it sees every failure.
        self.middlewares: List[Middleware] = [transactional, *(middlewares or [])]
        self.renderer = renderer or TemplateRenderer()
        self.infra_path = infra_path
        self.fs = fs

    def migrate(self, project_path: Path) -> MigrationOutcome:
        root = project_path.resolve()
        config = self.config or load_config_from_path(root)

        with project_lock(root, timeout=config.lock_timeout):
            bus.debug(L.migration.run.checking, path=root)
            version = VersionOracle(config).classify(root)
            if not VersionOracle.is_migratable(version):
                bus.info(
                    L.migration.run.not_needed,
                    path=root,
                    status=version.status.value,
                    version=version.version or "-",
                )
                return MigrationOutcome(migrated=False, version=version)

            workspace = MigrationWorkspace.from_config(root, config, fs=self.fs)
            context = MigrationContext(
                project_path=root,
                config=config,
                workspace=workspace,
                version=version,
                renderer=self.renderer,
                infra_path=self.infra_path,
            )

            bus.info(
                L.migration.run.started, version=version.version, target=CURRENT_VERSION
            )
            run_middlewares(self.middlewares, context, self.pipeline.run)

            modified_paths = workspace.get_modified_paths()
            try:
                workspace.commit(keep_backup=config.keep_backup)
            except FilesystemError as e:
                # The migration itself is complete; only the cleanup failed.
                log.warning("Could not remove backup after commit: %s", e)
                bus.warning(L.migration.run.backup_not_removed, error=str(e))

            self._report(workspace, modified_paths, config)
            return MigrationOutcome(
                migrated=True,
                version=version,
                modified_paths=modified_paths,
                tracking_id=context.tracking_id,
            )

    def _report(
        self,
        workspace: MigrationWorkspace,
        modified_paths: List[str],
        config: MigratorConfig,
    ) -> None:
        bus.success(L.migration.run.success, count=len(modified_paths))
        for path in modified_paths:
            bus.info(L.migration.run.modified_path, path=path)
        if config.keep_backup and workspace.get_backed_up_dirs():
            bus.info(L.migration.run.backup_kept, path=workspace.backup_root)
