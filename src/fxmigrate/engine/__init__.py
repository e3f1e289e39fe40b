from .version import (
    CURRENT_VERSION,
    MIGRATION_VERSION,
    ProjectVersion,
    VersionOracle,
    VersionStatus,
)
from .context import MigrationContext
from .middleware import Middleware, NextFunction, run_middlewares
from .steps import (
    DEFAULT_STEPS,
    MigrationStep,
    generate_app_local_yml,
    generate_app_yml,
    generate_settings_json,
    pre_migration,
)
from .pipeline import StepInvocation, StepPipeline, trace_step
from .coordinator import MigrationCoordinator, MigrationOutcome, transactional

__all__ = [
    "CURRENT_VERSION",
    "MIGRATION_VERSION",
    "ProjectVersion",
    "VersionOracle",
    "VersionStatus",
    "MigrationContext",
    "Middleware",
    "NextFunction",
    "run_middlewares",
    "DEFAULT_STEPS",
    "MigrationStep",
    "generate_app_local_yml",
    "generate_app_yml",
    "generate_settings_json",
    "pre_migration",
    "StepInvocation",
    "StepPipeline",
    "trace_step",
    "MigrationCoordinator",
    "MigrationOutcome",
    "transactional",
]
