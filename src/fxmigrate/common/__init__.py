from pathlib import Path

from fxmigrate.needle import Needle
from .messaging.bus import MessageBus
from .exceptions import (
    MigrationError,
    ConfigReadError,
    UnsupportedTargetError,
    TemplateRenderError,
    FilesystemError,
    AlreadyExistsError,
    WorkspaceClosedError,
    ProjectLockedError,
    RollbackPartialFailureError,
)

# --- Composition root for the shared services ---

_assets_root = Path(__file__).parent / "assets" / "needle"

fxmigrate_nexus = Needle(roots=[_assets_root])

bus = MessageBus(nexus_instance=fxmigrate_nexus)

__all__ = [
    "bus",
    "fxmigrate_nexus",
    "MessageBus",
    "MigrationError",
    "ConfigReadError",
    "UnsupportedTargetError",
    "TemplateRenderError",
    "FilesystemError",
    "AlreadyExistsError",
    "WorkspaceClosedError",
    "ProjectLockedError",
    "RollbackPartialFailureError",
]
