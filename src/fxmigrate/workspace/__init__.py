from .workspace import MigrationWorkspace, WorkspaceState
from .fs import FileSystemAdapter, RealFileSystem
from .lock import project_lock, lock_path_for

__all__ = [
    "MigrationWorkspace",
    "WorkspaceState",
    "FileSystemAdapter",
    "RealFileSystem",
    "project_lock",
    "lock_path_for",
]
