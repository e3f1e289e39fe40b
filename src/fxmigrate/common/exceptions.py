from pathlib import Path
from typing import List, Optional


class MigrationError(Exception):
    """Base class for every error raised by the migration engine."""

    def __init__(self, message: str):
        super().__init__(message)
        # Set by the coordinator when rollback after this error was incomplete.
        self.rollback_error: Optional["RollbackPartialFailureError"] = None


class ConfigReadError(MigrationError):
    """Legacy or target configuration is missing or cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read project configuration at '{path}': {reason}")


class UnsupportedTargetError(MigrationError):
    def __init__(self, host_type: Optional[str], language: Optional[str]):
        self.host_type = host_type
        self.language = language
        super().__init__(
            "Cannot automatically upgrade this project type "
            f"(host type: {host_type or 'unknown'}, language: {language or 'unknown'}). "
            "Please upgrade the project manually."
        )


class TemplateRenderError(MigrationError):
    pass


class FilesystemError(MigrationError):
    pass


class AlreadyExistsError(FilesystemError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File already exists: '{path}'")


class WorkspaceClosedError(FilesystemError):
    pass


class ProjectLockedError(MigrationError):
    def __init__(self, project_path: str, timeout: float):
        self.project_path = project_path
        self.timeout = timeout
        super().__init__(
            f"Another migration is running for '{project_path}' "
            f"(lock not acquired after {timeout}s)."
        )


class RollbackPartialFailureError(MigrationError):
    """Collects the failures of individual rollback phases."""

    def __init__(self, failures: List[Exception], backup_path: Optional[Path] = None):
        self.failures = failures
        # Set when the backup was kept because the restore did not complete.
        self.backup_path = backup_path
        details = "; ".join(str(f) for f in failures)
        message = f"Rollback finished with {len(failures)} error(s): {details}"
        if backup_path is not None:
            message += f". The pre-migration backup was kept at '{backup_path}'."
        super().__init__(message)
