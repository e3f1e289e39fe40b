import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, Iterator, List, Optional, Union

from fxmigrate.common.exceptions import (
    AlreadyExistsError,
    FilesystemError,
    RollbackPartialFailureError,
    WorkspaceClosedError,
)
from fxmigrate.config import MigratorConfig
from .fs import FileSystemAdapter, RealFileSystem

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Sub-folder of the backup root holding single files saved before an overwrite.
PRESERVED_FILES_FOLDER = ".files"
# Hidden siblings used to swap a restored directory into place.
RESTORE_STAGING_SUFFIX = ".fxmigrate-restore"
RETIRED_SUFFIX = ".fxmigrate-retired"


class WorkspaceState(str, Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class MigrationWorkspace:
    """
    Mediates every filesystem mutation performed during one migration attempt.

    All paths are relative to `root_path`. Each mutating primitive records the
    paths it created or overwrote in an ordered ledger so that a failed attempt
    can be undone with `rollback()`: tracked paths are removed deepest-first,
    backed-up directories are copied back and the backup root is dropped.
    """

    def __init__(
        self,
        root_path: Path,
        backup_folder: str = ".backup",
        strict_create: bool = False,
        fs: Optional[FileSystemAdapter] = None,
    ):
        self.root_path = root_path.resolve()
        self.fs = fs or RealFileSystem()
        self.strict_create = strict_create
        self.backup_folder = self._normalize(backup_folder)
        self.backup_root = self.root_path / self.backup_folder
        self.state = WorkspaceState.ACTIVE

        # dicts used as insertion-ordered sets
        self._modified: Dict[str, None] = {}
        self._backed_up: Dict[str, None] = {}
        self._preserved: Dict[str, None] = {}
        self._owns_backup_root = False

    @classmethod
    def from_config(
        cls,
        root_path: Path,
        config: MigratorConfig,
        fs: Optional[FileSystemAdapter] = None,
    ) -> "MigrationWorkspace":
        return cls(
            root_path,
            backup_folder=config.backup_folder,
            strict_create=config.strict_create,
            fs=fs,
        )

    # --- Helpers ---

    def _normalize(self, relative_path: PathLike) -> str:
        posix = PurePosixPath(Path(relative_path).as_posix())
        if posix.is_absolute() or ".." in posix.parts:
            raise ValueError(f"Path must stay inside the project: '{relative_path}'")
        normalized = posix.as_posix()
        if normalized in ("", "."):
            raise ValueError("Path must not point at the project root.")
        return normalized

    def _check_active(self) -> None:
        if self.state != WorkspaceState.ACTIVE:
            raise WorkspaceClosedError(
                f"Workspace for '{self.root_path}' is already {self.state.value}."
            )

    @contextmanager
    def _guard(self, action: str, path: PathLike) -> Iterator[None]:
        try:
            yield
        except OSError as e:
            raise FilesystemError(f"Failed to {action} '{path}': {e}") from e

    def _record(self, relative_path: str) -> None:
        self._modified[relative_path] = None

    def _is_backed_up(self, relative_path: str) -> bool:
        return any(
            relative_path == d or relative_path.startswith(d + "/")
            for d in self._backed_up
        )

    def _is_in_backup_root(self, relative_path: str) -> bool:
        return relative_path == self.backup_folder or relative_path.startswith(
            self.backup_folder + "/"
        )

    def _make_dirs(self, relative_dir: str) -> None:
        current = PurePosixPath()
        for part in PurePosixPath(relative_dir).parts:
            current = current / part
            target = self.root_path / current
            if self.fs.exists(target):
                continue
            with self._guard("create directory", current):
                self.fs.mkdir(target)
            self._record(current.as_posix())

    def _make_parents(self, relative_path: str) -> None:
        parent = PurePosixPath(relative_path).parent.as_posix()
        if parent != ".":
            self._make_dirs(parent)

    def _ensure_backup_root(self) -> None:
        if self._owns_backup_root:
            return
        if self.fs.exists(self.backup_root):
            raise FilesystemError(
                f"Backup directory '{self.backup_root}' already exists. "
                "Remove it before starting a new migration."
            )
        self._owns_backup_root = True

    def _preserve_existing_file(self, relative_path: str) -> None:
        """Save a pre-existing file before it is overwritten for the first time."""
        target = self.root_path / relative_path
        if (
            relative_path in self._modified
            or relative_path in self._preserved
            or self._is_backed_up(relative_path)
            or not self.fs.is_file(target)
        ):
            return
        self._ensure_backup_root()
        saved = self.backup_root / PRESERVED_FILES_FOLDER / relative_path
        with self._guard("preserve", relative_path):
            self.fs.copy_file(target, saved)
        self._preserved[relative_path] = None

    # --- Mutating primitives ---

    def backup(self, relative_dir: PathLike) -> bool:
        self._check_active()
        rel = self._normalize(relative_dir)
        if self._is_in_backup_root(rel):
            raise ValueError(f"Cannot back up the backup directory itself: '{rel}'")

        source = self.root_path / rel
        if not self.fs.is_dir(source):
            log.debug("Nothing to back up at %s", source)
            return False

        self._ensure_backup_root()
        dest = self.backup_root / rel
        with self._guard("back up", rel):
            if self.fs.exists(dest):
                self.fs.rmtree(dest)
            self.fs.copy_tree(source, dest)
        self._backed_up[rel] = None
        log.debug("Backed up %s to %s", rel, dest)
        return True

    def write_file(self, relative_path: PathLike, content: str) -> None:
        self._check_active()
        rel = self._normalize(relative_path)
        self._preserve_existing_file(rel)
        self._make_parents(rel)
        with self._guard("write", rel):
            self.fs.write_text(self.root_path / rel, content)
        self._record(rel)

    def copy(self, src_relative_path: PathLike, dst_relative_path: PathLike) -> None:
        self._check_active()
        src = self._normalize(src_relative_path)
        dst = self._normalize(dst_relative_path)
        source = self.root_path / src

        if self.fs.is_dir(source):
            self._make_dirs(dst)
            with self._guard("list", src):
                entries = self.fs.walk_tree(source)
            for entry, is_dir in entries:
                target = f"{dst}/{entry}"
                if is_dir:
                    self._make_dirs(target)
                    continue
                self._preserve_existing_file(target)
                with self._guard("copy", target):
                    self.fs.copy_file(source / entry, self.root_path / target)
                self._record(target)
        elif self.fs.is_file(source):
            self._preserve_existing_file(dst)
            self._make_parents(dst)
            with self._guard("copy", dst):
                self.fs.copy_file(source, self.root_path / dst)
            self._record(dst)
        else:
            raise FilesystemError(f"Cannot copy '{src}': source does not exist.")

    def ensure_dir(self, relative_path: PathLike) -> None:
        self._check_active()
        self._make_dirs(self._normalize(relative_path))

    def create_file(self, relative_path: PathLike) -> None:
        # Non-strict mode truncates an existing file instead of failing.
        self._check_active()
        rel = self._normalize(relative_path)
        if self.fs.exists(self.root_path / rel):
            if self.strict_create:
                raise AlreadyExistsError(rel)
            self._preserve_existing_file(rel)
        self._make_parents(rel)
        with self._guard("create", rel):
            self.fs.write_text(self.root_path / rel, "")
        self._record(rel)

    # --- Ledger ---

    def get_modified_paths(self) -> List[str]:
        return list(self._modified)

    def get_backed_up_dirs(self) -> List[str]:
        return list(self._backed_up)

    def clean_modified_paths(self) -> None:
        failures: List[str] = []
        # Deepest first, so directories are empty by the time we reach them.
        ordered = sorted(self._modified, key=lambda p: p.count("/"), reverse=True)
        for rel in ordered:
            target = self.root_path / rel
            try:
                if self.fs.is_dir(target):
                    self.fs.rmdir(target)
                elif self.fs.exists(target):
                    self.fs.remove(target)
            except OSError as e:
                log.warning("Could not remove %s: %s", rel, e)
                failures.append(f"{rel} ({e})")
                continue
            del self._modified[rel]

        if failures:
            raise FilesystemError(
                "Failed to remove generated path(s): " + ", ".join(failures)
            )

    def _restore_dir(self, rel: str) -> None:
        live = self.root_path / rel
        staging = live.with_name(f".{live.name}{RESTORE_STAGING_SUFFIX}")
        retired = live.with_name(f".{live.name}{RETIRED_SUFFIX}")

        # Copy first; the live directory is only touched once a full copy exists.
        self.fs.rmtree(staging)
        try:
            self.fs.copy_tree(self.backup_root / rel, staging)
        except OSError:
            self._discard(staging)
            raise

        self.fs.rmtree(retired)
        had_live = self.fs.exists(live)
        if had_live:
            self.fs.move(live, retired)
        try:
            self.fs.move(staging, live)
        except OSError:
            if had_live:
                self.fs.move(retired, live)
            self._discard(staging)
            raise
        self.fs.rmtree(retired)

    def _discard(self, path: Path) -> None:
        try:
            self.fs.rmtree(path)
        except OSError as e:
            log.warning("Could not remove leftover %s: %s", path, e)

    def restore_backup(self) -> None:
        failures: List[str] = []
        for rel in self._backed_up:
            try:
                self._restore_dir(rel)
            except OSError as e:
                log.warning("Could not restore %s: %s", rel, e)
                failures.append(f"{rel} ({e})")

        for rel in self._preserved:
            try:
                self.fs.copy_file(
                    self.backup_root / PRESERVED_FILES_FOLDER / rel,
                    self.root_path / rel,
                )
            except OSError as e:
                log.warning("Could not restore %s: %s", rel, e)
                failures.append(f"{rel} ({e})")

        if failures:
            raise FilesystemError(
                "Failed to restore backed-up path(s): " + ", ".join(failures)
            )

    def clean_backup(self) -> None:
        if not self._owns_backup_root:
            return
        with self._guard("remove backup", self.backup_root):
            self.fs.rmtree(self.backup_root)
        self._owns_backup_root = False

    # --- Lifecycle ---

    def _run_phase(self, phase: Callable[[], None], failures: List[Exception]) -> bool:
        try:
            phase()
        except Exception as e:
            log.warning("Rollback phase '%s' failed: %s", phase.__name__, e)
            failures.append(e)
            return False
        return True

    def rollback(self) -> None:
        failures: List[Exception] = []
        # Best effort: a failed cleanup must not stop the restore.
        self._run_phase(self.clean_modified_paths, failures)
        restored = self._run_phase(self.restore_backup, failures)

        kept_backup: Optional[Path] = None
        if restored:
            self._run_phase(self.clean_backup, failures)
        elif self._owns_backup_root:
            # The backup may now hold the only intact copy of the project.
            kept_backup = self.backup_root
            log.warning("Restore failed; keeping backup at %s", kept_backup)

        self.state = WorkspaceState.ROLLED_BACK
        if failures:
            raise RollbackPartialFailureError(failures, backup_path=kept_backup)

    def commit(self, keep_backup: bool = True) -> None:
        self._check_active()
        self._modified.clear()
        if not keep_backup:
            self.clean_backup()
        self.state = WorkspaceState.COMMITTED
