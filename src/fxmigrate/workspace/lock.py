import hashlib
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from fxmigrate.common.exceptions import ProjectLockedError

log = logging.getLogger(__name__)


def lock_path_for(project_root: Path) -> Path:
    # Lives outside the project so that locking never alters the project tree.
    digest = hashlib.sha256(str(project_root.resolve()).encode("utf-8")).hexdigest()
    return Path(tempfile.gettempdir()) / f"fxmigrate-{digest[:16]}.lock"


@contextmanager
def project_lock(
    project_root: Path, timeout: float = 10.0, poll_interval: float = 0.1
) -> Iterator[Path]:
    """
    Hold an exclusive, non-reentrant lock on a project root.

    Raises ProjectLockedError when the lock cannot be taken within `timeout`
    seconds. Opening the same root twice, even from one process, conflicts.
    """
    lock_path = lock_path_for(project_root)
    # A fresh FileLock per call: the library only re-enters on the same object.
    lock = FileLock(str(lock_path))
    try:
        lock.acquire(timeout=timeout, poll_interval=poll_interval)
    except Timeout as e:
        raise ProjectLockedError(str(project_root), timeout) from e
    log.debug("Lock acquired for %s", project_root)
    try:
        yield lock_path
    finally:
        lock.release()
        log.debug("Lock released for %s", project_root)
