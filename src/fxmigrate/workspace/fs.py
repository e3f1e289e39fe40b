import os
import shutil
from pathlib import Path
from typing import List, Protocol, Tuple


class FileSystemAdapter(Protocol):
    def exists(self, path: Path) -> bool: ...
    def is_dir(self, path: Path) -> bool: ...
    def is_file(self, path: Path) -> bool: ...
    def mkdir(self, path: Path) -> None: ...
    def write_text(self, path: Path, content: str) -> None: ...
    def copy_file(self, src: Path, dest: Path) -> None: ...
    def copy_tree(self, src: Path, dest: Path) -> None: ...
    def move(self, src: Path, dest: Path) -> None: ...
    def walk_tree(self, root: Path) -> List[Tuple[str, bool]]: ...
    def remove(self, path: Path) -> None: ...
    def rmdir(self, path: Path) -> None: ...
    def rmtree(self, path: Path) -> None: ...


class RealFileSystem:
    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def mkdir(self, path: Path) -> None:
        path.mkdir()

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def copy_file(self, src: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)

    def copy_tree(self, src: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(src, dest)

    def move(self, src: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(src), str(dest))

    def walk_tree(self, root: Path) -> List[Tuple[str, bool]]:
        # (relative posix path, is_dir), parents always before children
        entries: List[Tuple[str, bool]] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            base = Path(dirpath).relative_to(root)
            for name in dirnames:
                entries.append(((base / name).as_posix(), True))
            for name in sorted(filenames):
                entries.append(((base / name).as_posix(), False))
        return entries

    def remove(self, path: Path) -> None:
        if path.exists():
            path.unlink()

    def rmdir(self, path: Path) -> None:
        path.rmdir()

    def rmtree(self, path: Path) -> None:
        if path.exists():
            shutil.rmtree(path)
