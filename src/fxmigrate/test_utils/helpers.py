from pathlib import Path
from typing import Dict, List, Optional

import yaml


def snapshot_tree(root: Path) -> Dict[str, Optional[bytes]]:
    """Map every path under `root` to its bytes (None for directories)."""
    snapshot: Dict[str, Optional[bytes]] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        snapshot[rel] = None if path.is_dir() else path.read_bytes()
    return snapshot


def load_app_yml(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def get_actions(stage: Optional[List[dict]], action_name: str) -> List[dict]:
    if not stage:
        return []
    return [item for item in stage if item.get("uses") == action_name]
