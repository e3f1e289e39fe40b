import json
import os
from pathlib import Path
from typing import Any, Dict, Optional


class JsonHandler:
    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, OSError):
            return {}


class Loader:
    def __init__(self, handler: Optional[JsonHandler] = None):
        self.handler = handler or JsonHandler()

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        if not root_path.is_dir():
            return registry

        # Sorted walk so that overlapping keys resolve the same way on every OS.
        for dirpath, dirnames, filenames in os.walk(root_path):
            dirnames.sort()
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if not self.handler.match(file_path):
                    continue
                # Keys are full dotted ids at the top level of each file.
                for key, value in self.handler.load(file_path).items():
                    registry[str(key)] = str(value)
        return registry
