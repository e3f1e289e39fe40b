import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from .loader import Loader
from .pointer import SemanticPointer


class Needle:
    """
    Resolves semantic pointers to message templates.

    Each root is expected to contain one directory per language
    (``<root>/<lang>/*.json``). Roots added later take precedence, which
    lets a caller overlay project-specific wording on the packaged assets.
    """

    def __init__(self, roots: Optional[List[Path]] = None, default_lang: str = "en"):
        self.default_lang = default_lang
        self.roots: List[Path] = list(roots or [])
        self._loader = Loader()
        self._registry: Dict[str, Dict[str, str]] = {}

    def add_root(self, path: Path) -> None:
        if path not in self.roots:
            self.roots.append(path)
            self._registry.clear()

    def _ensure_lang_loaded(self, lang: str) -> Dict[str, str]:
        if lang not in self._registry:
            merged: Dict[str, str] = {}
            for root in self.roots:
                merged.update(self._loader.load_directory(root / lang))
            self._registry[lang] = merged
        return self._registry[lang]

    def get(self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None) -> str:
        """
        Lookup order: target language, default language, then the key itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv("FXMIGRATE_LANG", self.default_lang)

        value = self._ensure_lang_loaded(target_lang).get(key)
        if value is not None:
            return value

        if target_lang != self.default_lang:
            value = self._ensure_lang_loaded(self.default_lang).get(key)
            if value is not None:
                return value

        return key
