from .bus import SpyBus
from .project import LegacyProjectFactory, DEFAULT_LEGACY_SETTINGS
from .helpers import snapshot_tree, load_app_yml, get_actions

__all__ = [
    "SpyBus",
    "LegacyProjectFactory",
    "DEFAULT_LEGACY_SETTINGS",
    "snapshot_tree",
    "load_app_yml",
    "get_actions",
]
