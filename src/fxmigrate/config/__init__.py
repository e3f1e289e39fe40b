from .loader import MigratorConfig, load_config_from_path, CONFIG_FILE_NAME
from .legacy import (
    OldProjectSettings,
    load_old_settings,
    normalize_plugin_name,
    read_json_object,
)

__all__ = [
    "MigratorConfig",
    "load_config_from_path",
    "CONFIG_FILE_NAME",
    "OldProjectSettings",
    "load_old_settings",
    "normalize_plugin_name",
    "read_json_object",
]
