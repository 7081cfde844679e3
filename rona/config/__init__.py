# Rona Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from rona.config.loader import (
    create_config_file,
    generate_default_config,
    get_config_path,
    load_config,
    save_config,
    set_editor,
)
from rona.config.schema import DEFAULT_EDITOR, RonaConfig

__all__ = [
    # Schema
    "RonaConfig",
    "DEFAULT_EDITOR",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "create_config_file",
    "set_editor",
    "generate_default_config",
]
