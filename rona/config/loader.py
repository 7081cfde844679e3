# Rona Configuration Loader
# Load, save, and manage the YAML configuration file

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from rona.config.schema import DEFAULT_EDITOR, RonaConfig
from rona.errors import ConfigAlreadyExists, ConfigNotFound, InvalidConfig


def get_config_dir() -> Path:
    """Get the rona configuration directory."""
    return Path.home() / ".config" / "rona"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("RONA_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def generate_default_config(editor: str = DEFAULT_EDITOR) -> str:
    """Generate configuration as YAML string with comments."""
    header = """# rona configuration
#
# editor: command used by 'rona generate' to open commit_message.md
#         (change it with 'rona set-editor <editor>')

"""
    data = RonaConfig(editor=editor).model_dump(mode="json")
    return header + yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_config(config_path: Optional[Path] = None) -> RonaConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        RonaConfig: Validated configuration object.

    Raises:
        ConfigNotFound: If config file doesn't exist.
        InvalidConfig: If config file is not valid YAML or fails validation.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise ConfigNotFound(str(config_path))

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfig(f"Invalid YAML syntax in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfig(f"Invalid configuration format in {config_path}: expected a mapping")

    try:
        return RonaConfig.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise InvalidConfig(f"Invalid configuration in {config_path}: {details}") from e


def save_config(config: RonaConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True, mode="json")
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def create_config_file(editor: str = DEFAULT_EDITOR, config_path: Optional[Path] = None) -> Path:
    """
    Create the configuration file.

    Args:
        editor: Initial editor command.
        config_path: Optional path to config file.

    Returns:
        Path of the created file.

    Raises:
        ConfigAlreadyExists: If the file is already there.
        InvalidConfig: If editor is blank.
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        raise ConfigAlreadyExists(str(config_path))

    try:
        content = generate_default_config(editor)
    except ValidationError as e:
        raise InvalidConfig(f"Invalid editor '{editor}': editor must not be empty") from e

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content, encoding="utf-8")
    return config_path


def set_editor(editor: str, config_path: Optional[Path] = None) -> RonaConfig:
    """
    Update the configured editor and save.

    Args:
        editor: New editor command.
        config_path: Optional path to config file.

    Returns:
        Updated RonaConfig.

    Raises:
        ConfigNotFound: If the file doesn't exist yet.
        InvalidConfig: If editor is blank.
    """
    config = load_config(config_path)

    try:
        updated = RonaConfig.model_validate({**config.model_dump(), "editor": editor})
    except ValidationError as e:
        raise InvalidConfig(f"Invalid editor '{editor}': editor must not be empty") from e

    save_config(updated, config_path)
    return updated
