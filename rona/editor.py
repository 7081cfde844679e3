# Rona Editor
# Opening commit_message.md in the configured editor

import shlex
import subprocess
from pathlib import Path

from rona.config.schema import RonaConfig
from rona.errors import RonaError


def open_in_editor(config: RonaConfig, file_path: Path) -> int:
    """
    Open a file in the configured editor and wait for it to exit.

    The editor setting may carry arguments (``code --wait``).

    Args:
        config: Loaded configuration.
        file_path: File to edit.

    Returns:
        Editor exit code.

    Raises:
        RonaError: If the editor executable cannot be started.
    """
    cmd = [*shlex.split(config.editor), str(file_path)]
    try:
        result = subprocess.run(cmd, check=False)
    except FileNotFoundError:
        raise RonaError(f"Editor '{config.editor}' not found. Change it with 'rona set-editor <editor>'.")
    return result.returncode
