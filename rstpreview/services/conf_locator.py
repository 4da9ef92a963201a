from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

CONF_FILENAME = "conf.py"


def find_conf_dir(start_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Find the Sphinx project directory by walking up from start_path.

    Args:
        start_path: File or directory to start from. Defaults to cwd.

    Returns:
        Directory containing conf.py, or None when no ancestor has one.
    """
    if start_path is None:
        current = Path.cwd()
    else:
        current = Path(start_path).resolve()

    if not current.is_dir():
        current = current.parent

    while True:
        if (current / CONF_FILENAME).is_file():
            return current

        parent = current.parent
        if parent == current:
            return None
        current = parent


def has_conf_file(config_dir: Union[str, Path]) -> bool:
    return (Path(config_dir) / CONF_FILENAME).is_file()
