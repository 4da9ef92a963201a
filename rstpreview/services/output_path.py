from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike]


def html_name_for(source_path: PathLike) -> str:
    """Swap the extension of ``source_path`` for ``.html``.

    Only the file name is inspected: a name without a dot keeps all of it as
    the stem (``README`` -> ``README.html``).
    """

    whole = os.path.abspath(os.fspath(source_path))
    ext = whole.rfind(".")
    if ext <= whole.rfind(os.sep):
        return whole + ".html"
    return whole[:ext] + ".html"


def resolve_output_path(source_path: PathLike, config_dir: PathLike, output_dir: PathLike) -> Path:
    """Locate the HTML the build backend generates for ``source_path``.

    The backend mirrors the source tree below ``config_dir`` into
    ``output_dir``. Both directories are made relative to ``config_dir`` before
    being joined, so the output directory may live inside, beside or outside
    the project. Nothing is read from disk.
    """

    config_dir = os.path.abspath(os.fspath(config_dir))
    whole = html_name_for(source_path)
    source_relative = os.path.relpath(os.path.dirname(whole), config_dir)
    output_relative = os.path.relpath(os.path.abspath(os.fspath(output_dir)), config_dir)
    html_path = os.path.join(config_dir, output_relative, source_relative, os.path.basename(whole))
    return Path(os.path.normpath(html_path))
