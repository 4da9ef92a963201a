from __future__ import annotations

import os
import re
from typing import Callable, Union

# Quotes are matched independently; the prefix and suffix are put back as found.
_LINK_ATTR_RE = re.compile(r"((?:src|href)=['\"])(.*?)(['\"])", re.I | re.M)
_SKIP_PREFIXES = ("#", "http://", "https://")


def _is_left_alone(value: str) -> bool:
    return value.lower().startswith(_SKIP_PREFIXES)


def _join(directory: str, value: str) -> str:
    # Concatenating join: a leading "/" in value stays below directory
    return os.path.normpath(directory.rstrip("/\\") + os.sep + value)


def rewrite_links(
    html: str,
    document_path: Union[str, os.PathLike],
    to_sandbox_uri: Callable[[str], str],
) -> str:
    """Point relative src/href values of ``html`` at sandbox URIs.

    Values are resolved against the directory of ``document_path``. Anchors and
    http(s) URLs are kept as they are. A ``?query`` suffix is dropped.
    """

    directory = os.path.dirname(os.fspath(document_path))

    def repl(m: re.Match) -> str:
        prefix, value, suffix = m.group(1), m.group(2), m.group(3)
        if _is_left_alone(value):
            return m.group(0)
        index = value.find("?")
        if index > -1:
            value = value[:index]
        return f"{prefix}{to_sandbox_uri(_join(directory, value))}{suffix}"

    return _LINK_ATTR_RE.sub(repl, html)
