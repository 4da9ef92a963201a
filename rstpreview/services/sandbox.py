from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Set, Union
from urllib.parse import quote

logger = logging.getLogger(__name__)


class SandboxUriMapper(ABC):
    @abstractmethod
    def to_sandbox_uri(self, path: Union[str, Path]) -> str:
        """Return the address under which the preview surface may load ``path``."""
        raise NotImplementedError


class LocalSandbox(SandboxUriMapper):
    """Maps local files to ``<base_url>/<absolute path>`` and back.

    Only files below an allowed root are served back, so a rewritten page can
    reach the project's own resources and nothing else.
    """

    def __init__(self, base_url: str = "/sandbox"):
        self.base_url = base_url.rstrip("/")
        self._roots: Set[Path] = set()
        self._lock = threading.Lock()

    @property
    def roots(self) -> Set[Path]:
        with self._lock:
            return set(self._roots)

    def allow(self, root: Union[str, Path]) -> None:
        resolved = Path(root).resolve()
        with self._lock:
            if resolved in self._roots:
                return
            self._roots.add(resolved)
        logger.debug("[preview] Sandbox root added: %s", resolved)

    def to_sandbox_uri(self, path: Union[str, Path]) -> str:
        posix = Path(path).as_posix().lstrip("/")
        return f"{self.base_url}/{quote(posix, safe='/')}"

    def resolve(self, uri_path: str) -> Optional[Path]:
        """Turn the path part of a sandbox URI back into an allowed file, or None."""
        candidate = Path(uri_path)
        if not candidate.is_absolute():
            candidate = Path("/") / uri_path
        candidate = candidate.resolve()
        for root in self.roots:
            if candidate == root or root in candidate.parents:
                return candidate if candidate.is_file() else None
        return None
