from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from rstpreview.errors import BackendBusy, BackendError
from rstpreview.models import BackendState, BuildConfig

logger = logging.getLogger(__name__)


class BuildBackend(ABC):
    @abstractmethod
    def query_state(self) -> BackendState:
        raise NotImplementedError

    @abstractmethod
    def build_config(self) -> Optional[BuildConfig]:
        """Return the backend's project and output directories, if known."""
        raise NotImplementedError

    def snapshot(self) -> Tuple[BackendState, Optional[BuildConfig]]:
        """State and build config as one consistent pair."""
        return self.query_state(), self.build_config()


class LocalBuildBackend(BuildBackend):
    """Holds whatever the build backend last published about itself.

    State and config are swapped together so readers on other threads never
    pair a new state with a stale config.
    """

    def __init__(self, state: Optional[BackendState] = None, config: Optional[BuildConfig] = None):
        self._current: Tuple[BackendState, Optional[BuildConfig]] = (state or BackendState(), config)
        self._lock = threading.Lock()

    def query_state(self) -> BackendState:
        return self._current[0]

    def build_config(self) -> Optional[BuildConfig]:
        return self._current[1]

    def snapshot(self) -> Tuple[BackendState, Optional[BuildConfig]]:
        return self._current

    def publish(self, state: BackendState, config: Optional[BuildConfig] = None) -> None:
        logger.info("[preview] Backend state: ready=%s error=%s", state.ready, state.error)
        with self._lock:
            if config is None:
                config = self._current[1]
            self._current = (state, config)


def check_ready(state: BackendState) -> None:
    """Raise unless generated output can be trusted.

    Build errors take precedence over readiness.
    """
    if state.error:
        raise BackendError("Esbonio detected build errors.")
    if not state.ready:
        raise BackendBusy("Esbonio is still building.")
