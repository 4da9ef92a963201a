from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BackendMode(str, Enum):
    SINGLE_FILE = "docutils"
    PROJECT_BUILD = "sphinx"


@dataclass(frozen=True)
class PreviewRequest:
    source_path: str
    source_uri: str
    project_config_dir: str = ""
    rewrite_links: bool = True
    # Per-document docutils selectors; fall back to settings when unset
    writer: Optional[str] = None
    writer_part: Optional[str] = None


@dataclass(frozen=True)
class BuildConfig:
    config_dir: str
    output_dir: str


@dataclass(frozen=True)
class BackendState:
    ready: bool = False
    error: bool = False
