from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


PREVIEW_NAMES = ("", "docutils", "sphinx")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
BUNDLED_RENDERER = str(Path(__file__).resolve().parent / "python_scripts" / "preview.py")


@dataclass(frozen=True)
class PreviewSettings:
    preview_name: str = ""
    docutils_writer: str = "html"
    docutils_writer_part: str = "html_body"
    python_path: str = sys.executable
    renderer_script: str = BUNDLED_RENDERER
    renderer_timeout: Optional[float] = None
    sandbox_base_url: str = "/sandbox"
    log_level: str = "INFO"

    @property
    def forces_single_file(self) -> bool:
        return self.preview_name == "docutils"

    def writer_for(self, override: Optional[str] = None) -> str:
        return override or self.docutils_writer

    def writer_part_for(self, override: Optional[str] = None) -> str:
        return override or self.docutils_writer_part


def _timeout_from_env(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def load_settings() -> PreviewSettings:
    """Build settings from RSTPREVIEW_* environment variables.

    Unknown or malformed values fall back to the defaults.
    """

    preview_name = os.getenv("RSTPREVIEW_PREVIEW_NAME", "").strip().lower()
    if preview_name not in PREVIEW_NAMES:
        preview_name = ""

    log_level = os.getenv("RSTPREVIEW_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return PreviewSettings(
        preview_name=preview_name,
        docutils_writer=os.getenv("RSTPREVIEW_DOCUTILS_WRITER") or "html",
        docutils_writer_part=os.getenv("RSTPREVIEW_DOCUTILS_WRITER_PART") or "html_body",
        python_path=os.getenv("RSTPREVIEW_PYTHON") or sys.executable,
        renderer_script=os.getenv("RSTPREVIEW_RENDERER_SCRIPT") or BUNDLED_RENDERER,
        renderer_timeout=_timeout_from_env(os.getenv("RSTPREVIEW_RENDERER_TIMEOUT")),
        sandbox_base_url=(os.getenv("RSTPREVIEW_SANDBOX_URL") or "/sandbox").rstrip("/") or "/sandbox",
        log_level=log_level,
    )


def configure_logging(settings: PreviewSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
