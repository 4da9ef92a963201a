from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from rstpreview.errors import ConversionError

logger = logging.getLogger(__name__)


class SingleFileRenderer(ABC):
    @abstractmethod
    async def render(self, source_path: str, writer: str, writer_part: str) -> str:
        """Render one document to HTML, raising ConversionError on failure."""
        raise NotImplementedError


class DocutilsConverter(SingleFileRenderer):
    def __init__(self, python_path: str, script_path: str, timeout_sec: Optional[float] = None):
        self.python_path = python_path
        self.script_path = script_path
        self.timeout_sec = timeout_sec

    def command(self, source_path: str, writer: str, writer_part: str) -> List[str]:
        return [self.python_path, str(self.script_path), str(source_path), writer, writer_part]

    async def render(self, source_path: str, writer: str, writer_part: str) -> str:
        if not Path(self.script_path).is_file():
            raise ConversionError(f"Preview script not found: {self.script_path}")

        args = self.command(source_path, writer, writer_part)
        logger.debug("[preview] Running: %s", args)

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ConversionError(f"docutils execution failed: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout_sec)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise ConversionError(f"docutils timed out after {self.timeout_sec}s") from e

        if proc.returncode != 0:
            raise ConversionError(f"docutils failed: {stderr.decode('utf-8', errors='replace').strip()}")

        return stdout.decode("utf-8", errors="replace")
