from __future__ import annotations

from pydantic import BaseModel
from typing import Optional


class PreviewIn(BaseModel):
    source_path: str
    source_uri: Optional[str] = None
    # None: look the project up from the source file; "": preview the single file
    project_config_dir: Optional[str] = None
    rewrite_links: bool = True
    writer: Optional[str] = None
    writer_part: Optional[str] = None


class BackendStateIn(BaseModel):
    ready: bool
    error: bool = False
    config_dir: Optional[str] = None
    output_dir: Optional[str] = None


class BackendStateOut(BaseModel):
    ready: bool
    error: bool
    config_dir: Optional[str] = None
    output_dir: Optional[str] = None
