from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from rstpreview.converters.docutils_converter import SingleFileRenderer
from rstpreview.errors import BackendBusy, BackendError, ConfigurationMissing
from rstpreview.models import BackendMode, PreviewRequest
from rstpreview.services.build_backend import BuildBackend, check_ready
from rstpreview.services.conf_locator import find_conf_dir, has_conf_file
from rstpreview.services.loader import load_preview_page
from rstpreview.services.output_path import resolve_output_path
from rstpreview.services.sandbox import SandboxUriMapper
from rstpreview.services.status_pages import error_page, error_snippet, escape_text, wait_page
from rstpreview.settings import PreviewSettings

logger = logging.getLogger(__name__)


def select_mode(request: PreviewRequest, settings: PreviewSettings) -> BackendMode:
    if request.project_config_dir == "" or settings.forces_single_file:
        return BackendMode.SINGLE_FILE
    return BackendMode.PROJECT_BUILD


class PreviewEngine:
    """Turns a preview request into HTML the preview surface can display.

    Single-file requests go straight to the docutils renderer. Project requests
    wait for the build backend, locate the page it generated and optionally
    point its resource links at the sandbox. Failures come back as status
    pages, never as exceptions.
    """

    def __init__(
        self,
        renderer: SingleFileRenderer,
        backend: BuildBackend,
        sandbox: SandboxUriMapper,
        settings: PreviewSettings,
        locate_conf_dir: Callable[[Union[str, Path]], Optional[Path]] = find_conf_dir,
    ):
        self.renderer = renderer
        self.backend = backend
        self.sandbox = sandbox
        self.settings = settings
        self.locate_conf_dir = locate_conf_dir
        self._handlers = {
            BackendMode.SINGLE_FILE: self._render_single_file,
            BackendMode.PROJECT_BUILD: self._render_project_page,
        }

    async def preview(
        self,
        source_path: Union[str, Path],
        source_uri: Optional[str] = None,
        project_config_dir: Optional[str] = None,
        rewrite_links: bool = True,
        writer: Optional[str] = None,
        writer_part: Optional[str] = None,
    ) -> str:
        """Preview ``source_path``; an empty ``project_config_dir`` means no project.

        When ``project_config_dir`` is None the project is looked up from the
        source file.
        """
        try:
            if project_config_dir is None:
                found = self.locate_conf_dir(source_path)
                project_config_dir = str(found) if found else ""
            request = PreviewRequest(
                source_path=str(source_path),
                source_uri=source_uri or Path(os.path.abspath(source_path)).as_uri(),
                project_config_dir=project_config_dir,
                rewrite_links=rewrite_links,
                writer=writer,
                writer_part=writer_part,
            )
            return await self.compile(request)
        except Exception as e:
            logger.exception("[preview] Preview failed for %s", source_path)
            return error_snippet(str(e))

    async def compile(self, request: PreviewRequest) -> str:
        logger.info("[preview] Compiling file: %s", request.source_path)
        mode = select_mode(request, self.settings)
        logger.info("[preview] Mode: %s", mode.value)
        if mode is BackendMode.SINGLE_FILE and self.settings.forces_single_file:
            logger.info('[preview] Forced to use docutils due to setting "preview.name".')
        return await self._handlers[mode](request)

    async def _render_single_file(self, request: PreviewRequest) -> str:
        writer = self.settings.writer_for(request.writer)
        writer_part = self.settings.writer_part_for(request.writer_part)
        logger.info("[preview] docutils writer: %s, part: %s", writer, writer_part)
        return await self.renderer.render(request.source_path, writer, writer_part)

    async def _render_project_page(self, request: PreviewRequest) -> str:
        try:
            html_path = self._project_output_path(request)
        except BackendError:
            return error_page("<p>Esbonio detected build errors.</p>", "Not Available")
        except BackendBusy:
            return wait_page()
        except ConfigurationMissing as e:
            return error_page(f"<p>{escape_text(str(e))}</p>", "Not Available")

        return await load_preview_page(html_path, request.rewrite_links, self.sandbox.to_sandbox_uri)

    def _project_output_path(self, request: PreviewRequest) -> Path:
        config_dir = request.project_config_dir
        logger.info("[preview] Sphinx conf.py directory: %s", config_dir)

        # Nothing on disk is looked at before the backend says it is done
        state, build = self.backend.snapshot()
        check_ready(state)
        config_dir = self._confirm_conf_dir(config_dir, request.source_path)

        if build is None or not build.output_dir:
            raise ConfigurationMissing("The Sphinx build directory is not known. Check \"esbonio.sphinx.buildDir\".")
        logger.info("[preview] Sphinx html directory: %s", build.output_dir)

        html_path = resolve_output_path(request.source_path, config_dir, build.output_dir)
        logger.info("[preview] Working directory: %s", config_dir)
        return html_path

    def _confirm_conf_dir(self, config_dir: str, source_path: str) -> str:
        if has_conf_file(config_dir):
            return config_dir
        logger.warning("[preview] conf.py not found in %s. Refreshing the settings.", config_dir)
        found = self.locate_conf_dir(source_path)
        if found is not None and str(found) != config_dir:
            logger.info("[preview] Sphinx conf.py directory: %s", found)
            return str(found)
        return config_dir
