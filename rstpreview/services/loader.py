from __future__ import annotations

import asyncio
import logging
import traceback
from pathlib import Path
from typing import Callable, Union

from rstpreview.errors import ReadFailure
from rstpreview.services.link_rewriter import rewrite_links
from rstpreview.services.status_pages import error_page, escape_text

logger = logging.getLogger(__name__)


def read_failure_page(failure: ReadFailure) -> str:
    """Status page for a failed read.

    The path is HTML-escaped, so `&`, `<` and `>` in it show up as entities
    in the markup and as the literal path once displayed.
    """
    cause = failure.cause
    description = f"""<p>Cannot read preview page "{escape_text(str(failure.path))}".</p>
          <p>Possible causes are,</p>
          <ul>
          <li>A wrong "conf.py" file is selected.</li>
          <li>Wrong value is set on "esbonio.sphinx.buildDir".</li>
          </ul>"""
    error_message = "\n".join([
        type(cause).__name__,
        str(cause),
        "".join(traceback.format_exception(type(cause), cause, cause.__traceback__)),
    ])
    return error_page(description, error_message)


async def read_html(html_path: Path) -> str:
    try:
        return await asyncio.to_thread(html_path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(html_path, e) from e


async def load_preview_page(
    html_path: Union[str, Path],
    rewrite: bool,
    to_sandbox_uri: Callable[[str], str],
) -> str:
    """Read the generated page once; a failed read becomes a status page."""

    html_path = Path(html_path)
    logger.info("[preview] HTML file: %s", html_path)
    try:
        data = await read_html(html_path)
    except ReadFailure as failure:
        logger.warning("[preview] Cannot read preview page %s: %s", html_path, failure.cause)
        return read_failure_page(failure)

    if rewrite:
        return rewrite_links(data, html_path, to_sandbox_uri)
    return data
