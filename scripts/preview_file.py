#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rstpreview.converters.docutils_converter import DocutilsConverter
from rstpreview.converters.engine import PreviewEngine
from rstpreview.models import BackendState, BuildConfig
from rstpreview.services.build_backend import LocalBuildBackend
from rstpreview.services.conf_locator import find_conf_dir
from rstpreview.services.sandbox import LocalSandbox
from rstpreview.settings import configure_logging, load_settings


def main():
    parser = argparse.ArgumentParser(description="Resolve the HTML preview of a reStructuredText file")
    parser.add_argument("source", type=str, help="Path to .rst file")
    parser.add_argument("--conf-dir", type=str, default=None, help="Sphinx project directory (defaults to the nearest conf.py)")
    parser.add_argument("--output-dir", type=str, default=None, help="Sphinx html output directory (defaults to <conf-dir>/_build/html)")
    parser.add_argument("--single-file", action="store_true", help="Render with docutils only")
    parser.add_argument("--no-fix-links", action="store_true", help="Keep relative links as generated")
    parser.add_argument("--out-html", type=str, default=None, help="Write the preview here instead of stdout")
    args = parser.parse_args()

    source = Path(args.source)
    if not source.exists():
        print(f"File not found: {source}", file=sys.stderr)
        return 2

    settings = load_settings()
    configure_logging(settings)

    if args.single_file:
        conf_dir = ""
    else:
        found = Path(args.conf_dir) if args.conf_dir else find_conf_dir(source)
        conf_dir = str(found.resolve()) if found else ""

    backend = LocalBuildBackend()
    sandbox = LocalSandbox(base_url=settings.sandbox_base_url)
    if conf_dir:
        output_dir = args.output_dir or str(Path(conf_dir) / "_build" / "html")
        # An existing output directory is taken as a finished build
        backend.publish(
            BackendState(ready=Path(output_dir).is_dir(), error=False),
            BuildConfig(config_dir=conf_dir, output_dir=output_dir),
        )

    renderer = DocutilsConverter(
        python_path=settings.python_path,
        script_path=settings.renderer_script,
        timeout_sec=settings.renderer_timeout,
    )
    engine = PreviewEngine(renderer=renderer, backend=backend, sandbox=sandbox, settings=settings)
    html = asyncio.run(engine.preview(source, project_config_dir=conf_dir, rewrite_links=not args.no_fix_links))

    if args.out_html:
        out_html = Path(args.out_html)
        out_html.parent.mkdir(parents=True, exist_ok=True)
        out_html.write_text(html, encoding="utf-8")
        print(f"Preview: {out_html}")
    else:
        print(html)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
