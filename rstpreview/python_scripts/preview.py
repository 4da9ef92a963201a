#!/usr/bin/env python3
"""Render one reStructuredText file with docutils and print a single part.

Usage: preview.py SOURCE WRITER WRITER_PART
"""
from __future__ import annotations

import sys
from pathlib import Path

from docutils.core import publish_parts


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 3:
        print("usage: preview.py SOURCE WRITER WRITER_PART", file=sys.stderr)
        return 2

    source_path, writer, writer_part = args
    source = Path(source_path).read_text(encoding="utf-8")
    parts = publish_parts(
        source=source,
        source_path=source_path,
        writer_name=writer,
        settings_overrides={"report_level": 5, "halt_level": 5},
    )
    if writer_part not in parts:
        print(f"Unknown writer part {writer_part!r} for writer {writer!r}", file=sys.stderr)
        return 2

    sys.stdout.buffer.write(parts[writer_part].encode("utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
