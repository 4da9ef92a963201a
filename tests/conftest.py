"""Shared fixtures for rstpreview tests."""

from pathlib import Path

import pytest

from rstpreview.converters.docutils_converter import SingleFileRenderer
from rstpreview.errors import ConversionError
from rstpreview.services.sandbox import SandboxUriMapper


class FakeRenderer(SingleFileRenderer):
    def __init__(self, html="<p>docutils</p>", fail=None):
        self.html = html
        self.fail = fail
        self.calls = []

    async def render(self, source_path, writer, writer_part):
        self.calls.append((source_path, writer, writer_part))
        if self.fail:
            raise ConversionError(self.fail)
        return self.html


class PrefixSandbox(SandboxUriMapper):
    def to_sandbox_uri(self, path):
        return "sandbox:/" + Path(path).as_posix()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def sandbox():
    return PrefixSandbox()


@pytest.fixture
def sphinx_project(tmp_path):
    """A Sphinx project with one built page at _build/html/docs/index.html."""
    project = tmp_path / "project"
    (project / "docs").mkdir(parents=True)
    (project / "conf.py").write_text("project = 'demo'\n")
    source = project / "docs" / "index.rst"
    source.write_text("Title\n=====\n")

    output = project / "_build" / "html"
    (output / "docs").mkdir(parents=True)
    (output / "docs" / "index.html").write_text(
        '<link href="../_static/basic.css?v=1" rel="stylesheet">'
        '<a href="#intro">Intro</a><img src="diagram.png">'
    )
    return {"project": project, "source": source, "output": output}
