"""Tests for the HTTP surface in rstpreview.main."""

import sys

import pytest
from fastapi.testclient import TestClient

from rstpreview.main import app, get_backend, get_sandbox, get_settings
from rstpreview.services.build_backend import LocalBuildBackend
from rstpreview.services.sandbox import LocalSandbox
from rstpreview.settings import PreviewSettings


@pytest.fixture
def renderer_script(tmp_path):
    script = tmp_path / "renderer" / "preview.py"
    script.parent.mkdir()
    script.write_text(
        "import sys\n"
        "print('<p>rendered ' + sys.argv[2] + ':' + sys.argv[3] + '</p>', end='')\n"
    )
    return script


@pytest.fixture
def client(renderer_script):
    settings = PreviewSettings(python_path=sys.executable, renderer_script=str(renderer_script))
    backend = LocalBuildBackend()
    sandbox = LocalSandbox(base_url="/sandbox")

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[get_sandbox] = lambda: sandbox
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def publish_ready(client, sphinx_project, ready=True, error=False):
    return client.put(
        "/backend/state",
        json={
            "ready": ready,
            "error": error,
            "config_dir": str(sphinx_project["project"]),
            "output_dir": str(sphinx_project["output"]),
        },
    )


class TestBackendState:
    """Tests for /backend/state."""

    def test_initial_state(self, client):
        response = client.get("/backend/state")
        assert response.status_code == 200
        assert response.json() == {"ready": False, "error": False, "config_dir": None, "output_dir": None}

    def test_publish(self, client, sphinx_project):
        response = publish_ready(client, sphinx_project)
        assert response.status_code == 200
        body = response.json()
        assert body["ready"] is True
        assert body["output_dir"] == str(sphinx_project["output"])
        assert client.get("/backend/state").json() == body


class TestPreviewEndpoint:
    """Tests for POST /preview."""

    def test_single_file(self, client, tmp_path):
        source = tmp_path / "a.rst"
        source.write_text("Title\n=====\n")
        response = client.post("/preview", json={"source_path": str(source), "project_config_dir": ""})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == "<p>rendered html:html_body</p>"

    def test_writer_selection(self, client, tmp_path):
        source = tmp_path / "a.rst"
        source.write_text("Title\n=====\n")
        response = client.post(
            "/preview",
            json={"source_path": str(source), "project_config_dir": "", "writer": "html5", "writer_part": "whole"},
        )
        assert response.text == "<p>rendered html5:whole</p>"

    def test_busy_backend(self, client, sphinx_project):
        publish_ready(client, sphinx_project, ready=False)
        response = client.post("/preview", json={"source_path": str(sphinx_project["source"])})
        assert response.status_code == 200
        assert "Esbonio is busy." in response.text

    def test_built_page_links_point_at_sandbox(self, client, sphinx_project):
        publish_ready(client, sphinx_project)
        response = client.post(
            "/preview",
            json={
                "source_path": str(sphinx_project["source"]),
                "project_config_dir": str(sphinx_project["project"]),
            },
        )
        assert response.status_code == 200
        assert 'href="#intro"' in response.text
        css = (sphinx_project["output"] / "_static" / "basic.css").as_posix().lstrip("/")
        assert f'href="/sandbox/{css}"' in response.text

    def test_renderer_failure_is_html(self, client, tmp_path, renderer_script):
        renderer_script.write_text("import sys\nsys.stderr.write('boom')\nsys.exit(3)\n")
        source = tmp_path / "a.rst"
        source.write_text("x\n")
        response = client.post("/preview", json={"source_path": str(source), "project_config_dir": ""})
        assert response.status_code == 200
        assert response.text == "<html><body>docutils failed: boom</body></html>"


class TestSandboxEndpoint:
    """Tests for GET /sandbox/{path}."""

    def test_serves_file_under_published_root(self, client, sphinx_project):
        static = sphinx_project["output"] / "_static"
        static.mkdir()
        (static / "basic.css").write_text("body { margin: 0; }")
        publish_ready(client, sphinx_project)

        path = (static / "basic.css").as_posix().lstrip("/")
        response = client.get(f"/sandbox/{path}")
        assert response.status_code == 200
        assert response.text == "body { margin: 0; }"

    def test_refuses_unpublished_file(self, client, tmp_path):
        secret = tmp_path / "secret.txt"
        secret.write_text("x")
        response = client.get(f"/sandbox/{secret.as_posix().lstrip('/')}")
        assert response.status_code == 404
