from __future__ import annotations

from functools import lru_cache

from fastapi import FastAPI, Depends, HTTPException
from fastapi.responses import FileResponse, HTMLResponse

from rstpreview.converters.docutils_converter import DocutilsConverter
from rstpreview.converters.engine import PreviewEngine
from rstpreview.models import BackendState, BuildConfig
from rstpreview.schemas import BackendStateIn, BackendStateOut, PreviewIn
from rstpreview.services.build_backend import LocalBuildBackend
from rstpreview.services.sandbox import LocalSandbox
from rstpreview.settings import PreviewSettings, configure_logging, load_settings


app = FastAPI(title="rstpreview")


@lru_cache()
def get_settings() -> PreviewSettings:
    return load_settings()


@lru_cache()
def get_backend() -> LocalBuildBackend:
    return LocalBuildBackend()


@lru_cache()
def get_sandbox() -> LocalSandbox:
    return LocalSandbox(base_url=get_settings().sandbox_base_url)


def get_engine(
    settings: PreviewSettings = Depends(get_settings),
    backend: LocalBuildBackend = Depends(get_backend),
    sandbox: LocalSandbox = Depends(get_sandbox),
) -> PreviewEngine:
    renderer = DocutilsConverter(
        python_path=settings.python_path,
        script_path=settings.renderer_script,
        timeout_sec=settings.renderer_timeout,
    )
    return PreviewEngine(renderer=renderer, backend=backend, sandbox=sandbox, settings=settings)


@app.on_event("startup")
def on_startup():
    configure_logging(get_settings())


@app.post("/preview", response_class=HTMLResponse)
async def preview(body: PreviewIn, engine: PreviewEngine = Depends(get_engine)):
    return await engine.preview(
        body.source_path,
        source_uri=body.source_uri,
        project_config_dir=body.project_config_dir,
        rewrite_links=body.rewrite_links,
        writer=body.writer,
        writer_part=body.writer_part,
    )


@app.get("/backend/state", response_model=BackendStateOut)
def get_backend_state(backend: LocalBuildBackend = Depends(get_backend)):
    state = backend.query_state()
    config = backend.build_config()
    return BackendStateOut(
        ready=state.ready,
        error=state.error,
        config_dir=config.config_dir if config else None,
        output_dir=config.output_dir if config else None,
    )


@app.put("/backend/state", response_model=BackendStateOut)
def put_backend_state(
    body: BackendStateIn,
    backend: LocalBuildBackend = Depends(get_backend),
    sandbox: LocalSandbox = Depends(get_sandbox),
):
    config = None
    if body.config_dir and body.output_dir:
        config = BuildConfig(config_dir=body.config_dir, output_dir=body.output_dir)
        sandbox.allow(body.config_dir)
        sandbox.allow(body.output_dir)
    backend.publish(BackendState(ready=body.ready, error=body.error), config)
    return get_backend_state(backend)


@app.get("/sandbox/{file_path:path}")
def sandbox_file(file_path: str, sandbox: LocalSandbox = Depends(get_sandbox)):
    resolved = sandbox.resolve(file_path)
    if resolved is None:
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(resolved)
