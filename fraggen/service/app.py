"""FastAPI application for previewing and building fragments."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from ..config import load_config
from ..errors import ComponentNotFound, FragmentError, ThemeError
from ..orchestrator import BuildResult, FragmentGenerator
from ..postproc.script import INTERACTIVITY_SCRIPT
from ..themes import ThemeName, theme_stylesheet

PREVIEW_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{name} preview</title>
<style>
{css}
</style>
</head>
<body data-theme="{theme}">
{markup}
{script}
</body>
</html>
"""


class HealthResponse(BaseModel):
    status: str


class ComponentSummary(BaseModel):
    id: str
    name: str
    strategy: str


def _default_generator() -> FragmentGenerator:
    return FragmentGenerator(config=load_config(Path.cwd()))


def create_app(
    generator_factory: Callable[[], FragmentGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing previews and builds."""

    app = FastAPI(title="Fraggen Preview", version="1.0.0")

    async def get_generator() -> FragmentGenerator:
        # A fresh generator per request keeps registry and config per run.
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/components", response_model=List[ComponentSummary])
    async def list_components(
        generator: FragmentGenerator = Depends(get_generator),
    ) -> List[ComponentSummary]:
        return [
            ComponentSummary(id=descriptor.id, name=descriptor.name, strategy=descriptor.strategy)
            for descriptor in generator.registry
        ]

    @app.get("/components/{component_id}/preview", response_class=HTMLResponse)
    async def preview_component(
        component_id: str,
        theme: Optional[str] = None,
        generator: FragmentGenerator = Depends(get_generator),
    ) -> HTMLResponse:
        descriptor = generator.registry.get(component_id)
        theme_name = ThemeName.parse(theme or generator.config.default_theme).value
        markup, css = generator.preview(component_id, theme=theme_name)
        page = PREVIEW_PAGE.format(
            name=descriptor.name,
            css=css,
            theme=theme_name,
            markup=markup,
            script=INTERACTIVITY_SCRIPT.strip(),
        )
        return HTMLResponse(page)

    @app.get("/themes/{name}/variables.css")
    async def theme_variables_css(name: str) -> Response:
        try:
            theme_name = ThemeName.parse(name)
        except ThemeError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(theme_stylesheet(theme_name), media_type="text/css")

    @app.post("/build")
    async def build(
        generator: FragmentGenerator = Depends(get_generator),
    ) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        result: BuildResult = await loop.run_in_executor(None, generator.run)
        return result.manifest.to_dict()

    @app.exception_handler(ComponentNotFound)
    async def component_not_found_handler(_: Any, exc: ComponentNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ThemeError)
    async def theme_error_handler(_: Any, exc: ThemeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(FragmentError)
    async def fragment_error_handler(_: Any, exc: FragmentError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
