from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from core.config import Settings, get_settings
from core.logging import get_logger
from providers.api_football.fixtures_provider import ApiFootballFixturesProvider
from pronostics.analyzer import PronosticsAnalyzer
from pronostics.pipeline import PipelineState, run_automatic_analysis

from api.routes.health import router as health_router
from api.routes.pronostics import router as pronostics_router

logger = get_logger("api.app")

LOG_BODY_MAX_CHARS = 500


async def _startup_analysis(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    analyzer = PronosticsAnalyzer(
        seed=settings.analysis_seed,
        max_safe=settings.max_safe_picks,
        max_risky=settings.max_risky_picks,
    )
    provider = ApiFootballFixturesProvider(settings=settings)
    await run_automatic_analysis(
        provider,
        analyzer,
        settings.pronostics_path,
        state=app.state.pipeline,
    )


def schedule_startup_analysis(app: FastAPI) -> asyncio.Task:
    """
    Avvia l'analisi in background (una sola volta per app): il server accetta
    richieste nel frattempo.
    """
    task: Optional[asyncio.Task] = app.state.analysis_task
    if task is None:
        logger.info("Avvio dell'analisi automatica...")
        task = asyncio.create_task(_startup_analysis(app))
        app.state.analysis_task = task
    return task


async def wait_startup_analysis(app: FastAPI) -> None:
    task: Optional[asyncio.Task] = app.state.analysis_task
    if task is None or task.done():
        return
    settings: Settings = app.state.settings
    done, _ = await asyncio.wait({task}, timeout=settings.shutdown_grace_seconds)
    if not done:
        logger.warning("Analisi ancora in corso allo shutdown: annullata")
        task.cancel()


def _build_lifespan(run_on_startup: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if run_on_startup:
            schedule_startup_analysis(app)
        try:
            yield
        finally:
            await wait_startup_analysis(app)

    return lifespan


def create_app(
    settings: Optional[Settings] = None,
    run_on_startup: Optional[bool] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if run_on_startup is None:
        run_on_startup = settings.run_analysis_on_startup

    docs_url = None if settings.is_production else "/docs"
    app = FastAPI(
        title="Pronostics API",
        version="0.1.0",
        docs_url=docs_url,
        redoc_url=None,
        lifespan=_build_lifespan(run_on_startup),
    )
    app.state.settings = settings
    app.state.pipeline = PipelineState()
    app.state.analysis_task = None

    @app.middleware("http")
    async def catch_all_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
            if not isinstance(status, int) or not 400 <= status < 600:
                status = 500
            logger.exception(
                "Errore non gestito %s %s: %s",
                request.method,
                request.url.path,
                exc,
                extra={"status_code": status},
            )
            return JSONResponse(status_code=status, content={"message": str(exc) or "Internal Server Error"})

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if not path.startswith("/api"):
            return response

        duration = round((time.perf_counter() - start) * 1000)
        line = f"{request.method} {path} {response.status_code} in {duration}ms"
        if response.headers.get("content-type", "").startswith("application/json"):
            # Il corpo viene consumato per il log e poi restituito intatto
            body = b"".join([chunk async for chunk in response.body_iterator])
            line += f" :: {body.decode('utf-8', errors='replace')[:LOG_BODY_MAX_CHARS]}"
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                background=getattr(response, "background", None),
            )
        logger.info(line, extra={"status_code": response.status_code, "duration_ms": duration})
        return response

    static_dir = Path(settings.static_dir)
    static_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(health_router)
    app.include_router(pronostics_router)
    return app
