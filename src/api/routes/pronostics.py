from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from core.logging import get_logger
from core.persistence import load_pronostics

logger = get_logger("api.routes.pronostics")

router = APIRouter(prefix="/api", tags=["pronostics"])


@router.get("/pronostics", summary="Ultimi pronostici generati")
async def get_pronostics(request: Request):
    """
    Rilegge pronostics.json ad ogni richiesta (nessuna cache).
    File mancante o non valido: 500 con ``error`` e ``message``.
    """
    path = request.app.state.settings.pronostics_path
    try:
        return await run_in_threadpool(load_pronostics, path)
    except (OSError, ValueError) as exc:
        logger.error("Errore lettura %s: %s", path, exc, extra={"path": str(path)})
        return JSONResponse(
            status_code=500,
            content={
                "error": "Unable to read pronostics",
                "message": str(exc),
            },
        )
