from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
def health(request: Request):
    """
    Health endpoint con lo stato dell'analisi eseguita all'avvio.
    """
    settings = request.app.state.settings
    return {
        "status": "ok",
        "app_env": settings.app_env,
        "api_key_configured": bool(settings.rapidapi_key),
        "analysis": request.app.state.pipeline.to_dict(),
    }
