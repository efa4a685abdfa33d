from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from core.logging import get_logger
from core.persistence import save_pronostics
from providers.api_football.base import FixturesProviderBase
from .analyzer import PronosticsAnalyzer

log = get_logger("pronostics.pipeline")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class PipelineStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PipelineState:
    """Stato osservabile dell'analisi eseguita una sola volta all'avvio."""

    status: PipelineStatus = PipelineStatus.PENDING
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    error: Optional[str] = None
    safe_count: int = 0
    risky_count: int = 0
    fixtures_source: Optional[str] = None
    output_path: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.status in (PipelineStatus.SUCCEEDED, PipelineStatus.FAILED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "error": self.error,
            "safe_count": self.safe_count,
            "risky_count": self.risky_count,
            "fixtures_source": self.fixtures_source,
            "output_path": self.output_path,
        }


async def run_automatic_analysis(
    provider: FixturesProviderBase,
    analyzer: PronosticsAnalyzer,
    path: Path,
    state: Optional[PipelineState] = None,
    date: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> PipelineState:
    """
    Esegue fetch -> analisi -> salvataggio.
    Gli errori vengono loggati e registrati nello stato, mai propagati:
    il server continua a servire l'ultimo file salvato (se esiste).
    """
    logger = logger or log
    state = state or PipelineState()
    state.status = PipelineStatus.RUNNING
    state.started_at = _now_iso()
    state.finished_at = None
    state.error = None
    logger.info("=== AVVIO ANALISI AUTOMATICA ===")

    try:
        fixtures = await provider.fetch_fixtures(date=date)
        stats = getattr(provider, "get_last_stats", None)
        if callable(stats):
            state.fixtures_source = stats().get("source")

        result = analyzer.analyze(fixtures)

        # Scrittura su file in un worker thread: l'event loop resta libero
        saved = await asyncio.to_thread(save_pronostics, result, path)
    except Exception as exc:
        state.status = PipelineStatus.FAILED
        state.error = str(exc) or exc.__class__.__name__
        state.finished_at = _now_iso()
        logger.exception("=== ERRORE DURANTE L'ANALISI: %s ===", exc)
        return state

    state.status = PipelineStatus.SUCCEEDED
    state.safe_count = len(result.sure_combined)
    state.risky_count = len(result.risky_combined)
    state.output_path = str(saved)
    state.finished_at = _now_iso()
    logger.info("=== ANALISI TERMINATA CON SUCCESSO ===")
    logger.info(
        "File %s generato con %s scommesse sicure e %s rischiose",
        saved.name,
        state.safe_count,
        state.risky_count,
        extra={"path": str(saved), "cote_sure": result.cote_sure, "cote_risky": result.cote_risky},
    )
    return state


__all__ = ["PipelineStatus", "PipelineState", "run_automatic_analysis"]
