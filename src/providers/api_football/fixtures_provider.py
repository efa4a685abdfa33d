from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from core.config import Settings, get_settings
from core.logging import get_logger
from core.models import Fixture
from .base import FixturesProviderBase
from .client import ApiFootballClient
from .exceptions import ApiFootballHTTPError, InvalidPayloadError
from .fallback import get_mock_fixtures

log = get_logger("providers.api_football")


def _today_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


class ApiFootballFixturesProvider(FixturesProviderBase):
    """
    Provider delle partite del giorno da API-Football.
    - Una sola GET /fixtures?date=YYYY-MM-DD per chiamata, nessun retry
    - Chiave assente, errore rete, status non 2xx, payload non valido o vuoto:
      ritorna i dati dimostrativi e logga il motivo
    - Non solleva mai per problemi della sorgente
    """

    def __init__(
        self,
        client: Optional[ApiFootballClient] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._log = logger or log
        if client is None and self._settings.rapidapi_key:
            client = ApiFootballClient(
                api_key=self._settings.rapidapi_key,
                host=self._settings.rapidapi_host,
                base_url=self._settings.api_football_base_url,
                timeout=self._settings.api_football_timeout,
                log=self._log,
            )
        self._client = client
        self._last_stats: Dict[str, Any] = {}

    async def fetch_fixtures(self, date: Optional[str] = None) -> List[Fixture]:
        day = date or _today_utc()

        if self._client is None:
            return self._fallback(day, "missing_api_key", "RAPIDAPI_KEY non definita")

        self._log.info("Recupero partite per il %s...", day)
        try:
            raw = await self._client.get("/fixtures", params={"date": day})
        except httpx.HTTPError as exc:
            return self._fallback(day, "network_error", f"Errore di rete: {exc}")
        except ApiFootballHTTPError as exc:
            return self._fallback(day, f"http_{exc.status_code}", f"Errore API {exc.status_code}")
        except InvalidPayloadError as exc:
            return self._fallback(day, "invalid_payload", str(exc))

        response = raw.get("response")
        if not isinstance(response, list):
            return self._fallback(day, "invalid_payload", "Formato inatteso: 'response' non è una lista")
        if not response:
            return self._fallback(day, "empty_response", "Nessuna partita trovata per oggi")

        try:
            fixtures = [Fixture.from_api(item) for item in response]
        except ValueError as exc:
            return self._fallback(day, "invalid_payload", str(exc))

        self._log.info(
            "%s partite recuperate dall'API",
            len(fixtures),
            extra={"fixtures_count": len(fixtures)},
        )
        self._last_stats = {"source": "api", "reason": None, "count": len(fixtures), "date": day}
        return fixtures

    def _fallback(self, day: str, reason: str, detail: str) -> List[Fixture]:
        fixtures = get_mock_fixtures()
        self._log.warning(
            "%s - utilizzo dei dati dimostrativi",
            detail,
            extra={"fallback_reason": reason, "fixtures_count": len(fixtures)},
        )
        self._last_stats = {"source": "fallback", "reason": reason, "count": len(fixtures), "date": day}
        return fixtures

    def get_last_stats(self) -> Dict[str, Any]:
        return dict(self._last_stats)


__all__ = ["ApiFootballFixturesProvider"]
