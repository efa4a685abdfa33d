import logging
import time
from typing import Any, Dict, Optional

import httpx

from core.config import DEFAULT_RAPIDAPI_HOST
from core.logging import get_logger

from .exceptions import ApiFootballHTTPError, InvalidPayloadError

logger = get_logger("providers.api_football.client")


class ApiFootballClient:
    """
    Client HTTP asincrono minimale per l'API Football (via RapidAPI).
    Una sola richiesta per chiamata, nessun retry: gli errori sono rilanciati
    e la decisione di fallback spetta al provider.
    """

    def __init__(
        self,
        api_key: str,
        host: str = DEFAULT_RAPIDAPI_HOST,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.api_key = api_key
        self.host = host
        self.base_url = base_url or f"https://{host}/v3"
        self._timeout = timeout
        self._transport = transport
        self._log = log or logger
        self._headers = {
            "x-rapidapi-host": self.host,
            "x-rapidapi-key": self.api_key,
            "Accept": "application/json",
        }

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Esegue una GET e ritorna il JSON decodificato.
        Lancia httpx.RequestError per problemi di rete, ApiFootballHTTPError per
        status non 2xx e InvalidPayloadError per un corpo non JSON.
        """
        params = params or {}
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        self._log.debug("GET %s params=%s", url, params)
        start = time.perf_counter()
        async with httpx.AsyncClient(
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.get(url, params=params)
            except httpx.RequestError as exc:
                elapsed = (time.perf_counter() - start) * 1000
                self._log.error("Errore rete %s dopo %.1fms: %s", url, elapsed, exc)
                raise
        elapsed = (time.perf_counter() - start) * 1000
        if not resp.is_success:
            self._log.error(
                "Status %s %s (%.1fms) body=%s",
                resp.status_code,
                url,
                elapsed,
                resp.text[:300],
                extra={"status_code": resp.status_code},
            )
            raise ApiFootballHTTPError(resp.status_code, resp.text[:300])
        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidPayloadError(f"Risposta non valida (non JSON) status={resp.status_code}") from e
        if not isinstance(data, dict):
            raise InvalidPayloadError("Risposta non valida (atteso oggetto JSON)")
        self._log.debug("OK %s %s %.1fms", url, resp.status_code, elapsed)
        return data
