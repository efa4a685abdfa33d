from typing import Optional


class ApiFootballError(Exception):
    """Errore base del client API-Football."""


class ApiFootballHTTPError(ApiFootballError):
    """Sollevata quando l'API risponde con uno status non 2xx."""

    def __init__(self, status_code: int, body: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Status {status_code} dall'API Football")


class InvalidPayloadError(ApiFootballError):
    """Sollevata quando il corpo della risposta non è un JSON utilizzabile."""
