import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


DEFAULT_RAPIDAPI_HOST = "api-football-v1.p.rapidapi.com"


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    v = value.strip().lower()
    if v in {"0", "false", "no", "off"}:
        return False
    return True


@dataclass
class Settings:
    rapidapi_key: Optional[str]
    rapidapi_host: str
    api_football_timeout: float

    static_dir: str
    pronostics_file: str

    host: str
    port: int
    app_env: str

    analysis_seed: Optional[int]
    max_safe_picks: int
    max_risky_picks: int

    run_analysis_on_startup: bool
    shutdown_grace_seconds: float

    @property
    def api_football_base_url(self) -> str:
        return f"https://{self.rapidapi_host}/v3"

    @property
    def pronostics_path(self) -> Path:
        return Path(self.static_dir) / self.pronostics_file

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        # Chiave opzionale: senza chiave il provider usa i dati dimostrativi
        key = (os.getenv("RAPIDAPI_KEY") or "").strip() or None

        def _opt_int(name: str) -> Optional[int]:
            raw = os.getenv(name)
            if not raw:
                return None
            try:
                return int(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un intero (valore: {raw!r})") from e

        def _int(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un intero (valore: {raw!r})") from e

        def _float(name: str, default: float) -> float:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError as e:
                raise ValueError(f"Variabile {name} deve essere un numero (valore: {raw!r})") from e

        rapidapi_host = os.getenv("RAPIDAPI_HOST") or DEFAULT_RAPIDAPI_HOST
        timeout = _float("API_FOOTBALL_TIMEOUT", 10.0)

        static_dir = os.getenv("PRONOSTICS_STATIC_DIR", "static")
        pronostics_file = os.getenv("PRONOSTICS_FILE", "pronostics.json")

        host = os.getenv("HOST", "0.0.0.0")
        port = _int("PORT", 5000)
        if not 0 < port < 65536:
            raise ValueError(f"Variabile PORT fuori intervallo (valore: {port})")
        app_env = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").strip().lower()

        seed = _opt_int("PRONOSTICS_SEED")
        max_safe = _int("PRONOSTICS_MAX_SAFE", 10)
        max_risky = _int("PRONOSTICS_MAX_RISKY", 5)
        if max_safe < 0 or max_risky < 0:
            raise ValueError("PRONOSTICS_MAX_SAFE e PRONOSTICS_MAX_RISKY devono essere >= 0")

        run_on_startup = _parse_bool(os.getenv("RUN_ANALYSIS_ON_STARTUP"), True)
        grace = max(0.0, _float("PRONOSTICS_SHUTDOWN_GRACE", 5.0))

        return cls(
            rapidapi_key=key,
            rapidapi_host=rapidapi_host,
            api_football_timeout=timeout,
            static_dir=static_dir,
            pronostics_file=pronostics_file,
            host=host,
            port=port,
            app_env=app_env,
            analysis_seed=seed,
            max_safe_picks=max_safe,
            max_risky_picks=max_risky,
            run_analysis_on_startup=run_on_startup,
            shutdown_grace_seconds=grace,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "_reset_settings_cache_for_tests"]
