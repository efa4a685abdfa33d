import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from core.config import _reset_settings_cache_for_tests  # noqa: E402

_ENV_VARS = (
    "RAPIDAPI_KEY",
    "RAPIDAPI_HOST",
    "PRONOSTICS_SEED",
    "PRONOSTICS_MAX_SAFE",
    "PRONOSTICS_MAX_RISKY",
    "PRONOSTICS_FILE",
    "RUN_ANALYSIS_ON_STARTUP",
    "APP_ENV",
    "NODE_ENV",
    "PORT",
)


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PRONOSTICS_STATIC_DIR", str(tmp_path / "static"))
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()
