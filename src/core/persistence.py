from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .logging import get_logger
from .models import PronosticsResult

LOGGER = get_logger("core.persistence")


def pronostics_path(settings: Optional[Settings] = None) -> Path:
    """Path del file pronostici (rispetta PRONOSTICS_STATIC_DIR / PRONOSTICS_FILE)."""
    settings = settings or get_settings()
    return settings.pronostics_path


# ---------------------------------------------------------------------------
# Low level
# ---------------------------------------------------------------------------


def _ensure_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _write_json_atomic(path: Path, data: Any, indent: int = 2) -> None:
    _ensure_dir(path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=indent)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Pronostics
# ---------------------------------------------------------------------------


def save_pronostics(
    result: PronosticsResult,
    path: Optional[Path] = None,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Sovrascrive il file pronostici con il JSON indentato del risultato.
    Errori di scrittura vengono loggati e rilanciati al chiamante.
    """
    log = logger or LOGGER
    target = Path(path) if path is not None else pronostics_path()
    try:
        _write_json_atomic(target, result.to_dict())
    except OSError as e:
        log.error("Errore durante il salvataggio di %s: %s", target, e, extra={"path": str(target)})
        raise
    log.info("Pronostici salvati in %s", target, extra={"path": str(target)})
    return target


def load_pronostics(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Rilegge il file pronostici dal disco.
    Solleva OSError se il file manca / non è leggibile e ValueError se il JSON
    non è valido o non è un oggetto.
    """
    target = Path(path) if path is not None else pronostics_path()
    with target.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Struttura non valida in {target} (atteso oggetto JSON)")
    return data


__all__ = [
    "pronostics_path",
    "save_pronostics",
    "load_pronostics",
]
