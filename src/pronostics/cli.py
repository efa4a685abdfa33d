from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from core.config import get_settings
from core.logging import get_logger
from providers.api_football.fixtures_provider import ApiFootballFixturesProvider
from .analyzer import PronosticsAnalyzer
from .pipeline import PipelineStatus, run_automatic_analysis

logger = get_logger("pronostics.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pronostics-run",
        description="Genera una volta il file pronostics.json e termina.",
    )
    parser.add_argument("--date", help="Data delle partite (YYYY-MM-DD), default oggi UTC")
    parser.add_argument("--seed", type=int, help="Seed del generatore di quote (riproducibile)")
    parser.add_argument("--output", type=Path, help="File di output (default PRONOSTICS_STATIC_DIR/PRONOSTICS_FILE)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("Configurazione non valida: %s", e)
        return 2

    seed = args.seed if args.seed is not None else settings.analysis_seed
    analyzer = PronosticsAnalyzer(
        seed=seed,
        max_safe=settings.max_safe_picks,
        max_risky=settings.max_risky_picks,
    )
    provider = ApiFootballFixturesProvider(settings=settings)
    output = args.output or settings.pronostics_path

    state = asyncio.run(run_automatic_analysis(provider, analyzer, output, date=args.date))
    return 0 if state.status is PipelineStatus.SUCCEEDED else 1


if __name__ == "__main__":
    raise SystemExit(main())
