from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from core.logging import get_logger
from core.models import Fixture, Prediction, PronosticsResult

log = get_logger("pronostics.analyzer")

MAX_SAFE_PICKS = 10
MAX_RISKY_PICKS = 5


@dataclass(frozen=True)
class BetType:
    """Tipo di scommessa con intervallo di quota [low, high) in centesimi."""

    key: str
    label: str
    low: float
    high: float

    def sample(self, rng: random.Random) -> float:
        # Campionamento sui centesimi: 2 decimali esatti e sempre < high
        low_cents = int(round(self.low * 100))
        high_cents = int(round(self.high * 100))
        return rng.randrange(low_cents, high_cents) / 100

    def contains(self, cote: float) -> bool:
        return self.low <= cote < self.high


HOME_WIN = BetType("home_win", "1X2 - Domicile", 1.5, 3.0)
DRAW = BetType("draw", "1X2 - Match Nul", 2.8, 4.0)
AWAY_WIN = BetType("away_win", "1X2 - Extérieur", 2.0, 4.0)
OVER_2_5 = BetType("over_2_5", "Plus de 2.5 buts", 1.6, 2.4)
UNDER_2_5 = BetType("under_2_5", "Moins de 2.5 buts", 1.8, 2.7)

BET_TYPES = (HOME_WIN, DRAW, AWAY_WIN, OVER_2_5, UNDER_2_5)
BET_TYPES_BY_LABEL: Dict[str, BetType] = {b.label: b for b in BET_TYPES}

SAFE_BET = HOME_WIN
RISKY_BET = AWAY_WIN


def combined_odds(predictions: Iterable[Prediction]) -> float:
    """Prodotto delle quote, arrotondato a 2 decimali solo alla fine. Lista vuota -> 1.0."""
    total = 1.0
    for p in predictions:
        total *= p.cote
    return round(total, 2)


class PronosticsAnalyzer:
    """
    Analizzatore semplificato:
    - considera le prime ``max_safe`` partite nell'ordine ricevuto
    - per ogni partita campiona una quota per ciascun tipo di scommessa
    - combinato sicuro: vittoria casa per ogni partita considerata
    - combinato rischioso: vittoria trasferta per le prime ``max_risky`` partite
    La sorgente casuale è iniettabile (random.Random) per avere risultati riproducibili.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_safe: int = MAX_SAFE_PICKS,
        max_risky: int = MAX_RISKY_PICKS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._rng = rng or random.Random(seed)
        self.max_safe = max_safe
        self.max_risky = max_risky
        self._log = logger or log

    def sample_markets(self) -> Dict[str, float]:
        return {b.key: b.sample(self._rng) for b in BET_TYPES}

    def analyze(self, fixtures: Sequence[Fixture]) -> PronosticsResult:
        self._log.info("Analisi delle partite in corso...", extra={"fixtures_count": len(fixtures)})
        if not fixtures:
            return PronosticsResult.empty()

        sure_bets: List[Prediction] = []
        risky_bets: List[Prediction] = []

        for index, fixture in enumerate(fixtures[: self.max_safe]):
            match = fixture.match_label
            league = fixture.league_label
            markets = self.sample_markets()

            sure_bets.append(
                Prediction(match=match, league=league, pronostic=SAFE_BET.label, cote=markets[SAFE_BET.key])
            )
            if index < self.max_risky:
                risky_bets.append(
                    Prediction(match=match, league=league, pronostic=RISKY_BET.label, cote=markets[RISKY_BET.key])
                )

        result = PronosticsResult(
            cote_sure=combined_odds(sure_bets),
            sure_combined=sure_bets,
            cote_risky=combined_odds(risky_bets),
            risky_combined=risky_bets,
        )
        self._log.info(
            "Combinato sicuro: %s scommesse, quota totale %.2f",
            len(sure_bets),
            result.cote_sure,
            extra={"cote_sure": result.cote_sure},
        )
        self._log.info(
            "Combinato rischioso: %s scommesse, quota totale %.2f",
            len(risky_bets),
            result.cote_risky,
            extra={"cote_risky": result.cote_risky},
        )
        return result


def analyze_fixtures(
    fixtures: Sequence[Fixture],
    rng: Optional[random.Random] = None,
) -> PronosticsResult:
    return PronosticsAnalyzer(rng=rng).analyze(fixtures)


__all__ = [
    "BetType",
    "BET_TYPES",
    "BET_TYPES_BY_LABEL",
    "SAFE_BET",
    "RISKY_BET",
    "MAX_SAFE_PICKS",
    "MAX_RISKY_PICKS",
    "PronosticsAnalyzer",
    "analyze_fixtures",
    "combined_odds",
]
