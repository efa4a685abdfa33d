from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from core.models import Fixture

# (casa, trasferta, lega, paese) in ordine fisso
_DEMO_MATCHES: Tuple[Tuple[str, str, str, str], ...] = (
    ("Paris Saint-Germain", "Olympique Marseille", "Ligue 1", "France"),
    ("Manchester City", "Liverpool", "Premier League", "England"),
    ("Real Madrid", "Barcelona", "La Liga", "Spain"),
    ("Bayern Munich", "Borussia Dortmund", "Bundesliga", "Germany"),
    ("Juventus", "Inter Milan", "Serie A", "Italy"),
    ("Arsenal", "Chelsea", "Premier League", "England"),
    ("Atletico Madrid", "Sevilla", "La Liga", "Spain"),
    ("Lyon", "Monaco", "Ligue 1", "France"),
)


def get_mock_fixtures(now: Optional[datetime] = None) -> List[Fixture]:
    """Dati dimostrativi usati quando l'API non è disponibile (8 partite, 5 leghe)."""
    kickoff = (now or datetime.now(timezone.utc)).isoformat()
    return [
        Fixture(
            fixture_id=idx,
            kickoff=kickoff,
            home_team=home,
            away_team=away,
            league_name=league,
            league_country=country,
        )
        for idx, (home, away, league, country) in enumerate(_DEMO_MATCHES, start=1)
    ]


__all__ = ["get_mock_fixtures"]
