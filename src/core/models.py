from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _section(parent: Mapping[str, Any], key: str, prefix: str = "") -> Mapping[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Sezione {prefix}{key!r} non valida (atteso oggetto, trovato {type(value).__name__})")
    return value


@dataclass(frozen=True)
class Fixture:
    fixture_id: Optional[int]
    kickoff: str              # ISO 8601
    home_team: str
    away_team: str
    league_name: str
    league_country: str

    @property
    def match_label(self) -> str:
        return f"{self.home_team} vs {self.away_team}"

    @property
    def league_label(self) -> str:
        return f"{self.league_name} ({self.league_country})"

    @classmethod
    def from_api(cls, item: Any) -> "Fixture":
        """
        Costruisce una Fixture da un elemento grezzo di ``response`` API-Football.
        Solleva ValueError se mancano i nomi delle squadre o se una sezione non è un oggetto.
        """
        if not isinstance(item, Mapping):
            raise ValueError(f"Fixture non valida (atteso oggetto, trovato {type(item).__name__})")
        fixture = _section(item, "fixture")
        league = _section(item, "league")
        teams = _section(item, "teams")

        home = _section(teams, "home", "teams.").get("name")
        away = _section(teams, "away", "teams.").get("name")
        if not home or not away:
            raise ValueError(f"Fixture {fixture.get('id')!r} senza nomi squadra")

        raw_id = fixture.get("id")
        try:
            fixture_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError):
            fixture_id = None

        return cls(
            fixture_id=fixture_id,
            kickoff=str(fixture.get("date") or ""),
            home_team=str(home),
            away_team=str(away),
            league_name=str(league.get("name") or ""),
            league_country=str(league.get("country") or ""),
        )


@dataclass(frozen=True)
class Prediction:
    match: str
    league: str
    pronostic: str
    cote: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match": self.match,
            "league": self.league,
            "pronostic": self.pronostic,
            "cote": self.cote,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Prediction":
        return cls(
            match=str(data["match"]),
            league=str(data["league"]),
            pronostic=str(data["pronostic"]),
            cote=float(data["cote"]),
        )


@dataclass
class PronosticsResult:
    cote_sure: float = 1.0
    sure_combined: List[Prediction] = field(default_factory=list)
    cote_risky: float = 1.0
    risky_combined: List[Prediction] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "PronosticsResult":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cote_sure": self.cote_sure,
            "sure_combined": [p.to_dict() for p in self.sure_combined],
            "cote_risky": self.cote_risky,
            "risky_combined": [p.to_dict() for p in self.risky_combined],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PronosticsResult":
        return cls(
            cote_sure=float(data["cote_sure"]),
            sure_combined=[Prediction.from_dict(p) for p in data.get("sure_combined") or []],
            cote_risky=float(data["cote_risky"]),
            risky_combined=[Prediction.from_dict(p) for p in data.get("risky_combined") or []],
        )
