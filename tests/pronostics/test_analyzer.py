import math
import random

import pytest

from core.models import Fixture
from providers.api_football.fallback import get_mock_fixtures
from pronostics.analyzer import (
    AWAY_WIN,
    BET_TYPES,
    BET_TYPES_BY_LABEL,
    HOME_WIN,
    PronosticsAnalyzer,
    analyze_fixtures,
    combined_odds,
)


def _fixtures(n: int):
    return [
        Fixture(
            fixture_id=i,
            kickoff="2030-01-01T12:00:00+00:00",
            home_team=f"Home {i}",
            away_team=f"Away {i}",
            league_name="League",
            league_country="Country",
        )
        for i in range(n)
    ]


def _has_two_decimals(value: float) -> bool:
    return round(value, 2) == value


@pytest.mark.parametrize("n", [1, 3, 5, 8, 10, 17])
def test_list_sizes(n) -> None:
    result = PronosticsAnalyzer(seed=n).analyze(_fixtures(n))
    assert len(result.sure_combined) == min(10, n)
    assert len(result.risky_combined) == min(5, n)


def test_empty_input() -> None:
    result = PronosticsAnalyzer(seed=1).analyze([])
    assert result.cote_sure == 1.0
    assert result.cote_risky == 1.0
    assert result.sure_combined == []
    assert result.risky_combined == []


def test_labels_and_input_order() -> None:
    result = PronosticsAnalyzer(seed=3).analyze(_fixtures(12))
    assert [p.match for p in result.sure_combined] == [f"Home {i} vs Away {i}" for i in range(10)]
    assert [p.match for p in result.risky_combined] == [f"Home {i} vs Away {i}" for i in range(5)]
    assert all(p.league == "League (Country)" for p in result.sure_combined)
    assert all(p.pronostic == HOME_WIN.label for p in result.sure_combined)
    assert all(p.pronostic == AWAY_WIN.label for p in result.risky_combined)


def test_cotes_within_ranges_with_two_decimals() -> None:
    for seed in range(25):
        result = PronosticsAnalyzer(seed=seed).analyze(_fixtures(10))
        for p in result.sure_combined + result.risky_combined:
            assert BET_TYPES_BY_LABEL[p.pronostic].contains(p.cote)
            assert _has_two_decimals(p.cote)


def test_combined_odds_is_rounded_product() -> None:
    for seed in range(25):
        result = PronosticsAnalyzer(seed=seed).analyze(_fixtures(10))
        sure = math.prod(p.cote for p in result.sure_combined)
        risky = math.prod(p.cote for p in result.risky_combined)
        assert abs(result.cote_sure - round(sure, 2)) < 0.01
        assert abs(result.cote_risky - round(risky, 2)) < 0.01
        assert _has_two_decimals(result.cote_sure)


def test_combined_odds_empty_is_one() -> None:
    assert combined_odds([]) == 1.0


def test_same_seed_same_result() -> None:
    fixtures = _fixtures(8)
    a = PronosticsAnalyzer(seed=42).analyze(fixtures)
    b = analyze_fixtures(fixtures, rng=random.Random(42))
    assert a == b


def test_samples_every_bet_type_per_fixture() -> None:
    class CountingRandom(random.Random):
        calls = 0

        def randrange(self, *args, **kwargs):
            CountingRandom.calls += 1
            return super().randrange(*args, **kwargs)

    PronosticsAnalyzer(rng=CountingRandom(0)).analyze(_fixtures(12))
    assert CountingRandom.calls == 10 * len(BET_TYPES)


def test_bet_type_sample_bounds() -> None:
    class Low(random.Random):
        def randrange(self, start, stop=None, step=1):
            return start

    class High(random.Random):
        def randrange(self, start, stop=None, step=1):
            return stop - 1

    for bet in BET_TYPES:
        assert bet.sample(Low()) == bet.low
        assert bet.sample(High()) == round(bet.high - 0.01, 2)


def test_custom_combo_sizes() -> None:
    result = PronosticsAnalyzer(seed=0, max_safe=3, max_risky=1).analyze(_fixtures(8))
    assert len(result.sure_combined) == 3
    assert len(result.risky_combined) == 1


def test_mock_scenario() -> None:
    result = PronosticsAnalyzer(seed=2024).analyze(get_mock_fixtures())
    assert len(result.sure_combined) == 8
    assert len(result.risky_combined) == 5
    for p in result.sure_combined:
        assert 1.5 <= p.cote < 3.0
    for p in result.risky_combined:
        assert 2.0 <= p.cote < 4.0
    expected = round(math.prod(p.cote for p in result.sure_combined), 2)
    assert abs(result.cote_sure - expected) < 0.01
