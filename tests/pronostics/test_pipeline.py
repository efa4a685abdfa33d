import asyncio
import json
from typing import List, Optional

from core.models import Fixture
from core.persistence import load_pronostics
from providers.api_football.base import FixturesProviderBase
from providers.api_football.fallback import get_mock_fixtures
from providers.api_football.fixtures_provider import ApiFootballFixturesProvider
from pronostics.analyzer import PronosticsAnalyzer
from pronostics.pipeline import PipelineState, PipelineStatus, run_automatic_analysis


class StaticProvider(FixturesProviderBase):
    def __init__(self, fixtures: List[Fixture]) -> None:
        self.fixtures = fixtures
        self.dates: List[Optional[str]] = []

    async def fetch_fixtures(self, date: Optional[str] = None) -> List[Fixture]:
        self.dates.append(date)
        return self.fixtures


class BrokenAnalyzer(PronosticsAnalyzer):
    def analyze(self, fixtures):
        raise RuntimeError("analisi rotta")


def test_pipeline_success_writes_file(tmp_path):
    target = tmp_path / "static" / "pronostics.json"
    provider = ApiFootballFixturesProvider()  # nessuna chiave: dati dimostrativi
    state = asyncio.run(run_automatic_analysis(provider, PronosticsAnalyzer(seed=7), target))

    assert state.status is PipelineStatus.SUCCEEDED
    assert state.done
    assert state.safe_count == 8
    assert state.risky_count == 5
    assert state.fixtures_source == "fallback"
    assert state.output_path == str(target)
    assert state.started_at and state.finished_at
    expected = PronosticsAnalyzer(seed=7).analyze(get_mock_fixtures()).to_dict()
    assert load_pronostics(target) == expected


def test_pipeline_passes_date(tmp_path):
    provider = StaticProvider(get_mock_fixtures()[:2])
    state = asyncio.run(
        run_automatic_analysis(provider, PronosticsAnalyzer(seed=1), tmp_path / "p.json", date="2025-05-01")
    )
    assert provider.dates == ["2025-05-01"]
    assert state.safe_count == 2
    assert state.risky_count == 2
    assert state.fixtures_source is None


def test_pipeline_save_failure_marks_failed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    state = PipelineState()
    out = asyncio.run(
        run_automatic_analysis(
            StaticProvider(get_mock_fixtures()),
            PronosticsAnalyzer(seed=1),
            blocker / "pronostics.json",
            state=state,
        )
    )
    assert out is state
    assert state.status is PipelineStatus.FAILED
    assert state.error
    assert state.finished_at


def test_pipeline_analysis_failure_keeps_previous_file(tmp_path):
    target = tmp_path / "pronostics.json"
    target.write_text(json.dumps({"cote_sure": 2.0}), encoding="utf-8")
    state = asyncio.run(
        run_automatic_analysis(StaticProvider(get_mock_fixtures()), BrokenAnalyzer(seed=1), target)
    )
    assert state.status is PipelineStatus.FAILED
    assert state.error == "analisi rotta"
    assert json.loads(target.read_text(encoding="utf-8")) == {"cote_sure": 2.0}


def test_state_to_dict_defaults():
    assert PipelineState().to_dict() == {
        "status": "pending",
        "started_at": None,
        "finished_at": None,
        "error": None,
        "safe_count": 0,
        "risky_count": 0,
        "fixtures_source": None,
        "output_path": None,
    }
