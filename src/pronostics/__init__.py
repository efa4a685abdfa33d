from .analyzer import BET_TYPES, PronosticsAnalyzer, analyze_fixtures, combined_odds
from .pipeline import PipelineState, PipelineStatus, run_automatic_analysis

__all__ = [
    "BET_TYPES",
    "PronosticsAnalyzer",
    "analyze_fixtures",
    "combined_odds",
    "PipelineState",
    "PipelineStatus",
    "run_automatic_analysis",
]
