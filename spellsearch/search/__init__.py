"""
Search module - Best-first exploration of puzzle states.

Provides:
- BestFirstSearch: The frontier-driven search loop
- SearchNode / Frontier: Nodes and their priority ordering
- Reporters: Periodic progress telemetry
"""

from .node import SearchNode, Frontier, priority_key, is_better
from .engine import BestFirstSearch, SearchResult, StopReason, Improvement, search
from .telemetry import (
    ProgressSnapshot,
    ProgressReporter,
    LoggingReporter,
    PrintReporter,
    CollectingReporter,
    render_state,
)

__all__ = [
    "SearchNode",
    "Frontier",
    "priority_key",
    "is_better",
    "BestFirstSearch",
    "SearchResult",
    "StopReason",
    "Improvement",
    "search",
    "ProgressSnapshot",
    "ProgressReporter",
    "LoggingReporter",
    "PrintReporter",
    "CollectingReporter",
    "render_state",
]
