"""
Telemetry - Progress snapshots and how they get reported.

Reporting is observability only: a reporter never influences the search.
"""

from __future__ import annotations
import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..engine_core.state import GameState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Where the search stands at one point in time."""
    iteration: int
    frontier_size: int
    elapsed: float
    best_depth: int
    best_state: GameState

    def format(self) -> str:
        return (
            f"iter={self.iteration} frontier={self.frontier_size} "
            f"elapsed={self.elapsed:.1f}s best_depth={self.best_depth} "
            f"best={render_state(self.best_state)}"
        )


def render_state(state: GameState) -> str:
    """One-line rendering: dice, board, consumed faces, enemy health."""
    dice = ",".join(str(c) for c in state.dice.counts)

    slots = []
    for slot in state.board:
        if slot.spell is None:
            slots.append("-")
        else:
            name = state.spellbook.spell(slot.spell).name
            slots.append(f"{name}@{slot.spell}x{slot.uses}")

    consumed = ",".join(str(d) for d in state.spellbook.consumed_faces())
    return f"dice=[{dice}] board=[{' | '.join(slots)}] consumed={{{consumed}}} hp={state.enemy_hp}"


class ProgressReporter(ABC):
    """Receives periodic progress snapshots from the search engine."""

    @abstractmethod
    def report(self, snapshot: ProgressSnapshot) -> None:
        pass


class LoggingReporter(ProgressReporter):
    """Sends snapshots to the module logger at INFO."""

    def report(self, snapshot: ProgressSnapshot) -> None:
        logger.info("search progress: %s", snapshot.format())


class PrintReporter(ProgressReporter):
    """Writes one line per snapshot to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def report(self, snapshot: ProgressSnapshot) -> None:
        print(snapshot.format(), file=self.stream or sys.stdout, flush=True)


class CollectingReporter(ProgressReporter):
    """Keeps every snapshot in memory. Handy for tests and notebooks."""

    def __init__(self):
        self.snapshots: list[ProgressSnapshot] = []

    def report(self, snapshot: ProgressSnapshot) -> None:
        self.snapshots.append(snapshot)
