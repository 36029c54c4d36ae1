"""
Best-First Search - Bounded exploration of the puzzle's state space.

The engine:
1. Pushes the initial state at depth 0 and seeds the best tracker with it
2. Pops the node with the lowest (enemy health, depth)
3. Updates the best tracker if the popped node is strictly better
4. Expands every legal action and pushes the children at depth + 1
5. Stops once the frontier holds more than `node_ceiling` nodes

This is a greedy frontier ordering, not an exhaustive search: the best
node it reports is the best one it dequeued before running out of room.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..config import SearchConfig
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, InvariantViolation
from .node import Frontier, SearchNode, is_better
from .telemetry import ProgressReporter, ProgressSnapshot


logger = logging.getLogger(__name__)


class StopReason(Enum):
    """Why the search loop ended."""
    NODE_CEILING = "node_ceiling"
    FRONTIER_EXHAUSTED = "frontier_exhausted"
    ITERATION_CAP = "iteration_cap"
    TIME_LIMIT = "time_limit"


@dataclass(frozen=True)
class Improvement:
    """A point where the best tracker moved."""
    iteration: int
    enemy_hp: int
    depth: int


@dataclass
class SearchResult:
    """
    Outcome of a search run.

    `best` is the best node ever dequeued. `improvements` lists every
    change of the best tracker in order, starting with the root.
    """
    best: SearchNode
    iterations: int
    frontier_size: int
    elapsed: float
    stop_reason: StopReason
    improvements: list[Improvement] = field(default_factory=list)

    @property
    def best_state(self) -> GameState:
        return self.best.state

    @property
    def best_depth(self) -> int:
        return self.best.depth


@dataclass
class BestFirstSearch:
    """
    Priority-queue search driver.

    Single-threaded and synchronous. Telemetry is read off the loop every
    `telemetry_check_every` iterations and never changes what is explored.
    """
    config: SearchConfig = field(default_factory=SearchConfig)
    reporter: ProgressReporter | None = None
    clock: Callable[[], float] | None = None

    def __post_init__(self):
        if self.clock is None:
            self.clock = time.monotonic
        self.generator = ActionGenerator(prep_policy=self.config.prep_policy)
        self.reducer = Reducer()

    def expand(self, node: SearchNode) -> list[SearchNode]:
        """Apply every legal action to the node's state."""
        link = self.config.track_path
        children = []
        for action in self.generator.generate(node.state):
            children.append(node.child(self.reducer.apply(node.state, action), action, link=link))
        return children

    def run(self, initial: GameState) -> SearchResult:
        """
        Search from `initial` until a stop condition is hit.

        Raises InvariantViolation if a generated action cannot be applied.
        """
        config = self.config
        root = SearchNode(state=initial, depth=0)
        frontier = Frontier()
        frontier.push(root)

        best = root
        improvements = [Improvement(iteration=0, enemy_hp=initial.enemy_hp, depth=0)]

        start = self.clock()
        last_report = start
        iterations = 0

        logger.info(
            "Starting search: enemy_hp=%d node_ceiling=%d prep_policy=%s",
            initial.enemy_hp, config.node_ceiling, config.prep_policy.value,
        )

        while True:
            if len(frontier) > config.node_ceiling:
                stop_reason = StopReason.NODE_CEILING
                break
            if not frontier:
                stop_reason = StopReason.FRONTIER_EXHAUSTED
                break
            if config.max_iterations is not None and iterations >= config.max_iterations:
                stop_reason = StopReason.ITERATION_CAP
                break

            node = frontier.pop()
            iterations += 1

            if is_better(node, best):
                best = node
                improvements.append(
                    Improvement(iteration=iterations, enemy_hp=node.state.enemy_hp, depth=node.depth)
                )
                logger.debug("New best at iteration %d: hp=%d depth=%d",
                             iterations, node.state.enemy_hp, node.depth)

            try:
                children = self.expand(node)
            except InvariantViolation:
                logger.error("Invariant violated expanding node at depth %d", node.depth)
                raise
            for child in children:
                frontier.push(child)

            if iterations % config.telemetry_check_every == 0:
                now = self.clock()
                if config.max_seconds is not None and now - start >= config.max_seconds:
                    stop_reason = StopReason.TIME_LIMIT
                    break
                if now - last_report >= config.telemetry_interval:
                    last_report = now
                    if self.reporter is not None:
                        self.reporter.report(ProgressSnapshot(
                            iteration=iterations,
                            frontier_size=len(frontier),
                            elapsed=now - start,
                            best_depth=best.depth,
                            best_state=best.state,
                        ))

        elapsed = self.clock() - start
        logger.info(
            "Search stopped (%s) after %d iterations: frontier=%d best_hp=%d best_depth=%d",
            stop_reason.value, iterations, len(frontier), best.state.enemy_hp, best.depth,
        )
        return SearchResult(
            best=best,
            iterations=iterations,
            frontier_size=len(frontier),
            elapsed=elapsed,
            stop_reason=stop_reason,
            improvements=improvements,
        )


def search(
    initial: GameState,
    config: SearchConfig | None = None,
    reporter: ProgressReporter | None = None,
) -> SearchResult:
    """
    Convenience function to run a search.

    Creates a BestFirstSearch and runs it.
    """
    engine = BestFirstSearch(config=config or SearchConfig(), reporter=reporter)
    return engine.run(initial)
