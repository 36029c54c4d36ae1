"""
Tests for the best-first search engine.

Tests:
- Frontier ordering
- Termination at the node ceiling
- Best-tracker monotonicity
- Telemetry does not change results
- Invariant violations abort the search
"""

import logging

import pytest

from ..config import SearchConfig, PuzzleConfig
from ..engine_core.action import Action
from ..engine_core.reducer import apply_action
from ..engine_core.state import Die, InvariantViolation
from ..games.harvest import setup_puzzle
from ..search import (
    BestFirstSearch,
    CollectingReporter,
    LoggingReporter,
    Frontier,
    SearchNode,
    StopReason,
    is_better,
    priority_key,
    render_state,
    search,
)


class FakeClock:
    """Advances a fixed step every time it is read."""

    def __init__(self, step=1.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


class TestOrdering:
    """Tests for the priority key."""

    def test_lower_health_first_then_shallower(self, make_state):
        a = SearchNode(make_state(enemy_hp=50), depth=3)
        b = SearchNode(make_state(enemy_hp=50), depth=1)
        c = SearchNode(make_state(enemy_hp=40), depth=9)

        frontier = Frontier()
        for node in (a, b, c):
            frontier.push(node)

        assert [frontier.pop() for _ in range(3)] == [c, b, a]

    def test_equal_keys_pop_in_insertion_order(self, initial_state):
        nodes = [SearchNode(initial_state, depth=1) for _ in range(5)]
        frontier = Frontier()
        for node in nodes:
            frontier.push(node)

        assert [frontier.pop() for _ in range(5)] == nodes

    def test_is_better_is_strict(self, initial_state):
        a = SearchNode(initial_state, depth=2)
        b = SearchNode(initial_state, depth=2)

        assert priority_key(a) == (105, 2)
        assert not is_better(a, b)
        assert not is_better(b, a)
        assert is_better(SearchNode(initial_state, depth=1), a)


class TestSearchTermination:
    """Tests for the stop conditions."""

    def test_small_ceiling_terminates(self, initial_state):
        result = search(initial_state, SearchConfig(node_ceiling=100, max_iterations=100_000))

        assert result.stop_reason == StopReason.NODE_CEILING
        assert result.frontier_size > 100
        assert result.best_state.enemy_hp <= 105

    def test_search_finds_damage(self, initial_state):
        result = search(initial_state, SearchConfig(node_ceiling=2000, max_iterations=20000))
        assert result.best_state.enemy_hp < 105

    def test_frontier_exhausted_when_nothing_to_push(self, initial_state):
        engine = BestFirstSearch(config=SearchConfig(node_ceiling=10))
        engine.expand = lambda node: []

        result = engine.run(initial_state)

        assert result.stop_reason == StopReason.FRONTIER_EXHAUSTED
        assert result.iterations == 1
        assert result.best.state == initial_state

    def test_iteration_cap(self, initial_state):
        result = search(initial_state, SearchConfig(max_iterations=5))

        assert result.stop_reason == StopReason.ITERATION_CAP
        assert result.iterations == 5

    def test_time_limit(self, initial_state):
        config = SearchConfig(max_seconds=3.0, telemetry_check_every=1)
        engine = BestFirstSearch(config=config, clock=FakeClock())

        result = engine.run(initial_state)

        assert result.stop_reason == StopReason.TIME_LIMIT
        assert result.iterations == 3


class TestBestTracker:
    """Tests for the best result."""

    def test_improvements_never_regress(self, initial_state):
        result = search(initial_state, SearchConfig(node_ceiling=5000, max_iterations=20000))
        keys = [(i.enemy_hp, i.depth) for i in result.improvements]

        assert keys[0] == (105, 0)
        assert all(later < earlier for earlier, later in zip(keys, keys[1:]))
        assert all(
            later.enemy_hp <= earlier.enemy_hp
            for earlier, later in zip(result.improvements, result.improvements[1:])
        )
        assert keys[-1] == (result.best_state.enemy_hp, result.best_depth)

    def test_best_path_replays_to_best_state(self, initial_state):
        result = search(initial_state, SearchConfig(node_ceiling=2000, max_iterations=20000))

        state = initial_state
        for action in result.best.actions():
            state = apply_action(state, action)

        assert state == result.best_state
        assert len(result.best.path()) == result.best_depth

    def test_untracked_run_holds_no_ancestors(self, initial_state):
        tracked = search(initial_state, SearchConfig(node_ceiling=2000, max_iterations=20000))
        untracked = search(
            initial_state, SearchConfig(node_ceiling=2000, max_iterations=20000, track_path=False)
        )

        assert untracked.best.parent is None
        assert untracked.best.path() == []
        assert untracked.iterations == tracked.iterations
        assert untracked.best_state == tracked.best_state
        assert untracked.best_depth == tracked.best_depth

    def test_child_without_link(self, initial_state):
        root = SearchNode(initial_state)
        child = root.child(initial_state, Action.pass_turn(), link=False)

        assert child.depth == 1
        assert child.parent is None
        assert child.action == Action.pass_turn()

    def test_lethal_puzzle_reaches_zero(self, low_health_puzzle):
        result = search(low_health_puzzle, SearchConfig(node_ceiling=500, max_iterations=5000))

        assert result.best_state.enemy_hp == 0
        assert result.best_depth == 2

    def test_no_dice_means_root_is_best(self):
        state = setup_puzzle(PuzzleConfig(dice=[0, 0, 0, 0, 0, 0]))
        result = search(state, SearchConfig(max_iterations=10))

        assert result.best.depth == 0
        assert result.best_state == state


class TestTelemetry:
    """Tests for progress reporting."""

    def test_reports_are_emitted(self, initial_state):
        reporter = CollectingReporter()
        config = SearchConfig(
            node_ceiling=500, max_iterations=2000, telemetry_interval=0.5, telemetry_check_every=1
        )
        engine = BestFirstSearch(config=config, reporter=reporter, clock=FakeClock())

        result = engine.run(initial_state)

        assert reporter.snapshots
        iterations = [s.iteration for s in reporter.snapshots]
        assert iterations == sorted(iterations)
        assert all(s.frontier_size > 0 for s in reporter.snapshots)
        assert reporter.snapshots[-1].iteration <= result.iterations

    def test_reporting_does_not_change_result(self, initial_state):
        config = SearchConfig(
            node_ceiling=1000, max_iterations=5000, telemetry_interval=0.5, telemetry_check_every=1
        )
        quiet = BestFirstSearch(config=config).run(initial_state)
        noisy = BestFirstSearch(
            config=config, reporter=CollectingReporter(), clock=FakeClock()
        ).run(initial_state)

        assert noisy.iterations == quiet.iterations
        assert noisy.best_state == quiet.best_state
        assert noisy.best_depth == quiet.best_depth

    def test_snapshot_format(self, initial_state):
        reporter = CollectingReporter()
        config = SearchConfig(
            node_ceiling=200, max_iterations=2000, telemetry_interval=0.5, telemetry_check_every=1
        )
        BestFirstSearch(config=config, reporter=reporter, clock=FakeClock()).run(initial_state)

        line = reporter.snapshots[0].format()
        assert line.startswith("iter=1 ")
        assert "best_depth=" in line
        assert "hp=" in line

    def test_logging_reporter(self, initial_state, caplog):
        config = SearchConfig(max_iterations=5, telemetry_interval=0.5, telemetry_check_every=1)
        engine = BestFirstSearch(config=config, reporter=LoggingReporter(), clock=FakeClock())

        with caplog.at_level(logging.INFO, logger="spellsearch"):
            engine.run(initial_state)

        assert "search progress: iter=1 " in caplog.text
        assert "Search stopped (iteration_cap) after 5 iterations" in caplog.text

    def test_render_state(self, initial_state):
        assert render_state(initial_state) == (
            "dice=[1,1,1,1,1,1] board=[- | - | - | -] consumed={} hp=105"
        )

    def test_render_state_with_spells(self, make_state):
        state = make_state(board={0: (1, 1), 2: (4, 2)}, consumed=0b000101, enemy_hp=70)
        assert render_state(state) == (
            "dice=[1,1,1,1,1,1] board=[Harvest Scythe@1x1 | - | Chisel@4x2 | -] "
            "consumed={1,3} hp=70"
        )


class TestFailure:
    """Invariant violations abort the run."""

    def test_bad_generator_aborts(self, initial_state):
        class BrokenGenerator:
            def generate(self, state):
                return [Action.cast1(0, Die(1))]

        engine = BestFirstSearch(config=SearchConfig(node_ceiling=100))
        engine.generator = BrokenGenerator()

        with pytest.raises(InvariantViolation):
            engine.run(initial_state)
