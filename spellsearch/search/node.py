"""
Search Nodes - Frontier entries and their ordering.

The frontier is ordered by (enemy health, depth): the node with the lowest
enemy health is expanded first, ties go to the shallower node. The ordering
is written out as plain functions so there is exactly one definition of
"better" shared by the frontier and the best tracker.
"""

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Action


@dataclass(frozen=True, eq=False)
class SearchNode:
    """
    A state reached after `depth` actions.

    `parent` and `action` link back to the node this one was expanded
    from, so the move sequence can be recovered. A linked node keeps its
    whole ancestor chain alive; children built with `link=False` hold no
    parent and report an empty path.
    """
    state: GameState
    depth: int = 0
    parent: SearchNode | None = None
    action: Action | None = None

    def child(self, state: GameState, action: Action, link: bool = True) -> SearchNode:
        return SearchNode(
            state=state,
            depth=self.depth + 1,
            parent=self if link else None,
            action=action,
        )

    def path(self) -> list[tuple[Action, GameState]]:
        """
        Moves from the root to this node.

        Each entry is (action, state the action was applied to).
        """
        steps = []
        node = self
        while node.parent is not None:
            steps.append((node.action, node.parent.state))
            node = node.parent
        steps.reverse()
        return steps

    def actions(self) -> list[Action]:
        return [action for action, _ in self.path()]


def priority_key(node: SearchNode) -> tuple[int, int]:
    """Sort key: lower is expanded first."""
    return (node.state.enemy_hp, node.depth)


def is_better(a: SearchNode, b: SearchNode) -> bool:
    """Strictly better: lower health, or equal health at a smaller depth."""
    return priority_key(a) < priority_key(b)


@dataclass
class Frontier:
    """
    Min-heap of SearchNodes keyed by priority_key.

    An insertion counter breaks remaining ties, so nodes never get compared
    directly and equal keys pop in insertion order.
    """
    _heap: list[tuple[int, int, int, SearchNode]] = field(default_factory=list)
    _counter: count = field(default_factory=count)

    def push(self, node: SearchNode) -> None:
        health, depth = priority_key(node)
        heapq.heappush(self._heap, (health, depth, next(self._counter), node))

    def pop(self) -> SearchNode:
        return heapq.heappop(self._heap)[-1]

    def peek(self) -> SearchNode:
        return self._heap[0][-1]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
