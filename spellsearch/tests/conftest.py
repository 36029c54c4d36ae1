"""
Pytest fixtures for Spellsearch tests.
"""

import pytest

from ..config import PuzzleConfig
from ..engine_core.state import GameState, DicePool, Spellbook, SpellSlot, Die
from ..games.harvest import setup_puzzle, THE_SPELLBOOK


@pytest.fixture
def initial_state() -> GameState:
    """The standard puzzle: one die of each face, empty board, 105 health."""
    return setup_puzzle()


@pytest.fixture
def make_state():
    """
    Build a state directly from dice counts and board slots.

    Board slots are given as {slot_index: (face_pips, uses)}.
    """
    def _make(
        dice=(1, 1, 1, 1, 1, 1),
        board=None,
        enemy_hp=105,
        consumed=0,
    ) -> GameState:
        slots = [SpellSlot()] * 4
        for index, (pips, uses) in (board or {}).items():
            slots[index] = SpellSlot(spell=Die(pips), uses=uses)
        spellbook = Spellbook(spells=THE_SPELLBOOK.spells, consumed=consumed)
        return GameState(
            dice=DicePool(tuple(dice)),
            spellbook=spellbook,
            board=tuple(slots),
            enemy_hp=enemy_hp,
        )
    return _make


@pytest.fixture
def low_health_puzzle() -> GameState:
    """A puzzle the first scythe can finish."""
    return setup_puzzle(PuzzleConfig(enemy_health=20))
