"""
Harvest Puzzle Setup - Creates the initial game state.

This module handles:
- Building a spellbook from spell names
- Seeding the dice pool
- Clearing the board
"""

from __future__ import annotations

from ...config import PuzzleConfig, DEFAULT_SPELLBOOK_LAYOUT
from ...engine_core.effect_resolver import get_spell
from ...engine_core.state import GameState, DicePool, Spellbook, EMPTY_BOARD


def create_spellbook(layout: list[str] | None = None) -> Spellbook:
    """Build a spellbook with nothing consumed, face 1 first."""
    names = layout if layout is not None else DEFAULT_SPELLBOOK_LAYOUT
    return Spellbook(spells=tuple(get_spell(name) for name in names))


THE_SPELLBOOK = create_spellbook()


def setup_puzzle(config: PuzzleConfig | None = None) -> GameState:
    """
    Set up a new puzzle.

    Args:
        config: Starting dice, spellbook and enemy health (defaults to the
            standard puzzle: one die of each face, 105 health)

    Returns:
        Initial GameState ready for search
    """
    config = config or PuzzleConfig()
    return GameState(
        dice=DicePool(tuple(config.dice)),
        spellbook=create_spellbook(config.spellbook),
        board=EMPTY_BOARD,
        enemy_hp=config.enemy_health,
    )
