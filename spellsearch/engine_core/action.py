"""
Action System - The moves a player can make.

Actions are:
1. PASS  - do nothing
2. PREP  - prepare a spellbook spell into a board slot, spending a die of its face
3. CAST1 - cast a single-die spell from a slot
4. CAST2 - cast a double-die spell from a slot

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .state import Die

if TYPE_CHECKING:
    from .state import Spellbook, GameState


class ActionType(Enum):
    """Types of actions in the system."""
    PASS = "pass"
    PREP = "prep"
    CAST1 = "cast1"
    CAST2 = "cast2"


@dataclass(frozen=True)
class Action:
    """
    A fully specified move.

    `face` is the spellbook face for PREP. `dice` are the dice spent by
    CAST1 (one) and CAST2 (two, lowest first).
    """
    action_type: ActionType
    slot: int | None = None
    face: Die | None = None
    dice: tuple[Die, ...] = ()

    @classmethod
    def pass_turn(cls) -> Action:
        """Factory for the no-op action."""
        return cls(action_type=ActionType.PASS)

    @classmethod
    def prep(cls, face: Die, slot: int) -> Action:
        """Factory for prep action."""
        return cls(action_type=ActionType.PREP, slot=slot, face=face)

    @classmethod
    def cast1(cls, slot: int, die: Die) -> Action:
        """Factory for single-die cast."""
        return cls(action_type=ActionType.CAST1, slot=slot, dice=(die,))

    @classmethod
    def cast2(cls, slot: int, d1: Die, d2: Die) -> Action:
        """Factory for double-die cast. The pair is unordered."""
        return cls(action_type=ActionType.CAST2, slot=slot, dice=tuple(sorted((d1, d2))))

    def describe(self, state: GameState | None = None) -> str:
        """Human-readable move, naming spells when a state is given."""
        if self.action_type == ActionType.PASS:
            return "Pass"
        if self.action_type == ActionType.PREP:
            name = _spell_name(state.spellbook, self.face) if state is not None else f"face {self.face}"
            return f"Prep {name} into slot {self.slot}"
        dice = " and ".join(str(d) for d in self.dice)
        name = f"slot {self.slot}"
        if state is not None:
            prepared = state.board[self.slot].spell
            if prepared is not None:
                name = f"{_spell_name(state.spellbook, prepared)} (slot {self.slot})"
        return f"Cast {name} with {dice}"

    def __str__(self) -> str:
        return self.describe()


def _spell_name(spellbook: Spellbook, face: Die) -> str:
    return spellbook.spell(face).name
