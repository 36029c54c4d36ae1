"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The search engine to expand nodes
2. The CLI to list available moves
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
Enumeration order is deterministic: preps, single casts, double casts, pass.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from itertools import combinations_with_replacement

from .state import GameState, ALL_DICE
from .action import Action
from .effect_resolver import SpellKind


class PrepPolicy(str, Enum):
    """Which open slots receive prep candidates in one call."""
    FIRST_OPEN_SLOT = "first_open_slot"
    ALL_OPEN_SLOTS = "all_open_slots"


@dataclass
class ActionGenerator:
    """
    Generates legal actions for a game state.

    With the default policy only the first open slot (scanning 0..3) gets
    prep candidates; later open slots wait for a later move.
    """
    prep_policy: PrepPolicy = PrepPolicy.FIRST_OPEN_SLOT

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions.

        Returns a list of fully-specified Action objects. Pass is always
        included, so the list is never empty.
        """
        actions = []
        actions.extend(self._generate_prep_actions(state))
        actions.extend(self._generate_cast1_actions(state))
        actions.extend(self._generate_cast2_actions(state))
        actions.append(Action.pass_turn())
        return actions

    def _generate_prep_actions(self, state: GameState) -> list[Action]:
        """Generate prep actions - one per preparable face per open slot."""
        faces = [
            face for face in ALL_DICE
            if state.dice.has(face) and not state.spellbook.is_consumed(face)
        ]

        actions = []
        for slot_index, slot in enumerate(state.board):
            if not slot.is_open:
                continue
            for face in faces:
                actions.append(Action.prep(face, slot_index))
            if self.prep_policy == PrepPolicy.FIRST_OPEN_SLOT:
                break
        return actions

    def _generate_cast1_actions(self, state: GameState) -> list[Action]:
        """Generate single-die casts for every ready single-die spell."""
        actions = []
        for slot_index, slot in enumerate(state.board):
            if slot.spell is None or slot.uses <= 0:
                continue
            spell = state.spellbook.spell(slot.spell)
            if spell.kind != SpellKind.SINGLE:
                continue

            for die in state.dice.available():
                if spell.usable(state, slot.spell, die):
                    actions.append(Action.cast1(slot_index, die))
        return actions

    def _generate_cast2_actions(self, state: GameState) -> list[Action]:
        """Generate double-die casts over unordered pairs of faces."""
        actions = []
        for slot_index, slot in enumerate(state.board):
            if slot.spell is None or slot.uses <= 0:
                continue
            spell = state.spellbook.spell(slot.spell)
            if spell.kind != SpellKind.DOUBLE:
                continue

            for d1, d2 in combinations_with_replacement(state.dice.available(), 2):
                if d1 == d2 and not state.dice.has(d1, 2):
                    continue
                if spell.usable(state, slot.spell, d1, d2):
                    actions.append(Action.cast2(slot_index, d1, d2))
        return actions


def legal_actions(state: GameState, prep_policy: PrepPolicy = PrepPolicy.FIRST_OPEN_SLOT) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator(prep_policy=prep_policy)
    return generator.generate(state)


def is_legal(
    state: GameState,
    action: Action,
    prep_policy: PrepPolicy = PrepPolicy.FIRST_OPEN_SLOT,
) -> bool:
    """Check if a specific action is legal."""
    return action in legal_actions(state, prep_policy)
