"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Raises InvariantViolation on anything the action generator would never emit
- Delegates spell effects to the effect resolver
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, SpellSlot, InvariantViolation
from .action import Action, ActionType
from .effect_resolver import SpellKind


_CAST_KINDS = {
    ActionType.CAST1: SpellKind.SINGLE,
    ActionType.CAST2: SpellKind.DOUBLE,
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> GameState:
        """
        Apply an action to the game state.

        Returns the new state. Raises InvariantViolation if the action
        breaks a precondition.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            raise InvariantViolation(f"No handler for action type: {action.action_type}")
        return handler(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PASS: self._handle_pass,
            ActionType.PREP: self._handle_prep,
            ActionType.CAST1: self._handle_cast,
            ActionType.CAST2: self._handle_cast,
        }
        return handlers.get(action_type)

    def _handle_pass(self, state: GameState, action: Action) -> GameState:
        """Handle pass - nothing changes."""
        return state

    def _handle_prep(self, state: GameState, action: Action) -> GameState:
        """Spend a die of the face and put that face's spell into the slot."""
        face = action.face
        if face is None or action.slot is None:
            raise InvariantViolation(f"Prep needs a face and a slot: {action!r}")
        if state.spellbook.is_consumed(face):
            raise InvariantViolation(f"Cannot prep consumed spellbook face {face}")

        slot = state.slot(action.slot)
        if not slot.is_open:
            raise InvariantViolation(
                f"Slot {action.slot} still holds a spell with {slot.uses} use(s)"
            )

        spell = state.spellbook.spell(face)
        new_state = state.use_die(face)
        return new_state.with_slot(action.slot, SpellSlot(spell=face, uses=spell.initial_uses))

    def _handle_cast(self, state: GameState, action: Action) -> GameState:
        """Pay the casting cost, then resolve the spell's effect."""
        if action.slot is None:
            raise InvariantViolation(f"Cast needs a slot: {action!r}")
        slot = state.slot(action.slot)
        if slot.spell is None:
            raise InvariantViolation(f"Slot {action.slot} holds no spell")

        spell = state.spellbook.spell(slot.spell)
        expected_kind = _CAST_KINDS[action.action_type]
        if spell.kind != expected_kind:
            raise InvariantViolation(
                f"{action.action_type.value} on slot {action.slot}, "
                f"but {spell.name} is a {spell.kind.value}-die spell"
            )
        if slot.uses <= 0:
            raise InvariantViolation(f"{spell.name} in slot {action.slot} has no uses left")
        if not spell.usable(state, slot.spell, *action.dice):
            raise InvariantViolation(
                f"{spell.name} cannot be cast with {[d.pips for d in action.dice]}"
            )

        # Deduct the cost: one use, then the dice
        paid = state.with_slot(action.slot, SpellSlot(spell=slot.spell, uses=slot.uses - 1))
        for die in action.dice:
            paid = paid.use_die(die)

        return spell.cast(paid, slot.spell, *action.dice)


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
