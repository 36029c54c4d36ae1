"""
Effect Resolver - Spell definitions and their effects.

Every spell is one of two kinds:
- SINGLE: spends one die
- DOUBLE: spends two dice

A spell is a small capability record (precondition, effect, initial uses).
Effects are pure: (state, face, dice...) -> new state. They run on a state
from which the casting cost (slot use and dice) has already been deducted
by the reducer, so they never re-check those.

`face` is the spellbook face the spell is prepared from. Spells that touch
the spellbook (Harvest Scythe) use it to find their own bit.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .state import Die, GameState, InvariantViolation


class SpellKind(Enum):
    """How many dice a spell consumes."""
    SINGLE = "single"
    DOUBLE = "double"

    @property
    def dice_cost(self) -> int:
        return 1 if self is SpellKind.SINGLE else 2


def _always(state: GameState, face: Die, *dice: Die) -> bool:
    return True


@dataclass(frozen=True)
class SpellDefinition:
    """
    A named spell rule.

    The definition is immutable and shared by every state that references
    it. Per-slot use counters live on the board, not here.
    """
    name: str
    kind: SpellKind
    effect: Callable[..., GameState]
    precondition: Callable[..., bool] = _always
    initial_uses: int = 1

    @property
    def dice_cost(self) -> int:
        return self.kind.dice_cost

    def _check_arity(self, dice: tuple[Die, ...]) -> None:
        if len(dice) != self.dice_cost:
            raise InvariantViolation(
                f"{self.name} takes {self.dice_cost} die/dice, got {len(dice)}"
            )

    def usable(self, state: GameState, face: Die, *dice: Die) -> bool:
        """Check the spell-specific precondition for casting with these dice."""
        self._check_arity(dice)
        return self.precondition(state, face, *dice)

    def cast(self, state: GameState, face: Die, *dice: Die) -> GameState:
        """Apply the effect. The casting cost must already be deducted."""
        self._check_arity(dice)
        return self.effect(state, face, *dice)


# =============================================================================
# Harvest Scythe
# =============================================================================

HARVEST_DAMAGE_PER_PIP = 5


def harvest_scythe_usable(state: GameState, face: Die, die: Die) -> bool:
    return not state.spellbook.is_consumed(face)


def harvest_scythe(state: GameState, face: Die, die: Die) -> GameState:
    """Deal 5x pips damage and permanently consume this spell's face."""
    spellbook = state.spellbook.consume(face)
    # Health saturates at zero
    enemy_hp = max(0, state.enemy_hp - HARVEST_DAMAGE_PER_PIP * die.pips)
    return state.with_spellbook(spellbook).with_enemy_hp(enemy_hp)


# =============================================================================
# Vise Grip
# =============================================================================

VISE_GRIP_YIELD = 3


def vise_grip(state: GameState, face: Die, d1: Die, d2: Die) -> GameState:
    """Add three dice showing the difference of the two dice."""
    if d1 == d2:
        return state
    delta = Die(abs(d1.pips - d2.pips))
    return state.with_dice(state.dice.add(delta, VISE_GRIP_YIELD))


# =============================================================================
# Chisel
# =============================================================================

def chisel_usable(state: GameState, face: Die, die: Die) -> bool:
    return die.pips > 1


def chisel(state: GameState, face: Die, die: Die) -> GameState:
    """Split a die into pips-1 and a 1."""
    dice = state.dice.add(Die(die.pips - 1)).add(Die(1))
    return state.with_dice(dice)


# =============================================================================
# Doppeltwice
# =============================================================================

def doppel_twice_usable(state: GameState, face: Die, die: Die) -> bool:
    return die.pips <= 5


def doppel_twice(state: GameState, face: Die, die: Die) -> GameState:
    """Double a die. Doubles above 6 wrap around (8 -> 2)."""
    doubled = die.pips * 2
    if doubled > 6:
        doubled -= 6
    # A wrapped double still credits exactly one die, never two.
    return state.with_dice(state.dice.add(Die(doubled)))


HARVEST_SCYTHE = SpellDefinition(
    name="Harvest Scythe",
    kind=SpellKind.SINGLE,
    effect=harvest_scythe,
    precondition=harvest_scythe_usable,
)

VISE_GRIP = SpellDefinition(
    name="Vise Grip",
    kind=SpellKind.DOUBLE,
    effect=vise_grip,
)

CHISEL = SpellDefinition(
    name="Chisel",
    kind=SpellKind.SINGLE,
    effect=chisel,
    precondition=chisel_usable,
    initial_uses=2,
)

DOPPEL_TWICE = SpellDefinition(
    name="Doppeltwice",
    kind=SpellKind.SINGLE,
    effect=doppel_twice,
    precondition=doppel_twice_usable,
    initial_uses=2,
)

SPELL_REGISTRY: dict[str, SpellDefinition] = {
    spell.name: spell
    for spell in (HARVEST_SCYTHE, VISE_GRIP, CHISEL, DOPPEL_TWICE)
}


def get_spell(name: str) -> SpellDefinition:
    """Look up a spell definition by name."""
    try:
        return SPELL_REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown spell: {name}") from None
