"""
Game State - Immutable value types for the dice/spell puzzle.

Design principles:
- Immutable: all mutations return new state
- Hashable: states can be compared and deduplicated
- Validated at the boundary: bad dice fail on construction
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .effect_resolver import SpellDefinition


NUM_FACES = 6
NUM_SLOTS = 4
DEFAULT_ENEMY_HEALTH = 105


class InvalidDieError(ValueError):
    """Raised when a die is built from a value outside [1, 6]."""


class InvariantViolation(Exception):
    """
    Raised when an action breaks a precondition the action generator guarantees.

    This is a programming error, not bad input. Callers should let it
    abort the run.
    """


@dataclass(frozen=True, order=True)
class Die:
    """A die face. Stored as pips (1-6), addressable by index (0-5)."""
    pips: int

    def __post_init__(self):
        if isinstance(self.pips, bool) or not isinstance(self.pips, int):
            raise InvalidDieError(f"bad pips: {self.pips!r}")
        if self.pips < 1 or self.pips > NUM_FACES:
            raise InvalidDieError(f"bad pips: {self.pips}")

    @property
    def index(self) -> int:
        return self.pips - 1

    @classmethod
    def from_pips(cls, pips: int) -> Die:
        return cls(pips)

    @classmethod
    def from_index(cls, index: int) -> Die:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidDieError(f"bad index: {index!r}")
        if index < 0 or index >= NUM_FACES:
            raise InvalidDieError(f"bad index: {index}")
        return cls(index + 1)

    def __str__(self) -> str:
        return str(self.pips)


ALL_DICE: tuple[Die, ...] = tuple(Die(p) for p in range(1, NUM_FACES + 1))


@dataclass(frozen=True)
class DicePool:
    """
    Available dice, as one count per face.

    counts[0] is the number of 1s, counts[5] the number of 6s.
    """
    counts: tuple[int, ...] = (0,) * NUM_FACES

    def __post_init__(self):
        counts = tuple(self.counts)
        if len(counts) != NUM_FACES:
            raise ValueError(f"dice pool needs {NUM_FACES} counts, got {len(counts)}")
        if any(c < 0 for c in counts):
            raise ValueError(f"dice counts must be non-negative: {counts}")
        object.__setattr__(self, "counts", counts)

    def count(self, die: Die) -> int:
        return self.counts[die.index]

    def has(self, die: Die, n: int = 1) -> bool:
        return self.counts[die.index] >= n

    @property
    def total(self) -> int:
        return sum(self.counts)

    def take(self, die: Die, n: int = 1) -> DicePool:
        """Return new pool with n dice of this face removed."""
        if not self.has(die, n):
            raise InvariantViolation(
                f"no {n} die/dice of face {die} to spend (have {self.count(die)})"
            )
        counts = list(self.counts)
        counts[die.index] -= n
        return DicePool(tuple(counts))

    def add(self, die: Die, n: int = 1) -> DicePool:
        """Return new pool with n dice of this face added."""
        counts = list(self.counts)
        counts[die.index] += n
        return DicePool(tuple(counts))

    def available(self) -> list[Die]:
        """Faces with at least one die, lowest first."""
        return [d for d in ALL_DICE if self.counts[d.index] > 0]


@dataclass(frozen=True)
class Spellbook:
    """
    Six spells indexed by face, plus a bitmask of permanently consumed faces.

    Bit i of `consumed` is face i+1. Bits only go from unset to set.
    """
    spells: tuple[SpellDefinition, ...]
    consumed: int = 0

    def __post_init__(self):
        spells = tuple(self.spells)
        if len(spells) != NUM_FACES:
            raise ValueError(f"spellbook needs {NUM_FACES} spells, got {len(spells)}")
        object.__setattr__(self, "spells", spells)

    def spell(self, face: Die) -> SpellDefinition:
        return self.spells[face.index]

    def is_consumed(self, face: Die) -> bool:
        return bool(self.consumed >> face.index & 1)

    def consume(self, face: Die) -> Spellbook:
        """Return new spellbook with this face marked consumed."""
        if self.is_consumed(face):
            raise InvariantViolation(f"spellbook face {face} already consumed")
        return replace(self, consumed=self.consumed | (1 << face.index))

    def consumed_faces(self) -> list[Die]:
        return [d for d in ALL_DICE if self.is_consumed(d)]


@dataclass(frozen=True)
class SpellSlot:
    """A board position: the face of a prepared spell (if any) and its remaining uses."""
    spell: Die | None = None
    uses: int = 0

    @property
    def is_empty(self) -> bool:
        return self.spell is None

    @property
    def is_open(self) -> bool:
        """Open slots can receive a new prep: empty, or holding a spent spell."""
        return self.spell is None or self.uses <= 0


EMPTY_BOARD: tuple[SpellSlot, ...] = (SpellSlot(),) * NUM_SLOTS


@dataclass(frozen=True)
class GameState:
    """
    Complete puzzle state at a point in time.

    All state changes go through the reducer, which returns new states.
    """
    dice: DicePool
    spellbook: Spellbook
    board: tuple[SpellSlot, ...] = EMPTY_BOARD
    enemy_hp: int = DEFAULT_ENEMY_HEALTH

    def __post_init__(self):
        board = tuple(self.board)
        if len(board) != NUM_SLOTS:
            raise ValueError(f"board needs {NUM_SLOTS} slots, got {len(board)}")
        if self.enemy_hp < 0:
            raise ValueError(f"enemy health must be non-negative: {self.enemy_hp}")
        object.__setattr__(self, "board", board)

    def slot(self, index: int) -> SpellSlot:
        if index < 0 or index >= NUM_SLOTS:
            raise InvariantViolation(f"no board slot {index}")
        return self.board[index]

    def use_die(self, die: Die) -> GameState:
        """Return new state with one die of this face spent."""
        return replace(self, dice=self.dice.take(die))

    def with_dice(self, dice: DicePool) -> GameState:
        return replace(self, dice=dice)

    def with_spellbook(self, spellbook: Spellbook) -> GameState:
        return replace(self, spellbook=spellbook)

    def with_slot(self, index: int, slot: SpellSlot) -> GameState:
        """Return new state with one board slot replaced."""
        self.slot(index)
        board = list(self.board)
        board[index] = slot
        return replace(self, board=tuple(board))

    def with_enemy_hp(self, enemy_hp: int) -> GameState:
        return replace(self, enemy_hp=enemy_hp)
