"""
Engine Core - Deterministic puzzle state management and spell resolution.

The engine is the runtime that:
1. Holds immutable GameState values
2. Generates legal actions
3. Applies actions via the reducer
4. Resolves spell effects
"""

from .state import (
    Die,
    DicePool,
    Spellbook,
    SpellSlot,
    GameState,
    InvalidDieError,
    InvariantViolation,
)
from .action import Action, ActionType
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, PrepPolicy, legal_actions, is_legal
from .effect_resolver import SpellDefinition, SpellKind, SPELL_REGISTRY, get_spell

__all__ = [
    "Die",
    "DicePool",
    "Spellbook",
    "SpellSlot",
    "GameState",
    "InvalidDieError",
    "InvariantViolation",
    "Action",
    "ActionType",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "PrepPolicy",
    "legal_actions",
    "is_legal",
    "SpellDefinition",
    "SpellKind",
    "SPELL_REGISTRY",
    "get_spell",
]
