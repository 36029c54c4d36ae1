"""
Pydantic Schemas for configuration - Puzzle setup and search limits.

These models are the contract between the CLI (or any other caller) and
the engine. Values are validated on construction; an invalid value raises
pydantic.ValidationError before any search starts.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .engine_core.action_generator import PrepPolicy
from .engine_core.effect_resolver import SPELL_REGISTRY
from .engine_core.state import NUM_FACES, DEFAULT_ENEMY_HEALTH


DEFAULT_SPELLBOOK_LAYOUT = [
    "Harvest Scythe",
    "Vise Grip",
    "Harvest Scythe",
    "Chisel",
    "Harvest Scythe",
    "Doppeltwice",
]


# =============================================================================
# Puzzle
# =============================================================================

class PuzzleConfig(BaseModel):
    """Starting position of the puzzle."""
    enemy_health: int = Field(DEFAULT_ENEMY_HEALTH, ge=0, description="Enemy health at the start")
    dice: list[int] = Field(
        default_factory=lambda: [1] * NUM_FACES,
        description="Available dice per face, ones first",
    )
    spellbook: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SPELLBOOK_LAYOUT),
        description="Spell name for each face, face 1 first",
    )

    @field_validator("dice")
    @classmethod
    def _check_dice(cls, value: list[int]) -> list[int]:
        if len(value) != NUM_FACES:
            raise ValueError(f"dice needs {NUM_FACES} counts, got {len(value)}")
        if any(c < 0 for c in value):
            raise ValueError("dice counts must be non-negative")
        return value

    @field_validator("spellbook")
    @classmethod
    def _check_spellbook(cls, value: list[str]) -> list[str]:
        if len(value) != NUM_FACES:
            raise ValueError(f"spellbook needs {NUM_FACES} spells, got {len(value)}")
        unknown = [name for name in value if name not in SPELL_REGISTRY]
        if unknown:
            raise ValueError(f"unknown spell(s): {', '.join(unknown)}")
        return value


# =============================================================================
# Search
# =============================================================================

class SearchConfig(BaseModel):
    """Limits and telemetry cadence for the best-first search."""
    node_ceiling: int = Field(1_000_000, gt=0, description="Stop once the frontier holds more nodes")
    telemetry_interval: float = Field(1.0, gt=0, description="Seconds between progress reports")
    telemetry_check_every: int = Field(1000, gt=0, description="Iterations between clock reads")
    max_iterations: Optional[int] = Field(None, gt=0, description="Optional hard cap on expansions")
    max_seconds: Optional[float] = Field(None, gt=0, description="Optional wall-clock cap")
    prep_policy: PrepPolicy = PrepPolicy.FIRST_OPEN_SLOT
    track_path: bool = Field(
        True, description="Keep parent links so the best move sequence can be recovered"
    )

    model_config = {"frozen": True}
