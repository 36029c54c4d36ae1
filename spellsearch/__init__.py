"""
Spellsearch - Best-first solver for a dice/spell puzzle

A deterministic engine for exploring the moves of a single-player dice
puzzle and finding the line that leaves the enemy with the least health.
The package provides:
- Immutable state and dice types
- Legal action generation
- Deterministic spell effect resolution
- A bounded best-first search with progress telemetry
"""

__version__ = "0.1.0"
