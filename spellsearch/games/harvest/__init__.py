"""
Harvest - The default dice/spell puzzle.

One die of each face, an empty board and a 105-health enemy. The spellbook
holds three Harvest Scythes (faces 1, 3, 5), a Vise Grip (face 2), a Chisel
(face 4) and a Doppeltwice (face 6). Every point of damage comes from the
scythes, so the puzzle is about manufacturing high dice for them.
"""

from .setup import create_spellbook, setup_puzzle, THE_SPELLBOOK

__all__ = [
    "create_spellbook",
    "setup_puzzle",
    "THE_SPELLBOOK",
]
