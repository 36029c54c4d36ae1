"""
Games module - Puzzle-specific setups.

Each puzzle has its own subpackage with:
- Spellbook layout
- Initial state construction
"""
