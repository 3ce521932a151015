"""
Game handling module for the game troubleshooter.

This module provides:
- GameRegistry: Catalog lookups for games, issues and advice
- fix_crashes(): Best-effort crash-fix cleanup for a game

Usage:
    from game_troubleshooter.game_handling import GameRegistry, fix_crashes

    registry = GameRegistry.from_file()
    category, steps = registry.resolve_issue('BO6', 'connection')
    fix_crashes('Cold War', registry, print)
"""

from .registry import CRASH_FIX_CATEGORY, GameRegistry, load_catalog
from .fixer import GENERIC_CRASH_FIX, ActionExecutor, fix_crashes

# Expose public API
__all__ = [
    'CRASH_FIX_CATEGORY', 'GameRegistry', 'load_catalog',
    'GENERIC_CRASH_FIX', 'ActionExecutor', 'fix_crashes',
]
