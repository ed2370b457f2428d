"""
Roster Domain Constants

Purpose
-------
Provide domain-level constants for the character roster: level bounds and
bands, name rules, fight eligibility, and combat power coefficients.

IMPORTANT:
This module contains GAMEPLAY constants only. Infrastructure settings
(logging, database URL) belong in roster.core.config.

Design Notes
------------
- Values are annotated with typing.Final to signal immutability
- Grouped by game system
- No side effects at import time
"""

from __future__ import annotations

from typing import Final

# ============================================================================
# NAMES
# ============================================================================

NAME_MIN_LENGTH: Final[int] = 2

# ============================================================================
# LEVELS
# ============================================================================

MIN_LEVEL: Final[int] = 1
MAX_LEVEL: Final[int] = 100

# Band boundaries: novice < 20 <= experienced < 90 <= master
EXPERIENCED_LEVEL_THRESHOLD: Final[int] = 20
MASTER_LEVEL_THRESHOLD: Final[int] = 90

# ============================================================================
# COMBAT
# ============================================================================

# Opponents may be at most this many levels apart
MAX_FIGHT_LEVEL_GAP: Final[int] = 20

# Combat power = level * class multiplier. Melee classes never drop below the
# magical tier, so a melee character is at least as strong as a mage of the
# same level.
MAGICAL_COMBAT_MULTIPLIER: Final[float] = 1.2
ARCHER_COMBAT_MULTIPLIER: Final[float] = 1.3
PALADIN_COMBAT_MULTIPLIER: Final[float] = 1.4
WARRIOR_COMBAT_MULTIPLIER: Final[float] = 1.5

# Upper bound K: combat power never exceeds level * K
MAX_COMBAT_MULTIPLIER: Final[float] = WARRIOR_COMBAT_MULTIPLIER

# ============================================================================
# PRESET QUERIES
# ============================================================================

POWERFUL_WARRIOR_MIN_LEVEL: Final[int] = EXPERIENCED_LEVEL_THRESHOLD
