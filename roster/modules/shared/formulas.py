"""
Roster Game Formulas

Purpose
-------
Pure calculation functions for roster mechanics: combat power, level gaps and
the aggregates reported by character statistics.

Design Notes
------------
All formulas:
- Accept parameters explicitly (no config access)
- Return calculated values
- Are deterministic and side-effect free

Usage
-----
    from roster.modules.shared.formulas import calculate_combat_power

    power = calculate_combat_power(level=50, multiplier=1.5)
"""

from __future__ import annotations

from typing import Optional


def calculate_combat_power(level: int, multiplier: float) -> float:
    """
    Calculate combat power from level and class multiplier.

    Strictly increasing in level for any positive multiplier, and bounded by
    ``level * multiplier``.

    Args:
        level: Character level (1-100)
        multiplier: Class combat multiplier (> 0)

    Returns:
        Combat power, rounded to one decimal place

    Example:
        >>> calculate_combat_power(10, 1.5)
        15.0
        >>> calculate_combat_power(100, 1.2)
        120.0
    """
    return round(level * multiplier, 1)


def calculate_level_difference(level_a: int, level_b: int) -> int:
    """
    Absolute difference between two levels (never negative).

    Example:
        >>> calculate_level_difference(10, 35)
        25
    """
    return abs(level_a - level_b)


def calculate_average(total: float, count: int, precision: int = 2) -> float:
    """
    Average of ``count`` values summing to ``total``; 0 when there are none.

    Example:
        >>> calculate_average(75, 2)
        37.5
        >>> calculate_average(0, 0)
        0
    """
    if count <= 0:
        return 0
    return round(total / count, precision)


def update_bounds(
    current_low: Optional[int],
    current_high: int,
    value: int,
) -> tuple[Optional[int], int]:
    """
    Fold ``value`` into running (lowest, highest) bounds.

    ``current_low`` is None until the first value is seen, so an empty
    collection never reports a sentinel as its lowest level.

    Example:
        >>> update_bounds(None, 0, 42)
        (42, 42)
        >>> update_bounds(42, 42, 7)
        (7, 42)
    """
    low = value if current_low is None else min(current_low, value)
    return low, max(current_high, value)
