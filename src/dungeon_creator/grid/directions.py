"""Cardinal direction flags and the mask algebra used by connection rules.

Bit values match the exported snapshot format, so a mask is always a plain
integer in ``0..15``.
"""
from __future__ import annotations

from enum import IntFlag
from typing import Any, Dict, Iterable, List, Optional, Tuple


class Direction(IntFlag):
    NONE = 0
    NORTH = 1
    SOUTH = 2
    EAST = 4
    WEST = 8
    ALL = 15


CARDINALS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)

# (di, dj) step on the grid for each direction: north/east are +1.
STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_NAMES: Dict[str, Direction] = {
    "north": Direction.NORTH,
    "n": Direction.NORTH,
    "south": Direction.SOUTH,
    "s": Direction.SOUTH,
    "east": Direction.EAST,
    "e": Direction.EAST,
    "west": Direction.WEST,
    "w": Direction.WEST,
}


def opposite(direction: Optional[int]) -> Direction:
    """Return the facing direction. Anything that is not a single cardinal maps to SOUTH."""
    if direction is None:
        return Direction.SOUTH
    try:
        return _OPPOSITES.get(Direction(direction), Direction.SOUTH)
    except ValueError:
        return Direction.SOUTH


def has(mask: int, flags: int) -> bool:
    """True when every bit of ``flags`` is set in ``mask``."""
    return (int(mask) & int(flags)) == int(flags)


def not_contains(mask: int, flags: int) -> bool:
    """True when ``mask`` shares no bit with ``flags``."""
    return (int(mask) & int(flags)) == 0


def complement(mask: int) -> Direction:
    return Direction(~int(mask) & int(Direction.ALL))


def union(*masks: int) -> Direction:
    result = 0
    for m in masks:
        result |= int(m)
    return Direction(result & int(Direction.ALL))


def parse_mask(value: Any) -> Direction:
    """Build a mask from an int, a direction name, or an iterable of names/ints.

    Raises:
        ValueError: on unknown names or integers outside 0..15.
    """
    if isinstance(value, Direction):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid connection mask: {value!r}")
    if isinstance(value, int):
        if value < 0 or value > int(Direction.ALL):
            raise ValueError(f"Connection mask out of range 0..15: {value}")
        return Direction(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in ("", "none"):
            return Direction.NONE
        if key not in _NAMES:
            raise ValueError(f"Unknown direction name: {value!r}")
        return _NAMES[key]
    if isinstance(value, Iterable):
        return union(*(parse_mask(v) for v in value))
    raise ValueError(f"Invalid connection mask: {value!r}")


def mask_names(mask: int) -> List[str]:
    """Lower-case names of the cardinal bits set in ``mask`` (N, S, E, W order)."""
    return [d.name.lower() for d in CARDINALS if int(mask) & int(d)]


__all__ = [
    "Direction",
    "CARDINALS",
    "STEPS",
    "opposite",
    "has",
    "not_contains",
    "complement",
    "union",
    "parse_mask",
    "mask_names",
]
