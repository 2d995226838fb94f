"""Plain-text preview of a block's layout.

North is at the top of the output and east to the right.
"""
from __future__ import annotations

from typing import Dict, Iterable, Tuple, Union

from .grid.geometry import Coordinate
from .grid.matrix import GridIndex
from .serialization.snapshot import BlockSnapshot

EMPTY = "·"

# Indexed by mask: N=1, S=2, E=4, W=8.
GLYPHS: Tuple[str, ...] = (
    "■",  # closed
    "╵",  # N
    "╷",  # S
    "│",  # N S
    "╶",  # E
    "└",  # N E
    "┌",  # S E
    "├",  # N S E
    "╴",  # W
    "┘",  # N W
    "┐",  # S W
    "┤",  # N S W
    "─",  # E W
    "┴",  # N E W
    "┬",  # S E W
    "┼",  # all
)


def _cells(source: Union[BlockSnapshot, GridIndex]) -> Iterable[Tuple[Coordinate, int]]:
    if isinstance(source, BlockSnapshot):
        return [(c.coordinate, c.connections) for c in source.cells]
    return [(e.coordinate, int(e.connections)) for e in source]


def render_ascii(source: Union[BlockSnapshot, GridIndex]) -> str:
    cells: Dict[Coordinate, int] = dict(_cells(source))
    if not cells:
        return ""
    min_i = min(i for i, _ in cells)
    max_i = max(i for i, _ in cells)
    min_j = min(j for _, j in cells)
    max_j = max(j for _, j in cells)

    rows = []
    for j in range(max_j, min_j - 1, -1):
        row = []
        for i in range(min_i, max_i + 1):
            mask = cells.get((i, j))
            row.append(EMPTY if mask is None else GLYPHS[mask & 15])
        rows.append("".join(row))
    return "\n".join(rows)


__all__ = ["GLYPHS", "EMPTY", "render_ascii"]
