"""Neighbour-driven connection constraints for a candidate cell.

A direction is *required* when the neighbour on that side already opens back toward
the cell, and *forbidden* when the neighbour exists but keeps that side closed. A
side with no neighbour is unconstrained.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .directions import CARDINALS, Direction, has, not_contains, opposite
from .matrix import GridIndex, PointLike

if TYPE_CHECKING:  # pragma: no cover
    from ..catalog.catalog import Catalog

logger = logging.getLogger(__name__)


def required_directions(grid: GridIndex, point: PointLike) -> Direction:
    required = Direction.NONE
    for direction in CARDINALS:
        element = grid.neighbor(point, direction)
        if element is not None and has(element.connections, opposite(direction)):
            required |= direction
    return required


def forbidden_directions(grid: GridIndex, point: PointLike) -> Direction:
    forbidden = Direction.NONE
    for direction in CARDINALS:
        element = grid.neighbor(point, direction)
        if element is not None and not has(element.connections, opposite(direction)):
            forbidden |= direction
    return forbidden


def is_compatible(mask: int, required: int, forbidden: int) -> bool:
    return not_contains(mask, forbidden) and has(mask, required)


def filter_candidates(catalog: "Catalog", grid: GridIndex, point: PointLike) -> "Catalog":
    """Catalog entries that may legally be placed at ``point``, in catalog order."""
    required = required_directions(grid, point)
    forbidden = forbidden_directions(grid, point)
    filtered = catalog.filter(lambda d: is_compatible(d.connections, required, forbidden))
    logger.debug(
        "Candidates at %s: required=%d forbidden=%d -> %d of %d",
        grid.to_coordinate(point),
        int(required),
        int(forbidden),
        len(filtered),
        len(catalog),
    )
    return filtered


__all__ = [
    "required_directions",
    "forbidden_directions",
    "is_compatible",
    "filter_candidates",
]
