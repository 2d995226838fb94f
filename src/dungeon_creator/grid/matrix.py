from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Union

from .directions import STEPS, Direction
from .geometry import Coordinate, Vec3

logger = logging.getLogger(__name__)

PointLike = Union[Vec3, Sequence[float]]


@dataclass
class GridElement:
    """One occupied cell: its integer coordinate and its open sides."""

    i: int = 0
    j: int = 0
    connections: Direction = Direction.NONE

    @property
    def coordinate(self) -> Coordinate:
        return (self.i, self.j)

    def copy(self) -> "GridElement":
        return GridElement(i=self.i, j=self.j, connections=Direction(self.connections))


class GridIndex:
    """
    Sparse planar grid of occupied cells keyed by integer coordinate.

    - World positions map to cells with floor(x / scale), floor(z / scale); height is ignored.
    - At most one live element per coordinate. Insertion order is kept and is the
      order used by index_of() and by exports.
    - Changing scale only changes how future positions map; stored coordinates stay put.
    """

    def __init__(self, scale: float = 1.0) -> None:
        self._scale = self._check_scale(scale)
        self._cells: Dict[Coordinate, GridElement] = {}

    @staticmethod
    def _check_scale(scale: float) -> float:
        value = float(scale)
        if not value > 0 or math.isinf(value):
            raise ValueError(f"Grid scale must be a positive finite number, got {scale!r}")
        return value

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = self._check_scale(value)
        logger.debug("Grid rescaled to %s (%d cells kept)", self._scale, len(self._cells))

    @property
    def elements(self) -> List[GridElement]:
        return list(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[GridElement]:
        return iter(list(self._cells.values()))

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._cells

    def _index(self, value: float) -> int:
        return math.floor(value / self._scale)

    def to_coordinate(self, point: PointLike) -> Coordinate:
        p = Vec3.of(point)
        return (self._index(p.x), self._index(p.z))

    def get(self, i: int, j: int) -> Optional[GridElement]:
        return self._cells.get((i, j))

    def get_at(self, point: PointLike) -> Optional[GridElement]:
        return self.get(*self.to_coordinate(point))

    try_get = get_at

    def neighbor(self, point: PointLike, direction: Optional[int]) -> Optional[GridElement]:
        """Element one step away from the cell holding ``point`` along ``direction``.

        Returns None for a missing neighbour or when ``direction`` is not a single cardinal.
        """
        if direction is None:
            return None
        step = STEPS.get(Direction(direction)) if int(direction) in (1, 2, 4, 8) else None
        if step is None:
            return None
        i, j = self.to_coordinate(point)
        return self.get(i + step[0], j + step[1])

    def add(self, element: GridElement, point: PointLike) -> GridElement:
        """Assign the element's coordinate from ``point`` and append it.

        Occupancy is the caller's check: an element already at that coordinate is replaced
        and the new one goes to the end of insertion order.
        """
        element.i, element.j = self.to_coordinate(point)
        key = element.coordinate
        previous = self._cells.pop(key, None)
        if previous is not None and previous is not element:
            logger.debug("Cell %s already occupied; replacing previous element", key)
        self._cells[key] = element
        logger.debug("Added cell %s connections=%d", key, int(element.connections))
        return element

    def remove(self, element: GridElement) -> None:
        key = element.coordinate
        if self._cells.get(key) is element:
            del self._cells[key]
            logger.debug("Removed cell %s", key)

    def index_of(self, point: PointLike) -> int:
        key = self.to_coordinate(point)
        if key not in self._cells:
            return -1
        for idx, coord in enumerate(self._cells):
            if coord == key:
                return idx
        return -1  # pragma: no cover - unreachable

    def center(self, i: int, j: int) -> Vec3:
        return Vec3((i + 0.5) * self._scale, 0.0, (j + 0.5) * self._scale)

    def center_of(self, point: PointLike) -> Vec3:
        return self.center(*self.to_coordinate(point))

    def clone(self) -> "GridIndex":
        clone = GridIndex(self._scale)
        for coord, element in self._cells.items():
            clone._cells[coord] = element.copy()
        return clone

    def __repr__(self) -> str:
        return f"GridIndex(scale={self._scale}, cells={len(self._cells)})"


__all__ = ["GridElement", "GridIndex", "PointLike"]
