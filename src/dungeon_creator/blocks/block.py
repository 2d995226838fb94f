from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..catalog.models import PieceDefinition
from ..grid.geometry import Coordinate, Vec3
from ..grid.matrix import GridElement, GridIndex, PointLike

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PieceInstance:
    """A placed piece.

    ``handle`` is whatever the scene host returned when instantiating it (None for
    headless/data-only placement). ``cell`` is filled in by the block on add.
    """

    definition: PieceDefinition
    position: Vec3
    handle: Any = None
    bound_center: Optional[Vec3] = None
    cell: Optional[Coordinate] = None

    @property
    def name(self) -> str:
        return self.definition.name


class Block:
    """A named, toggleable group of placed pieces sharing one grid.

    Pieces are keyed by the coordinate of their grid element, so lookups by position and
    the grid can never point at different pieces.
    """

    def __init__(
        self,
        name: str = "New Block",
        scale: float = 1.0,
        *,
        on_visibility: Optional[Callable[[bool], None]] = None,
    ) -> None:
        if not name:
            raise ValueError("Block name must be a non-empty string")
        self._name = name
        self.active = False
        self.grid = GridIndex(scale)
        self._pieces: Dict[Coordinate, PieceInstance] = {}
        self.on_visibility = on_visibility
        self.host_group: Any = None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not value:
            logger.debug("Ignoring empty name for block %r", self._name)
            return
        self._name = value

    @property
    def scale(self) -> float:
        return self.grid.scale

    @scale.setter
    def scale(self, value: float) -> None:
        self.grid.scale = value

    @property
    def pieces(self) -> List[PieceInstance]:
        """Placed pieces in grid insertion order."""
        return [self._pieces[e.coordinate] for e in self.grid if e.coordinate in self._pieces]

    def __len__(self) -> int:
        return len(self._pieces)

    def activate(self) -> None:
        self.active = True
        if self.on_visibility is not None:
            self.on_visibility(True)

    def deactivate(self) -> None:
        self.active = False
        if self.on_visibility is not None:
            self.on_visibility(False)

    def add_piece(self, instance: PieceInstance, point: PointLike) -> GridElement:
        """Record ``instance`` in the grid cell containing ``point``.

        The caller is expected to have checked the cell is free (and, when filtering by
        connections, that the piece fits). A piece already there is dropped.
        """
        element = GridElement(connections=instance.definition.connections)
        coordinate = self.grid.to_coordinate(point)
        displaced = self._pieces.pop(coordinate, None)
        if displaced is not None:
            logger.warning(
                "Block %r: cell %s already held %r; replacing it with %r",
                self._name,
                coordinate,
                displaced.name,
                instance.name,
            )
            displaced.cell = None
        self.grid.add(element, point)
        instance.cell = element.coordinate
        self._pieces[element.coordinate] = instance
        return element

    def remove_piece(self, instance: PieceInstance) -> bool:
        """Remove ``instance`` and its grid element. Returns False if it was not found."""
        coordinate = instance.cell if instance.cell is not None else self.grid.to_coordinate(instance.position)
        if self._pieces.get(coordinate) is not instance:
            logger.warning("Block %r: piece %r not found at %s", self._name, instance.name, coordinate)
            return False
        element = self.grid.get(*coordinate)
        if element is not None:
            self.grid.remove(element)
        del self._pieces[coordinate]
        instance.cell = None
        return True

    def try_get_piece_at(self, point: PointLike) -> Optional[PieceInstance]:
        coordinate = self.grid.to_coordinate(point)
        if self.grid.get(*coordinate) is None:
            return None
        piece = self._pieces.get(coordinate)
        if piece is None:
            logger.warning("Block %r: grid cell %s has no piece recorded", self._name, coordinate)
        return piece

    def count_pieces(self, name: str) -> int:
        return sum(1 for p in self._pieces.values() if p.name == name)

    def __repr__(self) -> str:
        return f"Block(name={self._name!r}, active={self.active}, pieces={len(self._pieces)})"


__all__ = ["Block", "PieceInstance"]
