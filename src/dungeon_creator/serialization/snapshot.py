from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..blocks.block import Block, PieceInstance
from ..catalog.catalog import Catalog
from ..catalog.models import PieceDefinition
from ..grid.geometry import Coordinate, Vec3

logger = logging.getLogger(__name__)

# Increment when making breaking changes to the snapshot document
SCHEMA_VERSION = 1


@dataclass(frozen=True)
class SnapshotCell:
    i: int
    j: int
    connections: int

    @property
    def coordinate(self) -> Coordinate:
        return (self.i, self.j)

    def to_dict(self) -> Dict[str, int]:
        return {"i": self.i, "j": self.j, "connections": self.connections}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SnapshotCell":
        return SnapshotCell(i=int(data["i"]), j=int(data["j"]), connections=int(data.get("connections", 0)))


@dataclass(frozen=True)
class BlockSnapshot:
    """Portable copy of a block's grid: scale plus (coordinate, mask) cells.

    Carries no piece identities and no editor state. Cell order is the grid's
    insertion order, which keeps repeated exports identical.
    """

    scale: float
    cells: Tuple[SnapshotCell, ...] = field(default_factory=tuple)
    name: str = ""

    def __post_init__(self) -> None:
        scale = float(self.scale)
        if not scale > 0 or math.isinf(scale):
            raise ValueError(f"Snapshot scale must be a positive finite number, got {self.scale!r}")
        object.__setattr__(self, "scale", scale)
        object.__setattr__(self, "cells", tuple(self.cells))

    def __len__(self) -> int:
        return len(self.cells)

    def cell_set(self) -> Counter:
        """Multiset of ((i, j), mask) pairs, for order-insensitive comparison."""
        return Counter((c.coordinate, c.connections) for c in self.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "name": self.name,
            "scale": self.scale,
            "elements": [c.to_dict() for c in self.cells],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BlockSnapshot":
        return BlockSnapshot(
            scale=float(data.get("scale", 1.0)),
            cells=tuple(SnapshotCell.from_dict(e) for e in data.get("elements", [])),
            name=str(data.get("name", "")),
        )


def export_block(block: Block) -> BlockSnapshot:
    grid = block.grid.clone()
    snapshot = BlockSnapshot(
        scale=grid.scale,
        cells=tuple(SnapshotCell(e.i, e.j, int(e.connections)) for e in grid),
        name=block.name,
    )
    logger.info("Exported block %r: %d cells at scale %s", block.name, len(snapshot), snapshot.scale)
    return snapshot


PlaceFn = Callable[[PieceDefinition, Block, Vec3], Optional[PieceInstance]]


def place_bare(definition: PieceDefinition, block: Block, position: Vec3) -> PieceInstance:
    """Data-only placement: a PieceInstance with no host handle."""
    instance = PieceInstance(definition=definition, position=position, bound_center=position)
    block.add_piece(instance, position)
    return instance


@dataclass
class ImportResult:
    block: Block
    skipped: List[SnapshotCell] = field(default_factory=list)

    @property
    def resolved(self) -> int:
        return len(self.block)

    @property
    def complete(self) -> bool:
        return not self.skipped


def import_snapshot(
    snapshot: BlockSnapshot,
    catalog: Catalog,
    *,
    name: Optional[str] = None,
    block: Optional[Block] = None,
    place: Optional[PlaceFn] = None,
) -> ImportResult:
    """Rebuild a block from ``snapshot``, resolving each mask to a catalog piece.

    Each cell resolves to the first catalog entry whose mask equals the cell mask exactly.
    Cells with no match are logged and skipped; the rest are still placed.

    ``block`` lets the caller supply the (empty) block to fill; it takes the snapshot
    scale. Otherwise a new block is created.
    """
    place = place or place_bare
    if block is None:
        block = Block(name or snapshot.name or "Imported Block", scale=snapshot.scale)
    else:
        block.scale = snapshot.scale
    result = ImportResult(block=block)
    for cell in snapshot.cells:
        definition = catalog.find_by_mask(cell.connections)
        if definition is None:
            logger.error(
                "No catalog piece matches connections=%d for cell %s; skipping",
                cell.connections,
                cell.coordinate,
            )
            result.skipped.append(cell)
            continue
        place(definition, block, block.grid.center(cell.i, cell.j))
    logger.info(
        "Imported block %r: %d placed, %d skipped",
        block.name,
        result.resolved,
        len(result.skipped),
    )
    return result


__all__ = [
    "SCHEMA_VERSION",
    "SnapshotCell",
    "BlockSnapshot",
    "ImportResult",
    "PlaceFn",
    "place_bare",
    "export_block",
    "import_snapshot",
]
