from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from ..grid.directions import Direction, mask_names, parse_mask
from ..grid.geometry import ONE, ZERO, Vec3


@dataclass(frozen=True)
class PieceDefinition:
    """Immutable template for a placeable piece.

    Attributes:
        id: Unique identifier within a catalog.
        name: Display name; also what coverage statistics count by.
        connections: Open sides of the piece.
        scale: Local scale applied by the host when the piece is instantiated.
        rotation: Euler rotation (degrees) handed to the host unchanged.
        footprint_offset: Offset from the piece origin to the centre of its footprint,
            in local units. Hosts use it to align the footprint on a cell centre.
        tags: Free-form labels.
    """

    id: str
    name: str
    connections: Direction = Direction.NONE
    scale: Vec3 = ONE
    rotation: Vec3 = ZERO
    footprint_offset: Vec3 = ZERO
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id or not isinstance(self.id, str):
            raise ValueError("PieceDefinition.id must be a non-empty string")
        object.__setattr__(self, "connections", parse_mask(self.connections))
        object.__setattr__(self, "scale", Vec3.of(self.scale))
        object.__setattr__(self, "rotation", Vec3.of(self.rotation))
        object.__setattr__(self, "footprint_offset", Vec3.of(self.footprint_offset))
        object.__setattr__(self, "tags", tuple(self.tags))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "connections": mask_names(self.connections),
            "scale": list(self.scale.as_tuple()),
            "rotation": list(self.rotation.as_tuple()),
            "footprint_offset": list(self.footprint_offset.as_tuple()),
            "tags": list(self.tags),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PieceDefinition":
        return PieceDefinition(
            id=data["id"],
            name=data.get("name") or data["id"],
            connections=parse_mask(data.get("connections", 0)),
            scale=Vec3.of(data.get("scale", (1.0, 1.0, 1.0))),
            rotation=Vec3.of(data.get("rotation", (0.0, 0.0, 0.0))),
            footprint_offset=Vec3.of(data.get("footprint_offset", (0.0, 0.0, 0.0))),
            tags=tuple(data.get("tags", ())),
        )
