from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Vec3:
    """World-space point or offset. The grid is planar on (x, z); y is height."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: Union["Vec3", Sequence[float]]) -> "Vec3":
        """Coerce a Vec3 or a 2/3-item sequence into a Vec3.

        Two items are read as planar (x, z) with y = 0.
        """
        if isinstance(value, Vec3):
            return value
        items = [float(v) for v in value]
        if len(items) == 2:
            return cls(items[0], 0.0, items[1])
        if len(items) == 3:
            return cls(items[0], items[1], items[2])
        raise ValueError(f"Expected 2 or 3 components, got {len(items)}")

    def with_y(self, y: float) -> "Vec3":
        return Vec3(self.x, y, self.z)

    def scaled(self, other: "Vec3") -> "Vec3":
        """Component-wise product."""
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vec3":
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)


__all__ = ["Coordinate", "Vec3", "ZERO", "ONE"]
