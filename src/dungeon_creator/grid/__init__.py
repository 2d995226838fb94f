from .directions import CARDINALS, Direction, has, mask_names, not_contains, opposite, parse_mask
from .geometry import Coordinate, Vec3
from .matrix import GridElement, GridIndex
from .rules import filter_candidates, forbidden_directions, is_compatible, required_directions

__all__ = [
    "CARDINALS",
    "Direction",
    "has",
    "mask_names",
    "not_contains",
    "opposite",
    "parse_mask",
    "Coordinate",
    "Vec3",
    "GridElement",
    "GridIndex",
    "filter_candidates",
    "forbidden_directions",
    "is_compatible",
    "required_directions",
]
