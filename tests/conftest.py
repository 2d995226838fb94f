import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from dungeon_creator.catalog import Catalog, PieceDefinition  # noqa: E402
from dungeon_creator.grid import Direction  # noqa: E402

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


@pytest.fixture
def pieces():
    """A small catalog covering dead ends, corridors, corners and a crossing."""
    return [
        PieceDefinition(id="dead_s", name="Dead End S", connections=S),
        PieceDefinition(id="dead_n", name="Dead End N", connections=N),
        PieceDefinition(id="corridor_ns", name="Corridor NS", connections=N | S),
        PieceDefinition(id="corridor_ew", name="Corridor EW", connections=E | W),
        PieceDefinition(id="corner_ne", name="Corner NE", connections=N | E),
        PieceDefinition(id="cross", name="Crossing", connections=N | S | E | W),
    ]


@pytest.fixture
def catalog(pieces):
    return Catalog(pieces)
