from dungeon_creator.blocks import Block
from dungeon_creator.grid import Direction, GridElement, GridIndex, Vec3
from dungeon_creator.render import EMPTY, GLYPHS, render_ascii
from dungeon_creator.serialization import BlockSnapshot, SnapshotCell, export_block, place_bare

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def test_glyph_table_covers_every_mask():
    assert len(GLYPHS) == 16
    assert GLYPHS[int(N | S)] == "│"
    assert GLYPHS[int(Direction.ALL)] == "┼"


def test_render_snapshot_north_up():
    snapshot = BlockSnapshot(
        scale=1.0,
        cells=[SnapshotCell(0, 0, int(N | S)), SnapshotCell(0, 1, int(S)), SnapshotCell(1, 0, int(E | W))],
    )
    assert render_ascii(snapshot) == "╷" + EMPTY + "\n│─"


def test_render_grid_with_negative_coordinates():
    grid = GridIndex()
    grid.add(GridElement(connections=E), Vec3(-0.5, 0, -0.5))
    grid.add(GridElement(connections=W), Vec3(0.5, 0, -0.5))
    assert render_ascii(grid) == "╶╴"


def test_render_exported_block(catalog):
    block = Block("Crypt")
    place_bare(catalog.find_by_mask(Direction.ALL), block, block.grid.center(0, 0))
    assert render_ascii(export_block(block)) == "┼"


def test_render_empty():
    assert render_ascii(BlockSnapshot(scale=1.0)) == ""
    assert render_ascii(GridIndex()) == ""
