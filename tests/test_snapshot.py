import logging

import pytest

from dungeon_creator.blocks import Block
from dungeon_creator.catalog import Catalog, PieceDefinition
from dungeon_creator.grid import Direction, Vec3
from dungeon_creator.serialization import (
    BlockSnapshot,
    SnapshotCell,
    export_block,
    import_snapshot,
    place_bare,
)

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def _build_block(catalog, scale=2.0):
    block = Block("Crypt", scale=scale)
    place_bare(catalog.find_by_mask(S), block, block.grid.center(0, 1))
    place_bare(catalog.find_by_mask(N | S), block, block.grid.center(0, 0))
    place_bare(catalog.find_by_mask(N | E), block, block.grid.center(0, -1))
    return block


def test_export_lists_cells_in_insertion_order(catalog):
    snapshot = export_block(_build_block(catalog))
    assert snapshot.name == "Crypt"
    assert snapshot.scale == 2.0
    assert [c.to_dict() for c in snapshot.cells] == [
        {"i": 0, "j": 1, "connections": 2},
        {"i": 0, "j": 0, "connections": 3},
        {"i": 0, "j": -1, "connections": 5},
    ]


def test_export_is_deterministic_and_detached(catalog):
    block = _build_block(catalog)
    first = export_block(block)
    assert export_block(block) == first
    block.grid.elements[0].connections = Direction.ALL
    assert first.cells[0].connections == int(S)


def test_round_trip_preserves_cells(catalog):
    snapshot = export_block(_build_block(catalog, scale=1.5))
    result = import_snapshot(snapshot, catalog)
    assert result.complete
    assert result.resolved == 3
    again = export_block(result.block)
    assert again.scale == 1.5
    assert again.cell_set() == snapshot.cell_set()


def test_import_places_pieces_at_cell_centres(catalog):
    snapshot = BlockSnapshot(scale=2.0, cells=[SnapshotCell(1, 2, int(N | S))])
    result = import_snapshot(snapshot, catalog, name="Vault")
    assert result.block.name == "Vault"
    (piece,) = result.block.pieces
    assert piece.definition.id == "corridor_ns"
    assert piece.position == Vec3(3.0, 0.0, 5.0)
    assert piece.cell == (1, 2)


def test_import_resolves_to_first_exact_match(pieces):
    mossy = PieceDefinition(id="dead_s_mossy", name="Mossy", connections=S)
    catalog = Catalog([mossy] + pieces)
    snapshot = BlockSnapshot(scale=1.0, cells=[SnapshotCell(0, 0, int(S))])
    result = import_snapshot(snapshot, catalog)
    assert result.block.pieces[0].definition is mossy


def test_import_never_substitutes_a_superset(catalog):
    # S|E has no exact entry even though the crossing opens every side
    snapshot = BlockSnapshot(scale=1.0, cells=[SnapshotCell(0, 0, int(S | E))])
    result = import_snapshot(snapshot, catalog)
    assert result.resolved == 0
    assert result.skipped == [SnapshotCell(0, 0, int(S | E))]


def test_unmatched_cells_are_logged_and_skipped(catalog, caplog):
    snapshot = BlockSnapshot(
        scale=1.0,
        cells=[
            SnapshotCell(0, 0, int(N)),
            SnapshotCell(1, 0, int(W | S)),
            SnapshotCell(2, 0, int(E | W)),
        ],
    )
    with caplog.at_level(logging.ERROR):
        result = import_snapshot(snapshot, catalog)
    assert not result.complete
    assert [p.definition.id for p in result.block.pieces] == ["dead_n", "corridor_ew"]
    assert [c.coordinate for c in result.skipped] == [(1, 0)]
    assert "connections=10" in caplog.text


def test_import_into_existing_block_takes_snapshot_scale(catalog):
    block = Block("Target", scale=1.0)
    snapshot = BlockSnapshot(scale=4.0, cells=[SnapshotCell(0, 0, int(Direction.ALL))])
    result = import_snapshot(snapshot, catalog, block=block)
    assert result.block is block
    assert block.scale == 4.0
    assert block.pieces[0].position == Vec3(2.0, 0.0, 2.0)


def test_import_with_custom_placement(catalog):
    calls = []

    def place(definition, block, position):
        calls.append((definition.id, position))
        return place_bare(definition, block, position)

    snapshot = BlockSnapshot(scale=1.0, cells=[SnapshotCell(0, 0, int(N))])
    import_snapshot(snapshot, catalog, place=place)
    assert calls == [("dead_n", Vec3(0.5, 0.0, 0.5))]


def test_empty_snapshot_round_trip(catalog):
    snapshot = export_block(Block("Empty", scale=3.0))
    assert len(snapshot) == 0
    result = import_snapshot(snapshot, catalog)
    assert result.resolved == 0
    assert result.block.scale == 3.0


@pytest.mark.parametrize("scale", [0, -2.0, float("inf")])
def test_snapshot_rejects_bad_scale(scale):
    with pytest.raises(ValueError):
        BlockSnapshot(scale=scale)
