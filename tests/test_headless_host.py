from dungeon_creator.catalog import PieceDefinition
from dungeon_creator.grid import Direction, Vec3
from dungeon_creator.host import BoundsSource, HeadlessHost


def _piece(offset=(0, 0, 0)):
    return PieceDefinition(id="p", name="Piece", connections=Direction.NORTH, footprint_offset=offset)


def test_instantiate_parents_node_to_group():
    host = HeadlessHost()
    group = host.create_group("Crypt")
    node = host.instantiate(_piece(), Vec3(1, 0, 1), Vec3(), Vec3(1, 1, 1), group)
    assert node.parent is group
    assert group.children == [node]
    assert host.is_alive(node)


def test_destroy_group_removes_children():
    host = HeadlessHost()
    group = host.create_group("Crypt")
    node = host.instantiate(_piece(), Vec3(), Vec3(), Vec3(1, 1, 1), group)
    host.destroy_group(group)
    assert not host.is_alive(group)
    assert not host.is_alive(node)
    assert host.nodes == {}


def test_center_of_applies_scaled_footprint_offset():
    host = HeadlessHost()
    node = host.instantiate(_piece((1, 3, -0.5)), Vec3(4, 2, 4), Vec3(), Vec3(2, 2, 2))
    assert host.center_of(node) == Vec3(6.0, 0.0, 3.0)


def test_center_of_without_bounds_uses_position():
    host = HeadlessHost(BoundsSource.NONE)
    node = host.instantiate(_piece((1, 0, 0)), Vec3(4, 2, 4), Vec3(), Vec3(1, 1, 1))
    assert host.center_of(node) == Vec3(4.0, 0.0, 4.0)


def test_visibility_and_rename():
    host = HeadlessHost()
    group = host.create_group("Crypt")
    host.set_group_visible(group, False)
    host.rename_group(group, "Vault")
    assert group.visible is False
    assert group.name == "Vault"


def test_child_strategies_all_use_footprint_offset():
    centres = set()
    for source in (BoundsSource.FIRST_CHILD, BoundsSource.CUSTOM_CHILD, BoundsSource.ALL_CHILDREN):
        host = HeadlessHost(source)
        node = host.instantiate(_piece((1, 0, 1)), Vec3(2, 0, 2), Vec3(), Vec3(1, 1, 1))
        centres.add(host.center_of(node))
    assert centres == {Vec3(3.0, 0.0, 3.0)}
