from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..catalog.models import PieceDefinition
from ..grid.geometry import ONE, ZERO, Vec3
from .interfaces import BoundsProvider, BoundsSource, SceneHost

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class SceneNode:
    """In-memory stand-in for a scene object."""

    id: int
    name: str
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    scale: Vec3 = ONE
    parent: Optional["SceneNode"] = None
    visible: bool = True
    definition: Optional[PieceDefinition] = None
    children: List["SceneNode"] = field(default_factory=list)

    def __repr__(self) -> str:  # pragma: no cover - debug only
        return f"SceneNode(id={self.id}, name={self.name!r})"


class HeadlessHost(SceneHost, BoundsProvider):
    """Scene host without a renderer, for tests, tools and batch imports.

    Footprint centres come from the definition's ``footprint_offset`` scaled by the
    node scale. There are no child meshes to measure, so ``FIRST_CHILD``,
    ``CUSTOM_CHILD`` and ``ALL_CHILDREN`` all reduce to that offset and
    ``EditorConfig.custom_child_name`` is not consulted. With ``BoundsSource.NONE`` the
    node position itself is used.
    """

    def __init__(self, bounds_source: BoundsSource = BoundsSource.FIRST_CHILD) -> None:
        self.bounds_source = BoundsSource(bounds_source)
        self._ids = itertools.count(1)
        self.nodes: Dict[int, SceneNode] = {}

    def _new_node(self, name: str, **kwargs) -> SceneNode:
        node = SceneNode(id=next(self._ids), name=name, **kwargs)
        self.nodes[node.id] = node
        return node

    def create_group(self, name: str) -> SceneNode:
        node = self._new_node(name)
        logger.debug("Created group %r (node %d)", name, node.id)
        return node

    def rename_group(self, group: SceneNode, name: str) -> None:
        group.name = name

    def destroy_group(self, group: SceneNode) -> None:
        self.destroy(group)

    def set_group_visible(self, group: SceneNode, visible: bool) -> None:
        group.visible = bool(visible)

    def instantiate(
        self,
        definition: PieceDefinition,
        position: Vec3,
        rotation: Vec3,
        scale: Vec3,
        parent: Optional[SceneNode] = None,
    ) -> SceneNode:
        node = self._new_node(
            definition.name,
            position=position,
            rotation=rotation,
            scale=scale,
            parent=parent,
            definition=definition,
        )
        if parent is not None:
            parent.children.append(node)
        return node

    def move(self, handle: SceneNode, position: Vec3) -> None:
        handle.position = position

    def destroy(self, handle: SceneNode) -> None:
        for child in list(handle.children):
            self.destroy(child)
        if handle.parent is not None and handle in handle.parent.children:
            handle.parent.children.remove(handle)
        self.nodes.pop(handle.id, None)

    def center_of(self, handle: SceneNode) -> Vec3:
        if self.bounds_source is BoundsSource.NONE or handle.definition is None:
            return handle.position.with_y(0.0)
        offset = handle.definition.footprint_offset.scaled(handle.scale)
        return (handle.position + offset).with_y(0.0)

    def is_alive(self, handle: SceneNode) -> bool:
        return self.nodes.get(handle.id) is handle


__all__ = ["SceneNode", "HeadlessHost"]
