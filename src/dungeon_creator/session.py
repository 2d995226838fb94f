from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .blocks.block import Block, PieceInstance
from .catalog.catalog import Catalog
from .catalog.models import PieceDefinition
from .config import EditorConfig
from .core.random import RandomSource
from .grid.geometry import Vec3
from .grid.matrix import PointLike
from .grid.rules import filter_candidates
from .host.headless import HeadlessHost
from .host.interfaces import BoundsProvider, SceneHost
from .serialization.snapshot import BlockSnapshot, ImportResult, export_block, import_snapshot
from .serialization.storage import JsonFileSnapshotStore, SnapshotStore

logger = logging.getLogger(__name__)


class EditorSession:
    """State behind one interactive editing surface.

    Owns the blocks being edited, which one is active, the current selection and the
    piece index the user is stepping through. All scene work is delegated to ``host``
    and footprint measurement to ``bounds``.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        config: Optional[EditorConfig] = None,
        host: Optional[SceneHost] = None,
        bounds: Optional[BoundsProvider] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.catalog = catalog
        if host is None:
            host = HeadlessHost(self.config.bounds_source)
        self.host = host
        if bounds is None:
            if not isinstance(host, BoundsProvider):
                raise TypeError("A BoundsProvider is required when the host does not provide bounds")
            bounds = host
        self.bounds = bounds
        self.rng = rng or RandomSource(self.config.seed)

        self.blocks: List[Block] = []
        self.active_block: Optional[Block] = None
        self.selected: Optional[PieceInstance] = None
        self.is_editing = False
        self.candidates: Catalog = Catalog()
        self._prefab_index = 0

    # Blocks

    def create_block(self, name: str) -> Block:
        block = Block(name, scale=self.config.default_scale)
        group = self.host.create_group(name)
        block.host_group = group
        block.on_visibility = lambda visible: self.host.set_group_visible(group, visible)
        self.blocks.append(block)
        logger.info("Created block %r", name)
        return block

    def remove_block(self, block: Block) -> None:
        if block not in self.blocks:
            return
        self.blocks.remove(block)
        if self.selected is not None and any(p is self.selected for p in block.pieces):
            self.selected = None
        if self.active_block is block:
            self.active_block = None
        if block.host_group is not None:
            self.host.destroy_group(block.host_group)
        logger.info("Removed block %r", block.name)

    def rename_block(self, block: Block, name: str) -> None:
        old = block.name
        block.name = name
        if block.name != old and block.host_group is not None:
            self.host.rename_group(block.host_group, block.name)

    def activate_block(self, block: Block) -> None:
        self.deactivate_all()
        block.activate()
        self.active_block = block

    def deactivate_all(self) -> None:
        for block in self.blocks:
            block.deactivate()
        self.selected = None
        self.active_block = None

    def next_block_name(self) -> str:
        return f"Block{len(self.blocks)}"

    # Editing

    def start_edit(self) -> None:
        self.is_editing = True
        if self.active_block is None:
            return
        self.selected = None

    def stop_edit(self) -> None:
        self.is_editing = False

    @property
    def pieces(self) -> Catalog:
        """Pieces on offer: the filtered candidates when checking connections."""
        if self.config.check_connections:
            return self.candidates
        return self.catalog

    @property
    def prefab_index(self) -> int:
        return self.pieces.select(self._prefab_index)

    @prefab_index.setter
    def prefab_index(self, value: int) -> None:
        pieces = self.pieces
        # Nothing offered yet (no click with connection checks): keep the request as is.
        self._prefab_index = pieces.select(value) if len(pieces) else max(0, int(value))

    def current_piece(self) -> Optional[PieceDefinition]:
        pieces = self.pieces
        definition = pieces.get(self._prefab_index)
        if definition is None:
            return None
        if self.config.randomize:
            definition = Catalog.random_pick(pieces.variants(definition.connections), self.rng)
        return definition

    def refresh_candidates(self, point: PointLike) -> Catalog:
        if self.active_block is None:
            self.candidates = Catalog()
        else:
            self.candidates = filter_candidates(self.catalog, self.active_block.grid, point)
        return self.candidates

    def click(self, point: PointLike) -> Optional[PieceInstance]:
        """Primary-button press at a world point.

        Selects the piece already in that cell, or places the current piece at the cell
        centre. Does nothing outside edit mode or without an active block.
        """
        block = self.active_block
        if not self.is_editing or block is None:
            return None
        if self.config.check_connections:
            self.refresh_candidates(point)

        existing = block.try_get_piece_at(point)
        if existing is not None:
            self.select(existing)
            return existing

        definition = self.current_piece()
        if definition is None:
            logger.info("No piece available to place at %s", block.grid.to_coordinate(point))
            return None
        return self.create_piece(definition, block.grid.center_of(point))

    def create_piece(
        self,
        definition: Optional[PieceDefinition],
        position: PointLike,
        block: Optional[Block] = None,
        check_bound: bool = True,
    ) -> Optional[PieceInstance]:
        if block is None:
            block = self.active_block
        if block is None or definition is None:
            return None

        position = Vec3.of(position)
        scale = definition.scale * block.scale if self.config.scale_room else definition.scale
        handle = self.host.instantiate(definition, position, definition.rotation, scale, block.host_group)
        instance = PieceInstance(definition=definition, position=position, handle=handle)
        if check_bound:
            center = self.bounds.center_of(handle)
            if center != position:
                instance.position = position + (position - center)
                self.host.move(handle, instance.position)
            instance.bound_center = self.bounds.center_of(handle)
        else:
            instance.bound_center = position

        block.add_piece(instance, position)
        if self.is_editing and block is self.active_block:
            self.select(instance)
        return instance

    def delete(self, instance: PieceInstance) -> bool:
        """Remove ``instance`` from the active block and destroy its handle.

        Returns False, leaving the piece and its handle untouched, when the active block
        does not hold it.
        """
        if self.active_block is None or not self.active_block.remove_piece(instance):
            return False
        if self.selected is instance:
            self.deselect()
        if instance.handle is not None:
            self.host.destroy(instance.handle)
        return True

    def select(self, instance: PieceInstance) -> None:
        self.selected = instance

    def deselect(self) -> None:
        self.selected = None

    def change_selected(self, delta: int) -> Optional[PieceInstance]:
        """Swap the selected piece for the one ``delta`` steps away in the offered list."""
        if self.selected is None:
            return None
        current = self.pieces.index_of(self.selected.definition)
        self.prefab_index = current + delta
        selected = self.selected
        position = selected.bound_center if selected.bound_center is not None else selected.position
        if not self.delete(selected):
            return None
        return self.create_piece(self.pieces.get(self._prefab_index), position)

    def delete_selected(self) -> bool:
        if self.selected is None:
            return False
        return self.delete(self.selected)

    # Import / export

    def export_block(self, block: Block) -> BlockSnapshot:
        return export_block(block)

    def snapshot_store(self) -> SnapshotStore:
        """File store under ``config.export_dir`` (platform data directory when unset)."""
        return JsonFileSnapshotStore(self.config.export_dir)

    def save_block(
        self,
        block: Block,
        store: Optional[SnapshotStore] = None,
        snapshot_id: Optional[str] = None,
    ) -> str:
        if store is None:
            store = self.snapshot_store()
        snapshot_id = snapshot_id or block.name
        store.save(self.export_block(block), snapshot_id)
        return snapshot_id

    def import_block(self, snapshot: BlockSnapshot) -> ImportResult:
        """Recreate a snapshot as a new, deactivated block of this session.

        Pieces go straight to their cell centres; no footprint correction is applied.
        """
        block = self.create_block(snapshot.name or self.next_block_name())

        def place(definition: PieceDefinition, target: Block, position: Vec3) -> Optional[PieceInstance]:
            return self.create_piece(definition, position, block=target, check_bound=False)

        result = import_snapshot(snapshot, self.catalog, block=block, place=place)
        block.deactivate()
        return result

    def load_block(self, snapshot_id: str, store: Optional[SnapshotStore] = None) -> ImportResult:
        if store is None:
            store = self.snapshot_store()
        return self.import_block(store.load(snapshot_id))

    # Statistics

    def piece_usage(self) -> Dict[str, int]:
        """How many times each catalog piece name is placed across all blocks."""
        usage: Dict[str, int] = {}
        for definition in self.catalog:
            if definition.name in usage:
                continue
            usage[definition.name] = sum(b.count_pieces(definition.name) for b in self.blocks)
        return usage


__all__ = ["EditorSession"]
