from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Sequence, Tuple, overload

from ..core.random import RandomSource
from .models import PieceDefinition

logger = logging.getLogger(__name__)


class Catalog(Sequence[PieceDefinition]):
    """Ordered, immutable set of placeable piece definitions.

    Order matters: selection clamps against it, cycling steps through it and snapshot
    import resolves a mask to the *first* matching entry.
    """

    def __init__(self, definitions: Iterable[PieceDefinition] = ()) -> None:
        self._items: Tuple[PieceDefinition, ...] = tuple(definitions)

    @overload
    def __getitem__(self, index: int) -> PieceDefinition: ...

    @overload
    def __getitem__(self, index: slice) -> "Catalog": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Catalog(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PieceDefinition]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return any(d is item for d in self._items) or item in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Catalog):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"Catalog({[d.id for d in self._items]})"

    def select(self, index: int) -> int:
        """Clamp ``index`` into range; -1 when the catalog is empty."""
        if not self._items:
            return -1
        return max(0, min(len(self._items) - 1, int(index)))

    def get(self, index: int) -> Optional[PieceDefinition]:
        idx = self.select(index)
        return self._items[idx] if idx >= 0 else None

    def index_of(self, definition: Optional[PieceDefinition]) -> int:
        if definition is None:
            return -1
        for idx, d in enumerate(self._items):
            if d is definition:
                return idx
        for idx, d in enumerate(self._items):
            if d.id == definition.id:
                return idx
        return -1

    def find_by_mask(self, mask: int) -> Optional[PieceDefinition]:
        """First entry whose connections equal ``mask`` exactly."""
        for d in self._items:
            if int(d.connections) == int(mask):
                return d
        return None

    def variants(self, mask: int) -> "Catalog":
        return self.filter(lambda d: int(d.connections) == int(mask))

    def filter(self, predicate: Callable[[PieceDefinition], bool]) -> "Catalog":
        return Catalog(d for d in self._items if predicate(d))

    def cycle(self, current: Optional[PieceDefinition], delta: int) -> Optional[PieceDefinition]:
        """Definition ``delta`` steps away from ``current``, clamped to the ends.

        An unknown ``current`` counts as index -1, like a fresh selection.
        """
        return self.get(self.index_of(current) + delta)

    @staticmethod
    def random_pick(candidates: Sequence[PieceDefinition], rng: RandomSource) -> PieceDefinition:
        """Uniform choice among ``candidates``. Raises ValueError when empty."""
        return rng.choice(candidates)


__all__ = ["Catalog"]
