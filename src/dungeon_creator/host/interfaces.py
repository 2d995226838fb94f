from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from ..catalog.models import PieceDefinition
from ..grid.geometry import Vec3


class BoundsSource(str, Enum):
    """Which part of a placed piece its footprint is measured from.

    The strategy is applied by the host; the core only passes it along.
    """

    NONE = "none"
    FIRST_CHILD = "first_child"
    CUSTOM_CHILD = "custom_child"
    ALL_CHILDREN = "all_children"


class BoundsProvider(ABC):
    """Reports where a placed piece's footprint is centred in world space."""

    @abstractmethod
    def center_of(self, handle: Any) -> Vec3:
        """Return the footprint centre of ``handle`` with y = 0."""
        raise NotImplementedError


class SceneHost(ABC):
    """Scene-graph operations the editing session delegates to its host.

    Handles returned here are opaque to the core; it only passes them back.
    """

    @abstractmethod
    def create_group(self, name: str) -> Any:
        """Create a container for one block's pieces and return its handle."""
        raise NotImplementedError

    @abstractmethod
    def rename_group(self, group: Any, name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def destroy_group(self, group: Any) -> None:
        """Destroy a group and everything parented to it."""
        raise NotImplementedError

    @abstractmethod
    def set_group_visible(self, group: Any, visible: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def instantiate(
        self,
        definition: PieceDefinition,
        position: Vec3,
        rotation: Vec3,
        scale: Vec3,
        parent: Optional[Any] = None,
    ) -> Any:
        """Create a live piece from ``definition`` and return its handle."""
        raise NotImplementedError

    @abstractmethod
    def move(self, handle: Any, position: Vec3) -> None:
        raise NotImplementedError

    @abstractmethod
    def destroy(self, handle: Any) -> None:
        raise NotImplementedError


__all__ = ["BoundsSource", "BoundsProvider", "SceneHost"]
