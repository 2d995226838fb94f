from .headless import HeadlessHost, SceneNode
from .interfaces import BoundsProvider, BoundsSource, SceneHost

__all__ = [
    "BoundsProvider",
    "BoundsSource",
    "SceneHost",
    "HeadlessHost",
    "SceneNode",
]
