from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError
from .host.interfaces import BoundsSource

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DC_CONFIG"

GRID_SIZE_MIN = 2
GRID_SIZE_MAX = 100


@dataclass
class EditorConfig:
    """Editing session options.

    - check_connections: only offer pieces compatible with the clicked cell's neighbours.
    - scale_room: multiply a piece's own scale by the block scale when placing it.
    - use_grid / grid_size: overlay preferences for hosts that draw a grid (cells per side).
    - bounds_source / custom_child_name: how hosts measure a piece footprint.
    - default_scale: cell size for newly created blocks.
    - randomize / seed: pick uniformly among pieces sharing the selected piece's mask.
    - export_dir: where blocks are saved; None means the platform data directory.
    """

    check_connections: bool = False
    scale_room: bool = True
    use_grid: bool = False
    grid_size: int = 2
    bounds_source: BoundsSource = BoundsSource.FIRST_CHILD
    custom_child_name: str = ""
    default_scale: float = 1.0
    randomize: bool = False
    seed: Optional[int] = None
    export_dir: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "EditorConfig":
        """Build a config from a mapping. Missing keys fall back to defaults.

        Raises ConfigError on values that cannot be coerced.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        cfg = cls()
        try:
            if "check_connections" in raw:
                cfg.check_connections = bool(raw["check_connections"])
            if "scale_room" in raw:
                cfg.scale_room = bool(raw["scale_room"])
            if "use_grid" in raw:
                cfg.use_grid = bool(raw["use_grid"])
            if "grid_size" in raw:
                size = int(raw["grid_size"])
                clamped = max(GRID_SIZE_MIN, min(GRID_SIZE_MAX, size))
                if clamped != size:
                    logger.warning("grid_size %s out of range; clamped to %s", size, clamped)
                cfg.grid_size = clamped
            if "bounds_source" in raw:
                source = raw["bounds_source"]
                if not isinstance(source, BoundsSource):
                    source = BoundsSource(str(source).lower())
                cfg.bounds_source = source
            if "custom_child_name" in raw:
                cfg.custom_child_name = str(raw["custom_child_name"] or "")
            if "default_scale" in raw:
                scale = float(raw["default_scale"])
                if not scale > 0 or math.isinf(scale):
                    raise ValueError(f"default_scale must be positive, got {scale}")
                cfg.default_scale = scale
            if "randomize" in raw:
                cfg.randomize = bool(raw["randomize"])
            if raw.get("seed") is not None:
                cfg.seed = int(raw["seed"])
            if raw.get("export_dir"):
                cfg.export_dir = Path(str(raw["export_dir"])).expanduser()
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid editor configuration: {e}") from e
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        return {
            "check_connections": self.check_connections,
            "scale_room": self.scale_room,
            "use_grid": self.use_grid,
            "grid_size": self.grid_size,
            "bounds_source": self.bounds_source.value,
            "custom_child_name": self.custom_child_name,
            "default_scale": self.default_scale,
            "randomize": self.randomize,
            "seed": self.seed,
            "export_dir": str(self.export_dir) if self.export_dir is not None else None,
        }

    def to_yaml(self, path: Union[str, Path]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=True)


def load_config(path: Optional[Union[str, Path]] = None) -> EditorConfig:
    """Load editor configuration from YAML.

    If path is None, the DC_CONFIG environment variable is consulted; without it the
    built-in defaults are returned.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None
    if path is None:
        logger.debug("No config file given; using defaults")
        return EditorConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping in {p}")

    cfg = EditorConfig.from_dict(raw)
    logger.info(
        "Loaded config from %s | check_connections=%s scale_room=%s default_scale=%s",
        p,
        cfg.check_connections,
        cfg.scale_room,
        cfg.default_scale,
    )
    return cfg


__all__ = ["CONFIG_ENV_VAR", "EditorConfig", "load_config"]
