"""Global configuration and defaults for maze2topo."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class GeneratorConfig:
    """Maze generator parameters."""

    width: int = 20
    height: int = 20
    seed: int = 42
    braid_probability: float = 0.0  # 0 = perfect maze, 1 = no dead ends


@dataclass
class ReductionConfig:
    """Topology reducer parameters."""

    detect_rooms: bool = True  # run the RoomFinder when no partition is given
    verify: bool = True  # run the invariant checks after reduction


@dataclass
class Config:
    """Top-level configuration."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    reduction: ReductionConfig = field(default_factory=ReductionConfig)
    debug_output_dir: Optional[Path] = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        gen_data = data.get("generator", {})
        red_data = data.get("reduction", {})
        debug_dir = data.get("debug_output_dir")

        return cls(
            generator=GeneratorConfig(**gen_data) if gen_data else GeneratorConfig(),
            reduction=ReductionConfig(**red_data) if red_data else ReductionConfig(),
            debug_output_dir=Path(debug_dir) if debug_dir else None,
        )

    @classmethod
    def default(cls) -> "Config":
        return cls()
