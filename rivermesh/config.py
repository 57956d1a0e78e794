"""River generation configuration."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiverBankContour:
    """Allowed (side, up) offset range for one contour of the cross-section.

    Attributes:
        x_min: Smallest offset along the lateral track normal
        x_max: Largest offset along the lateral track normal
        z_min: Smallest offset along the world up axis
        z_max: Largest offset along the world up axis
    """

    x_min: float
    x_max: float
    z_min: float
    z_max: float


def _default_banks() -> List[RiverBankContour]:
    # Left to right across the river. Contours 3 and 4 are the water's edges.
    return [
        RiverBankContour(-14.0, -12.0, 1.6, 2.2),
        RiverBankContour(-10.0, -8.5, 1.0, 1.4),
        RiverBankContour(-7.0, -6.0, 0.4, 0.7),
        RiverBankContour(-4.2, -3.8, -0.1, 0.0),
        RiverBankContour(3.8, 4.2, -0.1, 0.0),
        RiverBankContour(6.0, 7.0, 0.4, 0.7),
        RiverBankContour(8.5, 10.0, 1.0, 1.4),
        RiverBankContour(12.0, 14.0, 1.6, 2.2),
    ]


@dataclass
class RiverConfig:
    """Shared settings for every river in the world.

    Attributes:
        spline_stepsize: Distance between consecutive rail samples
        track_height: Offset of the river surface above the rail
        texture_tile_size: Number of times the texture tiles around the loop
        river_index: Contour index of the river's left edge
        banks: Contours, ordered left to right
        material: Material used for the river surface
        shader: Shader used for the river surface
        bank_material: Material used for the banks
        bank_shader: Shader used for the banks
    """

    spline_stepsize: float = 2.0
    track_height: float = 0.0
    texture_tile_size: float = 12.0
    river_index: int = 3
    banks: List[RiverBankContour] = field(default_factory=_default_banks)

    material: str = "materials/river.mat.yaml"
    shader: str = "shaders/river.vert"
    bank_material: str = "materials/ground_material.mat.yaml"
    bank_shader: str = "shaders/textured_opaque.vert"

    @property
    def num_bank_contours(self) -> int:
        return len(self.banks)

    def validate(self) -> None:
        """Raise ValueError if the cross-section cannot produce a mesh."""
        if self.spline_stepsize <= 0.0:
            raise ValueError(
                f"spline_stepsize must be positive, got {self.spline_stepsize}"
            )
        validate_contours(self.banks, self.river_index)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiverConfig":
        data = dict(data)
        banks = data.pop("banks", None)
        if banks is not None:
            data["banks"] = [
                b if isinstance(b, RiverBankContour) else RiverBankContour(**b)
                for b in banks
            ]
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RiverConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        config = cls.from_dict(data)
        logger.debug(
            "Loaded river config from %s (%d contours, river index %d)",
            path,
            config.num_bank_contours,
            config.river_index,
        )
        return config

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)


def validate_contours(banks, river_index: int) -> None:
    num_contours = len(banks)
    if num_contours < 2:
        raise ValueError(
            f"A river needs at least 2 bank contours, got {num_contours}"
        )
    if river_index < 0 or river_index >= num_contours - 1:
        raise ValueError(
            f"river_index must be in [0, {num_contours - 2}], got {river_index}"
        )
