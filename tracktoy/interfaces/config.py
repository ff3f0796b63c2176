"""Configuration interfaces and data structures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple

Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class TrackingConfig:
    """Runtime configuration for the tracking driver."""

    version: str
    tolerance: float
    field: Vector3
    field_z_min: float
    field_z_max: float
    field_gradient_end: float | None
    mass: float
    charge: int
    position: Vector3
    momentum: Vector3
    t0: float
    duration: float
    zmax: float
    data_root: Path
    plot_subdir: str

    def __post_init__(self) -> None:
        if self.tolerance <= 0.0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.duration <= 0.0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if self.mass < 0.0:
            raise ValueError(f"mass must be non-negative, got {self.mass}")
        if self.field_z_min >= self.field_z_max:
            raise ValueError(
                f"field_z_min must be below field_z_max, got [{self.field_z_min}, {self.field_z_max}]"
            )

    @property
    def plot_dir(self) -> Path:
        return self.data_root / self.plot_subdir

    def __getitem__(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)
