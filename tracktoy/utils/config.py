"""Configuration loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from ..fields import GradientBFieldMap, UniformBFieldMap
from ..interfaces.config import TrackingConfig
from ..interfaces.fields import BFieldMap
from ..interfaces.states import ParticleState, TimeRange
from ..kinematics import Helix
from ..trajectory.piecewise import PiecewiseTrajectory
from .paths import DEFAULT_PLOT_SUBDIR, data_root, default_config_path


def _vector(raw: Any, default: tuple[float, float, float]) -> tuple[float, float, float]:
    if raw is None:
        return default
    values = tuple(float(v) for v in raw)
    if len(values) != 3:
        raise ValueError(f"Expected three components, got {list(raw)}")
    return values  # type: ignore[return-value]


def load_config(path: str | Path | None = None) -> TrackingConfig:
    """Load tracking configuration from ``config.yml``.

    Args:
        path: Optional path override. Defaults to ``<project_root>/config.yml``.

    Returns:
        A :class:`~tracktoy.interfaces.config.TrackingConfig` populated from YAML.
    """

    config_path = Path(path) if path else default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        raw: Mapping[str, Any] = yaml.safe_load(handle) or {}

    tracking = raw.get("tracking", {}) or {}
    field = raw.get("field", {}) or {}
    particle = raw.get("particle", {}) or {}
    gradient_end = field.get("gradient_end")

    return TrackingConfig(
        version=str(raw.get("version", "0.0.0")),
        tolerance=float(tracking.get("tolerance", 1.0e-3)),
        field=_vector(field.get("vector"), (0.0, 0.0, 1.0)),
        field_z_min=float(field.get("z_min", -1.0e4)),
        field_z_max=float(field.get("z_max", 1.0e4)),
        field_gradient_end=float(gradient_end) if gradient_end is not None else None,
        mass=float(particle.get("mass", 105.658)),
        charge=int(particle.get("charge", 1)),
        position=_vector(particle.get("position"), (0.0, 0.0, 0.0)),
        momentum=_vector(particle.get("momentum"), (100.0, 0.0, 50.0)),
        t0=float(particle.get("t0", 0.0)),
        duration=float(tracking.get("duration", 100.0)),
        zmax=float(tracking.get("zmax", 500.0)),
        data_root=data_root(),
        plot_subdir=str(tracking.get("plot_subdir", DEFAULT_PLOT_SUBDIR)),
    )


def build_field_map(config: TrackingConfig) -> BFieldMap:
    """Construct the field map described by ``config``.

    A ``field_gradient_end`` selects a :class:`GradientBFieldMap` running from
    the axial component of ``field`` at ``field_z_min`` to ``field_gradient_end``
    at ``field_z_max``; otherwise the field is uniform over the envelope.
    """

    if config.field_gradient_end is not None:
        return GradientBFieldMap(
            b0=config.field[2],
            b1=config.field_gradient_end,
            z0=config.field_z_min,
            z1=config.field_z_max,
        )
    return UniformBFieldMap(config.field, z_min=config.field_z_min, z_max=config.field_z_max)


def build_trajectory(config: TrackingConfig, bfield: BFieldMap) -> PiecewiseTrajectory:
    """Seed a single-helix trajectory from the configured particle."""

    state = ParticleState(
        position=config.position,
        momentum=config.momentum,
        time=config.t0,
        mass=config.mass,
        charge=config.charge,
    )
    return PiecewiseTrajectory.from_state(
        state,
        bfield.field_at(state.position),
        TimeRange(config.t0, config.t0 + config.duration),
        piece_type=Helix,
    )
