"""Piecewise trajectories and the operations that splice, extend and invert them."""

from .piecewise import PiecewiseTrajectory
from .utilities import (
    Z_CROSSING_TOLERANCE,
    Z_TIME_SENTINEL_OFFSET,
    ZCrossing,
    extend_traj,
    extend_z,
    update_energy,
    z_crossing,
    z_time,
)

__all__ = [
    "PiecewiseTrajectory",
    "ZCrossing",
    "Z_CROSSING_TOLERANCE",
    "Z_TIME_SENTINEL_OFFSET",
    "update_energy",
    "extend_z",
    "extend_traj",
    "z_time",
    "z_crossing",
]
