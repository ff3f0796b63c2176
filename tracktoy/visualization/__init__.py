"""Plotting helpers for piecewise trajectories."""

from .trajectories import TrajectoryPlotter

__all__ = ["TrajectoryPlotter"]
