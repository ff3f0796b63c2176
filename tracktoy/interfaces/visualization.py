"""Visualization-oriented interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..trajectory.piecewise import PiecewiseTrajectory


@dataclass(frozen=True)
class PlotArtifact:
    """Metadata describing a saved visualization asset."""

    path: Path | None


class TrajectoryVisualizer(Protocol):
    """Protocol for classes capable of rendering piecewise trajectories."""

    def plot(
        self,
        trajectory: "PiecewiseTrajectory",
        output_path: Path | None = None,
        **kwargs,
    ) -> PlotArtifact:  # pragma: no cover - protocol definition
        ...
