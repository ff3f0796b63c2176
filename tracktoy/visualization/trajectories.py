"""Visualization helpers for piecewise trajectories."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # ensure headless-friendly backend
import matplotlib.pyplot as plt
import numpy as np

from ..interfaces.visualization import PlotArtifact, TrajectoryVisualizer
from ..trajectory.piecewise import PiecewiseTrajectory
from ..utils.paths import resolve_plot_path


class TrajectoryPlotter(TrajectoryVisualizer):
    """Static two-panel plotter: transverse x-y view and z against time."""

    def __init__(
        self,
        samples_per_piece: int = 32,
        cmap: str = "viridis",
        figsize: tuple[float, float] = (10, 4),
        plot_root: Path | None = None,
    ) -> None:
        if samples_per_piece < 2:
            raise ValueError("samples_per_piece must be at least 2")
        self.samples_per_piece = samples_per_piece
        self.cmap = plt.get_cmap(cmap)
        self.figsize = figsize
        self.plot_root = plot_root

    def sample(self, trajectory: PiecewiseTrajectory) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Sample every piece over its own range.

        Returns:
            (times, positions, piece_ids) with shapes (M,), (M, 3), (M,)
        """
        times, positions, ids = [], [], []
        for index, piece in enumerate(trajectory):
            ts = np.linspace(piece.range.begin, piece.range.end, self.samples_per_piece)
            times.append(ts)
            positions.append(np.array([piece.position(t) for t in ts]))
            ids.append(np.full(ts.shape, index))
        return np.concatenate(times), np.concatenate(positions), np.concatenate(ids)

    def plot(
        self,
        trajectory: PiecewiseTrajectory,
        output_path: Path | str | None = None,
        show: bool = False,
        title: str | None = None,
        **_: object,
    ) -> PlotArtifact:
        times, positions, ids = self.sample(trajectory)
        colors = self.cmap(np.linspace(0, 1, max(len(trajectory), 2)))

        fig, (ax_xy, ax_zt) = plt.subplots(1, 2, figsize=self.figsize, dpi=160)
        for index in range(len(trajectory)):
            mask = ids == index
            color = colors[index]
            ax_xy.plot(positions[mask, 0], positions[mask, 1], color=color, linewidth=1.0)
            ax_zt.plot(times[mask], positions[mask, 2], color=color, linewidth=1.0)

        joins = np.array([piece.range.begin for piece in trajectory][1:])
        if joins.size:
            join_z = np.array([trajectory.position(t)[2] for t in joins])
            ax_zt.scatter(joins, join_z, color="black", s=8, marker="|", alpha=0.8)

        ax_xy.set_xlabel("x [mm]")
        ax_xy.set_ylabel("y [mm]")
        ax_xy.set_aspect("equal")
        ax_zt.set_xlabel("t [ns]")
        ax_zt.set_ylabel("z [mm]")
        for ax in (ax_xy, ax_zt):
            ax.grid(True, linestyle="--", linewidth=0.4, alpha=0.4)
        fig.suptitle(title or f"Trajectory ({len(trajectory)} pieces)")

        saved_path: Path | None = None
        if output_path is not None:
            saved_path = resolve_plot_path(output_path, self.plot_root, create=True)
            fig.savefig(saved_path, bbox_inches="tight")

        if show:
            plt.show()
        else:
            plt.close(fig)

        return PlotArtifact(path=saved_path)

