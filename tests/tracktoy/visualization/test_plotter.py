"""
Tests for trajectory plotting.

Tests for tracktoy/visualization/trajectories.py
"""

from __future__ import annotations

import pytest

from tracktoy.interfaces import PlotArtifact
from tracktoy.trajectory import PiecewiseTrajectory
from tracktoy.visualization import TrajectoryPlotter


@pytest.fixture
def two_lines(make_line_piece) -> PiecewiseTrajectory:
    traj = PiecewiseTrajectory(make_line_piece(0.0, 10.0))
    traj.append(make_line_piece(5.0, 10.0, z0=traj.position(5.0)[2]))
    return traj


class TestTrajectoryPlotter:
    """Test TrajectoryPlotter."""

    def test_sample_shapes(self, two_lines):
        """Test every piece contributes samples_per_piece points."""
        times, positions, ids = TrajectoryPlotter(samples_per_piece=8).sample(two_lines)

        assert times.shape == (16,)
        assert positions.shape == (16, 3)
        assert ids.tolist() == [0] * 8 + [1] * 8
        assert times[0] == 0.0
        assert times[-1] == 10.0

    def test_plot_without_output(self, two_lines):
        """Test plotting without a path saves nothing."""
        artifact = TrajectoryPlotter().plot(two_lines)

        assert isinstance(artifact, PlotArtifact)
        assert artifact.path is None

    def test_plot_adds_suffix(self, two_lines, tmp_path):
        """Test a suffix-less path is saved as png."""
        artifact = TrajectoryPlotter().plot(two_lines, output_path=tmp_path / "figure")

        assert artifact.path == tmp_path / "figure.png"
        assert artifact.path.exists()

    def test_relative_path_under_plot_root(self, two_lines, tmp_path):
        """Test relative output paths are saved under the plot root."""
        plotter = TrajectoryPlotter(plot_root=tmp_path / "plots")
        artifact = plotter.plot(two_lines, output_path="runs/two_lines")

        assert artifact.path == tmp_path / "plots" / "runs" / "two_lines.png"
        assert artifact.path.exists()

    def test_single_piece(self, muon_helix, tmp_path):
        """Test a trajectory without joins still plots."""
        artifact = TrajectoryPlotter().plot(
            muon_helix, output_path=tmp_path / "helix.png", title="helix"
        )
        assert artifact.path.exists()

    def test_too_few_samples(self):
        """Test a single sample per piece is rejected."""
        with pytest.raises(ValueError):
            TrajectoryPlotter(samples_per_piece=1)
