"""
Tests for the tracking command line driver.

Tests for tracktoy/cli/main.py
"""

from __future__ import annotations

import pytest
from rich.console import Console

from tracktoy.cli.main import _parse_args, main, run

CONFIG = """
version: "0.1.0"
tracking:
  tolerance: 1.0e-3
  duration: 10.0
  zmax: 500.0
field:
  vector: [0.0, 0.0, 1.0]
  z_min: -100.0
  z_max: 2000.0
particle:
  mass: 105.658
  charge: 1
  position: [0.0, 0.0, 0.0]
  momentum: [100.0, 0.0, 50.0]
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def recording_console() -> Console:
    return Console(record=True, width=160)


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        """Test overrides default to None."""
        args = _parse_args([])

        assert args.config is None
        assert args.zmax is None
        assert args.tol is None
        assert args.energy_loss is None
        assert not args.verbose

    def test_overrides(self):
        """Test numeric overrides are parsed as floats."""
        args = _parse_args(["--zmax", "250", "--tol", "0.01", "--z-target", "100"])

        assert args.zmax == 250.0
        assert args.tol == 0.01
        assert args.z_target == 100.0


class TestRun:
    """Test the driver end to end."""

    def test_reaches_target(self, config_path, recording_console):
        """Test a plain run reports the target as reached."""
        code = run(_parse_args(["--config", str(config_path)]), recording_console)

        assert code == 0
        output = recording_console.export_text()
        assert "Particle reached" in output
        assert "piece(s)" in output

    def test_unreached_target(self, config_path, recording_console):
        """Test a target beyond the trajectory is reported."""
        args = _parse_args(["--config", str(config_path), "--zmax", "1.0e5"])

        assert run(args, recording_console) == 0
        assert "did not reach" in recording_console.export_text()

    def test_energy_loss_and_crossing(self, config_path, recording_console):
        """Test an energy splice followed by a z inversion."""
        args = _parse_args(
            ["--config", str(config_path), "--energy-loss", "5", "--z-target", "250"]
        )

        assert run(args, recording_console) == 0
        output = recording_console.export_text()
        assert "Energy set to" in output
        assert "Crosses z = 250.000 mm" in output

    def test_stopping_loss(self, config_path, recording_console):
        """Test a loss larger than the kinetic energy stops the particle."""
        args = _parse_args(
            ["--config", str(config_path), "--energy-loss", "100", "--loss-time", "2.0"]
        )

        assert run(args, recording_console) == 0
        assert "Particle stopped at t = 2.0000 ns" in recording_console.export_text()

    def test_loss_time_outside_range(self, config_path, recording_console):
        """Test a loss time outside the trajectory fails."""
        args = _parse_args(
            ["--config", str(config_path), "--energy-loss", "1", "--loss-time", "50"]
        )

        assert run(args, recording_console) == 1

    def test_missing_config(self, tmp_path, recording_console):
        """Test a missing config file fails cleanly."""
        args = _parse_args(["--config", str(tmp_path / "missing.yml")])

        assert run(args, recording_console) == 1
        assert "Configuration error" in recording_console.export_text()

    def test_bad_tolerance(self, config_path, recording_console):
        """Test a non-positive tolerance override fails cleanly."""
        args = _parse_args(["--config", str(config_path), "--tol", "0"])

        assert run(args, recording_console) == 1

    def test_plot(self, config_path, recording_console, tmp_path):
        """Test --plot writes a figure."""
        target = tmp_path / "out" / "traj.png"
        args = _parse_args(["--config", str(config_path), "--plot", str(target)])

        assert run(args, recording_console) == 0
        assert target.exists()


def test_main_entry_point(config_path):
    """Test main parses argv and returns the exit code."""
    assert main(["--config", str(config_path)]) == 0
