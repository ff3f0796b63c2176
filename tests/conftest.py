"""
Pytest configuration and shared fixtures for tracktoy tests.

Provides particle states, field maps and seed trajectories.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tracktoy.fields import UniformBFieldMap
from tracktoy.interfaces import ParticleState, TimeRange
from tracktoy.kinematics import Helix, StraightLine
from tracktoy.trajectory import PiecewiseTrajectory

MUON_MASS = 105.658
ELECTRON_MASS = 0.511


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def muon_state() -> ParticleState:
    """Positive muon with (100, 0, 50) MeV/c momentum at the origin."""
    return ParticleState(
        position=[0.0, 0.0, 0.0],
        momentum=[100.0, 0.0, 50.0],
        time=0.0,
        mass=MUON_MASS,
        charge=1,
    )


@pytest.fixture
def electron_state() -> ParticleState:
    """Electron moving along z with 1 GeV/c."""
    return ParticleState(
        position=[0.0, 0.0, 0.0],
        momentum=[0.0, 0.0, 1000.0],
        time=0.0,
        mass=ELECTRON_MASS,
        charge=-1,
    )


# =============================================================================
# Field Fixtures
# =============================================================================


@pytest.fixture
def solenoid() -> UniformBFieldMap:
    """1 T along z, unbounded."""
    return UniformBFieldMap([0.0, 0.0, 1.0])


@pytest.fixture
def stepped_solenoid() -> UniformBFieldMap:
    """1 T along z with tolerance steps capped at 0.5 ns."""
    return UniformBFieldMap([0.0, 0.0, 1.0], max_step_time=0.5)


# =============================================================================
# Trajectory Fixtures
# =============================================================================


@pytest.fixture
def muon_helix(muon_state) -> PiecewiseTrajectory:
    """Single helix piece over [0, 25] ns in 1 T."""
    return PiecewiseTrajectory.from_state(
        muon_state, [0.0, 0.0, 1.0], TimeRange(0.0, 25.0), Helix
    )


def line_piece(t0: float, t1: float, z0: float = 0.0, mass: float = MUON_MASS, charge: int = 1):
    """Straight-line piece moving along +z, starting at z0 at time t0."""
    state = ParticleState([0.0, 0.0, z0], [0.0, 0.0, 100.0], t0, mass, charge)
    return StraightLine(state, [0.0, 0.0, 0.0], TimeRange(t0, t1))


def assert_contiguous(trajectory: PiecewiseTrajectory, atol: float = 1e-9) -> None:
    """Check range contiguity and position/direction continuity at every join."""
    pieces = trajectory.pieces
    assert trajectory.range.begin == pieces[0].range.begin
    assert trajectory.range.end == pieces[-1].range.end
    for before, after in zip(pieces[:-1], pieces[1:]):
        join = after.range.begin
        assert before.range.end == join
        np.testing.assert_allclose(before.position(join), after.position(join), atol=atol)
        np.testing.assert_allclose(before.direction(join), after.direction(join), atol=atol)
        assert before.mass == after.mass
        assert before.charge == after.charge


@pytest.fixture
def make_line_piece():
    """Factory fixture for straight-line pieces."""
    return line_piece


@pytest.fixture
def check_contiguous():
    """Fixture exposing the join-continuity assertion."""
    return assert_contiguous
