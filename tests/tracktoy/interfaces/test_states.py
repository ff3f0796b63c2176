"""
Tests for time ranges and particle states.

Tests for tracktoy/interfaces/states.py
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from tracktoy.interfaces.states import C_LIGHT, ParticleState, TimeRange, as_vector


class TestTimeRange:
    """Test TimeRange value type."""

    def test_creation(self):
        """Test basic construction and derived values."""
        trange = TimeRange(1.0, 3.0)

        assert trange.begin == 1.0
        assert trange.end == 3.0
        assert trange.duration == pytest.approx(2.0)
        assert trange.mid == pytest.approx(2.0)

    def test_inverted_range_rejected(self):
        """Test begin after end raises."""
        with pytest.raises(ValueError):
            TimeRange(2.0, 1.0)

    def test_degenerate_range_allowed(self):
        """Test a zero-length range is valid."""
        trange = TimeRange(1.5, 1.5)
        assert trange.duration == 0.0
        assert trange.contains(1.5)

    def test_contains_is_closed(self):
        """Test both ends are inside the range."""
        trange = TimeRange(0.0, 1.0)

        assert trange.contains(0.0)
        assert trange.contains(1.0)
        assert not trange.contains(1.0 + 1e-12)
        assert not trange.contains(-1e-12)

    def test_clamp(self):
        """Test clamping into the range."""
        trange = TimeRange(0.0, 1.0)

        assert trange.clamp(-5.0) == 0.0
        assert trange.clamp(0.25) == 0.25
        assert trange.clamp(7.0) == 1.0

    def test_restrict(self):
        """Test restrict replaces one end at a time."""
        trange = TimeRange(0.0, 10.0)

        assert trange.restrict(end=4.0) == TimeRange(0.0, 4.0)
        assert trange.restrict(begin=2.0) == TimeRange(2.0, 10.0)
        with pytest.raises(ValueError):
            trange.restrict(begin=11.0)

    def test_unpacking(self):
        """Test a range unpacks as (begin, end)."""
        begin, end = TimeRange(0.5, 2.5)
        assert (begin, end) == (0.5, 2.5)


class TestParticleState:
    """Test ParticleState kinematics."""

    def test_energy(self):
        """Test energy from momentum and mass."""
        state = ParticleState([0, 0, 0], [3.0, 0.0, 4.0], 0.0, 12.0, 1)

        assert state.momentum_magnitude == pytest.approx(5.0)
        assert state.energy == pytest.approx(13.0)

    def test_direction_is_unit(self):
        """Test direction is the normalized momentum."""
        state = ParticleState([0, 0, 0], [3.0, 0.0, 4.0], 0.0, 12.0, 1)

        np.testing.assert_allclose(state.direction, [0.6, 0.0, 0.8])

    def test_velocity(self):
        """Test velocity equals beta * c along the momentum."""
        state = ParticleState([0, 0, 0], [3.0, 0.0, 4.0], 0.0, 12.0, 1)

        np.testing.assert_allclose(state.velocity, np.array([3.0, 0.0, 4.0]) / 13.0 * C_LIGHT)
        assert state.speed == pytest.approx(5.0 / 13.0 * C_LIGHT)
        assert state.beta == pytest.approx(5.0 / 13.0)
        assert state.gamma == pytest.approx(13.0 / 12.0)

    def test_ultra_relativistic_electron(self, electron_state):
        """Test a 1 GeV electron moves at essentially c."""
        assert electron_state.speed == pytest.approx(C_LIGHT, rel=1e-6)

    def test_massless_gamma(self):
        """Test a massless particle has infinite gamma."""
        photon = ParticleState([0, 0, 0], [0, 0, 1.0], 0.0, 0.0, 0)
        assert math.isinf(photon.gamma)
        assert photon.speed == pytest.approx(C_LIGHT)

    def test_negative_mass_rejected(self):
        """Test negative mass raises."""
        with pytest.raises(ValueError):
            ParticleState([0, 0, 0], [1, 0, 0], 0.0, -1.0, 1)

    def test_fractional_charge_rejected(self):
        """Test non-integral charge raises."""
        with pytest.raises(ValueError):
            ParticleState([0, 0, 0], [1, 0, 0], 0.0, 1.0, 0.5)

    def test_direction_at_rest_rejected(self):
        """Test direction of a particle at rest raises."""
        state = ParticleState([0, 0, 0], [0, 0, 0], 0.0, 1.0, 1)
        with pytest.raises(ValueError):
            _ = state.direction

    def test_vectors_coerced(self):
        """Test list inputs become float arrays."""
        state = ParticleState((1, 2, 3), (0, 0, 1), 2, 1, 1)

        assert isinstance(state.position, np.ndarray)
        assert state.position.dtype == float
        assert state.time == 2.0
        assert isinstance(state.charge, int)

    def test_bad_vector_shape(self):
        """Test a 2-vector is rejected."""
        with pytest.raises(ValueError):
            as_vector([1.0, 2.0])
