"""Field-free straight-line motion."""

from __future__ import annotations

import math

import numpy as np

from ..interfaces.pieces import TrajectoryPiece
from ..interfaces.states import ParticleState, TimeRange


class StraightLine(TrajectoryPiece):
    """Uniform motion along the initial velocity.

    The nominal field is carried for bookkeeping only; it does not bend the
    motion. Useful for neutral particles and as a cheap piece in tests.
    """

    def __init__(self, state: ParticleState, bnom, trange: TimeRange) -> None:
        super().__init__(state, bnom, trange)
        self._t0 = state.time
        self._x0 = state.position
        self._velocity = state.velocity
        self._momentum = state.momentum

    def position(self, time: float) -> np.ndarray:
        return self._x0 + self._velocity * (time - self._t0)

    def velocity(self, time: float) -> np.ndarray:
        return self._velocity.copy()

    def momentum(self, time: float) -> np.ndarray:
        return self._momentum.copy()

    def z_time(self, z: float) -> float:
        vz = self._velocity[2]
        if vz == 0.0:
            return self._t0 if z == self._x0[2] else math.inf
        return self._t0 + (z - self._x0[2]) / vz
