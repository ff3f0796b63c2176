"""Exact helical motion of a charged particle in a uniform magnetic field."""

from __future__ import annotations

import math

import numpy as np
from scipy.optimize import newton

from ..interfaces.pieces import TrajectoryPiece
from ..interfaces.states import CBAR, C_LIGHT, ParticleState, TimeRange

# Transverse field components below this fraction of |B| count as axial.
_AXIAL_TOLERANCE = 1.0e-12


class Helix(TrajectoryPiece):
    """
    Helix about an arbitrary nominal field direction.

    The velocity splits into a component along ``b = B/|B|`` that stays
    constant and a transverse component that rotates about ``b`` with angular
    frequency ``omega = -q * cbar * c * |B| / E``. Positions use sinc forms,
    so a zero field or a neutral particle reduces exactly to a straight line.

    ``z_time`` is linear when the field is axial (or absent); for an oblique
    field the linear estimate along the guiding centre is refined by Newton
    iterations.
    """

    def __init__(self, state: ParticleState, bnom, trange: TimeRange) -> None:
        super().__init__(state, bnom, trange)
        bmag = float(np.linalg.norm(self._bnom))
        self._t0 = state.time
        self._x0 = state.position
        self._energy = state.energy
        velocity = state.velocity
        self._bhat = self._bnom / bmag if bmag > 0.0 else np.array([0.0, 0.0, 1.0])
        self._omega = -state.charge * CBAR * C_LIGHT * bmag / self._energy
        self._vpar = float(np.dot(velocity, self._bhat)) * self._bhat
        self._vperp = velocity - self._vpar
        self._vcross = np.cross(self._bhat, self._vperp)
        self._axial = (
            self._omega == 0.0
            or math.hypot(self._bhat[0], self._bhat[1]) < _AXIAL_TOLERANCE
        )

    @property
    def omega(self) -> float:
        """Signed angular frequency about the field direction (rad/ns)."""
        return self._omega

    @property
    def bend_radius(self) -> float:
        """Transverse radius of curvature in mm (``inf`` without bending)."""
        if self._omega == 0.0:
            return math.inf
        return float(np.linalg.norm(self._vperp)) / abs(self._omega)

    def position(self, time: float) -> np.ndarray:
        dt = time - self._t0
        phi = self._omega * dt
        sinc = np.sinc(phi / math.pi)
        half = np.sinc(phi / (2.0 * math.pi))
        return (
            self._x0
            + self._vpar * dt
            + self._vperp * (dt * sinc)
            + self._vcross * (dt * 0.5 * phi * half * half)
        )

    def velocity(self, time: float) -> np.ndarray:
        phi = self._omega * (time - self._t0)
        return self._vpar + self._vperp * math.cos(phi) + self._vcross * math.sin(phi)

    def momentum(self, time: float) -> np.ndarray:
        return self.velocity(time) * (self._energy / C_LIGHT)

    def z_time(self, z: float) -> float:
        dz = z - self._x0[2]
        if dz == 0.0:
            return self._t0
        if self._axial:
            vz = self._vpar[2] + self._vperp[2]
            if vz == 0.0:
                return math.inf
            return self._t0 + dz / vz

        vdrift = self._vpar[2] if self._vpar[2] != 0.0 else self.velocity(self._t0)[2]
        if vdrift == 0.0:
            return math.inf
        guess = self._t0 + dz / vdrift
        root = newton(
            lambda t: self.position(t)[2] - z,
            guess,
            fprime=lambda t: self.velocity(t)[2],
            tol=1.0e-10,
            maxiter=50,
            disp=False,
        )
        root = float(root)
        if not math.isfinite(root) or abs(self.position(root)[2] - z) > 1.0e-6:
            return math.inf
        return root
