"""Interface for analytic trajectory pieces."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .states import ParticleState, TimeRange, as_vector


class TrajectoryPiece(ABC):
    """
    Closed-form particle motion over one time range under a constant field.

    Concrete pieces are constructed from ``(state, bnom, trange)``: the
    particle state at the start of the motion, the nominal field vector used
    to derive the motion, and the time range over which the piece is valid.
    Pieces are immutable; ``with_range`` returns a shortened or lengthened
    copy of the same motion.

    The analytic motion can be evaluated outside ``range``. The z-inversion
    search relies on this to shuttle between neighbouring pieces.
    """

    def __init__(self, state: ParticleState, bnom, trange: TimeRange) -> None:
        self._state = state
        self._bnom = as_vector(bnom)
        self._range = trange if isinstance(trange, TimeRange) else TimeRange(*trange)

    @property
    def range(self) -> TimeRange:
        return self._range

    @property
    def bnom(self) -> np.ndarray:
        return self._bnom.copy()

    @property
    def mass(self) -> float:
        return self._state.mass

    @property
    def charge(self) -> int:
        return self._state.charge

    @property
    def reference_state(self) -> ParticleState:
        """State the motion was constructed from."""
        return self._state

    @abstractmethod
    def position(self, time: float) -> np.ndarray:
        """Position 3-vector (mm) at ``time``."""

    @abstractmethod
    def velocity(self, time: float) -> np.ndarray:
        """Velocity 3-vector (mm/ns) at ``time``."""

    @abstractmethod
    def momentum(self, time: float) -> np.ndarray:
        """Momentum 3-vector (MeV/c) at ``time``."""

    @abstractmethod
    def z_time(self, z: float) -> float:
        """Time at which this piece's motion reaches the plane ``z``.

        The answer may lie outside ``range``. Returns ``inf`` when the motion
        never reaches ``z``.
        """

    def direction(self, time: float) -> np.ndarray:
        mom = self.momentum(time)
        return mom / np.linalg.norm(mom)

    def speed(self, time: float) -> float:
        return float(np.linalg.norm(self.velocity(time)))

    def energy(self, time: float) -> float:
        return self._state.energy

    def state(self, time: float) -> ParticleState:
        return ParticleState(
            position=self.position(time),
            momentum=self.momentum(time),
            time=time,
            mass=self.mass,
            charge=self.charge,
        )

    def with_range(self, trange: TimeRange) -> "TrajectoryPiece":
        """Return the same motion valid over ``trange``."""

        return type(self)(self._state, self._bnom, trange)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(range={self._range!r}, bnom={self._bnom.tolist()})"
