"""Magnetic field map interface and the tolerance-step policy."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

import numpy as np

from .pieces import TrajectoryPiece
from .states import CBAR

logger = logging.getLogger(__name__)


class BFieldMap(ABC):
    """
    Abstract, read-only magnetic field map.

    Subclasses supply ``field_at`` and the z envelope ``[z_min, z_max]`` in
    which the map is defined. The base class supplies ``range_in_tolerance``,
    the adaptive stepping policy used when a trajectory is extended: a piece
    built from one field sample is followed until the position distortion
    caused by the difference between its nominal field and the true field
    reaches the caller's tolerance.

    Field maps hold no mutable state after construction and may be queried
    from several threads at once.

    Args:
        nominal_step: Time step (ns) used to sample the field along a piece when
            the field at the start agrees with the nominal field.
        max_step_time: Longest time span (ns) a single tolerance step may
            cover, regardless of the field agreement. ``inf`` disables the cap.
    """

    def __init__(self, nominal_step: float = 0.1, max_step_time: float = math.inf) -> None:
        if nominal_step <= 0.0:
            raise ValueError(f"nominal_step must be positive, got {nominal_step}")
        if max_step_time <= 0.0:
            raise ValueError(f"max_step_time must be positive, got {max_step_time}")
        self.nominal_step = float(nominal_step)
        self.max_step_time = float(max_step_time)

    @abstractmethod
    def field_at(self, position) -> np.ndarray:
        """Field 3-vector (Tesla) at ``position`` (mm)."""

    @property
    @abstractmethod
    def z_min(self) -> float:
        ...

    @property
    @abstractmethod
    def z_max(self) -> float:
        ...

    def in_range(self, position) -> bool:
        """True when ``position`` lies inside the z envelope of the map."""

        z = float(position[2])
        return self.z_min <= z <= self.z_max

    def range_in_tolerance(self, piece: TrajectoryPiece, tstart: float, tol: float) -> float:
        """
        Largest time after ``tstart`` over which ``piece`` stays within ``tol``.

        The transverse distortion of a piece whose nominal field differs from
        the true field by ``dB`` grows like ``sfac * dt^2 * dB`` with
        ``sfac = |cbar * q * v^2 / p|``. The piece is sampled in steps, the
        distortion is accumulated, and the first sample time at which it reaches
        ``tol`` (or passes the end of the piece, or the step cap) is returned.

        Args:
            piece: The piece whose nominal-field approximation is tested
            tstart: Start time of the step (ns)
            tol: Geometric tolerance (mm), must be positive

        Returns:
            End time of the step, never beyond ``piece.range.end``.
        """
        if tol <= 0.0:
            raise ValueError(f"Tolerance must be positive, got {tol}")
        tlimit = min(piece.range.end, tstart + self.max_step_time)
        if not math.isfinite(tlimit):
            raise ValueError(
                "range_in_tolerance needs a finite piece range or max_step_time"
            )
        if tstart >= tlimit:
            return tlimit

        pmag = float(np.linalg.norm(piece.momentum(tstart)))
        if pmag == 0.0:
            return tlimit
        spd = piece.speed(tstart)
        sfac = abs(CBAR * piece.charge * spd * spd / pmag)
        bnom = piece.bnom

        tstep = min(self.nominal_step, tlimit - tstart)
        dbstart = float(np.linalg.norm(self.field_at(piece.position(tstart)) - bnom))
        if sfac > 0.0 and dbstart > 1.0e-6:
            tstep = min(tstep, 0.5 * math.sqrt(tol / (sfac * dbstart)))

        tend = tstart
        dx = 0.0
        while dx < tol and tend < tlimit:
            tend += tstep
            db = float(np.linalg.norm(self.field_at(piece.position(tend)) - bnom))
            dx += sfac * (tend - tstart) * tstep * db
        logger.debug(
            "tolerance step from %.4f to %.4f ns (distortion %.3g mm)", tstart, tend, dx
        )
        return min(tend, tlimit)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(z_min={self.z_min}, z_max={self.z_max})"
