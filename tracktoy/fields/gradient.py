"""Axial field with a linear longitudinal gradient."""

from __future__ import annotations

import math

import numpy as np

from ..interfaces.fields import BFieldMap


class GradientBFieldMap(BFieldMap):
    """
    Solenoid-like field whose axial component falls linearly with z.

    ``Bz`` goes from ``b0`` at ``z0`` to ``b1`` at ``z1`` and is held constant
    outside that interval. Inside the gradient region the transverse
    components ``Bx = -x/2 * dBz/dz`` and ``By = -y/2 * dBz/dz`` keep the field
    divergence-free. The map envelope is ``[z0, z1]``.

    Args:
        b0: Axial field (T) at ``z0``
        b1: Axial field (T) at ``z1``
        z0: Start of the gradient region (mm)
        z1: End of the gradient region (mm), must exceed ``z0``
    """

    def __init__(
        self,
        b0: float,
        b1: float,
        z0: float,
        z1: float,
        nominal_step: float = 0.1,
        max_step_time: float = math.inf,
    ) -> None:
        super().__init__(nominal_step=nominal_step, max_step_time=max_step_time)
        if z1 <= z0:
            raise ValueError(f"Gradient region must have z1 > z0, got [{z0}, {z1}]")
        self.b0 = float(b0)
        self.b1 = float(b1)
        self._z0 = float(z0)
        self._z1 = float(z1)
        self.gradient = (self.b1 - self.b0) / (self._z1 - self._z0)

    def field_at(self, position) -> np.ndarray:
        x, y, z = (float(v) for v in position)
        if z <= self._z0:
            return np.array([0.0, 0.0, self.b0])
        if z >= self._z1:
            return np.array([0.0, 0.0, self.b1])
        bz = self.b0 + self.gradient * (z - self._z0)
        return np.array([-0.5 * x * self.gradient, -0.5 * y * self.gradient, bz])

    @property
    def z_min(self) -> float:
        return self._z0

    @property
    def z_max(self) -> float:
        return self._z1
