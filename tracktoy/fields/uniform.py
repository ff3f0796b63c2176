"""Uniform magnetic field map."""

from __future__ import annotations

import math

import numpy as np

from ..interfaces.fields import BFieldMap
from ..interfaces.states import as_vector


class UniformBFieldMap(BFieldMap):
    """Constant field over the z envelope ``[z_min, z_max]``.

    Returns a 3-vector field everywhere; the envelope only marks where the map
    is considered valid for trajectory extension.
    """

    def __init__(
        self,
        field,
        z_min: float = -math.inf,
        z_max: float = math.inf,
        nominal_step: float = 0.1,
        max_step_time: float = math.inf,
    ) -> None:
        super().__init__(nominal_step=nominal_step, max_step_time=max_step_time)
        if z_min >= z_max:
            raise ValueError(f"z_min must be below z_max, got [{z_min}, {z_max}]")
        self._field = as_vector(field)
        self._z_min = float(z_min)
        self._z_max = float(z_max)

    def field_at(self, position) -> np.ndarray:
        return self._field.copy()

    @property
    def z_min(self) -> float:
        return self._z_min

    @property
    def z_max(self) -> float:
        return self._z_max
