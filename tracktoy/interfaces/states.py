"""Value types shared by every trajectory piece: time ranges and particle states."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

# Speed of light in mm/ns.
C_LIGHT = 299.792458
# Curvature constant in MeV/(T*mm): p[MeV] = CBAR * |q| * B[T] * R[mm].
CBAR = C_LIGHT / 1000.0


def as_vector(value) -> np.ndarray:
    """Coerce an array-like into a float 3-vector."""

    vec = np.asarray(value, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vec.shape}")
    return vec


@dataclass(frozen=True)
class TimeRange:
    """Closed time interval ``[begin, end]`` in ns."""

    begin: float
    end: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "begin", float(self.begin))
        object.__setattr__(self, "end", float(self.end))
        if not self.begin <= self.end:
            raise ValueError(
                f"TimeRange begin must not exceed end, got [{self.begin}, {self.end}]"
            )

    @property
    def duration(self) -> float:
        return self.end - self.begin

    @property
    def mid(self) -> float:
        return 0.5 * (self.begin + self.end)

    def contains(self, time: float) -> bool:
        return self.begin <= time <= self.end

    def clamp(self, time: float) -> float:
        return min(max(time, self.begin), self.end)

    def restrict(self, begin: float | None = None, end: float | None = None) -> "TimeRange":
        """Return a copy with ``begin`` and/or ``end`` replaced."""

        return TimeRange(
            self.begin if begin is None else begin,
            self.end if end is None else end,
        )

    def __iter__(self):
        yield self.begin
        yield self.end

    def __repr__(self) -> str:
        return f"TimeRange({self.begin:.6g}, {self.end:.6g})"


@dataclass(frozen=True, eq=False)
class ParticleState:
    """
    Kinematic snapshot of a particle at one instant.

    Momentum is stored as p*c in MeV so that ``energy = sqrt(|p|^2 + m^2)``
    and ``velocity = p / E * c`` in mm/ns.

    Attributes:
        position: Position 3-vector in mm
        momentum: Momentum 3-vector in MeV/c
        time: Time in ns
        mass: Rest mass in MeV/c^2, non-negative
        charge: Charge in units of e, integral
    """

    position: np.ndarray
    momentum: np.ndarray
    time: float
    mass: float
    charge: int
    _energy: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector(self.position))
        object.__setattr__(self, "momentum", as_vector(self.momentum))
        object.__setattr__(self, "time", float(self.time))
        mass = float(self.mass)
        if mass < 0.0 or not math.isfinite(mass):
            raise ValueError(f"Particle mass must be non-negative, got {self.mass}")
        charge = float(self.charge)
        if charge != round(charge):
            raise ValueError(f"Particle charge must be integral, got {self.charge}")
        object.__setattr__(self, "mass", mass)
        object.__setattr__(self, "charge", int(round(charge)))
        energy = math.sqrt(float(np.dot(self.momentum, self.momentum)) + mass * mass)
        object.__setattr__(self, "_energy", energy)

    @property
    def momentum_magnitude(self) -> float:
        return float(np.linalg.norm(self.momentum))

    @property
    def energy(self) -> float:
        return self._energy

    @property
    def direction(self) -> np.ndarray:
        pmag = self.momentum_magnitude
        if pmag == 0.0:
            raise ValueError("Direction is undefined for a particle at rest")
        return self.momentum / pmag

    @property
    def velocity(self) -> np.ndarray:
        if self._energy == 0.0:
            raise ValueError("Velocity is undefined for a massless particle at rest")
        return self.momentum * (C_LIGHT / self._energy)

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def beta(self) -> float:
        return self.momentum_magnitude / self._energy

    @property
    def gamma(self) -> float:
        if self.mass == 0.0:
            return math.inf
        return self._energy / self.mass

    def __repr__(self) -> str:
        x, y, z = self.position
        px, py, pz = self.momentum
        return (
            f"ParticleState(t={self.time:.4f}, pos=({x:.3f}, {y:.3f}, {z:.3f}), "
            f"mom=({px:.3f}, {py:.3f}, {pz:.3f}), m={self.mass:.4g}, q={self.charge})"
        )
