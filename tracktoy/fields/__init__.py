"""Concrete magnetic field maps."""

from .gradient import GradientBFieldMap
from .uniform import UniformBFieldMap

__all__ = ["GradientBFieldMap", "UniformBFieldMap"]
