"""Concrete analytic trajectory pieces."""

from .helix import Helix
from .line import StraightLine

__all__ = ["Helix", "StraightLine"]
