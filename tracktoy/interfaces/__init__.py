"""Shared interfaces for the trajectory toolchain.

===================================================================================
OVERVIEW
===================================================================================
This package defines the contract between the parts of tracktoy:
  - Value types carried across piece boundaries (ParticleState, TimeRange)
  - Abstract base classes for analytic pieces and field maps
  - Dataclasses for configuration and plot results

Concrete pieces live in ``tracktoy.kinematics``, concrete field maps in
``tracktoy.fields``. The trajectory operations in ``tracktoy.trajectory`` only
talk to these interfaces, so any piece type with the same capability set can
be stitched into a PiecewiseTrajectory.

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

states.py:
    TimeRange      - frozen [begin, end] interval in ns
    ParticleState  - frozen (position, momentum, time, mass, charge) snapshot
    C_LIGHT, CBAR  - unit constants (mm/ns, MeV/(T*mm))

pieces.py:
    TrajectoryPiece (ABC) - closed-form motion over one range, one nominal field
      - Constructor: Piece(state, bnom, trange)
      - Methods: position, velocity, momentum, direction, state, z_time, with_range

fields.py:
    BFieldMap (ABC) - read-only field map
      - Methods: field_at(pos), z_min, z_max, range_in_tolerance(piece, t0, tol)

config.py:
    TrackingConfig - frozen configuration dataclass loaded from config.yml

visualization.py:
    TrajectoryVisualizer (Protocol), PlotArtifact

===================================================================================
UNITS
===================================================================================

length mm, time ns, momentum and energy MeV (momentum as p*c), field Tesla,
charge in units of e.

===================================================================================
"""

from .config import TrackingConfig
from .fields import BFieldMap
from .pieces import TrajectoryPiece
from .states import CBAR, C_LIGHT, ParticleState, TimeRange
from .visualization import PlotArtifact, TrajectoryVisualizer

__all__ = [
    "TrackingConfig",
    "BFieldMap",
    "TrajectoryPiece",
    "ParticleState",
    "TimeRange",
    "CBAR",
    "C_LIGHT",
    "PlotArtifact",
    "TrajectoryVisualizer",
]
