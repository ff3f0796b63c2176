"""tracktoy: piecewise particle trajectories for a charged-particle tracking toy.

===================================================================================
OVERVIEW
===================================================================================
A trajectory is stitched from closed-form pieces, each valid over one time
range and derived from a single nominal magnetic field sample. tracktoy
provides the container for such trajectories and four operations on it:

    update_energy  - splice in a new piece after an externally decided
                     energy change, or stop the particle
    extend_z       - grow the trajectory toward a z plane, re-sampling the
                     field every tolerance step
    extend_traj    - the same stepping toward a target time
    z_time         - find the time the trajectory crosses a z plane

===================================================================================
ARCHITECTURE
===================================================================================

    tracktoy/
    ├── interfaces/     ParticleState, TimeRange, TrajectoryPiece, BFieldMap,
    │                   TrackingConfig, PlotArtifact
    ├── kinematics/     Helix, StraightLine
    ├── fields/         UniformBFieldMap, GradientBFieldMap
    ├── trajectory/     PiecewiseTrajectory + the four operations
    ├── visualization/  TrajectoryPlotter
    ├── utils/          paths, config.yml loading, rich logging
    └── cli/            `tracktoy` console script

===================================================================================
DATA FLOW
===================================================================================

    config.yml ──► TrackingConfig ──► BFieldMap ──► seed Helix
                                          │             │
                                          ▼             ▼
                         range_in_tolerance ◄── PiecewiseTrajectory
                                          │             │
                                          └──► extend_z / extend_traj
                                                        │
                            update_energy ◄─────────────┤
                                                        ▼
                                                     z_time

===================================================================================
USAGE EXAMPLE
===================================================================================

    from tracktoy.fields import UniformBFieldMap
    from tracktoy.interfaces import ParticleState, TimeRange
    from tracktoy.kinematics import Helix
    from tracktoy.trajectory import PiecewiseTrajectory, extend_z, z_time

    bfield = UniformBFieldMap([0.0, 0.0, 1.0], z_min=-10.0, z_max=1000.0)
    state = ParticleState([0, 0, 0], [100.0, 0.0, 50.0], 0.0, 105.658, 1)
    traj = PiecewiseTrajectory.from_state(
        state, bfield.field_at(state.position), TimeRange(0.0, 50.0), Helix
    )
    extend_z(traj, bfield, zmax=500.0, tol=1e-4)
    t_cross = z_time(traj, 0.0, 250.0)

===================================================================================
CONSTRAINTS & ASSUMPTIONS
===================================================================================

1. Units: mm, ns, MeV (momentum as p*c), Tesla, charge in e. Not enforced.
2. One trajectory is mutated by one thread at a time; field maps are read-only.
3. No energy-loss physics: new energies come from the caller.

===================================================================================
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__license__",
]
