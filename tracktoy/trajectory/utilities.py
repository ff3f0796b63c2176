"""Operations that splice, extend and invert piecewise trajectories.

All four operations are generic over the piece type: new pieces are built
with ``type(piece)(state, bnom, trange)`` from the piece they continue.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..interfaces.fields import BFieldMap
from ..interfaces.states import ParticleState, TimeRange
from .piecewise import PiecewiseTrajectory

logger = logging.getLogger(__name__)

# Offset past the trajectory end returned when no z crossing is found (ns).
Z_TIME_SENTINEL_OFFSET = 1.0e-6
# Largest |z - z_target| (mm) accepted for an answer taken from a neighbouring piece.
Z_CROSSING_TOLERANCE = 1.0e-3


def _check_tolerance(tol: float) -> None:
    if not tol > 0.0:
        raise ValueError(f"Tolerance must be positive, got {tol}")


def update_energy(trajectory: PiecewiseTrajectory, time: float, new_energy: float) -> bool:
    """
    Apply an externally decided energy change at ``time``.

    If ``new_energy`` still exceeds the mass, a piece of the same type as the
    one at ``time`` is built from the position and direction there, with the
    momentum rescaled to the new energy and the *same* nominal field, and is
    appended with truncation. Otherwise the particle stops: the trajectory
    range is cut back to end at ``time``.

    Args:
        trajectory: Trajectory to modify in place
        time: Time of the energy change, inside ``trajectory.range``
        new_energy: New total energy (MeV)

    Returns:
        True if the particle continues, False if it was terminated.

    Raises:
        ValueError: If ``time`` lies outside the trajectory range or
            ``new_energy`` is not finite
    """
    trange = trajectory.range
    if not trange.contains(time):
        raise ValueError(f"Energy update time {time} outside trajectory range {trange!r}")
    if not math.isfinite(new_energy):
        raise ValueError(f"New energy must be finite, got {new_energy}")

    piece = trajectory.nearest_piece(time)
    mass = trajectory.mass
    if new_energy > mass:
        direction = piece.direction(time)
        position = piece.position(time)
        momentum = math.sqrt(new_energy * new_energy - mass * mass) * direction
        state = ParticleState(position, momentum, time, mass, piece.charge)
        new_piece = type(piece)(state, piece.bnom, TimeRange(time, trange.end))
        trajectory.append(new_piece, allow_truncate=True)
        logger.debug(
            "energy update at %.4f ns: %.4f -> %.4f MeV", time, piece.energy(time), new_energy
        )
        return True

    trajectory.set_range(TimeRange(trange.begin, time), allow_truncate=True)
    logger.debug("particle stopped at %.4f ns (energy %.4f MeV <= mass)", time, new_energy)
    return False


def extend_z(
    trajectory: PiecewiseTrajectory, bfield: BFieldMap, zmax: float, tol: float
) -> bool:
    """
    Extend ``trajectory`` with fresh field samples until it reaches ``zmax``.

    Starting at the last piece, the trajectory is advanced one tolerance step
    at a time. Each step samples the particle state at the step end, queries
    the field there and appends a new piece running to the trajectory end.
    Stepping stops when the target plane is reached, when the particle leaves
    the z envelope of the field map, when the step reaches the trajectory end,
    or when the step fails to advance. No piece is appended with its start
    outside the field map.

    Args:
        trajectory: Trajectory to extend in place
        bfield: Field map providing samples and the tolerance step
        zmax: Target z plane (mm)
        tol: Geometric tolerance (mm) for each piece

    Returns:
        True if the particle reached ``zmax``.
    """
    _check_tolerance(tol)
    tstart = trajectory.back.range.begin
    tend = trajectory.range.end
    pos = trajectory.position(tstart)
    while pos[2] < zmax and bfield.in_range(pos) and tstart < tend:
        back = trajectory.back
        tnext = bfield.range_in_tolerance(back, tstart, tol)
        if tnext <= tstart:
            logger.debug("tolerance step stalled at %.4f ns", tstart)
            break
        if tnext < tend:
            state = back.state(tnext)
            pos = state.position
            if not bfield.in_range(pos):
                logger.debug("left field map at z=%.3f mm, t=%.4f ns", pos[2], tnext)
                break
            bend = bfield.field_at(pos)
            trajectory.append(type(back)(state, bend, TimeRange(tnext, tend)))
            tstart = tnext
        else:
            pos = trajectory.position(tend)
            break
    return bool(pos[2] >= zmax)


def extend_traj(
    trajectory: PiecewiseTrajectory, bfield: BFieldMap, tmax: float, tol: float
) -> None:
    """
    Extend ``trajectory`` with fresh field samples until time ``tmax``.

    Same stepping as ``extend_z`` with a time target. Stops once the open end
    reaches ``tmax``, the step reaches the trajectory end, or the step fails
    to advance.
    """
    _check_tolerance(tol)
    tstart = trajectory.back.range.begin
    tend = trajectory.range.end
    while tstart < tmax:
        back = trajectory.back
        tnext = bfield.range_in_tolerance(back, tstart, tol)
        if tnext <= tstart or tnext >= tend:
            break
        state = back.state(tnext)
        bend = bfield.field_at(state.position)
        trajectory.append(type(back)(state, bend, TimeRange(tnext, tend)))
        tstart = tnext


@dataclass(frozen=True)
class ZCrossing:
    """
    Outcome of a z-inversion search.

    Attributes:
        time: Crossing time, or a time past the trajectory end when none found
        index: Index of the piece whose inverse produced ``time`` (-1 if none)
        iterations: Number of per-piece inversions performed
        found: True when ``time`` is a crossing inside the trajectory range
    """

    time: float
    index: int
    iterations: int
    found: bool


def z_crossing(trajectory: PiecewiseTrajectory, t_hint: float, z_target: float) -> ZCrossing:
    """
    Find a time at or after ``t_hint`` where the trajectory crosses ``z_target``.

    The search first scans forward from the piece holding ``t_hint`` to the
    first piece whose local velocity at its begin points toward the target
    plane. It then alternates between the per-piece inverse ``z_time`` and
    ``nearest_index`` until the piece index settles, falls into a two-cycle,
    leaves the trajectory range, or the number of inversions reaches the
    number of pieces.

    A backward or non-finite answer is replaced by the sentinel
    ``trajectory.range.end + Z_TIME_SENTINEL_OFFSET``. So is an answer inside
    the range that falls on another piece than the one that produced it,
    unless the trajectory there is within ``Z_CROSSING_TOLERANCE`` of the
    plane. This covers the single inversion made when no piece moves toward
    the target, and searches stopped by the two-cycle or piece-count caps.
    """
    trange = trajectory.range
    sentinel = trange.end + Z_TIME_SENTINEL_OFFSET
    npieces = len(trajectory)
    if t_hint > trange.end:
        return ZCrossing(sentinel, -1, 0, False)

    index = trajectory.nearest_index(t_hint)
    while index < npieces:
        piece = trajectory.piece(index)
        tbegin = piece.range.begin
        vz = piece.velocity(tbegin)[2]
        if vz != 0.0 and (z_target - piece.position(tbegin)[2]) / vz > 0.0:
            break
        index += 1

    if index == npieces:
        # no piece moves toward the target: one inversion from the last piece
        index = npieces - 1
        t_star = trajectory.piece(index).z_time(z_target)
        iterations = 1
        logger.debug("z search for %.3f mm found no forward piece", z_target)
    else:
        iterations = 0
        prev = prev_prev = index
        while True:
            iterations += 1
            t_star = trajectory.piece(index).z_time(z_target)
            prev_prev, prev = prev, index
            if not math.isfinite(t_star):
                break
            index = trajectory.nearest_index(t_star)
            if not (
                t_star < trange.end
                and index != prev
                and index != prev_prev
                and iterations < npieces
            ):
                break
        index = prev
        logger.debug(
            "z search for %.3f mm stopped after %d inversion(s) at t=%.4f ns",
            z_target,
            iterations,
            t_star,
        )

    if not math.isfinite(t_star) or t_star < t_hint:
        return ZCrossing(sentinel, index, iterations, False)
    if t_star > trange.end:
        return ZCrossing(t_star, index, iterations, False)
    # the answer must lie on the piece that produced it, or on the plane
    if (
        trajectory.nearest_index(t_star) != index
        and abs(trajectory.position(t_star)[2] - z_target) > Z_CROSSING_TOLERANCE
    ):
        logger.debug(
            "z search for %.3f mm: t=%.4f ns from piece %d is not a crossing",
            z_target,
            t_star,
            index,
        )
        return ZCrossing(sentinel, index, iterations, False)
    return ZCrossing(t_star, index, iterations, True)


def z_time(trajectory: PiecewiseTrajectory, t_hint: float, z_target: float) -> float:
    """Time at which ``trajectory`` crosses ``z_target``, searching from ``t_hint``.

    Returns a value greater than ``trajectory.range.end`` when no crossing is
    found.
    """
    return z_crossing(trajectory, t_hint, z_target).time
