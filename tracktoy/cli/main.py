"""Propagate one configured particle through its field map and report the pieces."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np
from rich.console import Console
from rich.table import Table

from ..trajectory import (
    PiecewiseTrajectory,
    extend_z,
    update_energy,
    z_crossing,
)
from ..utils.config import build_field_map, build_trajectory, load_config
from ..utils.console import configure_logging, console as default_console
from ..visualization import TrajectoryPlotter


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yml (defaults to the project root copy).",
    )
    parser.add_argument(
        "--zmax", type=float, default=None, help="Target z plane in mm (overrides config)."
    )
    parser.add_argument(
        "--tol", type=float, default=None, help="Piece tolerance in mm (overrides config)."
    )
    parser.add_argument(
        "--energy-loss",
        type=float,
        default=None,
        help="Energy in MeV removed from the particle at --loss-time.",
    )
    parser.add_argument(
        "--loss-time",
        type=float,
        default=None,
        help="Time in ns of the energy loss; defaults to the trajectory midpoint.",
    )
    parser.add_argument(
        "--z-target",
        type=float,
        default=None,
        help="Report the time the trajectory crosses this z plane (mm).",
    )
    parser.add_argument(
        "--plot",
        default=None,
        help="Save a trajectory figure here (relative paths land in the configured plot directory).",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show debug logging from the core."
    )
    return parser.parse_args(argv)


def _piece_table(trajectory: PiecewiseTrajectory) -> Table:
    table = Table(title=f"{len(trajectory)} piece(s)")
    table.add_column("#", justify="right")
    table.add_column("begin [ns]", justify="right")
    table.add_column("end [ns]", justify="right")
    table.add_column("z start [mm]", justify="right")
    table.add_column("|B| [T]", justify="right")
    table.add_column("E [MeV]", justify="right")
    for index, piece in enumerate(trajectory):
        tbegin = piece.range.begin
        table.add_row(
            str(index),
            f"{tbegin:.4f}",
            f"{piece.range.end:.4f}",
            f"{piece.position(tbegin)[2]:.3f}",
            f"{np.linalg.norm(piece.bnom):.5f}",
            f"{piece.energy(tbegin):.4f}",
        )
    return table


def run(args: argparse.Namespace, console: Console) -> int:
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 1

    tol = args.tol if args.tol is not None else config.tolerance
    zmax = args.zmax if args.zmax is not None else config.zmax
    if tol <= 0.0:
        console.print(f"[red]Tolerance must be positive, got {tol}[/red]")
        return 1

    bfield = build_field_map(config)
    trajectory = build_trajectory(config, bfield)
    reached = extend_z(trajectory, bfield, zmax, tol)
    status = "[green]reached[/green]" if reached else "[yellow]did not reach[/yellow]"
    console.print(f"Particle {status} z = {zmax:.3f} mm")

    if args.energy_loss is not None:
        tloss = args.loss_time if args.loss_time is not None else trajectory.range.mid
        if not trajectory.range.contains(tloss):
            console.print(
                f"[red]Loss time {tloss} outside trajectory range {trajectory.range!r}[/red]"
            )
            return 1
        new_energy = trajectory.energy(tloss) - args.energy_loss
        if update_energy(trajectory, tloss, new_energy):
            console.print(f"Energy set to {new_energy:.4f} MeV at t = {tloss:.4f} ns")
        else:
            console.print(f"[yellow]Particle stopped at t = {tloss:.4f} ns[/yellow]")

    console.print(_piece_table(trajectory))

    if args.z_target is not None:
        crossing = z_crossing(trajectory, trajectory.range.begin, args.z_target)
        if crossing.found:
            console.print(
                f"Crosses z = {args.z_target:.3f} mm at t = {crossing.time:.4f} ns "
                f"(piece {crossing.index}, {crossing.iterations} inversion(s))"
            )
        else:
            console.print(f"[yellow]No crossing of z = {args.z_target:.3f} mm found[/yellow]")

    if args.plot:
        artifact = TrajectoryPlotter(plot_root=config.plot_dir).plot(
            trajectory, output_path=Path(args.plot)
        )
        console.print(f"Saved trajectory figure to {artifact.path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return run(args, default_console)


if __name__ == "__main__":
    raise SystemExit(main())
