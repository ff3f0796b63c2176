"""Command-line driver for tracktoy.

Entry point: tracktoy

main.py:
    main(argv) → parses arguments, configures rich logging, runs the driver
    run(args, console) → loads config.yml, builds the field map and the seed
        helix, extends to the target plane, optionally applies an energy loss,
        reports pieces, z crossings and an optional figure
"""

from .main import main, run

__all__ = ["main", "run"]
