"""Shared utilities for paths, configuration and terminal output.

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

paths.py:
    project_root() → directory holding config.yml
    default_config_path() → <project_root>/config.yml
    data_root() → data/ directory for generated artifacts
    plot_dir(subdir, root) → figure directory, data/plots by default
    resolve_plot_path(path, plot_root) → absolute .png path for a figure

config.py:
    load_config(path=None) → TrackingConfig from YAML
    build_field_map(config) → UniformBFieldMap or GradientBFieldMap
    build_trajectory(config, bfield) → single-helix PiecewiseTrajectory

console.py:
    console → shared rich Console
    configure_logging(level) → installs a RichHandler on the tracktoy logger

===================================================================================
ERROR HANDLING
===================================================================================

FileNotFoundError:
    - config.yml missing → pass an explicit path or check project_root()

ValueError:
    - malformed vectors in config.yml (need exactly three components)
    - invalid tolerance, duration, mass or field envelope

===================================================================================
"""

from .config import build_field_map, build_trajectory, load_config
from .console import configure_logging, console
from .paths import (
    data_root,
    default_config_path,
    plot_dir,
    project_root,
    resolve_plot_path,
)

__all__ = [
    "project_root",
    "default_config_path",
    "data_root",
    "plot_dir",
    "resolve_plot_path",
    "load_config",
    "build_field_map",
    "build_trajectory",
    "configure_logging",
    "console",
]
