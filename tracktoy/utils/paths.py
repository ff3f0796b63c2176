"""Locations of the run configuration and of saved trajectory figures."""

from __future__ import annotations

from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DATA_ROOT = _PROJECT_ROOT / "data"

CONFIG_FILENAME = "config.yml"
DEFAULT_PLOT_SUBDIR = "plots"
PLOT_SUFFIX = ".png"


def project_root() -> Path:
    """Return the directory holding ``config.yml`` and ``pyproject.toml``."""

    return _PROJECT_ROOT


def default_config_path() -> Path:
    return _PROJECT_ROOT / CONFIG_FILENAME


def data_root() -> Path:
    """Return the ``data/`` directory generated artifacts are written under."""

    return _DATA_ROOT


def plot_dir(subdir: str = DEFAULT_PLOT_SUBDIR, root: Path | None = None) -> Path:
    """Directory for trajectory figures: ``<root>/<subdir>`` (root defaults to data/)."""

    return (root if root is not None else _DATA_ROOT) / subdir


def resolve_plot_path(
    output_path: Path | str, plot_root: Path | None = None, create: bool = False
) -> Path:
    """Resolve where a trajectory figure is saved.

    Absolute paths are kept. Relative paths are placed under ``plot_root``
    (default ``plot_dir()``). A path without a suffix gets ``.png``.

    Args:
        output_path: Requested figure path.
        plot_root: Directory for relative paths, e.g. ``TrackingConfig.plot_dir``.
        create: If ``True``, create the parent directories.

    Returns:
        Absolute ``Path`` of the figure file.
    """

    path = Path(output_path)
    if not path.is_absolute():
        path = (plot_root if plot_root is not None else plot_dir()) / path
    if path.suffix == "":
        path = path.with_suffix(PLOT_SUFFIX)
    if create:
        path.parent.mkdir(parents=True, exist_ok=True)
    return path
