"""Drawing of grid instances coloured by the partition that holds them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .geom import BoundingBox
from .grid import InstanceGrid
from .partitioning import Partition

# Ten distinct colours, reused cyclically when there are more partitions.
_PALETTE: tuple[str, ...] = (
    "#ff0000",  # red
    "#0000ff",  # blue
    "#00ff00",  # green
    "#ff00ff",  # magenta
    "#808000",  # dark yellow
    "#00ffff",  # cyan
    "#800000",  # dark red
    "#008000",  # dark green
    "#000080",  # dark blue
    "#000000",  # black
)

_MARKER_SIZE = 9.0
_UNASSIGNED_COLOR = "white"
_BACKGROUND = "lightgray"
_LABEL_COLOR = "blue"


def partition_color(index: int) -> str:
    """Return the colour used for the partition at ``index``."""
    return _PALETTE[index % len(_PALETTE)]


def _bounds_label(bounds: BoundingBox) -> str:
    return (
        f"X: [{bounds.ll.x:g}, {bounds.ur.x:g}], "
        f"Y: [{bounds.ll.y:g}, {bounds.ur.y:g}]"
    )


def _scatter(ax: Axes, instances: Iterable, color: str) -> None:
    members = list(instances)
    ax.scatter(
        [inst.x for inst in members],
        [inst.y for inst in members],
        s=_MARKER_SIZE,
        color=color,
    )


def plot_partitions(
    grid: InstanceGrid,
    partitions: Sequence[Partition],
    ax: Axes | None = None,
) -> Axes:
    """Draw every grid instance, then each partition in its own colour.

    Instances not held by any partition stay white. The grid bounds are
    written in the lower-left corner. Returns the axes drawn on.
    """
    if ax is None:
        ax = Figure().add_subplot()
    ax.set_facecolor(_BACKGROUND)
    _scatter(ax, grid.instances(), _UNASSIGNED_COLOR)
    for index, part in enumerate(partitions):
        _scatter(ax, part, partition_color(index))
    ax.set_aspect("equal", adjustable="datalim")
    ax.text(
        0.01,
        0.01,
        _bounds_label(grid.bounds),
        transform=ax.transAxes,
        color=_LABEL_COLOR,
    )
    return ax