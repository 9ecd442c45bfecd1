import matplotlib

matplotlib.use("Agg")

import pytest
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure

from partitioner.geom import Point2D
from partitioner.grid import InstanceGrid
from partitioner.instance import Instance
from partitioner.partitioning import Partition
from partitioner.viewer import partition_color, plot_partitions


def _grid_and_partitions():
    grid = InstanceGrid(1.0)
    insts = [
        Instance("a", Point2D(0.0, 0.0), 2),
        Instance("b", Point2D(3.0, 1.0), 1),
        Instance("c", Point2D(5.0, 4.0), 3),
        Instance("d", Point2D(2.0, 6.0), 4),
    ]
    for inst in insts:
        grid.add_instance(inst)
    first, second = Partition(), Partition()
    first.add_instance(insts[0])
    first.add_instance(insts[1])
    second.add_instance(insts[2])
    return grid, [first, second], insts


def test_palette_first_colour_is_red():
    assert partition_color(0) == "#ff0000"


def test_palette_repeats_after_ten():
    assert [partition_color(i + 10) for i in range(10)] == [
        partition_color(i) for i in range(10)
    ]
    assert len({partition_color(i) for i in range(10)}) == 10


def test_one_collection_for_grid_and_each_partition():
    grid, parts, _ = _grid_and_partitions()
    ax = plot_partitions(grid, parts, Figure().add_subplot())
    assert len(ax.collections) == 1 + len(parts)


def test_grid_layer_holds_all_instances_in_white():
    grid, parts, insts = _grid_and_partitions()
    ax = plot_partitions(grid, parts, Figure().add_subplot())
    base = ax.collections[0]
    points = sorted(tuple(p) for p in base.get_offsets().tolist())
    assert points == sorted((i.x, i.y) for i in insts)
    assert tuple(base.get_facecolor()[0]) == pytest.approx(to_rgba("white"))


def test_partition_layers_use_palette_and_positions():
    grid, parts, _ = _grid_and_partitions()
    ax = plot_partitions(grid, parts, Figure().add_subplot())
    for index, part in enumerate(parts):
        layer = ax.collections[index + 1]
        points = sorted(tuple(p) for p in layer.get_offsets().tolist())
        assert points == sorted((i.x, i.y) for i in part)
        assert tuple(layer.get_facecolor()[0]) == pytest.approx(
            to_rgba(partition_color(index))
        )


def test_bounds_label_written():
    grid, parts, _ = _grid_and_partitions()
    ax = plot_partitions(grid, parts, Figure().add_subplot())
    labels = [t.get_text() for t in ax.texts]
    assert labels == ["X: [0, 5], Y: [0, 6]"]


def test_creates_axes_when_none_given():
    grid, parts, _ = _grid_and_partitions()
    ax = plot_partitions(grid, parts)
    assert ax.figure is not None
    assert len(ax.collections) == 3