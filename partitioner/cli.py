"""Benchmark command: generate clustered instances and compare partitioners."""

from __future__ import annotations

import argparse
import math
import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .geom import BoundingBox, Point2D
from .grid import InstanceGrid, StrPath, generate_gaussian_clusters
from .partitioning import Partition, Partitioner

DEFAULT_INSTANCE_COUNT = 100_000
DEFAULT_BITSIZE_LIMIT = 1000
CLUSTER_COUNT = 10
CLUSTER_STDDEV = 10.0
NAME_LENGTH = 8
AREA = BoundingBox(Point2D(0.0, 0.0), Point2D(100.0, 200.0))

COARSE_BIN = 10.0
MIDDLE_BIN = 2.0
FINE_BIN = 1.0

HEADER = (
    "| Algorithm | Grid    | Instances | Runtime (ms) | Route Len |\n"
    "|-----------|---------|-----------|--------------|-----------|"
)
FOOTER = "| | | | | |"

_MAX_WIDTH = 800
_MAX_HEIGHT = 600
_DPI = 100


@dataclass
class RunResult:
    """Outcome of one partitioning algorithm on one grid."""

    algorithm: str
    grid_type: str
    instance_count: int
    runtime_ms: float
    route_length: float
    grid: InstanceGrid
    partitions: list[Partition]

    def row(self) -> str:
        """The table row for this result."""
        return format_row(
            self.algorithm,
            self.grid_type,
            self.instance_count,
            self.runtime_ms,
            self.route_length,
        )


def format_row(
    algorithm: str,
    grid_type: str,
    instance_count: int,
    runtime_ms: float,
    route_length: float,
) -> str:
    """Format one line of the results table."""
    return (
        f"| {algorithm} | {grid_type} | {instance_count} | "
        f"{runtime_ms:g} | {route_length:g} |"
    )


def _runs(
    coarse: InstanceGrid, fine: InstanceGrid
) -> list[tuple[str, InstanceGrid, str, Callable[[Partitioner], None]]]:
    return [
        ("FINE  ", fine, "HASHMAP ", Partitioner.partition_hashmap),
        ("FINE  ", fine, "LOCALIZE", Partitioner.partition_localized),
        ("COARSE", coarse, "LOCALIZE", Partitioner.partition_localized),
        (" N/A  ", coarse, "MERGING ", Partitioner.partition_merging),
        (" N/A  ", coarse, "NEARBY  ", Partitioner.partition_nearby),
    ]


def run_benchmark(
    instance_count: int = DEFAULT_INSTANCE_COUNT,
    bitsize_limit: int = DEFAULT_BITSIZE_LIMIT,
    path: StrPath | None = None,
    rng: random.Random | None = None,
) -> list[RunResult]:
    """Generate clustered instances, load them into grids and time each algorithm."""
    if path is None:
        path = f"outfile{instance_count}.txt"
    generate_gaussian_clusters(
        path, instance_count, CLUSTER_COUNT, AREA, CLUSTER_STDDEV, NAME_LENGTH, rng
    )
    coarse = InstanceGrid(COARSE_BIN)
    middle = InstanceGrid(MIDDLE_BIN)
    fine = InstanceGrid(FINE_BIN)
    for grid in (coarse, fine, middle):
        grid.read_instances(path)

    results: list[RunResult] = []
    for grid_type, grid, algorithm, method in _runs(coarse, fine):
        partitioner = Partitioner(grid, bitsize_limit)
        start = time.perf_counter()
        method(partitioner)
        runtime_ms = (time.perf_counter() - start) * 1000.0
        partitions = partitioner.partitions()
        results.append(
            RunResult(
                algorithm=algorithm,
                grid_type=grid_type,
                instance_count=instance_count,
                runtime_ms=runtime_ms,
                route_length=partitioner.total_routing_length(),
                grid=grid,
                partitions=partitions,
            )
        )
    return results


def _show(results: Sequence[RunResult]) -> None:
    import matplotlib.pyplot as plt

    from .viewer import plot_partitions

    width, height = _MAX_WIDTH, _MAX_HEIGHT
    for result in results:
        ur = result.grid.bounds.ur
        width = math.ceil(min(float(width), ur.x * 4))
        height = math.ceil(min(float(height), ur.y * 4))
        fig = plt.figure(figsize=(max(width, 1) / _DPI, max(height, 1) / _DPI), dpi=_DPI)
        plot_partitions(result.grid, result.partitions, fig.add_subplot())
        fig.canvas.manager.set_window_title(
            f"Dots - {result.algorithm} - {result.grid_type} - {result.instance_count}"
        )
    plt.show()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="partitioner",
        description="Compare instance partitioning algorithms on clustered data.",
    )
    parser.add_argument(
        "--instances", type=int, default=DEFAULT_INSTANCE_COUNT,
        help="number of instances to generate",
    )
    parser.add_argument(
        "--limit", type=int, default=DEFAULT_BITSIZE_LIMIT,
        help="bit-size limit per partition",
    )
    parser.add_argument("--output", help="file to write generated instances to")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument(
        "--no-show", action="store_true", help="print the table without drawing"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark, print the results table and draw each partitioning."""
    args = _parser().parse_args(argv)
    if args.instances < 0:
        raise SystemExit("--instances must be non-negative")
    if args.limit <= 0:
        raise SystemExit("--limit must be positive")
    rng = random.Random(args.seed)
    print(HEADER)
    results = run_benchmark(args.instances, args.limit, args.output, rng)
    for result in results:
        print(result.row())
    print(FOOTER)
    if not args.no_show:
        _show(results)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())