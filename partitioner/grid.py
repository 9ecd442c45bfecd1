"""Spatial hash grid of instances, plus instance file reading and generation."""

from __future__ import annotations

import math
import random
import string
from collections.abc import Iterator
from os import PathLike
from typing import Union

from .geom import BoundingBox, Point2D
from .instance import Instance

StrPath = Union[str, "PathLike[str]"]

_MAX_GENERATED_BITSIZE = 8


class InstanceGrid:
    """Buckets instances into square cells of ``bin_size`` and tracks totals."""

    def __init__(self, bin_size: float) -> None:
        if not bin_size > 0:
            raise ValueError(f"bin_size must be positive, got {bin_size}")
        self.bin_size = float(bin_size)
        self.cells: dict[tuple[int, int], list[Instance]] = {}
        self.bounds = BoundingBox()
        self.max_bitsize = 0
        self.instance_count = 0
        self.total_bitsize = 0

    def add_instance(self, inst: Instance) -> None:
        """Insert an instance and update bounds and bit totals."""
        if self.instance_count == 0:
            self.bounds = BoundingBox(inst.location, inst.location)
            self.max_bitsize = inst.bitsize
            self.total_bitsize = inst.bitsize
        else:
            ll, ur = self.bounds.ll, self.bounds.ur
            self.bounds = BoundingBox.from_coords(
                min(ll.x, inst.x), min(ll.y, inst.y), max(ur.x, inst.x), max(ur.y, inst.y)
            )
            self.max_bitsize = max(self.max_bitsize, inst.bitsize)
            self.total_bitsize += inst.bitsize
        self.cells.setdefault(self.cell(inst.location), []).append(inst)
        self.instance_count += 1

    def cell(self, point: Point2D) -> tuple[int, int]:
        """Return the cell coordinates holding a point."""
        return math.floor(point.x / self.bin_size), math.floor(point.y / self.bin_size)

    def cell_instances(self, x: float, y: float) -> list[Instance]:
        """Return the instances in the cell containing (x, y)."""
        return list(self.cells.get(self.cell(Point2D(x, y)), ()))

    def instances_within(self, bbox: BoundingBox) -> list[Instance]:
        """Return every instance inside the box, borders included."""
        min_cx, min_cy = self.cell(bbox.ll)
        max_cx, max_cy = self.cell(bbox.ur)
        result: list[Instance] = []
        for cx in range(min_cx, max_cx + 1):
            for cy in range(min_cy, max_cy + 1):
                result.extend(
                    inst for inst in self.cells.get((cx, cy), ()) if bbox.contains(inst.location)
                )
        return result

    def instances(self) -> Iterator[Instance]:
        """Yield every instance, cell by cell."""
        for bucket in self.cells.values():
            yield from bucket

    def read_instances(self, path: StrPath) -> int:
        """Add instances from a file of ``name x y bitsize`` lines.

        Lines that do not parse are skipped. Returns the number added.
        """
        added = 0
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                inst = _parse_line(line)
                if inst is not None:
                    self.add_instance(inst)
                    added += 1
        return added


def _parse_line(line: str) -> Instance | None:
    fields = line.split()
    if len(fields) < 4:
        return None
    name, x_text, y_text, bits_text = fields[:4]
    try:
        x, y, bits = float(x_text), float(y_text), int(bits_text)
    except ValueError:
        return None
    if bits < 0 or not (math.isfinite(x) and math.isfinite(y)):
        return None
    return Instance(name, Point2D(x, y), bits)


def _random_name(rng: random.Random, length: int) -> str:
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(length))


def _format_line(name: str, x: float, y: float, bitsize: int) -> str:
    return f"{name} {x:g} {y:g} {bitsize}\n"


def generate_random_instances(
    path: StrPath,
    count: int,
    search_box: BoundingBox,
    name_length: int,
    rng: random.Random | None = None,
) -> int:
    """Write ``count`` uniformly placed random instances to a file.

    Returns the number of lines written.
    """
    rng = rng if rng is not None else random.Random()
    with open(path, "w", encoding="utf-8") as out:
        for _ in range(count):
            name = _random_name(rng, name_length)
            x = rng.uniform(search_box.ll.x, search_box.ur.x)
            y = rng.uniform(search_box.ll.y, search_box.ur.y)
            bitsize = rng.randint(0, _MAX_GENERATED_BITSIZE)
            out.write(_format_line(name, x, y, bitsize))
    return count


def generate_gaussian_clusters(
    path: StrPath,
    instance_count: int,
    cluster_count: int,
    area: BoundingBox,
    stddev: float,
    name_length: int,
    rng: random.Random | None = None,
) -> int:
    """Write instances scattered normally around random cluster centres.

    Samples falling outside the open interior of ``area`` are dropped.
    Returns the number of lines written.
    """
    if cluster_count < 1:
        raise ValueError(f"cluster_count must be at least 1, got {cluster_count}")
    rng = rng if rng is not None else random.Random()
    centers = [
        Point2D(rng.uniform(area.ll.x, area.ur.x), rng.uniform(area.ll.y, area.ur.y))
        for _ in range(cluster_count)
    ]
    written = 0
    with open(path, "w", encoding="utf-8") as out:
        for _ in range(instance_count):
            name = _random_name(rng, name_length)
            bitsize = rng.randint(0, _MAX_GENERATED_BITSIZE)
            center = rng.choice(centers)
            x = center.x + rng.gauss(0.0, stddev)
            y = center.y + rng.gauss(0.0, stddev)
            if area.ll.x < x < area.ur.x and area.ll.y < y < area.ur.y:
                out.write(_format_line(name, x, y, bitsize))
                written += 1
    return written