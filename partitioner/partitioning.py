"""Grouping grid instances into partitions whose bit totals respect a limit."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator

from .geom import BoundingBox, Point2D
from .grid import InstanceGrid
from .instance import Instance

logger = logging.getLogger(__name__)


def _mean_location(instances: Iterable[Instance]) -> Point2D:
    points = [inst.location for inst in instances]
    return Point2D(
        sum(p.x for p in points) / len(points),
        sum(p.y for p in points) / len(points),
    )


def _weighted_location(instances: Iterable[Instance]) -> Point2D:
    members = list(instances)
    weight = sum(inst.bitsize for inst in members)
    if weight == 0:
        return _mean_location(members)
    return Point2D(
        sum(inst.x * inst.bitsize for inst in members) / weight,
        sum(inst.y * inst.bitsize for inst in members) / weight,
    )


class Partition:
    """A set of instances with their summed bit size and weighted centre.

    The centre is the bit-size weighted mean of the member locations; when
    every member carries zero bits the plain mean is used instead.
    """

    def __init__(self, center: Point2D | None = None) -> None:
        self._members: dict[Instance, Instance] = {}
        self.total_bitsize = 0
        self.center = center if center is not None else Point2D()

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Instance]:
        return iter(self._members)

    def __contains__(self, inst: object) -> bool:
        return inst in self._members

    def __repr__(self) -> str:
        return (
            f"Partition(size={len(self)}, total_bitsize={self.total_bitsize}, "
            f"center={self.center!r})"
        )

    @property
    def instances(self) -> tuple[Instance, ...]:
        """The member instances in insertion order."""
        return tuple(self._members)

    def add_instance(self, inst: Instance) -> None:
        """Add an instance, its bits, and shift the centre towards it."""
        self._members.setdefault(inst, inst)
        self.total_bitsize += inst.bitsize
        if len(self._members) == 1:
            self.center = inst.location
            return
        total = self.total_bitsize
        if total == 0:
            self.center = _mean_location(self._members)
            return
        previous = total - inst.bitsize
        self.center = Point2D(
            (self.center.x * previous + inst.x * inst.bitsize) / total,
            (self.center.y * previous + inst.y * inst.bitsize) / total,
        )

    def remove_instance(self, inst: Instance) -> bool:
        """Remove an instance if present and recompute the centre.

        Returns True if the instance was a member.
        """
        stored = self._members.pop(inst, None)
        if stored is None:
            return False
        self.total_bitsize -= stored.bitsize
        if not self._members:
            self.center = Point2D()
        else:
            self.center = _weighted_location(self._members)
        return True

    def total_routing_distance(self) -> float:
        """Sum over members of the Manhattan distance to their nearest other member."""
        members = list(self._members)
        if len(members) < 2:
            return 0.0
        return sum(
            min(inst.distance_to(other) for j, other in enumerate(members) if j != i)
            for i, inst in enumerate(members)
        )


class Partitioner:
    """Splits the instances of a grid into partitions under a bit-size limit."""

    def __init__(self, grid: InstanceGrid, bitsize_limit: int) -> None:
        if bitsize_limit < 0:
            raise ValueError(f"bitsize_limit must be non-negative, got {bitsize_limit}")
        self.grid = grid
        self.bitsize_limit = bitsize_limit
        self._partitions: list[Partition] = []

    # -- shared helpers -------------------------------------------------

    @property
    def _fill_threshold(self) -> float:
        """Bit total at which a partition counts as full.

        When the largest instance exceeds the limit no partition is ever full.
        """
        if self.grid.max_bitsize > self.bitsize_limit:
            return math.inf
        return self.bitsize_limit - self.grid.max_bitsize

    def _partition_count(self) -> int:
        room = self.bitsize_limit - self.grid.max_bitsize
        if room <= 0:
            return 1
        return max(1, math.ceil(self.grid.total_bitsize / room))

    @staticmethod
    def _square_bins(count: int, width: float, height: float) -> tuple[int, int]:
        best = (1, count)
        best_ratio = math.inf
        for nx in range(1, count + 1):
            ny = -(-count // nx)
            ratio = abs(width / nx - height / ny)
            if ratio < best_ratio:
                best_ratio = ratio
                best = (nx, ny)
        return best

    # -- algorithms -----------------------------------------------------

    def partition_hashmap(self) -> None:
        """Fill partitions greedily in grid-cell order."""
        self._partitions = []
        current = Partition()
        for inst in self.grid.instances():
            if len(current) and current.total_bitsize + inst.bitsize > self.bitsize_limit:
                self._partitions.append(current)
                current = Partition()
            current.add_instance(inst)
        if len(current):
            self._partitions.append(current)

    def partition_localized(self) -> None:
        """Sweep horizontal bands left to right, then collect leftovers by rows."""
        self._partitions = []
        if self.bitsize_limit == 0:
            return
        bounds = self.grid.bounds
        min_x, min_y = bounds.ll.x, bounds.ll.y
        max_x, max_y = bounds.ur.x, bounds.ur.y
        width, height = max_x - min_x, max_y - min_y

        _, rows = self._square_bins(self._partition_count(), width, height)
        bin_w = self.grid.bin_size
        bin_h = height / rows
        threshold = self._fill_threshold
        limit = self.bitsize_limit

        current = Partition()
        leftovers: dict[Instance, None] = {}
        for iy in range(rows):
            bottom = min_y + iy * bin_h
            top = max_y if iy == rows - 1 else bottom + bin_h
            cur_x = min_x
            while cur_x < max_x:
                right = min(cur_x + bin_w, max_x)
                box = BoundingBox.from_coords(cur_x, bottom, right, top)
                for inst in self.grid.instances_within(box):
                    if current.total_bitsize + inst.bitsize <= limit:
                        current.add_instance(inst)
                    if current.total_bitsize >= threshold:
                        self._partitions.append(current)
                        current = Partition()
                cur_x = right
            for inst in current:
                leftovers.setdefault(inst, None)
            current = Partition()

        if not leftovers:
            return

        rem_min_x = min(inst.x for inst in leftovers)
        rem_max_x = max(inst.x for inst in leftovers)
        rem_min_y = min(inst.y for inst in leftovers)
        rem_max_y = max(inst.y for inst in leftovers)

        handled: set[Instance] = set()
        cur_y = rem_min_y
        while cur_y < rem_max_y:
            top = min(cur_y + self.grid.bin_size, rem_max_y)
            box = BoundingBox.from_coords(rem_min_x, cur_y, rem_max_x, top)
            pending = [
                inst
                for inst in self.grid.instances_within(box)
                if inst in leftovers and inst not in handled
            ]
            for inst in pending:
                current.add_instance(inst)
                handled.add(inst)
                if current.total_bitsize >= threshold:
                    self._partitions.append(current)
                    current = Partition()
            cur_y = top

        if len(current):
            self._partitions.append(current)

    def partition_merging(self) -> None:
        """Split the area into equal bins, then move instances out of overfull bins."""
        self._partitions = []
        if self.bitsize_limit == 0:
            return
        bounds = self.grid.bounds
        min_x, min_y = bounds.ll.x, bounds.ll.y
        max_x, max_y = bounds.ur.x, bounds.ur.y
        width, height = max_x - min_x, max_y - min_y

        cols, rows = self._square_bins(self._partition_count(), width, height)
        bin_w = width / cols
        bin_h = height / rows

        for ix in range(cols):
            left = min_x + ix * bin_w
            right = max_x if ix == cols - 1 else left + bin_w
            for iy in range(rows):
                bottom = min_y + iy * bin_h
                top = max_y if iy == rows - 1 else bottom + bin_h
                part = Partition(Point2D((left + right) / 2.0, (bottom + top) / 2.0))
                for inst in self.grid.instances_within(
                    BoundingBox.from_coords(left, bottom, right, top)
                ):
                    part.add_instance(inst)
                self._partitions.append(part)

        self._balance()

    def _balance(self) -> None:
        limit = self.bitsize_limit
        threshold = self._fill_threshold
        changed = True
        while changed:
            changed = False
            over = [p for p in self._partitions if p.total_bitsize > limit]
            under = [p for p in self._partitions if p.total_bitsize <= limit and p.total_bitsize < threshold]
            if not over or not under:
                break
            for source in over:
                target = under[0]
                best = math.inf
                for candidate in under:
                    d = math.hypot(
                        source.center.x - candidate.center.x,
                        source.center.y - candidate.center.y,
                    )
                    if d < best:
                        best = d
                        target = candidate
                tc = target.center
                ordered = sorted(source, key=lambda inst: math.hypot(inst.x - tc.x, inst.y - tc.y))
                movable = next(
                    (inst for inst in ordered if target.total_bitsize + inst.bitsize <= limit),
                    None,
                )
                if movable is not None:
                    target.add_instance(movable)
                    source.remove_instance(movable)
                    changed = True
                    break
                logger.warning("Could not move due to bit size limit")

    def partition_nearby(self) -> None:
        """Chain each partition by repeatedly taking the nearest unassigned instance."""
        self._partitions = []
        unassigned: dict[int, Instance] = dict(enumerate(self.grid.instances()))
        limit = self.bitsize_limit

        while unassigned:
            current = Partition()
            key, current_inst = next(iter(unassigned.items()))
            current.add_instance(current_inst)
            del unassigned[key]

            while current.total_bitsize < limit and unassigned:
                nearest_key = min(
                    unassigned, key=lambda k: current_inst.distance_to(unassigned[k])
                )
                nearest = unassigned[nearest_key]
                if current.total_bitsize + nearest.bitsize > limit:
                    break
                current.add_instance(nearest)
                del unassigned[nearest_key]
                current_inst = nearest

            if len(current):
                self._partitions.append(current)

    # -- results --------------------------------------------------------

    def partitions(self) -> list[Partition]:
        """Return the partitions made by the last run.

        Raises RuntimeError if no partitions have been made.
        """
        if not self._partitions:
            raise RuntimeError("No partition generated yet")
        return list(self._partitions)

    def total_routing_length(self) -> float:
        """Sum of the routing distances of all partitions."""
        return sum(p.total_routing_distance() for p in self._partitions)

    def average_bitsize(self) -> float:
        """Mean bit total per partition, or 0 when there are none."""
        if not self._partitions:
            return 0.0
        return sum(p.total_bitsize for p in self._partitions) / len(self._partitions)

    def violating_partition_count(self) -> int:
        """Number of partitions whose bit total exceeds the limit."""
        return sum(1 for p in self._partitions if p.total_bitsize > self.bitsize_limit)

    def missed_instance_count(self) -> int:
        """Number of distinct grid instances that no partition holds."""
        placed = {inst for p in self._partitions for inst in p}
        return sum(1 for inst in set(self.grid.instances()) if inst not in placed)