# partitioner

`partitioner` groups placed instances into partitions whose total bit size
stays within a limit. Each instance has a name, an x/y location and a bit
size. The partitioner tries to keep each partition spatially compact, so
that the routing inside it stays short.

## Modules

- `partitioner.geom` has `Point2D` and `BoundingBox`. Both are frozen
  dataclasses. `BoundingBox.from_coords(min_x, min_y, max_x, max_y)` builds a
  box from its coordinates, and `BoundingBox.contains(point)` tests whether a
  point lies in the box, borders included.
- `partitioner.instance` has `Instance(name, location, bitsize)`. It offers
  `x` and `y` properties and `distance_to(other)`, which returns the
  Manhattan distance. Two instances are equal when every field matches. The
  hash uses only the name, and ordering compares the x coordinate. A
  negative bit size raises `ValueError`.
- `partitioner.grid` has `InstanceGrid(bin_size)`, which sorts instances into
  square cells. It keeps `bounds`, `max_bitsize`, `instance_count` and
  `total_bitsize` up to date as instances are added. Its methods are:
  - `add_instance`
  - `cell(point)`, which returns the cell coordinates of a point
  - `cell_instances(x, y)`
  - `instances_within(bbox)`
  - `instances()`, which iterates over every instance
  - `read_instances(path)`

  A `bin_size` that is not positive raises `ValueError`.
- `partitioner.partitioning` has `Partition` and `Partitioner(grid, bitsize_limit)`.
- `partitioner.viewer` draws partitions with matplotlib.
- `partitioner.cli` is the benchmark command.

## Instance files

An instance file has one instance per line, with the fields separated by
whitespace:

```
name x y bitsize
```

`InstanceGrid.read_instances` skips lines that do not parse. It also skips
lines with a negative bit size or a non-finite coordinate. It returns the
number of instances it added.

`partitioner.grid` can write test data in this format:

- `generate_random_instances(path, count, search_box, name_length, rng=None)`
  places instances uniformly inside `search_box`.
- `generate_gaussian_clusters(path, instance_count, cluster_count, area, stddev, name_length, rng=None)`
  scatters instances normally around random cluster centres. Samples that
  fall outside the interior of `area` are dropped.

Both functions give each instance a random lowercase name and a bit size from
0 to 8. Both return the number of lines written. Pass a `random.Random` as
`rng` if you need output you can reproduce.

## Partitioning strategies

| Method                | Strategy |
|-----------------------|----------|
| `partition_hashmap`   | Walks the grid cells in storage order and starts a new partition whenever the next instance would exceed the limit. |
| `partition_localized` | Sweeps horizontal bands left to right in steps of the grid's bin size. Leftover instances are then regrouped row by row. |
| `partition_merging`   | Divides the bounding area into near-square bins. It then moves instances from overfull bins into the nearest underfull ones. A warning is logged when no instance fits. |
| `partition_nearby`    | Builds chains by repeatedly taking the nearest unassigned instance until the limit is reached. |

Each run replaces the previous result. You can then query the partitioner:

- `partitions()` returns the partitions. It raises `RuntimeError` if none were made.
- `total_routing_length()` returns the sum of the partition routing distances.
- `average_bitsize()` returns the mean bit total per partition.
- `violating_partition_count()` returns the number of partitions over the limit.
- `missed_instance_count()` returns the number of grid instances that no partition holds.

A `Partition` supports `len`, iteration and `in`. It exposes `instances`,
`total_bitsize` and `center`, where `center` is the mean of the member
locations weighted by bit size. Its methods are:

- `add_instance(inst)`
- `remove_instance(inst)`, which returns whether the instance was a member
- `total_routing_distance()`, which sums, over all members, the distance from
  each member to its nearest other member

```python
import random

from partitioner.geom import BoundingBox
from partitioner.grid import InstanceGrid, generate_gaussian_clusters
from partitioner.partitioning import Partitioner

generate_gaussian_clusters(
    "instances.txt", 10_000, 10,
    BoundingBox.from_coords(0, 0, 100, 200), 10.0, 8, random.Random(1),
)
grid = InstanceGrid(10.0)
grid.read_instances("instances.txt")

p = Partitioner(grid, 1000)
p.partition_localized()
print(len(p.partitions()), p.total_routing_length())
```

## Plotting

`plot_partitions(grid, partitions, ax=None)` in `partitioner.viewer` draws
every grid instance in white. It then draws each partition in its own colour
and writes the grid bounds in the lower-left corner. When no axes is given,
it creates a new `matplotlib.figure.Figure`. It returns the axes it drew on.
The colours come from a repeating palette of ten; `partition_color(index)`
returns the colour for a partition index.

## Benchmark command

```
partitioner [--instances N] [--limit BITS] [--output FILE] [--seed SEED] [--no-show]
```

The command first writes clustered instances (10 clusters in a 100 × 200
area) to `FILE`. If `--output` is not given, the file is
`outfile<N>.txt` in the current directory. The defaults are 100000
instances and a limit of 1000 bits.

The command then loads the file into grids with bin sizes 10 and 1. It runs
the strategies and prints a Markdown table with the runtime and the routing
length of each run. Unless `--no-show` is given, it then opens one
matplotlib window per run.

You can also call `run_benchmark(instance_count, bitsize_limit, path, rng)`
from Python. It returns the results as a list instead of printing them.

## What it does not do

- Partitions are not saved. The benchmark keeps only the generated instance
  file.
- `partition_nearby` and `Partition.total_routing_distance` compare every
  pair of instances. They become slow at the default benchmark size.