import matplotlib

matplotlib.use("Agg")

import random

import pytest

from partitioner.cli import HEADER, FOOTER, format_row, main, run_benchmark
from partitioner.partitioning import Partitioner


def test_format_row_layout():
    assert format_row("HASHMAP ", "FINE  ", 100, 1.5, 2.25) == (
        "| HASHMAP  | FINE   | 100 | 1.5 | 2.25 |"
    )


def test_format_row_fields_in_order():
    row = format_row("NEARBY  ", " N/A  ", 7, 3.0, 0.0)
    fields = [f.strip() for f in row.strip("|").split("|")]
    assert fields == ["NEARBY", "N/A", "7", "3", "0"]


@pytest.fixture
def results(tmp_path):
    return run_benchmark(300, 100, tmp_path / "inst.txt", random.Random(5))


def test_benchmark_runs_in_source_order(results):
    assert [(r.algorithm.strip(), r.grid_type.strip()) for r in results] == [
        ("HASHMAP", "FINE"),
        ("LOCALIZE", "FINE"),
        ("LOCALIZE", "COARSE"),
        ("MERGING", "N/A"),
        ("NEARBY", "N/A"),
    ]


def test_benchmark_writes_instance_file(tmp_path):
    path = tmp_path / "inst.txt"
    results = run_benchmark(120, 100, path, random.Random(2))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert 0 < len(lines) <= 120
    assert results[0].grid.instance_count == len(lines)
    assert all(r.instance_count == 120 for r in results)


def test_route_length_matches_partitions(results):
    for result in results:
        expected = sum(p.total_routing_distance() for p in result.partitions)
        assert result.route_length == pytest.approx(expected)
        assert result.runtime_ms >= 0


def test_hashmap_covers_grid_within_limit(results):
    hashmap = results[0]
    placed = sum(len(p) for p in hashmap.partitions)
    assert placed == hashmap.grid.instance_count
    assert all(p.total_bitsize <= 100 for p in hashmap.partitions)


def test_nearby_matches_direct_run(results):
    nearby = results[4]
    direct = Partitioner(nearby.grid, 100)
    direct.partition_nearby()
    assert direct.missed_instance_count() == 0
    assert sum(len(p) for p in nearby.partitions) == nearby.grid.instance_count


def test_main_prints_table(tmp_path, capsys):
    path = tmp_path / "out.txt"
    code = main(["--instances", "80", "--seed", "1", "--output", str(path), "--no-show"])
    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert lines[:2] == HEADER.splitlines()
    assert lines[-1] == FOOTER
    assert len(lines) == 2 + 5 + 1
    assert all(line.startswith("| ") and line.endswith(" |") for line in lines[2:7])


def test_main_rejects_zero_limit(tmp_path):
    with pytest.raises(SystemExit):
        main(["--limit", "0", "--output", str(tmp_path / "x.txt"), "--no-show"])