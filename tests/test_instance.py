import pytest

from partitioner.geom import Point2D
from partitioner.instance import Instance


def make(name="a", x=0.0, y=0.0, bits=1):
    return Instance(name, Point2D(x, y), bits)


def test_coordinates_come_from_location():
    inst = make(x=3.5, y=-2.0)
    assert (inst.x, inst.y) == (3.5, -2.0)
    assert inst.location == Point2D(3.5, -2.0)


def test_manhattan_distance():
    a = make("a", 0.0, 0.0)
    b = make("b", 3.0, 4.0)
    assert a.distance_to(b) == 7.0


def test_distance_is_symmetric_and_zero_to_self():
    a = make("a", 1.25, -6.0)
    b = make("b", -2.5, 8.75)
    assert a.distance_to(b) == b.distance_to(a)
    assert a.distance_to(a) == 0.0


def test_equality_requires_all_fields():
    base = make("a", 1.0, 2.0, 3)
    assert base == make("a", 1.0, 2.0, 3)
    assert not base == make("a", 1.0, 2.0, 4)
    assert not base == make("b", 1.0, 2.0, 3)
    assert not base == make("a", 1.5, 2.0, 3)


def test_hash_uses_name_only():
    assert hash(make("same", 0.0, 0.0, 1)) == hash(make("same", 9.0, 9.0, 8))


def test_set_deduplicates_equal_instances():
    items = {make("a", 1.0, 1.0, 2), make("a", 1.0, 1.0, 2), make("b", 1.0, 1.0, 2)}
    assert len(items) == 2


def test_ordering_by_x():
    left = make("z", 1.0, 100.0)
    right = make("a", 2.0, -100.0)
    assert left < right
    assert sorted([right, left]) == [left, right]


def test_negative_bitsize_rejected():
    with pytest.raises(ValueError):
        make(bits=-1)