import numpy
import pytest

from routeboxer.envelope import Bound, Bounds
from routeboxer.geodesy import Point

rects = Bounds(
    mins=[(0., 0.), (1., 0.), (5., 5.)],
    maxs=[(1., 1.), (2., 2.), (6., 7.)],
)


def test_bound_from_points():
    bound = Bound.from_points([(1., 2.), (-1., 5.), (0., -3.)])
    assert bound.south_west == Point(-1., -3.)
    assert bound.north_east == Point(1., 5.)
    assert bound.north_west == Point(-1., 5.)
    assert bound.south_east == Point(1., -3.)
    assert bound.center == Point(0., 1.)


def test_bound_from_no_points():
    with pytest.raises(ValueError):
        Bound.from_points([])


def test_bound_corners_must_be_ordered():
    with pytest.raises(ValueError):
        Bound((1., 0.), (0., 1.))


def test_extend_grows_monotonically():
    bound = Bound((0., 0.), (1., 1.))
    bound.extend((0.5, 0.5))
    assert bound.to_tuple() == (0., 0., 1., 1.)
    bound.extend((3., -2.))
    assert bound.to_tuple() == (0., -2., 3., 1.)


def test_contains_edges():
    bound = Bound((0., 0.), (1., 1.))
    assert bound.contains((0., 1.))
    assert bound.contains((0.5, 0.5))
    assert not bound.contains((1.5, 0.5))


def test_almost_equals_and_copy():
    bound = Bound((0., 0.), (1., 1.))
    other = bound.copy().extend((1.0001, 1.))
    assert other != bound
    assert other.almost_equals(bound, 0.001)
    assert not other.almost_equals(bound, 1e-6)


def test_bounds_indexing():
    assert len(rects) == 3
    assert rects[1] == Bound((1., 0.), (2., 2.))
    assert [b.to_tuple() for b in rects][2] == (5., 5., 6., 7.)


def test_contains_points():
    res = rects.contains_points([(0.5, 0.5), (1., 1.), (5.5, 8.)])
    assert res.shape == (3, 3)
    assert res[:, 0].tolist() == [True, False, False]
    assert res[:, 1].tolist() == [True, True, False]
    assert not res[:, 2].any()


def test_touching_rectangles_do_not_intersect():
    res = rects.intersects(rects)
    assert res.tolist() == [
        [True, False, False],
        [False, True, False],
        [False, False, True],
    ]
