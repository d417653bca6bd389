import math

import pytest

from routeboxer.geodesy import EARTH_RADIUS_KM, Point, distance_to_latitude, \
    normalize_lng, rhumb_bearing, rhumb_destination, rhumb_distance

ONE_DEGREE_KM = EARTH_RADIUS_KM * math.pi / 180

pairs = [
    (Point(2.35, 48.85), Point(4.83, 45.76)),
    (Point(-73.98, 40.75), Point(-0.12, 51.5)),
    (Point(10., -33.), Point(-20., -35.5)),
    (Point(0., 0.), Point(0.3, 0.)),
]


def test_destination_north():
    dest = rhumb_destination(Point(0., 0.), 0., ONE_DEGREE_KM)
    assert dest.lat == pytest.approx(1.)
    assert dest.lng == pytest.approx(0., abs=1e-12)


def test_destination_east_keeps_latitude():
    dest = rhumb_destination(Point(0., 0.), 90., ONE_DEGREE_KM)
    assert dest.lat == 0.
    assert dest.lng == pytest.approx(1.)


def test_destination_east_is_longer_away_from_equator():
    dest = rhumb_destination(Point(0., 60.), 90., ONE_DEGREE_KM)
    assert dest.lat == pytest.approx(60.)
    assert dest.lng == pytest.approx(2.)


def test_destination_across_antimeridian():
    dest = rhumb_destination(Point(179.5, 0.), 90., ONE_DEGREE_KM)
    assert dest.lng == pytest.approx(-179.5)
    dest = rhumb_destination(Point(-179.5, 0.), 270., ONE_DEGREE_KM)
    assert dest.lng == pytest.approx(179.5)


def test_destination_reflects_over_pole():
    dest = rhumb_destination(Point(0., 89.5), 0., ONE_DEGREE_KM)
    assert dest.lat == pytest.approx(89.5)
    dest = rhumb_destination(Point(0., -89.5), 180., ONE_DEGREE_KM)
    assert dest.lat == pytest.approx(-89.5)


def test_normalize_lng():
    assert normalize_lng(0.) == 0.
    assert normalize_lng(180.) == 180.
    assert normalize_lng(-180.) == 180.
    assert normalize_lng(190.) == pytest.approx(-170.)
    assert normalize_lng(-190.) == pytest.approx(170.)
    assert normalize_lng(720. + 45.) == pytest.approx(45.)


@pytest.mark.parametrize("end, expected", [
    (Point(0., 1.), 0.),
    (Point(1., 0.), 90.),
    (Point(0., -1.), 180.),
    (Point(-1., 0.), 270.),
])
def test_bearing_cardinal(end, expected):
    assert rhumb_bearing(Point(0., 0.), end) == pytest.approx(expected)


def test_bearing_range():
    for start, end in pairs:
        for a, b in ((start, end), (end, start)):
            assert 0. <= rhumb_bearing(a, b) < 360.


def test_bearing_takes_short_way_round_antimeridian():
    assert rhumb_bearing(Point(179., 0.), Point(-179., 0.)) \
        == pytest.approx(90.)
    assert rhumb_bearing(Point(-179., 0.), Point(179., 0.)) \
        == pytest.approx(270.)


def test_distance_along_meridian():
    assert rhumb_distance(Point(5., 10.), Point(5., 11.)) \
        == pytest.approx(ONE_DEGREE_KM)


@pytest.mark.parametrize("start, end", pairs)
def test_destination_inverts_bearing_and_distance(start, end):
    dest = rhumb_destination(start, rhumb_bearing(start, end),
                             rhumb_distance(start, end))
    assert dest.lng == pytest.approx(end.lng, abs=1e-9)
    assert dest.lat == pytest.approx(end.lat, abs=1e-9)


@pytest.mark.parametrize("start, end", pairs[:3])
def test_distance_to_latitude(start, end):
    bearing = rhumb_bearing(start, end)
    target = (start.lat + end.lat) / 2
    dist = distance_to_latitude(start, bearing, target)
    assert dist > 0
    assert rhumb_destination(start, bearing, dist).lat \
        == pytest.approx(target)
