# Copyright (C) 2018 DataStorm
#
# This file is part of RouteBoxer.
#
# RouteBoxer is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# RouteBoxer is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Rhumb line primitives on a spherical Earth.

A rhumb line (loxodrome) keeps a constant compass bearing. In the Mercator
projection it is a straight line, so every computation below goes through the
isometric latitude::

    psi(lat) = log(tan(pi/4 + lat/2))

All angles are in degrees at the interface and distances are in kilometers.
'''
import collections
import math


EARTH_RADIUS_KM = 6378.137

# Latitude deltas below this value (radians, about 1mm) are treated as zero.
_MIN_DLAT = 1e-10
_MAX_LAT = math.pi / 2 - 1e-12

Point = collections.namedtuple("Point", "lng lat")
Point.__doc__ = "A (longitude, latitude) pair in degrees."


def _isometric(lat):
    # Poles sit at infinity in the Mercator projection.
    lat = max(-_MAX_LAT, min(_MAX_LAT, lat))
    return math.log(math.tan(lat / 2 + math.pi / 4))


def _isometric_delta(lat1, lat2):
    """Difference of isometric latitudes between two latitudes (radians)."""
    return _isometric(lat2) - _isometric(lat1)


def _stretch(dlat, lat1, lat2):
    """
    Ratio between the latitude change and the isometric latitude change.

    Along an east-west line the ratio degenerates to 0/0 and the limit,
    cos(lat1), is used instead.
    """
    if dlat == 0:
        return math.cos(lat1)
    return dlat / _isometric_delta(lat1, lat2)


def normalize_lng(lng):
    """Normalize a longitude in degrees into (-180, 180]."""
    lng = math.fmod(lng + 180., 360.)
    if lng <= 0:
        lng += 360.
    return lng - 180.


def rhumb_destination(origin, bearing, distance, radius=EARTH_RADIUS_KM):
    """
    Point reached travelling `distance` km from `origin` at constant bearing.

    Args:
        origin (Point): starting point.
        bearing (float): compass bearing in degrees, 0 is north.
        distance (float): distance travelled in kilometers.
        radius (float, optional): radius of the sphere in kilometers.

    Returns:
        Point: the destination. A latitude carried past a pole is reflected
        back across it and the longitude is normalized into (-180, 180].
    """
    delta = distance / radius
    lat1 = math.radians(origin[1])
    lng1 = math.radians(origin[0])
    theta = math.radians(bearing)

    dlat = delta * math.cos(theta)
    if abs(dlat) < _MIN_DLAT:
        dlat = 0.
    lat2 = lat1 + dlat

    if abs(lat2) > math.pi / 2:
        # Past the pole the isometric latitude is undefined, the reflected
        # latitude is the one that stays on the sphere.
        lat2 = math.copysign(math.pi, lat2) - lat2
        dlng = 0.
    else:
        dlng = delta * math.sin(theta) / _stretch(dlat, lat1, lat2)

    return Point(normalize_lng(math.degrees(lng1 + dlng)),
                 math.degrees(lat2))


def _shortest_dlng(lng1, lng2):
    """Longitude difference in radians, taking the short way round."""
    dlng = math.radians(lng2 - lng1)
    if abs(dlng) > math.pi:
        dlng -= math.copysign(2 * math.pi, dlng)
    return dlng


def rhumb_bearing(start, end):
    """Rhumb line bearing from `start` to `end`, in degrees in [0, 360)."""
    dlng = _shortest_dlng(start[0], end[0])
    dpsi = _isometric_delta(math.radians(start[1]), math.radians(end[1]))
    return math.degrees(math.atan2(dlng, dpsi)) % 360.


def rhumb_distance(start, end, radius=EARTH_RADIUS_KM):
    """Length in kilometers of the rhumb line from `start` to `end`."""
    lat1 = math.radians(start[1])
    lat2 = math.radians(end[1])
    dlat = lat2 - lat1
    if abs(dlat) < _MIN_DLAT:
        dlat = 0.
    q = _stretch(dlat, lat1, lat2)
    dlng = _shortest_dlng(start[0], end[0])
    return math.hypot(dlat, q * dlng) * radius


def distance_to_latitude(start, bearing, lat, radius=EARTH_RADIUS_KM):
    """
    Distance along the rhumb line from `start` at `bearing` to latitude `lat`.

    Undefined for east-west bearings, which never change latitude.
    """
    return (radius * (math.radians(lat) - math.radians(start[1]))
            / math.cos(math.radians(bearing)))
