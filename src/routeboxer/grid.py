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
Latitude/longitude grid laid over a route.

The grid is anchored at the center of the route's bounding box. Grid lines
are placed every `distance` kilometers along rhumb lines going north, south,
east and west from the center, until they extend one full cell beyond the
bounding box on every side.

A cell is addressed by ``(x, y)``: `x` indexes longitude lines (columns, west
to east) and `y` latitude lines (rows, south to north). Cell ``(x, y)`` spans
``lng_lines[x] <= lng < lng_lines[x+1]`` and
``lat_lines[y] <= lat < lat_lines[y+1]``; a point lying on a grid line
belongs to the cell whose lower or left edge is that line.
'''
import itertools
import logging
import math

import numpy

from .envelope import Bound
from .geodesy import EARTH_RADIUS_KM, rhumb_destination

logger = logging.getLogger(__name__)

LNG = 0
LAT = 1


def _outward(center, bearing, distance, axis):
    """
    Yield grid line coordinates outward from `center` along `bearing`.

    Longitudes are unwrapped so that the lines stay strictly monotonic across
    the antimeridian. Latitudes stop at the pole, the last line being clamped
    to it.
    """
    sign = 1 if bearing in (0., 90.) else -1
    previous = center[axis]
    for i in itertools.count(1):
        if axis == LAT:
            raw = center.lat + sign * math.degrees(distance * i / EARTH_RADIUS_KM)
            if abs(raw) >= 90.:
                if abs(previous) < 90.:
                    yield math.copysign(90., raw)
                return
        value = rhumb_destination(center, bearing, distance * i)[axis]
        while axis == LNG and (value - previous) * sign <= 0:
            value += sign * 360.
        yield value
        previous = value


def _axis_lines(center, low, high, distance, axis):
    """
    Grid lines along one axis, in increasing order.

    Toward the high side, growth stops once two lines lie strictly beyond
    `high`: the cell holding `high` plus one cell of margin. Toward the low
    side it stops once a line at or below `low` is followed by one more.
    """
    ascending, descending = (90., 270.) if axis == LNG else (0., 180.)

    upper = [center[axis]]
    for line in _outward(center, ascending, distance, axis):
        upper.append(line)
        if upper[-2] > high:
            break

    lower = [center[axis]]
    for line in _outward(center, descending, distance, axis):
        lower.append(line)
        if lower[-2] <= low:
            break

    return numpy.array(lower[:0:-1] + upper)


def _scan(lines, value, index):
    """
    Walk from cell `index` to the cell of `value` on one axis.

    Consecutive route vertices are usually close, so starting from a known
    cell is cheaper than locating from scratch. Indices are clamped to the
    grid.
    """
    last = len(lines) - 2
    index = min(max(index, 0), last)
    while index < last and lines[index + 1] <= value:
        index += 1
    while index > 0 and lines[index] > value:
        index -= 1
    return index


class Grid():
    """
    Rectilinear grid of latitude and longitude lines.

    Args:
        lng_lines (array): strictly increasing longitude lines.
        lat_lines (array): strictly increasing latitude lines.

    Attributes:
        lng_lines (1d-float-array): longitude of each west-east boundary.
        lat_lines (1d-float-array): latitude of each south-north boundary.
    """
    def __init__(self, lng_lines, lat_lines):
        self.lng_lines = numpy.asarray(lng_lines, dtype=float)
        self.lat_lines = numpy.asarray(lat_lines, dtype=float)
        for name, lines in (("Longitude", self.lng_lines),
                            ("Latitude", self.lat_lines)):
            if len(lines) < 2 or not (numpy.diff(lines) > 0).all():
                raise ValueError(
                    "{} grid lines must be at least 2 and strictly "
                    "increasing".format(name)
                )

    @classmethod
    def build(cls, route, distance):
        """
        Lay a grid of `distance` km cells over `route`.

        Args:
            route (sequence of Point): the route vertices.
            distance (float): cell side in kilometers, must be positive.
        """
        if not distance > 0 or not math.isfinite(distance):
            raise ValueError(
                "Distance must be a positive number of kilometers, got {}"
                .format(distance)
            )
        bound = Bound.from_points(route)
        center = bound.center
        grid = cls(
            _axis_lines(center, bound.west, bound.east, distance, LNG),
            _axis_lines(center, bound.south, bound.north, distance, LAT),
        )
        logger.debug("Built %dx%d grid of %s km cells around %s",
                     grid.shape[0], grid.shape[1], distance, bound)
        return grid

    @property
    def shape(self):
        """(number of columns, number of rows)."""
        return (len(self.lng_lines) - 1, len(self.lat_lines) - 1)

    @property
    def min_cell_size(self):
        """Smallest cell side, in degrees, over both axes."""
        return min(numpy.diff(self.lng_lines).min(),
                   numpy.diff(self.lat_lines).min())

    def locate(self, point):
        """Cell containing `point`, searching the whole grid."""
        x = numpy.searchsorted(self.lng_lines, point[0], side="right") - 1
        y = numpy.searchsorted(self.lat_lines, point[1], side="right") - 1
        return (_scan(self.lng_lines, point[0], int(x)),
                _scan(self.lat_lines, point[1], int(y)))

    def locate_from_hint(self, point, hint):
        """Cell containing `point`, searching outward from cell `hint`."""
        return (_scan(self.lng_lines, point[0], hint[0]),
                _scan(self.lat_lines, point[1], hint[1]))

    def column_from_hint(self, lng, hint):
        """Column containing longitude `lng`, searching from column `hint`."""
        return _scan(self.lng_lines, lng, hint)

    def cell_bounds(self, cell):
        x, y = cell
        return Bound((self.lng_lines[x], self.lat_lines[y]),
                     (self.lng_lines[x + 1], self.lat_lines[y + 1]))
