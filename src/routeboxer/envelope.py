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
Axis-aligned latitude/longitude rectangles.

:class:`Bound` is a single mutable rectangle, used as an accumulator while
cells are merged into boxes. :class:`Bounds` is an immutable array of
rectangles whose queries are vectorized over both rectangles and points.
'''
import numpy
import shapely.geometry

from .geodesy import Point


class Bound():
    """
    Rectangle between a south-west and a north-east corner.

    Args:
        south_west (Point): lowest longitude and latitude.
        north_east (Point): highest longitude and latitude.
    """
    __slots__ = ('west', 'south', 'east', 'north')

    def __init__(self, south_west, north_east):
        self.west, self.south = float(south_west[0]), float(south_west[1])
        self.east, self.north = float(north_east[0]), float(north_east[1])
        if self.west > self.east or self.south > self.north:
            raise ValueError(
                "South-west corner {} is not below and left of north-east "
                "corner {}".format(tuple(south_west), tuple(north_east))
            )

    @classmethod
    def from_points(cls, points):
        """Smallest rectangle containing all of `points`."""
        points = iter(points)
        try:
            first = next(points)
        except StopIteration:
            raise ValueError("Cannot bound an empty set of points") from None
        bound = cls(first, first)
        for point in points:
            bound.extend(point)
        return bound

    def __repr__(self):
        return "Bound(west={}, south={}, east={}, north={})".format(
            self.west, self.south, self.east, self.north)

    def __eq__(self, other):
        if not isinstance(other, Bound):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    # Mutable accumulator, not hashable.
    __hash__ = None

    def to_tuple(self):
        """(west, south, east, north), the shapely bounds order."""
        return (self.west, self.south, self.east, self.north)

    def copy(self):
        return Bound(self.south_west, self.north_east)

    @property
    def south_west(self):
        return Point(self.west, self.south)

    @property
    def north_east(self):
        return Point(self.east, self.north)

    @property
    def north_west(self):
        return Point(self.west, self.north)

    @property
    def south_east(self):
        return Point(self.east, self.south)

    @property
    def center(self):
        return Point((self.west + self.east) / 2,
                     (self.south + self.north) / 2)

    def extend(self, point):
        """Grow the rectangle just enough to contain `point`."""
        lng, lat = point
        self.west = min(self.west, lng)
        self.east = max(self.east, lng)
        self.south = min(self.south, lat)
        self.north = max(self.north, lat)
        return self

    def contains(self, point):
        lng, lat = point
        return (self.west <= lng <= self.east
                and self.south <= lat <= self.north)

    def almost_equals(self, other, tolerance):
        return all(abs(a - b) < tolerance
                   for a, b in zip(self.to_tuple(), other.to_tuple()))

    def to_polygon(self):
        """Shapely polygon of the rectangle."""
        return shapely.geometry.box(*self.to_tuple())

    def ring(self):
        """
        Closed ring of (lng, lat) pairs: north-west, north-east, south-east,
        south-west and back to north-west.
        """
        corners = [self.north_west, self.north_east,
                   self.south_east, self.south_west, self.north_west]
        return [[p.lng, p.lat] for p in corners]


class Bounds():
    """
    Vectorized array of rectangles.

    Args:
        mins (array): Nx2 array of (west, south) corners.
        maxs (array): Nx2 array of (east, north) corners.
    """
    def __init__(self, mins, maxs):
        mins = numpy.asarray(mins, dtype=float).reshape(-1, 2)
        maxs = numpy.asarray(maxs, dtype=float).reshape(-1, 2)
        if mins.shape != maxs.shape:
            raise ValueError("Mins and maxs must be of same shape")
        self.mins = mins
        self.maxs = maxs

    @classmethod
    def from_bounds(cls, bounds):
        arr = numpy.array([b.to_tuple() for b in bounds],
                          dtype=float).reshape(-1, 4)
        return cls(arr[:, :2], arr[:, 2:])

    def __len__(self):
        return self.mins.shape[0]

    def __getitem__(self, idx):
        return Bound(self.mins[idx], self.maxs[idx])

    def __iter__(self):
        return (self[i] for i in range(len(self)))

    def contains_points(self, points):
        """
        Args:
            points (array-like): Mx2 array of (lng, lat) pairs.

        Returns:
            NxM boolean array, True where rectangle i contains point j
            (edges included).
        """
        points = numpy.asarray(points, dtype=float).reshape(1, -1, 2)
        return (
            (self.mins[:, numpy.newaxis, :] <= points)
            & (points <= self.maxs[:, numpy.newaxis, :])
        ).all(axis=2)

    def intersects(self, other):
        """
        NxM boolean array, True where rectangle i of `self` and rectangle j
        of `other` share some interior.
        """
        return (
            (self.mins[:, numpy.newaxis, :] < other.maxs[numpy.newaxis, ...])
            & (self.maxs[:, numpy.newaxis, :] > other.mins[numpy.newaxis, ...])
        ).all(axis=2)
