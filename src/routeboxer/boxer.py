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
Boxes covering the surroundings of a route.

The computation goes in three steps:
    1. a grid of `distance` km cells is laid over the route
       (:meth:`routeboxer.grid.Grid.build`),
    2. every cell the route passes through is marked, together with its eight
       neighbours (:meth:`RouteBoxer.find_intersecting_cells`),
    3. marked cells are merged into rectangles, once merging rows first and
       once merging columns first; the smaller set wins.

Any point within `distance` km of the route then lies in one of the boxes.
'''
import logging
import math

import numpy
import toolz

from . import geojson
from .envelope import Bound, Bounds
from .geodesy import Point, distance_to_latitude, rhumb_bearing, \
    rhumb_destination
from .grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = None


def as_route(vertices):
    """
    Validate `vertices` as a route.

    Returns:
        list of Point: the route, in order.
    """
    route = []
    for vertex in vertices:
        try:
            lng, lat = vertex
            point = Point(float(lng), float(lat))
        except (TypeError, ValueError):
            raise ValueError(
                "Route vertices must be (lng, lat) pairs, got {!r}"
                .format(vertex)
            ) from None
        if not (math.isfinite(point.lng) and math.isfinite(point.lat)):
            raise ValueError("Non finite route vertex {}".format(point))
        if abs(point.lat) > 90.:
            raise ValueError("Latitude out of [-90, 90] in {}".format(point))
        route.append(point)
    if not route:
        raise ValueError("route must contain at least one point")
    return route


class RouteBoxerResult(list):
    """List of :class:`Bound` covering a route."""

    def bounds(self):
        """Vectorized view of the boxes."""
        return Bounds.from_bounds(self)

    def contains(self, point):
        """True if `point` lies in one of the boxes."""
        return any(box.contains(point) for box in self)

    def contains_points(self, points):
        """Boolean array: which of the (lng, lat) `points` lie in a box."""
        points = numpy.asarray(points, dtype=float).reshape(-1, 2)
        if not self:
            return numpy.zeros(len(points), dtype=bool)
        return self.bounds().contains_points(points).any(axis=0)

    def to_geojson(self):
        return geojson.multipolygon(self)

    def to_shapely(self):
        return geojson.to_shapely(self)


class RouteBoxer():
    """
    One boxing computation over a route.

    An instance owns its grid, coverage grid and box accumulators. It is
    computed at most once: :meth:`boxes` memoizes its result.

    Args:
        vertices (sequence of (lng, lat)): the route, at least one vertex.
        distance (float): radius in kilometers around the route that the
            boxes must cover. It is also the side of the grid cells.
        tolerance (float, optional): maximum difference in degrees for two
            box edges to be considered equal when merging. Defaults to a
            quarter of the smallest grid cell side.

    Attributes:
        route (list of Point): the validated route.
        distance (float): radius around the route, in kilometers.
        grid (Grid): grid laid over the route.
        cells (2d-bool-array): coverage grid indexed by ``[x, y]``.
    """
    def __init__(self, vertices, distance, tolerance=DEFAULT_TOLERANCE):
        self.route = as_route(vertices)
        self.distance = distance
        self.grid = Grid.build(self.route, distance)
        self.cells = numpy.zeros(self.grid.shape, dtype=bool)
        if tolerance is None:
            tolerance = self.grid.min_cell_size / 4
        self.tolerance = tolerance
        self._traced = False
        self._result = None

    def boxes(self):
        """
        Boxes covering every point within `distance` km of the route.

        Returns:
            RouteBoxerResult: row-first or column-first merge, whichever has
            fewer boxes. Ties go to row-first.
        """
        if self._result is None:
            cells = self.find_intersecting_cells()
            by_rows = self.merge_rows_first(cells)
            by_columns = self.merge_columns_first(cells)
            if len(by_rows) <= len(by_columns):
                self._result, strategy = by_rows, "row-first"
            else:
                self._result, strategy = by_columns, "column-first"
            logger.debug(
                "%d row-first and %d column-first boxes, keeping %s",
                len(by_rows), len(by_columns), strategy,
            )
        return self._result

    # =======================  Intersecting cells  ============================

    def find_intersecting_cells(self):
        """
        Mark the cells the route passes through and their neighbours.

        Returns:
            2d-bool-array: the coverage grid, indexed by ``[x, y]``.
        """
        if self._traced:
            return self.cells
        hint = self.grid.locate(self.route[0])
        self.mark_cell(hint)

        for previous, vertex in toolz.sliding_window(2, self.route):
            cell = self.grid.locate_from_hint(vertex, hint)
            dx = abs(cell[0] - hint[0])
            dy = abs(cell[1] - hint[1])
            if dx + dy == 1:
                # Shares an edge with the previous cell.
                self.mark_cell(cell)
            elif dx + dy > 1:
                self._trace_segment(previous, vertex, hint, cell)
            hint = cell

        self._traced = True
        logger.debug("%d of %d cells marked", self.cells.sum(),
                     self.cells.size)
        return self.cells

    def mark_cell(self, cell):
        """Mark `cell` and its eight neighbours."""
        x, y = cell
        # Slices clip at the grid edge, only reached next to a pole.
        self.cells[max(x - 1, 0):x + 2, max(y - 1, 0):y + 2] = True

    def _fill_row(self, start_x, end_x, y):
        """Mark cells of row `y` from column `start_x` to `end_x` included."""
        step = 1 if end_x >= start_x else -1
        for x in range(start_x, end_x + step, step):
            self.mark_cell((x, y))

    def _trace_segment(self, start, end, start_cell, end_cell):
        """
        Mark the cells crossed by the rhumb line from `start` to `end`.

        Each latitude grid line between the two cells is crossed once. The
        crossing point is found by travelling along the segment's bearing the
        distance that changes latitude up to the line. Between two successive
        crossings the segment stays in one row, where every cell between the
        two crossing columns is marked.
        """
        bearing = rhumb_bearing(start, end)
        lat_lines = self.grid.lat_lines
        step = 1 if end_cell[1] > start_cell[1] else -1

        x = start_cell[0]
        for y in range(start_cell[1], end_cell[1], step):
            line = lat_lines[y + 1] if step > 0 else lat_lines[y]
            crossing = rhumb_destination(
                start, bearing, distance_to_latitude(start, bearing, line))
            crossing_x = self.grid.column_from_hint(crossing.lng, x)
            self._fill_row(x, crossing_x, y)
            x = crossing_x
        self._fill_row(x, end_cell[0], end_cell[1])

    # ===========================  Box merging  ===============================

    def _run_boxes(self, lines):
        """
        Yield one box per run of marked cells along each line of cells.

        Args:
            lines (iterable): ``(cells, mask)`` pairs, one per grid row or
                column, where `mask` flags the marked `cells`.
        """
        for cells, mask in lines:
            box = None
            for cell, marked in zip(cells, mask):
                if marked:
                    if box is None:
                        box = self.grid.cell_bounds(cell)
                    else:
                        box.extend(self.grid.cell_bounds(cell).north_east)
                elif box is not None:
                    yield box
                    box = None
            if box is not None:
                yield box

    def _merge(self, boxes, matches):
        merged = RouteBoxerResult()
        for box in boxes:
            for other in merged:
                if matches(other, box):
                    other.extend(box.north_east)
                    break
            else:
                merged.append(box)
        return merged

    def _close(self, a, b):
        return abs(a - b) < self.tolerance

    def merge_rows_first(self, cells=None):
        """
        Merge marked cells row by row, bottom to top.

        Runs of marked cells in a row become horizontal boxes. A box is
        stacked onto a box of the row below spanning the same longitudes.
        """
        if cells is None:
            cells = self.find_intersecting_cells()
        nx, ny = cells.shape
        rows = (([(x, y) for x in range(nx)], cells[:, y])
                for y in range(ny))

        def matches(other, box):
            return (self._close(other.north, box.south)
                    and self._close(other.west, box.west)
                    and self._close(other.east, box.east))

        return self._merge(self._run_boxes(rows), matches)

    def merge_columns_first(self, cells=None):
        """
        Merge marked cells column by column, west to east.

        Runs of marked cells in a column become vertical boxes. A box is
        joined to a box of the column on its left spanning the same
        latitudes.
        """
        if cells is None:
            cells = self.find_intersecting_cells()
        nx, ny = cells.shape
        columns = (([(x, y) for y in range(ny)], cells[x, :])
                   for x in range(nx))

        def matches(other, box):
            return (self._close(other.east, box.west)
                    and self._close(other.south, box.south)
                    and self._close(other.north, box.north))

        return self._merge(self._run_boxes(columns), matches)


def route_boxes(vertices, distance, tolerance=DEFAULT_TOLERANCE):
    """
    Boxes covering every point within `distance` km of a route.

    Args:
        vertices (sequence of (lng, lat)): the route, at least one vertex.
        distance (float): radius around the route in kilometers.
        tolerance (float, optional): see :class:`RouteBoxer`.

    Returns:
        RouteBoxerResult: non-overlapping boxes.
    """
    return RouteBoxer(vertices, distance, tolerance=tolerance).boxes()
