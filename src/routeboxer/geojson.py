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
GeoJSON and shapely export of boxes.
'''
import shapely.geometry


def multipolygon(boxes):
    """
    GeoJSON MultiPolygon mapping of `boxes`.

    Each box is a polygon with a single closed ring of 5 (lng, lat) pairs:
    north-west, north-east, south-east, south-west, north-west.
    """
    return {
        "type": "MultiPolygon",
        "coordinates": [[box.ring()] for box in boxes],
    }


def to_shapely(boxes):
    """Shapely MultiPolygon of `boxes`."""
    return shapely.geometry.MultiPolygon([box.to_polygon() for box in boxes])
