"""
Boxes around a route, for fast proximity queries.

Testing whether a point lies within some distance of a polyline is costly
when done for many candidate points. RouteBoxer computes a small set of
latitude/longitude rectangles whose union covers every point within a given
distance of the route, so that candidates are filtered by a simple
containment test instead.

The route is overlaid with a grid of cells whose side is the distance. Cells
the route passes through are marked with their eight neighbours, and marked
cells are merged into as few rectangles as a greedy pass over rows, or over
columns, can find.

Geometry is a sphere with rhumb lines (constant bearing paths), which is
accurate enough for indexing at the scale of routes.
"""
from .boxer import RouteBoxer, RouteBoxerResult, route_boxes  # noqa: F401
from .envelope import Bound, Bounds  # noqa: F401
from .geodesy import Point, rhumb_bearing, rhumb_destination  # noqa: F401
from .geodesy import rhumb_distance  # noqa: F401
from .grid import Grid  # noqa: F401

__version__ = "0.1.0"
