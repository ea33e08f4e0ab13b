import math
from typing import Any, List, Optional, Sequence, Tuple

from geofactory.core import GeometryType, StructuralError
from geofactory.components.geometry.base_geometry import Geometry
from geofactory.components.geometry.geometry_adapter import GeometryAdapter
from geofactory.components.geometry.point import Point

_POINT_TYPES = (GeometryType.POINT,)


class LineString(Geometry):
    """Sequence of points: empty or at least two points"""

    GEOMETRY_TYPE = GeometryType.LINE_STRING

    def __init__(self, factory: Any, points: Sequence[Point]):
        super().__init__(factory)
        self._points: Tuple[Point, ...] = tuple(points)
        for point in self._points:
            self._check_element(point, _POINT_TYPES)
        self._validate()

    def _validate(self) -> None:
        if len(self._points) == 1:
            raise StructuralError(self.GEOMETRY_TYPE, "needs 0 or at least 2 points, got 1")

    @property
    def num_points(self) -> int:
        return len(self._points)

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def point_n(self, n: int) -> Optional[Point]:
        """N-th point (0-based), or None if out of range"""
        if 0 <= n < len(self._points):
            return self._points[n]
        return None

    @property
    def start_point(self) -> Optional[Point]:
        return self.point_n(0)

    @property
    def end_point(self) -> Optional[Point]:
        return self.point_n(len(self._points) - 1)

    def is_empty(self) -> bool:
        return not self._points

    def is_closed(self) -> bool:
        """Start and end points coincide (False for empty line strings)"""
        if not self._points:
            return False
        return self._points[0].ordinates() == self._points[-1].ordinates()

    def is_ring(self) -> bool:
        """Closed and simple; simplicity is checked by shapely"""
        return self.is_closed() and GeometryAdapter.to_shapely(self).is_simple

    def length(self) -> float:
        """Planar length of the line string"""
        return sum(
            math.hypot(b.x - a.x, b.y - a.y)
            for a, b in zip(self._points, self._points[1:])
        )

    def coordinates(self) -> List[List[float]]:
        return [point.coordinates() for point in self._points]

    def _rep_key(self) -> Tuple[Any, ...]:
        return tuple(point.ordinates() for point in self._points)


class Line(LineString):
    """Line string with exactly two points"""

    GEOMETRY_TYPE = GeometryType.LINE

    def _validate(self) -> None:
        if len(self._points) != 2:
            raise StructuralError(self.GEOMETRY_TYPE, f"needs exactly 2 points, got {len(self._points)}")


class LinearRing(LineString):
    """Closed line string: empty or at least four points with first == last"""

    GEOMETRY_TYPE = GeometryType.LINEAR_RING

    def _validate(self) -> None:
        count = len(self._points)
        if count == 0:
            return
        if count < 4:
            raise StructuralError(self.GEOMETRY_TYPE, f"needs 0 or at least 4 points, got {count}")
        if not self.is_closed():
            raise StructuralError(self.GEOMETRY_TYPE, "first and last points must be equal")
