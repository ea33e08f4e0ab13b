import math
from typing import Any, List, Optional, Tuple

from geofactory.core import GeometryType, StructuralError
from geofactory.components.geometry.base_geometry import Geometry


class Point(Geometry):
    """
    Point with x, y and the optional z / m the factory supports

    Extra values follow the factory dimensionality: z first (if the factory
    has Z), then m (if it has M). Missing values default to 0.
    """

    GEOMETRY_TYPE = GeometryType.POINT

    def __init__(self, factory: Any, x: float, y: float, *extra: float):
        super().__init__(factory)
        expected = int(factory.has_z) + int(factory.has_m)
        if len(extra) > expected:
            raise StructuralError(
                self.GEOMETRY_TYPE,
                f"got {2 + len(extra)} ordinates, factory supports at most {2 + expected}"
            )
        values = list(extra) + [0.0] * (expected - len(extra))
        try:
            self._x = float(x)
            self._y = float(y)
            self._z = float(values.pop(0)) if factory.has_z else None
            self._m = float(values.pop(0)) if factory.has_m else None
        except (TypeError, ValueError) as e:
            raise StructuralError(self.GEOMETRY_TYPE, f"non-numeric ordinate: {e}") from e
        if not all(math.isfinite(value) for value in self.ordinates()):
            raise StructuralError(self.GEOMETRY_TYPE, f"non-finite ordinate in {self.ordinates()}")

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> Optional[float]:
        return self._z

    @property
    def m(self) -> Optional[float]:
        return self._m

    def is_empty(self) -> bool:
        return False

    def ordinates(self) -> Tuple[float, ...]:
        """(x, y[, z][, m]) following the factory dimensionality"""
        values = [self._x, self._y]
        if self._z is not None:
            values.append(self._z)
        if self._m is not None:
            values.append(self._m)
        return tuple(values)

    def coordinates(self) -> List[float]:
        return list(self.ordinates())

    def _rep_key(self) -> Tuple[Any, ...]:
        return self.ordinates()
