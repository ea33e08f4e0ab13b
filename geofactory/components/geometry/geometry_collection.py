from typing import Any, Iterator, List, Optional, Sequence, Tuple

from geofactory.core import GeometryType, WIRE_TYPES
from geofactory.components.geometry.base_geometry import Geometry


class GeometryCollection(Geometry):
    """Heterogeneous collection of geometries"""

    GEOMETRY_TYPE = GeometryType.GEOMETRY_COLLECTION
    ELEMENT_TYPES: Optional[Tuple[GeometryType, ...]] = None

    def __init__(self, factory: Any, elements: Sequence[Geometry]):
        super().__init__(factory)
        self._elements: Tuple[Geometry, ...] = tuple(elements)
        for element in self._elements:
            self._check_element(element, self.ELEMENT_TYPES)

    @property
    def num_geometries(self) -> int:
        return len(self._elements)

    def geometry_n(self, n: int) -> Optional[Geometry]:
        """N-th element (0-based), or None if out of range"""
        if 0 <= n < len(self._elements):
            return self._elements[n]
        return None

    @property
    def geometries(self) -> List[Geometry]:
        return list(self._elements)

    @property
    def dimension(self) -> int:
        """Largest element dimension, -1 for an empty collection"""
        return max((element.dimension for element in self._elements), default=-1)

    def is_empty(self) -> bool:
        return all(element.is_empty() for element in self._elements)

    def coordinates(self) -> List[Any]:
        return [element.coordinates() for element in self._elements]

    def _rep_key(self) -> Tuple[Any, ...]:
        return tuple(
            (WIRE_TYPES[element.GEOMETRY_TYPE], element._rep_key()) for element in self._elements
        )

    def __iter__(self) -> Iterator[Geometry]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)


class MultiPoint(GeometryCollection):
    GEOMETRY_TYPE = GeometryType.MULTI_POINT
    ELEMENT_TYPES = (GeometryType.POINT,)

    @property
    def dimension(self) -> int:
        return 0


class MultiLineString(GeometryCollection):
    GEOMETRY_TYPE = GeometryType.MULTI_LINE_STRING
    ELEMENT_TYPES = (GeometryType.LINE_STRING, GeometryType.LINE, GeometryType.LINEAR_RING)

    @property
    def dimension(self) -> int:
        return 1

    def is_closed(self) -> bool:
        """All elements are closed"""
        return all(element.is_closed() for element in self._elements)

    def length(self) -> float:
        return sum(element.length() for element in self._elements)


class MultiPolygon(GeometryCollection):
    GEOMETRY_TYPE = GeometryType.MULTI_POLYGON
    ELEMENT_TYPES = (GeometryType.POLYGON,)

    @property
    def dimension(self) -> int:
        return 2
