from typing import Any, List, Optional, Sequence, Tuple

from geofactory.core import GeometryType, StructuralError
from geofactory.components.geometry.base_geometry import Geometry
from geofactory.components.geometry.line_string import LinearRing

_RING_TYPES = (GeometryType.LINEAR_RING,)


class Polygon(Geometry):
    """Polygon made of an exterior ring and zero or more interior rings"""

    GEOMETRY_TYPE = GeometryType.POLYGON

    def __init__(self, factory: Any, exterior_ring: LinearRing, interior_rings: Optional[Sequence[LinearRing]] = None):
        super().__init__(factory)
        self._check_element(exterior_ring, _RING_TYPES)
        self._exterior_ring = exterior_ring
        self._interior_rings: Tuple[LinearRing, ...] = tuple(interior_rings or ())
        for ring in self._interior_rings:
            self._check_element(ring, _RING_TYPES)
        if exterior_ring.is_empty() and self._interior_rings:
            raise StructuralError(self.GEOMETRY_TYPE, "an empty exterior ring cannot have interior rings")

    @property
    def exterior_ring(self) -> LinearRing:
        return self._exterior_ring

    @property
    def interior_rings(self) -> List[LinearRing]:
        return list(self._interior_rings)

    @property
    def num_interior_rings(self) -> int:
        return len(self._interior_rings)

    def interior_ring_n(self, n: int) -> Optional[LinearRing]:
        """N-th interior ring (0-based), or None if out of range"""
        if 0 <= n < len(self._interior_rings):
            return self._interior_rings[n]
        return None

    @property
    def rings(self) -> List[LinearRing]:
        """Exterior ring followed by interior rings (empty for an empty polygon)"""
        if self._exterior_ring.is_empty():
            return []
        return [self._exterior_ring, *self._interior_rings]

    def is_empty(self) -> bool:
        return self._exterior_ring.is_empty()

    def coordinates(self) -> List[List[List[float]]]:
        return [ring.coordinates() for ring in self.rings]

    def _rep_key(self) -> Tuple[Any, ...]:
        return tuple(ring._rep_key() for ring in self.rings)
