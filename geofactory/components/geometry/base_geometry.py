from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Tuple

from geofactory.core import GeometryType, StructuralError, TOPOLOGICAL_DIMENSIONS, WIRE_TYPES
from geofactory.components.geometry.geometry_adapter import GeometryAdapter


def _load_marshal(factory: Any, data: bytes) -> 'Geometry':
    """Unpickle hook: rebuild a geometry from its factory and WKB payload"""
    return factory.read_for_marshal(data)


class Geometry(ABC):
    """
    Base class for immutable geometry values

    Every geometry holds a reference to the factory that created it; the
    factory never references the geometries it builds. Values compare
    structurally: same wire type, equal factory, same coordinates.
    """

    GEOMETRY_TYPE: GeometryType

    def __init__(self, factory: Any):
        self._factory = factory

    @property
    def factory(self) -> Any:
        """Factory that created this geometry"""
        return self._factory

    @property
    def geometry_type(self) -> GeometryType:
        return self.GEOMETRY_TYPE

    @property
    def srid(self) -> int:
        return self._factory.srid

    @property
    def dimension(self) -> int:
        """Topological dimension (0 points, 1 curves, 2 surfaces)"""
        return TOPOLOGICAL_DIMENSIONS[self.GEOMETRY_TYPE]

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def coordinates(self) -> List[Any]:
        """Coordinates as (nested) lists of floats"""
        pass

    @abstractmethod
    def _rep_key(self) -> Tuple[Any, ...]:
        """Hashable structural key used for equality"""
        pass

    def as_text(self) -> str:
        """WKT using the factory's generator"""
        return self._factory.generate_wkt(self)

    def as_binary(self) -> bytes | str:
        """WKB using the factory's generator"""
        return self._factory.generate_wkb(self)

    def rep_equals(self, other: Any) -> bool:
        """Structural equality"""
        if not isinstance(other, Geometry):
            return False
        return (
            WIRE_TYPES[self.GEOMETRY_TYPE] == WIRE_TYPES[other.GEOMETRY_TYPE]
            and self._factory == other._factory
            and self._rep_key() == other._rep_key()
        )

    def __eq__(self, other: Any) -> bool:
        return self.rep_equals(other)

    def __hash__(self) -> int:
        return hash((WIRE_TYPES[self.GEOMETRY_TYPE], self._factory, self._rep_key()))

    def is_valid(self) -> bool:
        """Topological validity, delegated to shapely"""
        return GeometryAdapter.is_valid(self)

    def invalid_reason(self) -> Optional[str]:
        """Why the geometry is invalid, or None if it is valid"""
        return GeometryAdapter.invalid_reason(self)

    def __str__(self) -> str:
        return self.as_text()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.as_text()!r}>"

    def __reduce__(self):
        return (_load_marshal, (self._factory, self._factory.write_for_marshal(self)))

    def _check_element(self, element: Any, allowed: Iterable[GeometryType] | None = None) -> None:
        """
        Check a child geometry

        Factories are compared by equality, not identity: a child built by a
        different but equal factory (e.g. one restored from a persisted unit)
        is accepted and keeps its own factory reference.

        Raises:
            StructuralError: If the child is not a geometry of an allowed kind
                or was created by a different factory
        """
        if not isinstance(element, Geometry):
            raise StructuralError(
                self.GEOMETRY_TYPE, f"expected a geometry element, got {type(element).__name__}"
            )
        if allowed is not None and element.GEOMETRY_TYPE not in allowed:
            raise StructuralError(
                self.GEOMETRY_TYPE, f"{element.GEOMETRY_TYPE.value} is not an allowed element"
            )
        if element.factory != self._factory:
            raise StructuralError(
                self.GEOMETRY_TYPE,
                f"{element.GEOMETRY_TYPE.value} element belongs to a different factory"
            )
