from typing import Any, Callable, Dict, List, Optional
import logging
import numpy as np
from shapely.geometry import (
    Point as ShapelyPoint,
    LineString as ShapelyLineString,
    LinearRing as ShapelyLinearRing,
    Polygon as ShapelyPolygon,
    MultiPoint as ShapelyMultiPoint,
    MultiLineString as ShapelyMultiLineString,
    MultiPolygon as ShapelyMultiPolygon,
    GeometryCollection as ShapelyGeometryCollection,
)
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity
from geofactory.core import GeometryType, StructuralError

logger = logging.getLogger(__name__)

_VALID_GEOMETRY = "Valid Geometry"


class GeometryAdapter:
    """
    Adapter between geometry values and shapely geometries (Adapter Pattern)

    Shapely is the external geometry engine: topological predicates such as
    validity and simplicity are answered by it. M values are not carried
    over to shapely.
    """

    @staticmethod
    def _coord_array(points: List[Any]) -> Any:
        """Numpy (N, 2|3) array of point coordinates, or [] for no points"""
        if not points:
            return []
        if points[0].z is not None:
            return np.array([(p.x, p.y, p.z) for p in points], dtype=float)
        return np.array([(p.x, p.y) for p in points], dtype=float)

    @classmethod
    def _point_to_shapely(cls, geometry: Any) -> BaseGeometry:
        if geometry.z is not None:
            return ShapelyPoint(geometry.x, geometry.y, geometry.z)
        return ShapelyPoint(geometry.x, geometry.y)

    @classmethod
    def _line_string_to_shapely(cls, geometry: Any) -> BaseGeometry:
        return ShapelyLineString(cls._coord_array(geometry.points))

    @classmethod
    def _linear_ring_to_shapely(cls, geometry: Any) -> BaseGeometry:
        if geometry.is_empty():
            return ShapelyLinearRing()
        return ShapelyLinearRing(cls._coord_array(geometry.points))

    @classmethod
    def _polygon_to_shapely(cls, geometry: Any) -> BaseGeometry:
        if geometry.is_empty():
            return ShapelyPolygon()
        return ShapelyPolygon(
            cls._coord_array(geometry.exterior_ring.points),
            [cls._coord_array(ring.points) for ring in geometry.interior_rings],
        )

    @classmethod
    def _collection_to_shapely(cls, geometry: Any) -> BaseGeometry:
        return ShapelyGeometryCollection([cls.to_shapely(element) for element in geometry])

    @classmethod
    def _multi_point_to_shapely(cls, geometry: Any) -> BaseGeometry:
        return ShapelyMultiPoint([cls._point_to_shapely(element) for element in geometry])

    @classmethod
    def _multi_line_string_to_shapely(cls, geometry: Any) -> BaseGeometry:
        return ShapelyMultiLineString([cls._line_string_to_shapely(element) for element in geometry])

    @classmethod
    def _multi_polygon_to_shapely(cls, geometry: Any) -> BaseGeometry:
        return ShapelyMultiPolygon([cls._polygon_to_shapely(element) for element in geometry])

    # Strategy map: GeometryType -> conversion function name
    TO_SHAPELY_HANDLERS: Dict[GeometryType, str] = {
        GeometryType.POINT: "_point_to_shapely",
        GeometryType.LINE_STRING: "_line_string_to_shapely",
        GeometryType.LINE: "_line_string_to_shapely",
        GeometryType.LINEAR_RING: "_linear_ring_to_shapely",
        GeometryType.POLYGON: "_polygon_to_shapely",
        GeometryType.GEOMETRY_COLLECTION: "_collection_to_shapely",
        GeometryType.MULTI_POINT: "_multi_point_to_shapely",
        GeometryType.MULTI_LINE_STRING: "_multi_line_string_to_shapely",
        GeometryType.MULTI_POLYGON: "_multi_polygon_to_shapely",
    }

    @classmethod
    def to_shapely(cls, geometry: Any) -> BaseGeometry:
        """
        Convert a geometry value to a shapely geometry

        Args:
            geometry: Geometry value

        Returns:
            Equivalent shapely geometry (without M values)
        """
        handler: Callable = getattr(cls, cls.TO_SHAPELY_HANDLERS[geometry.geometry_type])
        return handler(geometry)

    @classmethod
    def from_shapely(cls, shape: BaseGeometry, factory: Any) -> Any:
        """
        Build a geometry value in factory from a shapely geometry

        Z is taken from the shape when the factory supports it (0 otherwise);
        M is always 0.

        Raises:
            StructuralError: If the shapely type is not supported
        """
        try:
            geometry_type = GeometryType(shape.geom_type)
        except ValueError as e:
            raise StructuralError(shape.geom_type, "unsupported shapely geometry type") from e

        if geometry_type == GeometryType.POINT:
            if shape.is_empty:
                raise StructuralError(geometry_type, "empty points are not supported")
            return cls._point_from_coord(shape.coords[0], factory)
        if geometry_type == GeometryType.LINE_STRING:
            return factory.line_string(cls._points_from_coords(shape.coords, factory))
        if geometry_type == GeometryType.LINEAR_RING:
            return factory.linear_ring(cls._points_from_coords(shape.coords, factory))
        if geometry_type == GeometryType.POLYGON:
            if shape.is_empty:
                return factory.polygon(factory.linear_ring([]))
            return factory.polygon(
                factory.linear_ring(cls._points_from_coords(shape.exterior.coords, factory)),
                [factory.linear_ring(cls._points_from_coords(ring.coords, factory)) for ring in shape.interiors],
            )
        elements = [cls.from_shapely(element, factory) for element in shape.geoms]
        builders = {
            GeometryType.MULTI_POINT: factory.multi_point,
            GeometryType.MULTI_LINE_STRING: factory.multi_line_string,
            GeometryType.MULTI_POLYGON: factory.multi_polygon,
            GeometryType.GEOMETRY_COLLECTION: factory.collection,
        }
        return builders[geometry_type](elements)

    @classmethod
    def _point_from_coord(cls, coord: Any, factory: Any) -> Any:
        extra = []
        if factory.has_z:
            extra.append(coord[2] if len(coord) > 2 else 0.0)
        if factory.has_m:
            extra.append(0.0)
        return factory.point(coord[0], coord[1], *extra)

    @classmethod
    def _points_from_coords(cls, coords: Any, factory: Any) -> List[Any]:
        return [cls._point_from_coord(coord, factory) for coord in np.asarray(coords, dtype=float)]

    @classmethod
    def is_valid(cls, geometry: Any) -> bool:
        return bool(cls.to_shapely(geometry).is_valid)

    @classmethod
    def invalid_reason(cls, geometry: Any) -> Optional[str]:
        """Shapely's explanation, or None when the geometry is valid"""
        reason = explain_validity(cls.to_shapely(geometry))
        if reason == _VALID_GEOMETRY:
            return None
        logger.debug("[GEOMETRY ADAPTER]: %s is invalid: %s", geometry.geometry_type.value, reason)
        return reason
