"""
Geometry module with the immutable geometry value model.

This module provides the geometry value classes created by GeometryFactory,
the shapely adapter used for topological checks and the operations that
rebuild geometries in another factory.
"""

from geofactory.components.geometry.geometry_adapter import GeometryAdapter
from geofactory.components.geometry.base_geometry import Geometry
from geofactory.components.geometry.point import Point
from geofactory.components.geometry.line_string import LineString, Line, LinearRing
from geofactory.components.geometry.polygon import Polygon
from geofactory.components.geometry.geometry_collection import (
    GeometryCollection,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
)
from geofactory.components.geometry.geometry_ops import GeometryOps

__all__ = [
    'GeometryAdapter',
    'Geometry',
    'Point',
    'LineString',
    'Line',
    'LinearRing',
    'Polygon',
    'GeometryCollection',
    'MultiPoint',
    'MultiLineString',
    'MultiPolygon',
    'GeometryOps',
]
