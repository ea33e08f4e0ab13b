"""
CRS module for coordinate reference system resolution.

This module provides the WKT-CRS coordinate system parser, the optional
pyproj-backed projection capability, spatial reference catalogs and the
resolver that combines them for a factory.
"""

from geofactory.components.crs.coordinate_system import CoordinateSystem, CsNode, CsEnum
from geofactory.components.crs.projection import (
    ProjectionHandle,
    ProjectionCapability,
    PyprojCapability,
    get_projection_capability,
)
from geofactory.components.crs.srs_catalog import SrsEntry, SrsCatalog, StaticSrsCatalog, EpsgCatalog
from geofactory.components.crs.crs_resolver import CrsResolver

__all__ = [
    'CoordinateSystem',
    'CsNode',
    'CsEnum',
    'ProjectionHandle',
    'ProjectionCapability',
    'PyprojCapability',
    'get_projection_capability',
    'SrsEntry',
    'SrsCatalog',
    'StaticSrsCatalog',
    'EpsgCatalog',
    'CrsResolver',
]
