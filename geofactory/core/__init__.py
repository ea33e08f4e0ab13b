from geofactory.core.enums import (
    GeometryType,
    ConvertCase,
    WktTagFormat,
    WkbTypeFormat,
    FactoryProperty,
    CodecFormat,
    WIRE_TYPES,
    TOPOLOGICAL_DIMENSIONS,
)
from geofactory.core.exceptions import (
    GeoFactoryException,
    ConfigurationError,
    StructuralError,
    FormatError,
)
from geofactory.core.wkb_layout import WkbLayout, WKB_LAYOUT

__all__ = [
    "GeometryType",
    "ConvertCase",
    "WktTagFormat",
    "WkbTypeFormat",
    "FactoryProperty",
    "CodecFormat",
    "WIRE_TYPES",
    "TOPOLOGICAL_DIMENSIONS",
    "GeoFactoryException",
    "ConfigurationError",
    "StructuralError",
    "FormatError",
    "WkbLayout",
    "WKB_LAYOUT",
]
