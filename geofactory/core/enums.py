from enum import Enum


class GeometryType(Enum):
    """Geometry kinds (values match the OGC / shapely type names)"""
    POINT = "Point"
    LINE_STRING = "LineString"
    LINE = "Line"
    LINEAR_RING = "LinearRing"
    POLYGON = "Polygon"
    GEOMETRY_COLLECTION = "GeometryCollection"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"


class ConvertCase(Enum):
    """Case convention for WKT tags"""
    UPPER = "upper"
    LOWER = "lower"
    NONE = "none"


class WktTagFormat(Enum):
    """WKT dialects"""
    WKT11 = "wkt11"
    WKT12 = "wkt12"
    EWKT = "ewkt"


class WkbTypeFormat(Enum):
    """WKB type code dialects"""
    EWKB = "ewkb"
    WKB12 = "wkb12"


class FactoryProperty(Enum):
    """Names accepted by GeometryFactory.property"""
    HAS_Z = "has_z_coordinate"
    HAS_M = "has_m_coordinate"
    BUFFER_RESOLUTION = "buffer_resolution"
    IS_CARTESIAN = "is_cartesian"


class CodecFormat(Enum):
    """Format names reported by FormatError"""
    WKT = "WKT"
    WKB = "WKB"
    CRS_WKT = "CRS WKT"


# Tag used on the wire for each geometry kind. Line and LinearRing are
# LineStrings as far as WKT/WKB are concerned.
WIRE_TYPES = {
    GeometryType.POINT: GeometryType.POINT,
    GeometryType.LINE_STRING: GeometryType.LINE_STRING,
    GeometryType.LINE: GeometryType.LINE_STRING,
    GeometryType.LINEAR_RING: GeometryType.LINE_STRING,
    GeometryType.POLYGON: GeometryType.POLYGON,
    GeometryType.GEOMETRY_COLLECTION: GeometryType.GEOMETRY_COLLECTION,
    GeometryType.MULTI_POINT: GeometryType.MULTI_POINT,
    GeometryType.MULTI_LINE_STRING: GeometryType.MULTI_LINE_STRING,
    GeometryType.MULTI_POLYGON: GeometryType.MULTI_POLYGON,
}

# Topological dimension per geometry kind (collections are resolved per instance)
TOPOLOGICAL_DIMENSIONS = {
    GeometryType.POINT: 0,
    GeometryType.LINE_STRING: 1,
    GeometryType.LINE: 1,
    GeometryType.LINEAR_RING: 1,
    GeometryType.POLYGON: 2,
    GeometryType.MULTI_POINT: 0,
    GeometryType.MULTI_LINE_STRING: 1,
    GeometryType.MULTI_POLYGON: 2,
}
