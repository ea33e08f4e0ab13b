"""
WKB layout constants

Type codes and flag bits shared by the WKB generator and parser.
"""
from dataclasses import dataclass, field
from typing import Dict

from geofactory.core.enums import GeometryType


@dataclass(frozen=True)
class WkbLayout:
    """
    Immutable constants describing the WKB byte layout (Immutable Object Pattern)
    """

    BIG_ENDIAN: int = 0
    LITTLE_ENDIAN: int = 1

    # EWKB flag bits (PostGIS)
    Z_FLAG: int = 0x80000000
    M_FLAG: int = 0x40000000
    SRID_FLAG: int = 0x20000000
    FLAG_MASK: int = 0xE0000000

    # ISO WKB type code offsets
    ISO_Z_OFFSET: int = 1000
    ISO_M_OFFSET: int = 2000
    ISO_ZM_OFFSET: int = 3000

    TYPE_CODES: Dict[GeometryType, int] = field(default_factory=lambda: {
        GeometryType.POINT: 1,
        GeometryType.LINE_STRING: 2,
        GeometryType.POLYGON: 3,
        GeometryType.MULTI_POINT: 4,
        GeometryType.MULTI_LINE_STRING: 5,
        GeometryType.MULTI_POLYGON: 6,
        GeometryType.GEOMETRY_COLLECTION: 7,
    })

    def type_for_code(self, code: int) -> GeometryType | None:
        """Get the geometry type for a base (dimensionless) type code"""
        for geometry_type, type_code in self.TYPE_CODES.items():
            if type_code == code:
                return geometry_type
        return None


WKB_LAYOUT = WkbLayout()
