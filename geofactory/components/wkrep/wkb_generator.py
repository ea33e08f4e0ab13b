import struct
from typing import Any, List

from geofactory.core import GeometryType, WkbTypeFormat, WIRE_TYPES, WKB_LAYOUT
from geofactory.components.wkrep.base_codec import BaseCodec, bool_option, enum_option


class WKBGenerator(BaseCodec):
    """
    Generates WKB for geometry values

    Options:
        type_format: "ewkb" (Z/M/SRID as high flag bits on the type code) or
            "wkb12" (ISO: Z/M as +1000/+2000/+3000 type code ranges)
        emit_srid: write the SRID after the top-level type code (sets the
            SRID flag bit)
        little_endian: byte order (default True)
        hex_format: return a lowercase hex string instead of bytes
    """

    _OPTIONS = {
        "type_format": (enum_option(WkbTypeFormat), WkbTypeFormat.EWKB),
        "emit_srid": (bool_option, False),
        "little_endian": (bool_option, True),
        "hex_format": (bool_option, False),
    }

    def __init__(self, **options: Any):
        super().__init__(**options)
        self._prefix = "<" if self._options["little_endian"] else ">"
        self._endian_marker = WKB_LAYOUT.LITTLE_ENDIAN if self._options["little_endian"] else WKB_LAYOUT.BIG_ENDIAN

    @property
    def type_format(self) -> WkbTypeFormat:
        return self._options["type_format"]

    @property
    def emit_srid(self) -> bool:
        return self._options["emit_srid"]

    @property
    def little_endian(self) -> bool:
        return self._options["little_endian"]

    @property
    def hex_format(self) -> bool:
        return self._options["hex_format"]

    def generate(self, geometry: Any) -> bytes | str:
        """
        Generate WKB for a geometry

        Args:
            geometry: Geometry value

        Returns:
            WKB bytes, or a hex string when hex_format is set
        """
        factory = geometry.factory
        chunks: List[bytes] = []
        self._generate(geometry, factory.has_z, factory.has_m, self.emit_srid, chunks)
        data = b"".join(chunks)
        return data.hex() if self.hex_format else data

    def _type_code(self, geometry_type: GeometryType, has_z: bool, has_m: bool, with_srid: bool) -> int:
        code = WKB_LAYOUT.TYPE_CODES[WIRE_TYPES[geometry_type]]
        if self.type_format == WkbTypeFormat.WKB12:
            if has_z and has_m:
                code += WKB_LAYOUT.ISO_ZM_OFFSET
            elif has_z:
                code += WKB_LAYOUT.ISO_Z_OFFSET
            elif has_m:
                code += WKB_LAYOUT.ISO_M_OFFSET
        else:
            if has_z:
                code |= WKB_LAYOUT.Z_FLAG
            if has_m:
                code |= WKB_LAYOUT.M_FLAG
        if with_srid:
            code |= WKB_LAYOUT.SRID_FLAG
        return code

    def _header(self, geometry: Any, has_z: bool, has_m: bool, with_srid: bool) -> bytes:
        code = self._type_code(geometry.geometry_type, has_z, has_m, with_srid)
        header = struct.pack(self._prefix + "BI", self._endian_marker, code)
        if with_srid:
            header += struct.pack(self._prefix + "i", geometry.srid)
        return header

    def _count(self, count: int) -> bytes:
        return struct.pack(self._prefix + "I", count)

    def _coords(self, point: Any) -> bytes:
        ordinates = point.ordinates()
        return struct.pack(self._prefix + "d" * len(ordinates), *ordinates)

    def _point_list(self, points: List[Any]) -> bytes:
        return self._count(len(points)) + b"".join(self._coords(point) for point in points)

    def _generate(self, geometry: Any, has_z: bool, has_m: bool, with_srid: bool, chunks: List[bytes]) -> None:
        chunks.append(self._header(geometry, has_z, has_m, with_srid))
        wire_type = WIRE_TYPES[geometry.geometry_type]
        if wire_type == GeometryType.POINT:
            chunks.append(self._coords(geometry))
        elif wire_type == GeometryType.LINE_STRING:
            chunks.append(self._point_list(geometry.points))
        elif wire_type == GeometryType.POLYGON:
            rings = geometry.rings
            chunks.append(self._count(len(rings)))
            chunks.extend(self._point_list(ring.points) for ring in rings)
        else:
            elements = geometry.geometries
            chunks.append(self._count(len(elements)))
            for element in elements:
                self._generate(element, has_z, has_m, False, chunks)
