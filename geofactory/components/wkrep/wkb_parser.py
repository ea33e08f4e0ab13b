import binascii
import logging
import struct
from typing import Any, List, Tuple

from geofactory.core import CodecFormat, FormatError, GeometryType, StructuralError, WKB_LAYOUT
from geofactory.components.wkrep.base_codec import BaseCodec, bool_option

logger = logging.getLogger(__name__)


class WKBParser(BaseCodec):
    """
    Parses WKB (bytes or hex text) into geometry values built by one factory

    Both byte orders are accepted, per geometry header.

    Options:
        support_ewkb: accept EWKB flag bits (Z, M, SRID)
        support_wkb12: accept ISO type code ranges (+1000/+2000/+3000)
        ignore_extra_bytes: do not fail on trailing bytes
    """

    _OPTIONS = {
        "support_ewkb": (bool_option, True),
        "support_wkb12": (bool_option, True),
        "ignore_extra_bytes": (bool_option, False),
    }

    def __init__(self, factory: Any, **options: Any):
        super().__init__(**options)
        self._factory = factory

    @property
    def factory(self) -> Any:
        return self._factory

    def parse(self, data: bytes | str) -> Any:
        """
        Parse WKB

        Args:
            data: WKB bytes, or a hex string

        Returns:
            Geometry value created by the bound factory

        Raises:
            FormatError: If the data is malformed or unsupported
        """
        if isinstance(data, str):
            try:
                data = binascii.unhexlify(data.strip())
            except (binascii.Error, ValueError) as e:
                raise FormatError(CodecFormat.WKB, 0, f"invalid hex string: {e}") from e
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise FormatError(CodecFormat.WKB, 0, f"expected bytes, got {type(data).__name__}")
        return _WkbReader(self, bytes(data)).read()


class _WkbReader:
    """Single-use parse state for one WKB input"""

    def __init__(self, parser: WKBParser, data: bytes):
        self._factory = parser.factory
        self._options = parser._options
        self._data = data
        self._offset = 0

    def _error(self, details: str, offset: int | None = None) -> FormatError:
        return FormatError(CodecFormat.WKB, self._offset if offset is None else offset, details)

    def _unpack(self, fmt: str, prefix: str) -> Tuple[Any, ...]:
        size = struct.calcsize(prefix + fmt)
        if self._offset + size > len(self._data):
            raise self._error("Unexpected end of data")
        values = struct.unpack_from(prefix + fmt, self._data, self._offset)
        self._offset += size
        return values

    def read(self) -> Any:
        geometry = self._read_geometry(None, True)
        if self._offset < len(self._data) and not self._options["ignore_extra_bytes"]:
            raise self._error(f"Found {len(self._data) - self._offset} extra bytes at the end of the data")
        return geometry

    def _read_header(self, top_level: bool) -> Tuple[GeometryType, bool, bool, str, int]:
        start = self._offset
        if self._offset >= len(self._data):
            raise self._error("Unexpected end of data")
        marker = self._data[self._offset]
        self._offset += 1
        if marker == WKB_LAYOUT.LITTLE_ENDIAN:
            prefix = "<"
        elif marker == WKB_LAYOUT.BIG_ENDIAN:
            prefix = ">"
        else:
            raise self._error(f"Invalid byte order marker {marker}", start)
        (code,) = self._unpack("I", prefix)

        flags = code & WKB_LAYOUT.FLAG_MASK
        code &= ~WKB_LAYOUT.FLAG_MASK & 0xFFFFFFFF
        has_z = bool(flags & WKB_LAYOUT.Z_FLAG)
        has_m = bool(flags & WKB_LAYOUT.M_FLAG)
        if flags and not self._options["support_ewkb"]:
            raise self._error("EWKB flags are not supported", start)

        if code >= WKB_LAYOUT.ISO_Z_OFFSET:
            if not self._options["support_wkb12"]:
                raise self._error(f"WKB 1.2 type code {code} is not supported", start)
            iso_dims = code // 1000
            if has_z or has_m or iso_dims > 3:
                raise self._error(f"Invalid type code {code}", start)
            has_z = iso_dims in (1, 3)
            has_m = iso_dims in (2, 3)
            code %= 1000

        geometry_type = WKB_LAYOUT.type_for_code(code)
        if geometry_type is None:
            raise self._error(f"Unknown geometry type code {code}", start)

        srid = 0
        if flags & WKB_LAYOUT.SRID_FLAG:
            if not top_level:
                raise self._error("SRID is only allowed on the top-level geometry", start)
            (srid,) = self._unpack("i", prefix)
            if srid != self._factory.srid:
                logger.debug("EWKB declares SRID %s, parsing into factory with SRID %s", srid, self._factory.srid)

        if has_z and not self._factory.has_z:
            raise self._error("Data has Z coordinates but the factory does not support Z", start)
        if has_m and not self._factory.has_m:
            raise self._error("Data has M coordinates but the factory does not support M", start)
        return geometry_type, has_z, has_m, prefix, start

    def _read_geometry(self, context: Tuple[bool, bool] | None, top_level: bool = False) -> Any:
        geometry_type, has_z, has_m, prefix, start = self._read_header(top_level)
        if context is not None and context != (has_z, has_m):
            raise self._error("Mismatched dimensionality inside collection", start)
        dims = (has_z, has_m)
        try:
            if geometry_type == GeometryType.POINT:
                return self._read_point(dims, prefix)
            if geometry_type == GeometryType.LINE_STRING:
                return self._factory.line_string(self._read_points(dims, prefix))
            if geometry_type == GeometryType.POLYGON:
                return self._read_polygon(dims, prefix)
            return self._read_collection(geometry_type, dims, prefix)
        except StructuralError as e:
            raise FormatError(CodecFormat.WKB, start, str(e)) from e

    def _read_point(self, dims: Tuple[bool, bool], prefix: str) -> Any:
        has_z, has_m = dims
        values = list(self._unpack("d" * (2 + int(has_z) + int(has_m)), prefix))
        x, y = values[0], values[1]
        rest = values[2:]
        z = rest.pop(0) if has_z else 0.0
        m = rest.pop(0) if has_m else 0.0
        extra = []
        if self._factory.has_z:
            extra.append(z)
        if self._factory.has_m:
            extra.append(m)
        return self._factory.point(x, y, *extra)

    def _read_points(self, dims: Tuple[bool, bool], prefix: str) -> List[Any]:
        (count,) = self._unpack("I", prefix)
        return [self._read_point(dims, prefix) for _ in range(count)]

    def _read_polygon(self, dims: Tuple[bool, bool], prefix: str) -> Any:
        (count,) = self._unpack("I", prefix)
        rings = [self._factory.linear_ring(self._read_points(dims, prefix)) for _ in range(count)]
        if not rings:
            return self._factory.polygon(self._factory.linear_ring([]))
        return self._factory.polygon(rings[0], rings[1:])

    def _read_collection(self, geometry_type: GeometryType, dims: Tuple[bool, bool], prefix: str) -> Any:
        (count,) = self._unpack("I", prefix)
        elements = [self._read_geometry(dims) for _ in range(count)]
        builders = {
            GeometryType.MULTI_POINT: self._factory.multi_point,
            GeometryType.MULTI_LINE_STRING: self._factory.multi_line_string,
            GeometryType.MULTI_POLYGON: self._factory.multi_polygon,
            GeometryType.GEOMETRY_COLLECTION: self._factory.collection,
        }
        return builders[geometry_type](elements)
