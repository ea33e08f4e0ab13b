"""
Unit tests for WKBGenerator and WKBParser
"""

import struct

import pytest

from geofactory.core import ConfigurationError, FormatError, WkbTypeFormat
from geofactory.components.factory import GeometryFactory
from geofactory.components.wkrep import WKBGenerator, WKBParser

POINT_1_2_LE = "0101000000000000000000f03f0000000000000040"


@pytest.fixture
def factory():
    return GeometryFactory()


def point_bytes(x, y, *extra, code=1, order="<"):
    marker = 1 if order == "<" else 0
    values = (x, y) + extra
    return struct.pack(order + "BI", marker, code) + struct.pack(order + "d" * len(values), *values)


class TestWKBGenerator:
    """Test generated bytes"""

    def test_standard_point(self, factory):
        """Default generator writes the 21-byte little-endian encoding"""
        data = factory.point(1.0, 2.0).as_binary()

        assert len(data) == 21
        assert data.hex() == POINT_1_2_LE

    def test_big_endian(self, factory):
        data = WKBGenerator(little_endian=False).generate(factory.point(1, 2))

        assert data == point_bytes(1.0, 2.0, order=">")

    def test_hex_format(self, factory):
        assert WKBGenerator(hex_format=True).generate(factory.point(1, 2)) == POINT_1_2_LE

    def test_emit_srid(self):
        factory = GeometryFactory(srid=4326)

        data = WKBGenerator(emit_srid=True).generate(factory.point(1, 2))

        assert struct.unpack_from("<I", data, 1)[0] == 0x20000001
        assert struct.unpack_from("<I", data, 5)[0] == 4326
        assert len(data) == 25

    def test_negative_srid_is_signed(self):
        factory = GeometryFactory(srid=-1, wkb_generator={"emit_srid": True})
        point = factory.point(1, 2)

        data = factory.generate_wkb(point)

        assert struct.unpack_from("<i", data, 5)[0] == -1
        assert factory.parse_wkb(data) == point

    def test_srid_only_on_top_level(self):
        factory = GeometryFactory(srid=4326)
        multi_point = factory.multi_point([factory.point(1, 2)])

        data = WKBGenerator(emit_srid=True).generate(multi_point)

        # header(5) + srid(4) + count(4) + point(21)
        assert len(data) == 34
        assert struct.unpack_from("<I", data, 14)[0] == 1

    @pytest.mark.parametrize("type_format,has_z,has_m,code", [
        ("ewkb", True, False, 0x80000001),
        ("ewkb", False, True, 0x40000001),
        ("ewkb", True, True, 0xC0000001),
        ("wkb12", True, False, 1001),
        ("wkb12", False, True, 2001),
        ("wkb12", True, True, 3001),
    ])
    def test_dimension_type_codes(self, type_format, has_z, has_m, code):
        factory = GeometryFactory(has_z=has_z, has_m=has_m)

        data = WKBGenerator(type_format=type_format).generate(factory.point(1, 2))

        assert struct.unpack_from("<I", data, 1)[0] == code
        assert len(data) == 5 + 8 * (2 + int(has_z) + int(has_m))

    def test_empty_polygon(self, factory):
        data = factory.polygon(factory.linear_ring([])).as_binary()

        assert data == struct.pack("<BII", 1, 3, 0)

    def test_options(self):
        generator = WKBGenerator(type_format=WkbTypeFormat.WKB12)

        assert generator.properties == {
            "type_format": "wkb12",
            "emit_srid": False,
            "little_endian": True,
            "hex_format": False,
        }
        with pytest.raises(ConfigurationError):
            WKBGenerator(byte_order="big")


class TestWKBParser:
    """Test parsing bytes and hex strings"""

    def test_standard_point(self, factory):
        assert factory.parse_wkb(bytes.fromhex(POINT_1_2_LE)) == factory.point(1.0, 2.0)

    @pytest.mark.parametrize("text", [POINT_1_2_LE, POINT_1_2_LE.upper()])
    def test_hex_input(self, factory, text):
        assert factory.parse_wkb(text) == factory.point(1, 2)

    def test_big_endian(self, factory):
        assert factory.parse_wkb(point_bytes(1.0, 2.0, order=">")) == factory.point(1, 2)

    def test_mixed_byte_order_in_collection(self, factory):
        data = struct.pack("<BII", 1, 4, 1) + point_bytes(1.0, 2.0, order=">")

        assert factory.parse_wkb(data) == factory.multi_point([factory.point(1, 2)])

    def test_srid_is_read_and_ignored(self, factory):
        data = struct.pack("<BII", 1, 0x20000001, 4326) + struct.pack("<dd", 1.0, 2.0)

        point = factory.parse_wkb(data)

        assert point == factory.point(1, 2)
        assert point.srid == 0

    def test_iso_z(self):
        factory = GeometryFactory(has_z=True, has_m=True)

        point = factory.parse_wkb(point_bytes(1.0, 2.0, 3.0, code=1001))

        assert point.ordinates() == (1.0, 2.0, 3.0, 0.0)

    def test_ewkb_m(self):
        factory = GeometryFactory(has_m=True)

        assert factory.parse_wkb(point_bytes(1.0, 2.0, 4.0, code=0x40000001)).m == 4.0

    def test_missing_dimension_filled(self):
        factory = GeometryFactory(has_z=True)

        assert factory.parse_wkb(POINT_1_2_LE).z == 0.0

    def test_properties(self, factory):
        assert WKBParser(factory).properties == {
            "support_ewkb": True,
            "support_wkb12": True,
            "ignore_extra_bytes": False,
        }


class TestWKBErrors:
    """Test FormatError reporting"""

    @pytest.mark.parametrize("data,position", [
        (bytes.fromhex(POINT_1_2_LE)[:20], 5),
        (bytes.fromhex(POINT_1_2_LE) + b"\x00", 21),
        (b"\x02" + bytes.fromhex(POINT_1_2_LE)[1:], 0),
        (struct.pack("<BI", 1, 99), 0),
        (b"", 0),
        ("zz", 0),
        (point_bytes(1.0, 2.0, 3.0, code=0x80000001), 0),
        (point_bytes(1.0, 2.0, 3.0, code=1001), 0),
        (struct.pack("<BII", 1, 2, 1) + struct.pack("<dd", 0.0, 0.0), 0),
    ])
    def test_error_offsets(self, factory, data, position):
        with pytest.raises(FormatError) as exc_info:
            factory.parse_wkb(data)

        assert exc_info.value.format_name == "WKB"
        assert exc_info.value.position == position

    def test_nested_srid_rejected(self, factory):
        nested = struct.pack("<BII", 1, 0x20000001, 4326) + struct.pack("<dd", 1.0, 2.0)
        data = struct.pack("<BII", 1, 4, 1) + nested

        with pytest.raises(FormatError) as exc_info:
            factory.parse_wkb(data)

        assert exc_info.value.position == 9

    def test_nested_dimension_mismatch(self):
        factory = GeometryFactory(has_z=True)
        data = struct.pack("<BII", 1, 0x80000004, 1) + point_bytes(1.0, 2.0)

        with pytest.raises(FormatError):
            factory.parse_wkb(data)

    def test_ewkb_disabled(self):
        parser = WKBParser(GeometryFactory(has_z=True), support_ewkb=False)

        with pytest.raises(FormatError):
            parser.parse(point_bytes(1.0, 2.0, 3.0, code=0x80000001))
        assert parser.parse(point_bytes(1.0, 2.0, 3.0, code=1001)).z == 3.0

    def test_wkb12_disabled(self):
        parser = WKBParser(GeometryFactory(has_z=True), support_wkb12=False)

        with pytest.raises(FormatError):
            parser.parse(point_bytes(1.0, 2.0, 3.0, code=1001))

    def test_ignore_extra_bytes(self, factory):
        parser = WKBParser(factory, ignore_extra_bytes=True)

        assert parser.parse(bytes.fromhex(POINT_1_2_LE) + b"\xff") == factory.point(1, 2)

    def test_non_bytes_input(self, factory):
        with pytest.raises(FormatError):
            factory.parse_wkb(12)


class TestWKBRoundTrip:
    """parse(generate(G)) == G across generator configurations"""

    @pytest.mark.parametrize("options", [
        {},
        {"type_format": "wkb12", "little_endian": False},
        {"emit_srid": True, "hex_format": True},
    ])
    @pytest.mark.parametrize("has_z,has_m", [(False, False), (True, False), (False, True), (True, True)])
    def test_round_trip(self, options, has_z, has_m):
        factory = GeometryFactory(has_z=has_z, has_m=has_m, srid=3857)
        extra = [value for value, flag in ((3.25, has_z), (-4.5, has_m)) if flag]
        points = [factory.point(x * 0.1, x + 1, *extra) for x in range(5)]
        ring = factory.linear_ring(points[:3] + [points[0]])
        collection = factory.collection([
            points[0],
            factory.line_string(points),
            factory.polygon(ring, [ring]),
            factory.multi_point(points[:2]),
            factory.multi_line_string([factory.line_string(points[:2]), factory.line_string([])]),
            factory.multi_polygon([factory.polygon(ring)]),
            factory.collection([]),
        ])

        data = WKBGenerator(**options).generate(collection)
        parsed = factory.parse_wkb(data)

        assert parsed == collection
        assert parsed.srid == 3857
