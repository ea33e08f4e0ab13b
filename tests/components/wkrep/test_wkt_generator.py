"""
Unit tests for WKTGenerator - dialects, case conventions and number formatting.
"""

import pytest

from geofactory.core import ConfigurationError, ConvertCase, WktTagFormat
from geofactory.components.factory import GeometryFactory
from geofactory.components.wkrep import WKTGenerator, CodecFactory


@pytest.fixture
def factory():
    return GeometryFactory()


@pytest.fixture
def upper():
    return WKTGenerator(convert_case="upper")


class TestWKTGeneratorOptions:
    """Test option validation"""

    def test_defaults(self):
        generator = WKTGenerator()

        assert generator.convert_case == ConvertCase.NONE
        assert generator.tag_format == WktTagFormat.WKT11
        assert generator.emit_ewkt_srid_prefix is False
        assert generator.properties == {
            "convert_case": "none",
            "tag_format": "wkt11",
            "emit_ewkt_srid_prefix": False,
        }

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WKTGenerator(colour="red")

        assert exc_info.value.option == "colour"

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            WKTGenerator(tag_format="wkt99")

    def test_non_bool_flag(self):
        with pytest.raises(ConfigurationError):
            WKTGenerator(emit_ewkt_srid_prefix="yes")

    def test_enum_members_accepted(self):
        assert WKTGenerator(convert_case=ConvertCase.LOWER).convert_case == ConvertCase.LOWER


class TestWKTGeneration:
    """Test generated text"""

    def test_factory_default_is_upper_case(self, factory):
        """Factory default generator writes POINT (1 2)"""
        assert factory.point(1.0, 2.0).as_text() == "POINT (1 2)"

    def test_camel_case_without_conversion(self, factory):
        assert WKTGenerator().generate(factory.point(1, 2)) == "Point (1 2)"

    def test_lower_case(self, factory):
        assert WKTGenerator(convert_case="lower").generate(factory.line_string([])) == "linestring empty"

    @pytest.mark.parametrize("value,text", [
        (0.1, "0.1"),
        (-1.5, "-1.5"),
        (1e-20, "1e-20"),
        (123456789.0, "123456789"),
    ])
    def test_number_formatting(self, factory, upper, value, text):
        assert upper.generate(factory.point(value, 0)) == f"POINT ({text} 0)"

    def test_polygon(self, factory, upper):
        polygon = factory.parse_wkt("POLYGON ((0 0, 10 0, 10 10, 0 0), (1 1, 2 1, 2 2, 1 1))")

        assert upper.generate(polygon) == "POLYGON ((0 0, 10 0, 10 10, 0 0), (1 1, 2 1, 2 2, 1 1))"

    def test_multi_point_elements_are_parenthesized(self, factory, upper):
        multi_point = factory.multi_point([factory.point(0, 0), factory.point(1, 1)])

        assert upper.generate(multi_point) == "MULTIPOINT ((0 0), (1 1))"

    def test_line_and_ring_written_as_line_string(self, factory, upper):
        line = factory.line(factory.point(0, 0), factory.point(1, 1))

        assert upper.generate(line) == "LINESTRING (0 0, 1 1)"

    def test_collection(self, factory, upper):
        collection = factory.collection([
            factory.point(1, 2),
            factory.collection([]),
            factory.polygon(factory.linear_ring([])),
        ])

        assert upper.generate(collection) == "GEOMETRYCOLLECTION (POINT (1 2), GEOMETRYCOLLECTION EMPTY, POLYGON EMPTY)"

    @pytest.mark.parametrize("tag_format,has_z,has_m,text", [
        ("wkt11", True, False, "POINT (1 2 3)"),
        ("wkt11", True, True, "POINT (1 2 3 4)"),
        ("wkt12", True, False, "POINT Z (1 2 3)"),
        ("wkt12", False, True, "POINT M (1 2 4)"),
        ("wkt12", True, True, "POINT ZM (1 2 3 4)"),
        ("ewkt", False, True, "POINTM (1 2 4)"),
        ("ewkt", True, True, "POINT (1 2 3 4)"),
    ])
    def test_dimension_tags(self, tag_format, has_z, has_m, text):
        factory = GeometryFactory(has_z=has_z, has_m=has_m)
        extra = [value for value, flag in ((3, has_z), (4, has_m)) if flag]
        generator = WKTGenerator(convert_case="upper", tag_format=tag_format)

        assert generator.generate(factory.point(1, 2, *extra)) == text

    def test_wkt12_tags_nested_collection_members(self):
        factory = GeometryFactory(has_z=True)
        collection = factory.collection([factory.point(1, 2, 3)])
        generator = WKTGenerator(convert_case="upper", tag_format="wkt12")

        assert generator.generate(collection) == "GEOMETRYCOLLECTION Z (POINT Z (1 2 3))"

    def test_ewkt_srid_prefix(self):
        factory = GeometryFactory(srid=4326)
        generator = WKTGenerator(convert_case="upper", tag_format="ewkt", emit_ewkt_srid_prefix=True)

        assert generator.generate(factory.point(1, 2)) == "SRID=4326;POINT (1 2)"

    def test_srid_prefix_needs_ewkt(self):
        factory = GeometryFactory(srid=4326)
        generator = WKTGenerator(convert_case="upper", emit_ewkt_srid_prefix=True)

        assert generator.generate(factory.point(1, 2)) == "POINT (1 2)"

    def test_codec_factory_builds_configured_generator(self, factory):
        generator = CodecFactory.create_wkt_generator({"convert_case": "lower"})

        assert generator.generate(factory.point(1, 2)) == "point (1 2)"

    def test_codec_factory_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            CodecFactory.create_wkt_generator(["upper"])
