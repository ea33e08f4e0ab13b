from typing import Any, Callable, Dict, List

from geofactory.core import ConvertCase, GeometryType, WktTagFormat, WIRE_TYPES
from geofactory.components.wkrep.base_codec import BaseCodec, bool_option, enum_option, format_number

EMPTY = "EMPTY"


class WKTGenerator(BaseCodec):
    """
    Generates WKT text for geometry values

    Options:
        convert_case: "upper", "lower" or "none" (CamelCase tags, the default)
        tag_format: "wkt11" (Z/M signalled by coordinate count),
            "wkt12" (ISO " Z" / " M" / " ZM" suffixes) or
            "ewkt" (PostGIS: "M" appended to the tag for M-only data)
        emit_ewkt_srid_prefix: prefix "SRID=<srid>;" (ewkt only)
    """

    _OPTIONS = {
        "convert_case": (enum_option(ConvertCase, ConvertCase.NONE), ConvertCase.NONE),
        "tag_format": (enum_option(WktTagFormat), WktTagFormat.WKT11),
        "emit_ewkt_srid_prefix": (bool_option, False),
    }

    # Case conversion strategies (Strategy Pattern)
    _CASE_CONVERTERS: Dict[ConvertCase, Callable[[str], str]] = {
        ConvertCase.UPPER: str.upper,
        ConvertCase.LOWER: str.lower,
        ConvertCase.NONE: lambda text: text,
    }

    @property
    def convert_case(self) -> ConvertCase:
        return self._options["convert_case"]

    @property
    def tag_format(self) -> WktTagFormat:
        return self._options["tag_format"]

    @property
    def emit_ewkt_srid_prefix(self) -> bool:
        return self._options["emit_ewkt_srid_prefix"]

    def generate(self, geometry: Any) -> str:
        """
        Generate WKT for a geometry

        Args:
            geometry: Geometry value

        Returns:
            WKT text
        """
        factory = geometry.factory
        text = self._generate(geometry, factory.has_z, factory.has_m)
        if self.tag_format == WktTagFormat.EWKT and self.emit_ewkt_srid_prefix:
            text = f"{self._convert('SRID')}={geometry.srid};{text}"
        return text

    def _convert(self, text: str) -> str:
        return self._CASE_CONVERTERS[self.convert_case](text)

    def _tag(self, geometry_type: GeometryType, has_z: bool, has_m: bool) -> str:
        tag = WIRE_TYPES[geometry_type].value
        if self.tag_format == WktTagFormat.WKT12 and (has_z or has_m):
            tag += " " + ("Z" if has_z else "") + ("M" if has_m else "")
        elif self.tag_format == WktTagFormat.EWKT and has_m and not has_z:
            tag += "M"
        return self._convert(tag)

    def _generate(self, geometry: Any, has_z: bool, has_m: bool) -> str:
        tag = self._tag(geometry.geometry_type, has_z, has_m)
        if geometry.geometry_type == GeometryType.POINT:
            body = self._point_body(geometry)
        else:
            body = self._BODY_HANDLERS[WIRE_TYPES[geometry.geometry_type]](self, geometry, has_z, has_m)
        return f"{tag} {body}"

    def _coords(self, point: Any) -> str:
        return " ".join(format_number(value) for value in point.ordinates())

    def _point_body(self, point: Any) -> str:
        return f"({self._coords(point)})"

    def _line_string_body(self, line_string: Any, has_z: bool = False, has_m: bool = False) -> str:
        if line_string.is_empty():
            return self._convert(EMPTY)
        return "(" + ", ".join(self._coords(point) for point in line_string.points) + ")"

    def _polygon_body(self, polygon: Any, has_z: bool = False, has_m: bool = False) -> str:
        if polygon.is_empty():
            return self._convert(EMPTY)
        return "(" + ", ".join(self._line_string_body(ring) for ring in polygon.rings) + ")"

    def _multi_point_body(self, multi_point: Any, has_z: bool, has_m: bool) -> str:
        if not len(multi_point):
            return self._convert(EMPTY)
        return "(" + ", ".join(self._point_body(point) for point in multi_point) + ")"

    def _multi_line_string_body(self, multi_line_string: Any, has_z: bool, has_m: bool) -> str:
        if not len(multi_line_string):
            return self._convert(EMPTY)
        return "(" + ", ".join(self._line_string_body(element) for element in multi_line_string) + ")"

    def _multi_polygon_body(self, multi_polygon: Any, has_z: bool, has_m: bool) -> str:
        if not len(multi_polygon):
            return self._convert(EMPTY)
        return "(" + ", ".join(self._polygon_body(element) for element in multi_polygon) + ")"

    def _collection_body(self, collection: Any, has_z: bool, has_m: bool) -> str:
        if not len(collection):
            return self._convert(EMPTY)
        elements: List[str] = [self._generate(element, has_z, has_m) for element in collection]
        return "(" + ", ".join(elements) + ")"

    # Strategy map: wire GeometryType -> body renderer
    _BODY_HANDLERS = {
        GeometryType.LINE_STRING: _line_string_body,
        GeometryType.POLYGON: _polygon_body,
        GeometryType.MULTI_POINT: _multi_point_body,
        GeometryType.MULTI_LINE_STRING: _multi_line_string_body,
        GeometryType.MULTI_POLYGON: _multi_polygon_body,
        GeometryType.GEOMETRY_COLLECTION: _collection_body,
    }
