import logging
import re
from typing import Any, List, NamedTuple, Optional, Tuple

from geofactory.core import CodecFormat, FormatError, GeometryType, StructuralError
from geofactory.components.wkrep.base_codec import BaseCodec, bool_option

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s*")
_TOKEN_RE = re.compile(
    r"(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<word>[A-Za-z_]+)"
    r"|(?P<punct>[(),;=])"
)

_TYPE_NAMES = {
    "POINT": GeometryType.POINT,
    "LINESTRING": GeometryType.LINE_STRING,
    "POLYGON": GeometryType.POLYGON,
    "MULTIPOINT": GeometryType.MULTI_POINT,
    "MULTILINESTRING": GeometryType.MULTI_LINE_STRING,
    "MULTIPOLYGON": GeometryType.MULTI_POLYGON,
    "GEOMETRYCOLLECTION": GeometryType.GEOMETRY_COLLECTION,
}

_DIMENSION_TAGS = {
    "Z": (True, False),
    "M": (False, True),
    "ZM": (True, True),
}

# (has_z, has_m) declared by a tag; None when the data is untagged
Dims = Optional[Tuple[bool, bool]]


class _Token(NamedTuple):
    kind: str
    text: str
    position: int


def _tokenize(text: str) -> List[_Token]:
    tokens = []
    position = 0
    length = len(text)
    while True:
        position = _WHITESPACE_RE.match(text, position).end()
        if position >= length:
            break
        match = _TOKEN_RE.match(text, position)
        if not match:
            raise FormatError(CodecFormat.WKT, position, f"Unexpected character {text[position]!r}")
        kind = match.lastgroup
        tokens.append(_Token(kind, match.group(kind), position))
        position = match.end()
    return tokens


class WKTParser(BaseCodec):
    """
    Parses WKT text into geometry values built by one factory

    Options:
        support_ewkt: accept "SRID=n;" prefixes and PostGIS "POINTM" tags
        support_wkt12: accept ISO " Z" / " M" / " ZM" tags
        strict_wkt11: reject all dimension tags and non-2D coordinates
        ignore_extra_tokens: do not fail on trailing input
    """

    _OPTIONS = {
        "support_ewkt": (bool_option, True),
        "support_wkt12": (bool_option, True),
        "strict_wkt11": (bool_option, False),
        "ignore_extra_tokens": (bool_option, False),
    }

    def __init__(self, factory: Any, **options: Any):
        super().__init__(**options)
        self._factory = factory

    @property
    def factory(self) -> Any:
        return self._factory

    def parse(self, text: str) -> Any:
        """
        Parse WKT

        Args:
            text: WKT (or EWKT) text

        Returns:
            Geometry value created by the bound factory

        Raises:
            FormatError: If the text is malformed or unsupported
        """
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="replace")
        if not isinstance(text, str):
            raise FormatError(CodecFormat.WKT, 0, f"expected text, got {type(text).__name__}")
        return _WktReader(self, text).read()


class _WktReader:
    """Single-use parse state for one WKT input"""

    def __init__(self, parser: WKTParser, text: str):
        self._factory = parser.factory
        self._options = parser._options
        self._text = text
        self._tokens = _tokenize(text)
        self._index = 0

    def _error(self, details: str, token: Optional[_Token] = None) -> FormatError:
        position = token.position if token is not None else len(self._text)
        return FormatError(CodecFormat.WKT, position, details)

    def _peek(self) -> Optional[_Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error("Unexpected end of input")
        self._index += 1
        return token

    def _expect(self, text: str) -> _Token:
        token = self._next()
        if token.text != text:
            raise self._error(f"Expected {text!r}, found {token.text!r}", token)
        return token

    def _peek_is(self, text: str) -> bool:
        token = self._peek()
        return token is not None and token.text.upper() == text

    def read(self) -> Any:
        self._read_srid_prefix()
        geometry = self._read_geometry(None)
        token = self._peek()
        if token is not None and not self._options["ignore_extra_tokens"]:
            raise self._error(f"Unexpected trailing token {token.text!r}", token)
        return geometry

    def _read_srid_prefix(self) -> None:
        if not self._peek_is("SRID"):
            return
        token = self._next()
        if not self._options["support_ewkt"]:
            raise self._error("EWKT SRID prefix is not supported", token)
        self._expect("=")
        srid_token = self._next()
        if srid_token.kind != "number":
            raise self._error(f"Expected SRID value, found {srid_token.text!r}", srid_token)
        self._expect(";")
        srid = int(float(srid_token.text))
        if srid != self._factory.srid:
            logger.debug("EWKT declares SRID %s, parsing into factory with SRID %s", srid, self._factory.srid)

    def _read_tag(self, context: Dims) -> Tuple[GeometryType, Dims, _Token]:
        token = self._next()
        if token.kind != "word":
            raise self._error(f"Expected geometry type, found {token.text!r}", token)
        name = token.text.upper()
        dims: Dims = None
        if name not in _TYPE_NAMES and name.endswith("M") and name[:-1] in _TYPE_NAMES:
            if not self._options["support_ewkt"] or self._options["strict_wkt11"]:
                raise self._error(f"EWKT tag {token.text!r} is not supported", token)
            name = name[:-1]
            dims = (False, True)
        if name not in _TYPE_NAMES:
            raise self._error(f"Unknown geometry type {token.text!r}", token)

        suffix = self._peek()
        if dims is None and suffix is not None and suffix.kind == "word" and suffix.text.upper() in _DIMENSION_TAGS:
            if not self._options["support_wkt12"] or self._options["strict_wkt11"]:
                raise self._error(f"WKT 1.2 tag {suffix.text!r} is not supported", suffix)
            self._next()
            dims = _DIMENSION_TAGS[suffix.text.upper()]

        if dims is None:
            dims = context
        elif context is not None and dims != context:
            raise self._error("Mismatched dimensionality inside collection", token)
        return _TYPE_NAMES[name], dims, token

    def _read_geometry(self, context: Dims) -> Any:
        geometry_type, dims, token = self._read_tag(context)
        readers = {
            GeometryType.POINT: self._read_point_text,
            GeometryType.LINE_STRING: self._read_line_string_text,
            GeometryType.POLYGON: self._read_polygon_text,
            GeometryType.MULTI_POINT: self._read_multi_point_text,
            GeometryType.MULTI_LINE_STRING: self._read_multi_line_string_text,
            GeometryType.MULTI_POLYGON: self._read_multi_polygon_text,
            GeometryType.GEOMETRY_COLLECTION: self._read_collection_text,
        }
        try:
            return readers[geometry_type](dims)
        except StructuralError as e:
            raise FormatError(CodecFormat.WKT, token.position, str(e)) from e

    def _read_empty(self) -> bool:
        if self._peek_is("EMPTY"):
            self._next()
            return True
        return False

    def _read_coords(self, dims: Dims) -> Any:
        values = []
        start = self._peek()
        while True:
            token = self._peek()
            if token is None or token.kind != "number":
                break
            values.append(float(self._next().text))
        if len(values) < 2:
            raise self._error("Expected at least 2 coordinate values", start)
        return self._make_point(values, dims, start)

    def _make_point(self, values: List[float], dims: Dims, token: _Token) -> Any:
        factory = self._factory
        count = len(values)
        z = m = None
        if dims is None:
            if self._options["strict_wkt11"] and count != 2:
                raise self._error("Strict WKT 1.1 only allows 2D coordinates", token)
            if count == 3:
                if factory.has_z:
                    z = values[2]
                elif factory.has_m:
                    m = values[2]
                else:
                    raise self._error("Data has a third ordinate but the factory is 2D", token)
            elif count == 4:
                z, m = values[2], values[3]
            elif count != 2:
                raise self._error(f"Unexpected number of ordinates: {count}", token)
        else:
            has_z, has_m = dims
            expected = 2 + int(has_z) + int(has_m)
            if count != expected:
                raise self._error(f"Expected {expected} ordinates, found {count}", token)
            rest = values[2:]
            if has_z:
                z = rest.pop(0)
            if has_m:
                m = rest.pop(0)
        if z is not None and not factory.has_z:
            raise self._error("Data has Z coordinates but the factory does not support Z", token)
        if m is not None and not factory.has_m:
            raise self._error("Data has M coordinates but the factory does not support M", token)
        extra = []
        if factory.has_z:
            extra.append(0.0 if z is None else z)
        if factory.has_m:
            extra.append(0.0 if m is None else m)
        return factory.point(values[0], values[1], *extra)

    def _read_point_list(self, dims: Dims) -> List[Any]:
        self._expect("(")
        points = [self._read_coords(dims)]
        while self._peek_is(","):
            self._next()
            points.append(self._read_coords(dims))
        self._expect(")")
        return points

    def _read_point_text(self, dims: Dims) -> Any:
        token = self._peek()
        if self._read_empty():
            raise self._error("Empty points are not supported", token)
        self._expect("(")
        point = self._read_coords(dims)
        self._expect(")")
        return point

    def _read_line_string_text(self, dims: Dims) -> Any:
        if self._read_empty():
            return self._factory.line_string([])
        return self._factory.line_string(self._read_point_list(dims))

    def _read_ring(self, dims: Dims) -> Any:
        if self._read_empty():
            return self._factory.linear_ring([])
        token = self._peek()
        try:
            return self._factory.linear_ring(self._read_point_list(dims))
        except StructuralError as e:
            raise FormatError(CodecFormat.WKT, token.position if token else len(self._text), str(e)) from e

    def _read_polygon_text(self, dims: Dims) -> Any:
        if self._read_empty():
            return self._factory.polygon(self._factory.linear_ring([]))
        self._expect("(")
        rings = [self._read_ring(dims)]
        while self._peek_is(","):
            self._next()
            rings.append(self._read_ring(dims))
        self._expect(")")
        return self._factory.polygon(rings[0], rings[1:])

    def _read_elements(self, read_element) -> List[Any]:
        if self._read_empty():
            return []
        self._expect("(")
        elements = [read_element()]
        while self._peek_is(","):
            self._next()
            elements.append(read_element())
        self._expect(")")
        return elements

    def _read_multi_point_text(self, dims: Dims) -> Any:
        def read_element():
            if self._peek_is("("):
                self._next()
                point = self._read_coords(dims)
                self._expect(")")
                return point
            return self._read_coords(dims)
        return self._factory.multi_point(self._read_elements(read_element))

    def _read_multi_line_string_text(self, dims: Dims) -> Any:
        return self._factory.multi_line_string(
            self._read_elements(lambda: self._read_line_string_text(dims))
        )

    def _read_multi_polygon_text(self, dims: Dims) -> Any:
        return self._factory.multi_polygon(
            self._read_elements(lambda: self._read_polygon_text(dims))
        )

    def _read_collection_text(self, dims: Dims) -> Any:
        return self._factory.collection(
            self._read_elements(lambda: self._read_geometry(dims))
        )
