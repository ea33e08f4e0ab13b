"""
Coordinate system values parsed from OGC WKT-CRS text.

The parser understands the generic keyword[arg, ...] grammar shared by WKT1
and WKT2 (square brackets or parentheses), so definitions produced by GDAL,
PostGIS spatial_ref_sys tables or pyproj can all be loaded. Only the tree
structure is interpreted; no datum or projection math happens here.
"""
import re
from typing import List, Optional, Tuple, Union

from geofactory.core import CodecFormat, ConfigurationError, FormatError

_WHITESPACE_RE = re.compile(r"\s*")
_TOKEN_RE = re.compile(
    r"(?:"
    r'(?P<string>"(?:[^"]|"")*")'
    r'|(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'
    r'|(?P<word>[A-Za-z_][A-Za-z0-9_]*)'
    r'|(?P<open>[\[(])'
    r'|(?P<close>[\])])'
    r'|(?P<comma>,)'
    r')'
)

_AUTHORITY_KEYWORDS = ("AUTHORITY", "ID")


class CsEnum(str):
    """Bare (unquoted) identifier argument such as NORTH or EAST"""
    pass


CsValue = Union[str, float, CsEnum, 'CsNode']


class CsNode:
    """One KEYWORD[...] element of a WKT-CRS tree"""

    def __init__(self, keyword: str, args: Tuple[CsValue, ...]):
        self._keyword = keyword.upper()
        self._args = args

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def args(self) -> Tuple[CsValue, ...]:
        return self._args

    def children(self, keyword: Optional[str] = None) -> List['CsNode']:
        """Child nodes, optionally filtered by keyword"""
        return [
            arg for arg in self._args
            if isinstance(arg, CsNode) and (keyword is None or arg.keyword == keyword)
        ]

    def to_wkt(self) -> str:
        return f"{self._keyword}[{','.join(_format_value(arg) for arg in self._args)}]"


def _format_value(value: CsValue) -> str:
    if isinstance(value, CsNode):
        return value.to_wkt()
    if isinstance(value, CsEnum):
        return str(value)
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class _CsParser:
    """Recursive descent parser over WKT-CRS tokens"""

    def __init__(self, text: str):
        self._text = text
        self._tokens = self._tokenize(text)
        self._index = 0

    def _tokenize(self, text: str) -> List[Tuple[str, str, int]]:
        tokens = []
        position = 0
        length = len(text)
        while True:
            position = _WHITESPACE_RE.match(text, position).end()
            if position >= length:
                break
            match = _TOKEN_RE.match(text, position)
            if not match:
                raise FormatError(CodecFormat.CRS_WKT, position, f"Unexpected character {text[position]!r}")
            kind = match.lastgroup
            tokens.append((kind, match.group(kind), match.start(kind)))
            position = match.end()
        return tokens

    def _peek(self) -> Optional[Tuple[str, str, int]]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self, expected: Optional[str] = None) -> Tuple[str, str, int]:
        token = self._peek()
        if token is None:
            raise FormatError(CodecFormat.CRS_WKT, len(self._text), "Unexpected end of input")
        if expected is not None and token[0] != expected:
            raise FormatError(CodecFormat.CRS_WKT, token[2], f"Expected {expected}, found {token[1]!r}")
        self._index += 1
        return token

    def parse(self) -> CsNode:
        node = self._parse_node()
        token = self._peek()
        if token is not None:
            raise FormatError(CodecFormat.CRS_WKT, token[2], f"Unexpected trailing token {token[1]!r}")
        return node

    def _parse_node(self) -> CsNode:
        _, keyword, _ = self._next("word")
        self._next("open")
        args: List[CsValue] = []
        token = self._peek()
        if token is not None and token[0] == "close":
            self._next()
            return CsNode(keyword, tuple(args))
        while True:
            args.append(self._parse_value())
            kind, text, position = self._next()
            if kind == "close":
                break
            if kind != "comma":
                raise FormatError(CodecFormat.CRS_WKT, position, f"Expected ',' or ']', found {text!r}")
        return CsNode(keyword, tuple(args))

    def _parse_value(self) -> CsValue:
        token = self._peek()
        if token is None:
            raise FormatError(CodecFormat.CRS_WKT, len(self._text), "Unexpected end of input")
        kind, text, position = token
        if kind == "string":
            self._next()
            return text[1:-1].replace('""', '"')
        if kind == "number":
            self._next()
            return float(text)
        if kind == "word":
            following = self._tokens[self._index + 1] if self._index + 1 < len(self._tokens) else None
            if following is not None and following[0] == "open":
                return self._parse_node()
            self._next()
            return CsEnum(text)
        raise FormatError(CodecFormat.CRS_WKT, position, f"Unexpected token {text!r}")


class CoordinateSystem:
    """
    Coordinate reference system parsed from WKT-CRS text.

    Values are immutable and compare by their canonical WKT rendering.
    """

    def __init__(self, root: CsNode):
        self._root = root
        self._wkt = root.to_wkt()

    @classmethod
    def from_wkt(cls, text: str) -> 'CoordinateSystem':
        """
        Parse WKT-CRS text

        Args:
            text: OGC WKT-CRS definition

        Returns:
            CoordinateSystem instance

        Raises:
            ConfigurationError: If the text is not valid WKT-CRS
        """
        if not isinstance(text, str) or not text.strip():
            raise ConfigurationError("coord_sys", "expected non-empty WKT-CRS text")
        try:
            return cls(_CsParser(text).parse())
        except FormatError as e:
            raise ConfigurationError("coord_sys", str(e)) from e

    @property
    def root(self) -> CsNode:
        return self._root

    @property
    def kind(self) -> str:
        """Root keyword, e.g. GEOGCS or PROJCS"""
        return self._root.keyword

    @property
    def name(self) -> Optional[str]:
        args = self._root.args
        if args and isinstance(args[0], str) and not isinstance(args[0], CsEnum):
            return args[0]
        return None

    def _authority_node(self) -> Optional[CsNode]:
        for keyword in _AUTHORITY_KEYWORDS:
            nodes = self._root.children(keyword)
            if nodes:
                return nodes[-1]
        return None

    @property
    def authority(self) -> Optional[str]:
        node = self._authority_node()
        if node is None or not node.args:
            return None
        return str(node.args[0])

    @property
    def authority_code(self) -> Optional[str]:
        """Authority code of the root element as a string (e.g. "4326")"""
        node = self._authority_node()
        if node is None or len(node.args) < 2:
            return None
        code = node.args[1]
        if isinstance(code, float):
            return str(int(code)) if code.is_integer() else repr(code)
        return str(code)

    def to_wkt(self) -> str:
        return self._wkt

    def __eq__(self, other) -> bool:
        return isinstance(other, CoordinateSystem) and self._wkt == other._wkt

    def __hash__(self) -> int:
        return hash(self._wkt)

    def __repr__(self) -> str:
        return f"CoordinateSystem({self.kind}, name={self.name!r}, authority_code={self.authority_code!r})"

    def __str__(self) -> str:
        return self._wkt
