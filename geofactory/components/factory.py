import logging
from typing import Any, Dict, Optional

from geofactory.core import FactoryProperty, StructuralError, GeometryType
from geofactory.models import CrsRequest, FactoryConfigRecord, ProjectionRecord
from geofactory.components.crs import CrsResolver, CoordinateSystem, ProjectionHandle, get_projection_capability
from geofactory.components.geometry import (
    Geometry,
    GeometryOps,
    Point,
    LineString,
    Line,
    LinearRing,
    Polygon,
    GeometryCollection,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
)
from geofactory.components.wkrep import CodecFactory

logger = logging.getLogger(__name__)


def _load_factory(data: Dict[str, Any]) -> 'GeometryFactory':
    """Unpickle hook: rebuild a factory from its object-graph record"""
    return GeometryFactory.from_record(FactoryConfigRecord.from_mapping(data))


class GeometryFactory:
    """
    Immutable configuration shared by every geometry it creates

    Holds the Z/M dimensionality, SRID, buffer resolution, resolved CRS
    (coordinate system and optional projection) and the four WKT/WKB codecs.
    Two factories are equal when srid, has_z, has_m and projection match;
    coordinate system and codec options do not take part in equality.
    """

    def __init__(
        self,
        has_z: bool = False,
        has_m: bool = False,
        srid: Optional[int] = None,
        buffer_resolution: Optional[int] = None,
        proj4: Any = None,
        coord_sys: Any = None,
        srs_database: Any = None,
        wkt_generator: Optional[Dict[str, Any]] = None,
        wkb_generator: Optional[Dict[str, Any]] = None,
        wkt_parser: Optional[Dict[str, Any]] = None,
        wkb_parser: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the factory

        Args:
            has_z: Geometries carry Z values
            has_m: Geometries carry M values
            srid: Spatial reference identifier (authoritative when given)
            buffer_resolution: Segments per quarter circle, clamped to >= 1
            proj4: Projection definition (str / dict) or ProjectionHandle
            coord_sys: WKT-CRS text or CoordinateSystem
            srs_database: SrsCatalog used to fill a missing projection / coordinate system
            wkt_generator: WKTGenerator options
            wkb_generator: WKBGenerator options
            wkt_parser: WKTParser options
            wkb_parser: WKBParser options

        Raises:
            ConfigurationError: If explicit CRS input or codec options are invalid
        """
        self._has_z = bool(has_z)
        self._has_m = bool(has_m)

        resolution = CrsResolver.resolve(
            CrsRequest(proj4=proj4, coord_sys=coord_sys, srid=srid, srs_database=srs_database)
        )
        self._projection: Optional[ProjectionHandle] = resolution.projection
        self._coord_sys: Optional[CoordinateSystem] = resolution.coord_sys
        self._srid: int = resolution.srid

        try:
            self._buffer_resolution = max(int(buffer_resolution or 0), 1)
        except (TypeError, ValueError):
            self._buffer_resolution = 1

        self._wkt_generator = CodecFactory.create_wkt_generator(wkt_generator)
        self._wkb_generator = CodecFactory.create_wkb_generator(wkb_generator)
        self._wkt_parser = CodecFactory.create_wkt_parser(self, wkt_parser)
        self._wkb_parser = CodecFactory.create_wkb_parser(self, wkb_parser)

        self._marshal_wkb_generator = CodecFactory.create_wkb_generator(CodecFactory.MARSHAL_WKB_GENERATOR)
        self._marshal_wkb_parser = CodecFactory.create_wkb_parser(self, CodecFactory.MARSHAL_WKB_PARSER)
        self._document_wkt_generator = CodecFactory.create_wkt_generator(CodecFactory.DOCUMENT_WKT_GENERATOR)
        self._document_wkt_parser = CodecFactory.create_wkt_parser(self, CodecFactory.DOCUMENT_WKT_PARSER)

        self._hash: Optional[int] = None

    # Configuration accessors

    @property
    def has_z(self) -> bool:
        return self._has_z

    @property
    def has_m(self) -> bool:
        return self._has_m

    @property
    def srid(self) -> int:
        return self._srid

    @property
    def buffer_resolution(self) -> int:
        return self._buffer_resolution

    @property
    def coord_sys(self) -> Optional[CoordinateSystem]:
        return self._coord_sys

    @property
    def projection(self) -> Optional[ProjectionHandle]:
        return self._projection

    @property
    def proj4(self) -> Optional[ProjectionHandle]:
        """Alias of projection"""
        return self._projection

    # Equality

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, GeometryFactory):
            return False
        return (
            self._srid == other._srid
            and self._has_z == other._has_z
            and self._has_m == other._has_m
            and self._projection == other._projection
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self._srid, self._has_z, self._has_m, self._projection))
        return self._hash

    def __repr__(self) -> str:
        return (
            f"GeometryFactory(srid={self._srid}, has_z={self._has_z}, has_m={self._has_m}, "
            f"projection={self._projection!r})"
        )

    # Geometry constructors

    def point(self, x: float, y: float, *extra: float) -> Point:
        """Point; extra values are z then m, following the factory dimensionality"""
        return Point(self, x, y, *extra)

    def line_string(self, points) -> LineString:
        return LineString(self, points)

    def line(self, *points: Point) -> Line:
        """Line through exactly two points: factory.line(start, stop)"""
        return Line(self, points)

    def linear_ring(self, points) -> LinearRing:
        return LinearRing(self, points)

    def polygon(self, outer_ring: LinearRing, inner_rings=None) -> Polygon:
        return Polygon(self, outer_ring, inner_rings)

    def collection(self, elements) -> GeometryCollection:
        return GeometryCollection(self, elements)

    def multi_point(self, elements) -> MultiPoint:
        return MultiPoint(self, elements)

    def multi_line_string(self, elements) -> MultiLineString:
        return MultiLineString(self, elements)

    def multi_polygon(self, elements) -> MultiPolygon:
        return MultiPolygon(self, elements)

    def cast(self, geometry: Geometry, project: bool = False) -> Geometry:
        """Rebuild a geometry from another factory in this one (see GeometryOps.cast)"""
        return GeometryOps.cast(geometry, self, project=project)

    # Codecs

    @property
    def wkt_generator(self):
        return self._wkt_generator

    @property
    def wkb_generator(self):
        return self._wkb_generator

    @property
    def wkt_parser(self):
        return self._wkt_parser

    @property
    def wkb_parser(self):
        return self._wkb_parser

    def parse_wkt(self, text: str) -> Geometry:
        return self._wkt_parser.parse(text)

    def parse_wkb(self, data: bytes | str) -> Geometry:
        return self._wkb_parser.parse(data)

    def generate_wkt(self, geometry: Geometry) -> str:
        return self._wkt_generator.generate(geometry)

    def generate_wkb(self, geometry: Geometry) -> bytes | str:
        return self._wkb_generator.generate(geometry)

    def _check_owned(self, geometry: Geometry) -> None:
        if not isinstance(geometry, Geometry) or geometry.factory != self:
            raise StructuralError(
                getattr(geometry, "geometry_type", GeometryType.GEOMETRY_COLLECTION),
                "geometry was not created by this factory"
            )

    def write_for_marshal(self, geometry: Geometry) -> bytes:
        """WKB 1.2 payload for the object-graph envelope"""
        self._check_owned(geometry)
        return self._marshal_wkb_generator.generate(geometry)

    def read_for_marshal(self, data: bytes) -> Geometry:
        return self._marshal_wkb_parser.parse(data)

    def write_for_document(self, geometry: Geometry) -> str:
        """WKT 1.2 payload for the document envelope"""
        self._check_owned(geometry)
        return self._document_wkt_generator.generate(geometry)

    def read_for_document(self, text: str) -> Geometry:
        return self._document_wkt_parser.parse(text)

    # Persistence

    def to_record(self) -> FactoryConfigRecord:
        """Snapshot of the full configuration"""
        projection = None
        if self._projection is not None:
            projection = ProjectionRecord(
                definition=self._projection.original_str or self._projection.canonical_str,
                radians=self._projection.radians,
            )
        return FactoryConfigRecord(
            has_z_coordinate=self._has_z,
            has_m_coordinate=self._has_m,
            srid=self._srid,
            buffer_resolution=self._buffer_resolution,
            wkt_generator=self._wkt_generator.properties,
            wkb_generator=self._wkb_generator.properties,
            wkt_parser=self._wkt_parser.properties,
            wkb_parser=self._wkb_parser.properties,
            proj4=projection,
            coord_sys=self._coord_sys.to_wkt() if self._coord_sys is not None else None,
        )

    @classmethod
    def from_record(cls, record: FactoryConfigRecord) -> 'GeometryFactory':
        """
        Build an equivalent factory from a configuration snapshot

        CRS resolution runs again; a stored projection is dropped when no
        projection capability is available.
        """
        projection = None
        if record.proj4 is not None:
            capability = get_projection_capability()
            if capability is not None:
                projection = capability.parse(record.proj4.definition, radians=record.proj4.radians)
            else:
                logger.info("Stored projection dropped: no projection capability available")
        return cls(
            has_z=record.has_z_coordinate,
            has_m=record.has_m_coordinate,
            srid=record.srid,
            buffer_resolution=record.buffer_resolution,
            proj4=projection,
            coord_sys=record.coord_sys,
            wkt_generator=record.wkt_generator,
            wkb_generator=record.wkb_generator,
            wkt_parser=record.wkt_parser,
            wkb_parser=record.wkb_parser,
        )

    def __reduce__(self):
        return (_load_factory, (self.to_record().to_marshal(),))

    # Defined last: the name shadows the builtin decorator inside the class body

    def property(self, name: FactoryProperty | str) -> Any:
        """
        Get a named factory property

        Args:
            name: FactoryProperty or its string value

        Returns:
            Property value, or None for unknown names
        """
        try:
            key = FactoryProperty(getattr(name, "value", name))
        except ValueError:
            return None
        properties = {
            FactoryProperty.HAS_Z: self._has_z,
            FactoryProperty.HAS_M: self._has_m,
            FactoryProperty.BUFFER_RESOLUTION: self._buffer_resolution,
            FactoryProperty.IS_CARTESIAN: True,
        }
        return properties[key]
