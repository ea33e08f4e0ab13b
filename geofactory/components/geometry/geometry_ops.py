import logging
from typing import Any, List

from geofactory.core import GeometryType
from geofactory.components.crs.projection import get_projection_capability

logger = logging.getLogger(__name__)


class GeometryOps:
    """Operations that rebuild geometries in another factory"""

    @classmethod
    def cast(cls, geometry: Any, factory: Any, project: bool = False) -> Any:
        """
        Rebuild a geometry in factory

        Dimensionality is adapted to the target factory: missing Z/M values are
        filled with 0, unsupported ones are dropped. With project=True and
        projections on both factories, coordinates are transformed by the
        projection capability; without a capability they are copied as-is.

        Args:
            geometry: Geometry value from any factory
            factory: Target factory
            project: Transform coordinates between the factories' projections

        Returns:
            Geometry value owned by factory
        """
        if geometry.factory is factory:
            return geometry

        transform = None
        source_projection = geometry.factory.projection
        target_projection = factory.projection
        if project and source_projection is not None and target_projection is not None \
                and source_projection != target_projection:
            capability = get_projection_capability()
            if capability is not None:
                def transform(coords):
                    return capability.transform(source_projection, target_projection, coords)
            else:
                logger.info("Cast without projection: no projection capability available")

        return cls._rebuild(geometry, factory, transform)

    @classmethod
    def _rebuild(cls, geometry: Any, factory: Any, transform: Any) -> Any:
        geometry_type = geometry.geometry_type
        if geometry_type == GeometryType.POINT:
            return cls._rebuild_points([geometry], factory, transform)[0]
        if geometry_type == GeometryType.LINE_STRING:
            return factory.line_string(cls._rebuild_points(geometry.points, factory, transform))
        if geometry_type == GeometryType.LINE:
            return factory.line(*cls._rebuild_points(geometry.points, factory, transform))
        if geometry_type == GeometryType.LINEAR_RING:
            return factory.linear_ring(cls._rebuild_points(geometry.points, factory, transform))
        if geometry_type == GeometryType.POLYGON:
            return factory.polygon(
                cls._rebuild(geometry.exterior_ring, factory, transform),
                [cls._rebuild(ring, factory, transform) for ring in geometry.interior_rings],
            )
        elements = [cls._rebuild(element, factory, transform) for element in geometry]
        builders = {
            GeometryType.GEOMETRY_COLLECTION: factory.collection,
            GeometryType.MULTI_POINT: factory.multi_point,
            GeometryType.MULTI_LINE_STRING: factory.multi_line_string,
            GeometryType.MULTI_POLYGON: factory.multi_polygon,
        }
        return builders[geometry_type](elements)

    @classmethod
    def _rebuild_points(cls, points: List[Any], factory: Any, transform: Any) -> List[Any]:
        coords = [(p.x, p.y, p.z) if p.z is not None else (p.x, p.y) for p in points]
        if transform is not None and coords:
            coords = transform(coords)
        result = []
        for point, coord in zip(points, coords):
            extra = []
            if factory.has_z:
                extra.append(coord[2] if len(coord) > 2 else 0.0)
            if factory.has_m:
                extra.append(point.m if point.m is not None else 0.0)
            result.append(factory.point(coord[0], coord[1], *extra))
        return result
