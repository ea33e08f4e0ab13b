import logging
from typing import Any, Optional

from geofactory.core import ConfigurationError
from geofactory.models import CrsRequest, CrsResolution
from geofactory.components.crs.coordinate_system import CoordinateSystem
from geofactory.components.crs.projection import ProjectionHandle, get_projection_capability

logger = logging.getLogger(__name__)

_SRID_MIN = -2 ** 31
_SRID_MAX = 2 ** 31 - 1


class CrsResolver:
    """
    Resolves projection, coordinate system and SRID for a factory

    Resolution order:
    1. parse a raw projection definition (if the projection capability exists)
    2. parse raw WKT-CRS text
    3. fill whatever is still missing from the SRS catalog entry for srid
    4. derive srid from the coordinate system authority code if still unset
    5. coerce srid to int (0 when unresolved)
    """

    @classmethod
    def resolve(cls, request: CrsRequest) -> CrsResolution:
        """
        Resolve a CRS request

        Args:
            request: Raw or pre-built CRS inputs

        Returns:
            CrsResolution

        Raises:
            ConfigurationError: If explicit CRS text, projection or srid is malformed
        """
        projection = cls._resolve_projection(request.proj4)
        coord_sys = cls._resolve_coord_sys(request.coord_sys)
        srid = request.srid

        if (projection is None or coord_sys is None) and srid is not None and request.srs_database is not None:
            entry = request.srs_database.get(cls._coerce_srid(srid))
            if entry is not None:
                logger.debug("SRS catalog hit for srid %s", srid)
                if projection is None:
                    projection = entry.proj4
                if coord_sys is None:
                    coord_sys = entry.coord_sys
            else:
                logger.debug("SRS catalog has no entry for srid %s", srid)

        if srid is None and coord_sys is not None:
            code = coord_sys.authority_code
            if code is not None and code.isdigit() and int(code) <= _SRID_MAX:
                srid = code

        return CrsResolution(projection=projection, coord_sys=coord_sys, srid=cls._coerce_srid(srid))

    @staticmethod
    def _resolve_projection(proj4: Any) -> Optional[ProjectionHandle]:
        if proj4 is None or isinstance(proj4, ProjectionHandle):
            return proj4
        capability = get_projection_capability()
        if capability is None:
            logger.info("Projection %r ignored: no projection capability available", proj4)
            return None
        return capability.parse(proj4)

    @staticmethod
    def _resolve_coord_sys(coord_sys: Any) -> Optional[CoordinateSystem]:
        if coord_sys is None or isinstance(coord_sys, CoordinateSystem):
            return coord_sys
        if isinstance(coord_sys, str):
            return CoordinateSystem.from_wkt(coord_sys)
        raise ConfigurationError(
            "coord_sys", f"expected WKT-CRS text or CoordinateSystem, got {type(coord_sys).__name__}"
        )

    @staticmethod
    def _coerce_srid(srid: Any) -> int:
        if srid is None:
            return 0
        try:
            value = int(srid)
        except (TypeError, ValueError) as e:
            raise ConfigurationError("srid", f"expected an integer, got {srid!r}") from e
        # EWKB stores the SRID as a signed 32-bit integer
        if not _SRID_MIN <= value <= _SRID_MAX:
            raise ConfigurationError("srid", f"{value} is outside the signed 32-bit range")
        return value
