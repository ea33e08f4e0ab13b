"""Spatial reference system catalogs (lookup by numeric identifier)"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from geofactory.components.crs.coordinate_system import CoordinateSystem
from geofactory.components.crs.projection import ProjectionHandle, get_projection_capability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SrsEntry:
    """One catalog entry"""
    identifier: int
    name: str = ""
    proj4: Optional[ProjectionHandle] = None
    coord_sys: Optional[CoordinateSystem] = None


class SrsCatalog(ABC):
    """Abstract spatial reference catalog (Interface)"""

    @abstractmethod
    def get(self, srid: int) -> Optional[SrsEntry]:
        """
        Look up an SRID

        Args:
            srid: Spatial reference identifier

        Returns:
            SrsEntry, or None if the catalog has no entry
        """
        pass


class StaticSrsCatalog(SrsCatalog):
    """In-memory catalog populated by the caller"""

    def __init__(self):
        self._entries: Dict[int, SrsEntry] = {}

    def add(self, identifier: int, proj4: Any = None, coord_sys: Any = None, name: str = "") -> SrsEntry:
        """
        Register an entry, parsing raw definitions

        Args:
            identifier: SRID
            proj4: Projection definition or ProjectionHandle (dropped if pyproj is unavailable)
            coord_sys: WKT-CRS text or CoordinateSystem

        Returns:
            The stored SrsEntry
        """
        if proj4 is not None and not isinstance(proj4, ProjectionHandle):
            capability = get_projection_capability()
            proj4 = capability.parse(proj4) if capability is not None else None
        if isinstance(coord_sys, str):
            coord_sys = CoordinateSystem.from_wkt(coord_sys)
        entry = SrsEntry(int(identifier), name, proj4, coord_sys)
        self._entries[entry.identifier] = entry
        return entry

    def get(self, srid: int) -> Optional[SrsEntry]:
        return self._entries.get(int(srid))

    def __contains__(self, srid: int) -> bool:
        return int(srid) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class EpsgCatalog(SrsCatalog):
    """Catalog backed by the EPSG registry shipped with pyproj"""

    def __init__(self):
        self._cache: Dict[int, Optional[SrsEntry]] = {}

    def get(self, srid: int) -> Optional[SrsEntry]:
        srid = int(srid)
        if srid not in self._cache:
            self._cache[srid] = self._lookup(srid)
        return self._cache[srid]

    def _lookup(self, srid: int) -> Optional[SrsEntry]:
        capability = get_projection_capability()
        if capability is None:
            return None

        from pyproj import CRS
        from pyproj.enums import WktVersion
        from pyproj.exceptions import CRSError

        try:
            crs = CRS.from_epsg(srid)
        except CRSError:
            logger.debug("EPSG:%s is not in the registry", srid)
            return None

        coord_sys = None
        wkt = crs.to_wkt(WktVersion.WKT1_GDAL)
        if wkt:
            coord_sys = CoordinateSystem.from_wkt(wkt)
        proj4 = capability.parse(f"EPSG:{srid}")
        return SrsEntry(srid, crs.name, proj4, coord_sys)
