from typing import Any, Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class CrsRequest:
    """
    Inputs to CRS resolution

    proj4 may be a raw definition (str / dict) or an already built
    ProjectionHandle; coord_sys may be WKT-CRS text or a CoordinateSystem.
    """
    proj4: Any = None
    coord_sys: Any = None
    srid: Any = None
    srs_database: Any = None


@dataclass(frozen=True)
class CrsResolution:
    """Resolved projection, coordinate system and SRID"""
    projection: Optional[Any] = None
    coord_sys: Optional[Any] = None
    srid: int = 0
