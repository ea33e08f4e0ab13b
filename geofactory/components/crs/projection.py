"""
Optional projection capability backed by pyproj.

The factory only carries an opaque ProjectionHandle. Parsing definitions,
producing a canonical form and transforming coordinates are delegated to a
ProjectionCapability; when pyproj cannot be imported the capability is None
and every projection-dependent value degrades to None.
"""
import importlib.util
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

from geofactory.core import ConfigurationError

logger = logging.getLogger(__name__)


class ProjectionHandle:
    """
    Opaque wrapper around an external projection definition

    Two handles are equal when their canonical forms and radians flags match.
    """

    def __init__(self, crs: Any, canonical_str: str, original_str: Optional[str] = None, radians: bool = False):
        self._crs = crs
        self._canonical_str = canonical_str
        self._original_str = original_str
        self._radians = bool(radians)

    @property
    def crs(self) -> Any:
        """Underlying library object (pyproj.CRS)"""
        return self._crs

    @property
    def canonical_str(self) -> str:
        return self._canonical_str

    @property
    def original_str(self) -> Optional[str]:
        return self._original_str

    @property
    def radians(self) -> bool:
        """Whether geographic coordinates are expressed in radians"""
        return self._radians

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ProjectionHandle)
            and self._canonical_str == other._canonical_str
            and self._radians == other._radians
        )

    def __hash__(self) -> int:
        return hash((self._canonical_str, self._radians))

    def __repr__(self) -> str:
        return f"ProjectionHandle({self._original_str or self._canonical_str!r}, radians={self._radians})"


class ProjectionCapability(ABC):
    """Interface of an external projection library (Adapter Pattern)"""

    @abstractmethod
    def parse(self, definition: Any, radians: bool = False) -> ProjectionHandle:
        """
        Parse a projection definition

        Args:
            definition: Projection string, mapping or EPSG code
            radians: Geographic coordinates are in radians

        Returns:
            ProjectionHandle

        Raises:
            ConfigurationError: If the definition cannot be parsed
        """
        pass

    @abstractmethod
    def canonical_form(self, handle: ProjectionHandle) -> str:
        """Canonical string for a handle"""
        pass

    @abstractmethod
    def transform(
        self,
        source: ProjectionHandle,
        target: ProjectionHandle,
        coords: Iterable[Tuple[float, ...]]
    ) -> List[Tuple[float, ...]]:
        """
        Transform (x, y[, z]) tuples from source to target projection

        Extra trailing values (such as M) are passed through unchanged.
        """
        pass


class PyprojCapability(ProjectionCapability):
    """ProjectionCapability implemented with pyproj"""

    def __init__(self):
        import pyproj
        from pyproj.exceptions import CRSError

        self._pyproj = pyproj
        self._crs_error = CRSError
        self._transformer_cache: Dict[Tuple[str, str], Any] = {}

    def parse(self, definition: Any, radians: bool = False) -> ProjectionHandle:
        if isinstance(definition, ProjectionHandle):
            return definition
        try:
            if isinstance(definition, dict):
                crs = self._pyproj.CRS.from_dict(definition)
                original = crs.to_string()
            else:
                crs = self._pyproj.CRS.from_user_input(definition)
                original = definition if isinstance(definition, str) else crs.to_string()
        except self._crs_error as e:
            raise ConfigurationError("proj4", f"cannot parse projection {definition!r}: {e}") from e
        return ProjectionHandle(crs, crs.to_wkt(), original_str=original, radians=radians)

    def canonical_form(self, handle: ProjectionHandle) -> str:
        return handle.crs.to_wkt()

    def _get_transformer(self, source: ProjectionHandle, target: ProjectionHandle) -> Any:
        key = (source.canonical_str, target.canonical_str)
        if key not in self._transformer_cache:
            self._transformer_cache[key] = self._pyproj.Transformer.from_crs(
                source.crs, target.crs, always_xy=True
            )
            logger.debug("Created transformer %s -> %s", source, target)
        return self._transformer_cache[key]

    def transform(
        self,
        source: ProjectionHandle,
        target: ProjectionHandle,
        coords: Iterable[Tuple[float, ...]]
    ) -> List[Tuple[float, ...]]:
        transformer = self._get_transformer(source, target)
        result = []
        for coord in coords:
            has_z = len(coord) > 2 and coord[2] is not None
            args = coord[:3] if has_z else coord[:2]
            transformed = transformer.transform(
                *args, radians=source.radians or target.radians
            )
            result.append(tuple(transformed) + tuple(coord[len(args):]))
        return result


_CAPABILITY: Dict[str, Optional[ProjectionCapability]] = {}


def get_projection_capability() -> Optional[ProjectionCapability]:
    """
    Get the process-wide projection capability

    Returns:
        PyprojCapability, or None when pyproj is not installed
    """
    if "default" not in _CAPABILITY:
        if importlib.util.find_spec("pyproj") is None:
            logger.info("pyproj is not available; projections are disabled")
            _CAPABILITY["default"] = None
        else:
            _CAPABILITY["default"] = PyprojCapability()
    return _CAPABILITY["default"]
