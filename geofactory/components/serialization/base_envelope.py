import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from pydantic import ValidationError

from geofactory.core import ConfigurationError, FormatError, StructuralError
from geofactory.models import DecodedGeometry, FactoryConfigRecord
from geofactory.components.factory import GeometryFactory
from geofactory.components.geometry import Geometry

logger = logging.getLogger(__name__)


class BaseEnvelope(ABC):
    """
    Base class for persisted units (Template Method Pattern)

    A unit is the factory configuration record plus one companion field holding
    the geometry rendered by a codec bound to that factory. Subclasses choose
    the record key style, the payload codec and the structured-data library.
    """

    FORMAT_NAME: str = ""
    GEOMETRY_KEY: str = ""

    @classmethod
    def encode(cls, factory: GeometryFactory, geometry: Geometry) -> Any:
        """
        Encode a factory and one of its geometries as a persisted unit

        Args:
            factory: Factory whose configuration is captured
            geometry: Geometry created by factory

        Returns:
            Serialized unit

        Raises:
            StructuralError: If geometry was not created by an equal factory
        """
        return cls._dump(cls.to_unit(factory, geometry))

    @classmethod
    def decode(cls, data: Any) -> DecodedGeometry:
        """
        Decode a persisted unit

        The factory is rebuilt from the stored record (re-running CRS
        resolution) and the geometry is parsed with a codec bound to it.

        Raises:
            FormatError: If the unit or its geometry payload is malformed
            ConfigurationError: If the stored configuration is invalid
        """
        return cls.from_unit(cls._load(data))

    @classmethod
    def to_unit(cls, factory: GeometryFactory, geometry: Geometry) -> Dict[str, Any]:
        """Unit as a plain mapping, before serialization"""
        if not isinstance(geometry, Geometry) or geometry.factory != factory:
            raise StructuralError(
                getattr(geometry, "geometry_type", type(geometry).__name__),
                "geometry was not created by the encoding factory"
            )
        unit = cls._record_mapping(factory.to_record())
        unit[cls.GEOMETRY_KEY] = cls._write_geometry(factory, geometry)
        return unit

    @classmethod
    def from_unit(cls, unit: Any) -> DecodedGeometry:
        """Rebuild factory and geometry from a plain mapping"""
        if not isinstance(unit, dict):
            raise FormatError(cls.FORMAT_NAME, 0, f"expected a mapping, got {type(unit).__name__}")
        unit = dict(unit)
        if cls.GEOMETRY_KEY not in unit:
            raise FormatError(cls.FORMAT_NAME, 0, f"missing '{cls.GEOMETRY_KEY}' field")
        payload = unit.pop(cls.GEOMETRY_KEY)
        factory = GeometryFactory.from_record(cls.read_record(unit))
        geometry = cls._read_geometry(factory, payload)
        logger.debug("Decoded %s from %s unit", geometry.geometry_type.value, cls.FORMAT_NAME)
        return DecodedGeometry(factory=factory, geometry=geometry)

    @staticmethod
    def read_record(mapping: Dict[str, Any]) -> FactoryConfigRecord:
        """
        Validate a stored configuration mapping (either key style)

        Raises:
            ConfigurationError: If the mapping does not describe a factory
        """
        try:
            return FactoryConfigRecord.from_mapping(mapping)
        except ValidationError as e:
            raise ConfigurationError("record", str(e)) from e

    @staticmethod
    @abstractmethod
    def _record_mapping(record: FactoryConfigRecord) -> Dict[str, Any]:
        pass

    @staticmethod
    @abstractmethod
    def _write_geometry(factory: GeometryFactory, geometry: Geometry) -> Any:
        pass

    @staticmethod
    @abstractmethod
    def _read_geometry(factory: GeometryFactory, payload: Any) -> Geometry:
        pass

    @staticmethod
    @abstractmethod
    def _dump(unit: Dict[str, Any]) -> Any:
        pass

    @staticmethod
    @abstractmethod
    def _load(data: Any) -> Any:
        pass
