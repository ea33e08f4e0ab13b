"""
Structured-document persisted unit backed by PyYAML.

Besides standalone units, geometries and factories can be embedded in larger
YAML documents with GeometryDumper / GeometryLoader:

    text = yaml.dump({"site": geometry}, Dumper=GeometryDumper)
    data = yaml.load(text, Loader=GeometryLoader)
"""
from typing import Any, Dict

import yaml

from geofactory.core import FormatError
from geofactory.models import FactoryConfigRecord
from geofactory.components.factory import GeometryFactory
from geofactory.components.geometry import Geometry
from geofactory.components.serialization.base_envelope import BaseEnvelope

GEOMETRY_TAG = "!geofactory/geometry"
FACTORY_TAG = "!geofactory/factory"


class DocumentEnvelope(BaseEnvelope):
    """
    Document persisted unit

    Descriptive record keys plus a "wkt" field holding WKT 1.2 text, written
    with yaml.safe_dump.
    """

    FORMAT_NAME = "YAML"
    GEOMETRY_KEY = "wkt"

    @staticmethod
    def _record_mapping(record: FactoryConfigRecord) -> Dict[str, Any]:
        return record.to_document()

    @staticmethod
    def _write_geometry(factory, geometry) -> str:
        return factory.write_for_document(geometry)

    @staticmethod
    def _read_geometry(factory, payload: Any):
        return factory.read_for_document(payload)

    @staticmethod
    def _dump(unit: Dict[str, Any]) -> str:
        return yaml.safe_dump(unit, sort_keys=False)

    @staticmethod
    def _load(data: Any) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            position = mark.index if mark is not None else 0
            raise FormatError(DocumentEnvelope.FORMAT_NAME, position, f"cannot load unit: {e}") from e


class GeometryDumper(yaml.SafeDumper):
    """SafeDumper that writes geometries and factories as tagged mappings"""
    pass


class GeometryLoader(yaml.SafeLoader):
    """SafeLoader that reads the tags written by GeometryDumper"""
    pass


def _represent_geometry(dumper: yaml.SafeDumper, geometry: Geometry) -> yaml.Node:
    return dumper.represent_mapping(GEOMETRY_TAG, DocumentEnvelope.to_unit(geometry.factory, geometry))


def _represent_factory(dumper: yaml.SafeDumper, factory: GeometryFactory) -> yaml.Node:
    return dumper.represent_mapping(FACTORY_TAG, factory.to_record().to_document())


def _construct_geometry(loader: yaml.SafeLoader, node: yaml.Node) -> Geometry:
    return DocumentEnvelope.from_unit(loader.construct_mapping(node, deep=True)).geometry


def _construct_factory(loader: yaml.SafeLoader, node: yaml.Node) -> GeometryFactory:
    record = DocumentEnvelope.read_record(loader.construct_mapping(node, deep=True))
    return GeometryFactory.from_record(record)


GeometryDumper.add_multi_representer(Geometry, _represent_geometry)
GeometryDumper.add_representer(GeometryFactory, _represent_factory)
GeometryLoader.add_constructor(GEOMETRY_TAG, _construct_geometry)
GeometryLoader.add_constructor(FACTORY_TAG, _construct_factory)
