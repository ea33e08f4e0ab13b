import pickle
from typing import Any, Dict

from geofactory.core import FormatError
from geofactory.models import FactoryConfigRecord
from geofactory.components.serialization.base_envelope import BaseEnvelope


class MarshalEnvelope(BaseEnvelope):
    """
    Object-graph persisted unit

    Compact record keys (hasz, hasm, srid, bufr, wktg, wkbg, wktp, wkbp,
    proj4, cs) plus a "wkb" field holding WKB 1.2 bytes, pickled as a dict.
    Only decode data from trusted sources.
    """

    FORMAT_NAME = "pickle"
    GEOMETRY_KEY = "wkb"

    @staticmethod
    def _record_mapping(record: FactoryConfigRecord) -> Dict[str, Any]:
        return record.to_marshal()

    @staticmethod
    def _write_geometry(factory, geometry) -> bytes:
        return factory.write_for_marshal(geometry)

    @staticmethod
    def _read_geometry(factory, payload: Any):
        return factory.read_for_marshal(payload)

    @staticmethod
    def _dump(unit: Dict[str, Any]) -> bytes:
        return pickle.dumps(unit, protocol=pickle.HIGHEST_PROTOCOL)

    @staticmethod
    def _load(data: Any) -> Any:
        try:
            return pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, TypeError, ValueError) as e:
            raise FormatError(MarshalEnvelope.FORMAT_NAME, 0, f"cannot unpickle unit: {e}") from e
