from geofactory.models.crs_resolution import CrsRequest, CrsResolution
from geofactory.models.decoded_geometry import DecodedGeometry
from geofactory.models.factory_config_record import FactoryConfigRecord, ProjectionRecord

__all__ = [
    "CrsRequest",
    "CrsResolution",
    "DecodedGeometry",
    "FactoryConfigRecord",
    "ProjectionRecord",
]
