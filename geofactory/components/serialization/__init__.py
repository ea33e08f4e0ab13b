"""
Serialization module for persisted geometry units.

This module provides the object-graph (pickle) and document (YAML) envelopes,
both built on the shared FactoryConfigRecord.
"""

from geofactory.components.serialization.base_envelope import BaseEnvelope
from geofactory.components.serialization.marshal_envelope import MarshalEnvelope
from geofactory.components.serialization.document_envelope import (
    DocumentEnvelope,
    GeometryDumper,
    GeometryLoader,
    GEOMETRY_TAG,
    FACTORY_TAG,
)

__all__ = [
    'BaseEnvelope',
    'MarshalEnvelope',
    'DocumentEnvelope',
    'GeometryDumper',
    'GeometryLoader',
    'GEOMETRY_TAG',
    'FACTORY_TAG',
]
