"""
Well-known representation codecs.

This module provides WKT and WKB generators and parsers and the factory
that builds them from option mappings.
"""

from geofactory.components.wkrep.base_codec import BaseCodec, format_number
from geofactory.components.wkrep.wkt_generator import WKTGenerator
from geofactory.components.wkrep.wkt_parser import WKTParser
from geofactory.components.wkrep.wkb_generator import WKBGenerator
from geofactory.components.wkrep.wkb_parser import WKBParser
from geofactory.components.wkrep.codec_factory import CodecFactory

__all__ = [
    'BaseCodec',
    'format_number',
    'WKTGenerator',
    'WKTParser',
    'WKBGenerator',
    'WKBParser',
    'CodecFactory',
]
