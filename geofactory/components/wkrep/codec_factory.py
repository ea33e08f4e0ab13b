from typing import Any, Dict, Optional

from geofactory.core import ConfigurationError
from geofactory.components.wkrep.wkt_generator import WKTGenerator
from geofactory.components.wkrep.wkt_parser import WKTParser
from geofactory.components.wkrep.wkb_generator import WKBGenerator
from geofactory.components.wkrep.wkb_parser import WKBParser


class CodecFactory:
    """Factory for creating WKT/WKB codecs from option mappings (Factory Pattern)"""

    # Baseline options used when a factory is given no codec configuration
    DEFAULT_WKT_GENERATOR: Dict[str, Any] = {"convert_case": "upper"}
    DEFAULT_WKB_GENERATOR: Dict[str, Any] = {}
    DEFAULT_WKT_PARSER: Dict[str, Any] = {}
    DEFAULT_WKB_PARSER: Dict[str, Any] = {}

    # Dialects used by the persistence envelopes
    MARSHAL_WKB_GENERATOR: Dict[str, Any] = {"type_format": "wkb12"}
    MARSHAL_WKB_PARSER: Dict[str, Any] = {"support_wkb12": True}
    DOCUMENT_WKT_GENERATOR: Dict[str, Any] = {"tag_format": "wkt12"}
    DOCUMENT_WKT_PARSER: Dict[str, Any] = {"support_wkt12": True, "support_ewkt": True}

    @staticmethod
    def _options(name: str, options: Optional[Dict[str, Any]], default: Dict[str, Any]) -> Dict[str, Any]:
        if options is None:
            return dict(default)
        if not isinstance(options, dict):
            raise ConfigurationError(name, f"expected a mapping of options, got {type(options).__name__}")
        return {str(key): value for key, value in options.items()}

    @classmethod
    def create_wkt_generator(cls, options: Optional[Dict[str, Any]] = None) -> WKTGenerator:
        return WKTGenerator(**cls._options("wkt_generator", options, cls.DEFAULT_WKT_GENERATOR))

    @classmethod
    def create_wkb_generator(cls, options: Optional[Dict[str, Any]] = None) -> WKBGenerator:
        return WKBGenerator(**cls._options("wkb_generator", options, cls.DEFAULT_WKB_GENERATOR))

    @classmethod
    def create_wkt_parser(cls, factory: Any, options: Optional[Dict[str, Any]] = None) -> WKTParser:
        return WKTParser(factory, **cls._options("wkt_parser", options, cls.DEFAULT_WKT_PARSER))

    @classmethod
    def create_wkb_parser(cls, factory: Any, options: Optional[Dict[str, Any]] = None) -> WKBParser:
        return WKBParser(factory, **cls._options("wkb_parser", options, cls.DEFAULT_WKB_PARSER))
