"""
Custom exceptions for the geometry factory system.

This module defines the exception classes raised while configuring a
factory, constructing geometry values and parsing WKT/WKB input.
"""

from typing import Any, Optional


class GeoFactoryException(Exception):
    """Base exception class for all geometry factory errors"""
    pass


class ConfigurationError(GeoFactoryException):
    """
    Exception raised when factory or codec options are invalid.

    Absent optional inputs are never a configuration error; only explicit
    input that cannot be interpreted (unknown codec option, malformed CRS
    text, unparsable projection definition) raises it.
    """

    def __init__(self, option: str, details: Optional[str] = None):
        """
        Initialize ConfigurationError.

        Args:
            option: Name of the offending option
            details: Additional details about the problem
        """
        self.option = option
        self.details = details

        message = f"Invalid configuration for '{option}'"
        if details:
            message += f": {details}"

        super().__init__(message)


class StructuralError(GeoFactoryException):
    """
    Exception raised when a geometry construction precondition is violated.

    Covers wrong point counts, unclosed rings, wrong element kinds and
    children created by a different factory.
    """

    def __init__(self, geometry_type: Any, details: str):
        """
        Initialize StructuralError.

        Args:
            geometry_type: GeometryType (or name) being constructed
            details: What precondition failed
        """
        self.geometry_type = geometry_type
        self.details = details

        type_name = getattr(geometry_type, "value", geometry_type)
        super().__init__(f"Cannot construct {type_name}: {details}")


class FormatError(GeoFactoryException):
    """Exception raised when WKT/WKB/CRS input does not match the expected grammar"""

    def __init__(self, format_name: Any, position: int, details: str):
        """
        Initialize FormatError.

        Args:
            format_name: CodecFormat (or name) of the input being parsed
            position: Character or byte offset where parsing stopped
            details: Description of the problem
        """
        self.format_name = getattr(format_name, "value", format_name)
        self.position = position
        self.details = details

        super().__init__(f"{self.format_name} parse error at offset {position}: {details}")
