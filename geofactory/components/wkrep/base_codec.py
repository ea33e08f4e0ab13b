from enum import Enum
from typing import Any, Callable, Dict, Tuple, Type

from geofactory.core import ConfigurationError

OptionNormalizer = Callable[[str, Any], Any]


def enum_option(enum_cls: Type[Enum], none_value: Enum | None = None) -> OptionNormalizer:
    """Normalizer accepting an enum member or its value"""
    def normalize(name: str, value: Any) -> Enum:
        if value is None and none_value is not None:
            return none_value
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).lower())
        except ValueError as e:
            allowed = ", ".join(member.value for member in enum_cls)
            raise ConfigurationError(name, f"{value!r} is not one of: {allowed}") from e
    return normalize


def bool_option(name: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(name, f"expected a boolean, got {value!r}")
    return value


def format_number(value: float) -> str:
    """Shortest round-trip text for a float, without a trailing '.0'"""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


class BaseCodec:
    """
    Base class for WKT/WKB generators and parsers

    Subclasses declare their options as name -> (normalizer, default). Options
    are validated on construction and exposed through `properties` as plain
    values so they can be stored in persistence records.
    """

    _OPTIONS: Dict[str, Tuple[OptionNormalizer, Any]] = {}

    def __init__(self, **options: Any):
        unknown = sorted(set(options) - set(self._OPTIONS))
        if unknown:
            raise ConfigurationError(unknown[0], f"unknown {self.__class__.__name__} option")
        self._options: Dict[str, Any] = {
            name: normalizer(name, options.get(name, default))
            for name, (normalizer, default) in self._OPTIONS.items()
        }

    @property
    def properties(self) -> Dict[str, Any]:
        """Normalized options as plain strings/bools"""
        return {
            name: value.value if isinstance(value, Enum) else value
            for name, value in self._options.items()
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.properties})"
