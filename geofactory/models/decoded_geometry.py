from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedGeometry:
    """
    Result of decoding a persisted unit

    The factory is rebuilt from the stored configuration, so it is equal to
    (but not the same object as) the factory used for encoding.
    """
    factory: Any
    geometry: Any
