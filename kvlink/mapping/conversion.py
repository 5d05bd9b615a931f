"""
Key Conversion
==============

Coerces record keys to strings, the only key type link stores accept.
"""

from typing import Any, Callable, Dict, Type
from uuid import UUID


def _decode_bytes(value: bytes) -> str:
    return value.decode("utf-8")


class ConversionService:
    """
    Converts key values to ``str`` through registered converters.

    Lookup walks the value type's MRO, so a converter for ``int`` also
    handles ``bool`` and IntEnum members.

    Example:
        >>> service = ConversionService()
        >>> service.convert(42)
        '42'
        >>> service.register(tuple, lambda t: ":".join(map(str, t)))
        >>> service.convert(("a", 1))
        'a:1'
    """

    def __init__(self):
        self._converters: Dict[Type, Callable[[Any], str]] = {
            bytes: _decode_bytes,
            int: str,
            UUID: str,
        }

    def register(self, source_type: Type, func: Callable[[Any], str]) -> None:
        """Register (or replace) the converter used for source_type."""
        self._converters[source_type] = func

    def convert(self, value: Any) -> str:
        """
        Convert value to a string key.

        Raises:
            TypeError: if no converter handles type(value)
        """
        if isinstance(value, str):
            return value

        for source_type in type(value).__mro__:
            func = self._converters.get(source_type)
            if func is not None:
                return func(value)

        raise TypeError(f"Cannot convert {type(value).__name__} to str")
