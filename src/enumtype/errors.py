"""Exception hierarchy shared by enum types and the column adapter."""

from __future__ import annotations

from typing import Any


class EnumError(Exception):
    """Base class for every error raised by enumtype."""


class DefinitionError(EnumError):
    """Raised when an enum definition has an unusable shape."""
    pass


class ConfigurationError(EnumError):
    """Raised when a column references something that is not an enum type."""
    pass


class InvalidValueError(EnumError, ValueError):
    """A value could not be resolved against an enum type."""

    def __init__(self, message: str, enum: Any = None):
        super().__init__(message)
        self.enum = enum


class InvalidSymbolError(InvalidValueError):
    def __init__(self, symbol: Any, enum: Any = None):
        super().__init__(f"Value [{symbol}] is not valid for enum {_enum_name(enum)}", enum)
        self.symbol = symbol


class InvalidOrdinalError(InvalidValueError):
    def __init__(self, ordinal: Any, enum: Any = None):
        super().__init__(f"Ordinal [{ordinal}] is not valid for enum {_enum_name(enum)}", enum)
        self.ordinal = ordinal


class CoercionError(InvalidValueError):
    def __init__(self, value: Any, enum: Any = None):
        super().__init__(f"Could not coerce invalid value [{value}] into {_enum_name(enum)}", enum)
        self.value = value


def _enum_name(enum: Any) -> str:
    return getattr(enum, "name", None) or repr(enum)
