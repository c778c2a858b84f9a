"""Enum types built from a declarative list of symbols.

An ``EnumType`` owns the symbol/ordinal tables of one enumeration and is the
factory for its values::

    ToastStatus = EnumType("ToastStatus", ["bread", "toasting", "toast", "burnt"])

    status = ToastStatus("toast")
    status.is_toast()               # True
    status > "bread"                # True
    status.none("toast", "burnt")   # False

Passing a mapping gives explicit ordinals, e.g. for bitfield-like enums::

    BitField = EnumType("BitField", {"READ": 1, "WRITE": 2, "EXECUTE": 4})

Nothing checks that an ordinal isn't reused. When two symbols share one, the
symbol registered last is the one ``ord_to_sym`` reports.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Annotated, Any

from enumtype.errors import (
    CoercionError,
    DefinitionError,
    InvalidOrdinalError,
    InvalidSymbolError,
    InvalidValueError,
)
from enumtype.logging import get_logger
from enumtype.validation import enum_validator

log = get_logger("core")

_ORDINAL_RE = re.compile(r"[+-]?[0-9]+")


def as_ordinal(value: Any) -> int | None:
    """Normalise ``value`` to an ordinal, or ``None`` if it cannot be one.

    Integers and strings made only of an optional sign and ASCII digits
    qualify; ``bool`` does not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str) and _ORDINAL_RE.fullmatch(value):
        return int(value)
    return None


def _check_symbol(name: str, symbol: Any) -> None:
    if not isinstance(symbol, str) or not symbol:
        raise DefinitionError(f"Enum {name}: symbols must be non-empty strings, got {symbol!r}")


def _build_table(name: str, values: Sequence[str] | Mapping[str, int]) -> dict[str, int]:
    table: dict[str, int] = {}

    if isinstance(values, Mapping):
        for symbol, ordinal in values.items():
            _check_symbol(name, symbol)
            if isinstance(ordinal, bool) or not isinstance(ordinal, int):
                raise DefinitionError(
                    f"Enum {name}: ordinal for [{symbol}] must be an integer, got {type(ordinal).__name__}"
                )
            table[symbol] = int(ordinal)
        return table

    if isinstance(values, (list, tuple)):
        # Later duplicates overwrite earlier ones, keeping the later position.
        for position, symbol in enumerate(values):
            _check_symbol(name, symbol)
            if symbol in table:
                log.warning("duplicate_symbol", enum=name, symbol=symbol, ordinal=position)
            table[symbol] = position
        return table

    raise DefinitionError("Enum values must be provided either as a list or a mapping.")


def _predicate(symbol: str) -> Callable[[EnumValue], bool]:
    def predicate(value: EnumValue) -> bool:
        return value.is_(symbol)

    predicate.__name__ = f"is_{symbol}"
    return predicate


class EnumType:
    """One enumeration: its tables, ``is_<symbol>`` predicates and value factory."""

    def __init__(
        self,
        name: str,
        values: Sequence[str] | Mapping[str, int],
        description: str = "",
    ):
        self.name = name
        self.description = description

        sym_to_ord = _build_table(name, values)
        ord_to_sym: dict[int, str] = {}
        for symbol, ordinal in sym_to_ord.items():
            if ordinal in ord_to_sym:
                log.warning(
                    "ordinal_collision", enum=name, ordinal=ordinal,
                    replaced=ord_to_sym[ordinal], symbol=symbol,
                )
            ord_to_sym[ordinal] = symbol

        self._sym_to_ord = MappingProxyType(sym_to_ord)
        self._ord_to_sym = MappingProxyType(ord_to_sym)
        self._values = tuple(sorted(sym_to_ord, key=sym_to_ord.__getitem__))
        self.predicates: Mapping[str, Callable[[EnumValue], bool]] = MappingProxyType(
            {f"is_{symbol}": _predicate(symbol) for symbol in self._values}
        )
        log.debug("enum_built", enum=name, symbols=len(self._values))

    # ── Tables ──────────────────────────────────────────
    def sym_to_ord(self) -> Mapping[str, int]:
        """Read-only mapping keyed by symbol, with ordinals as values."""
        return self._sym_to_ord

    def ord_to_sym(self) -> Mapping[int, str]:
        """Read-only mapping keyed by ordinal, with symbols as values."""
        return self._ord_to_sym

    def values(self) -> tuple[str, ...]:
        """Symbols in ascending ordinal order."""
        return self._values

    def list_is_methods(self) -> list[str]:
        """Names of the ``is_<symbol>`` predicates, in ``values()`` order."""
        return [f"is_{symbol}" for symbol in self._values]

    # ── Tests ───────────────────────────────────────────
    def test_symbol(self, value: Any) -> bool:
        try:
            return value in self._sym_to_ord
        except TypeError:
            return False

    def test_ordinal(self, value: Any) -> bool:
        ordinal = as_ordinal(value)
        return ordinal is not None and ordinal in self._ord_to_sym

    def owns(self, value: Any) -> bool:
        """True if ``value`` is already an ``EnumValue`` of this enum."""
        return isinstance(value, EnumValue) and value.enum is self

    # ── Construction ────────────────────────────────────
    def inflate_symbol(self, symbol: Any) -> EnumValue:
        try:
            ordinal = self._sym_to_ord[symbol]
        except (KeyError, TypeError):
            raise InvalidSymbolError(symbol, self) from None
        return EnumValue(self, ordinal)

    def inflate_ordinal(self, ordinal: Any) -> EnumValue:
        return EnumValue(self, ordinal)

    def coerce_symbol(self, value: Any) -> EnumValue:
        if self.owns(value):
            return value
        return self.inflate_symbol(value)

    def coerce_ordinal(self, value: Any) -> EnumValue:
        if self.owns(value):
            return value
        return self.inflate_ordinal(value)

    def coerce_any(self, value: Any) -> EnumValue:
        """Pass through own values, else try ``value`` as an ordinal, then as a symbol."""
        if self.owns(value):
            return value
        for inflate in (self.inflate_ordinal, self.inflate_symbol):
            try:
                return inflate(value)
            except InvalidValueError:
                continue
        raise CoercionError(value, self)

    def new(self, value: Any) -> EnumValue:
        return self.inflate_symbol(value)

    __call__ = new

    # ── Host type system ────────────────────────────────
    def type_constraint(self) -> Any:
        """Annotated ``EnumValue`` type for pydantic fields, coercing from symbols."""
        return Annotated[EnumValue, enum_validator(self)]

    # ── Container protocol ──────────────────────────────
    def __iter__(self) -> Iterator[EnumValue]:
        return (self.inflate_symbol(symbol) for symbol in self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, symbol: Any) -> bool:
        return self.test_symbol(symbol)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"<EnumType {self.name}: {', '.join(self._values)}>"

    # ── Copying & pickling ──────────────────────────────
    # An enum is shared by all of its values; copies of a value keep it.
    def __copy__(self) -> EnumType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> EnumType:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        """Pickle by name; only the enum registered under that name can be pickled."""
        from enumtype.definitions import get_enum

        if get_enum(self.name) is not self:
            raise TypeError(f"cannot pickle enum {self.name}: it is not registered under that name")
        return (_registered_enum, (self.name,))


def _registered_enum(name: str) -> EnumType:
    from enumtype.definitions import get_enum

    enum = get_enum(name)
    if enum is None:
        raise DefinitionError(f"Enum {name} is not registered")
    return enum


class EnumValue:
    """A value of an ``EnumType``, wrapping one ordinal.

    Values compare by ordinal against other values and against symbols of
    their own enum. ``increment()`` and ``decrement()`` change the ordinal in
    place without validation, so a value can end up outside its enum.
    """

    __slots__ = ("_enum", "_ordinal")

    def __init__(self, enum: EnumType, ordinal: Any):
        normalised = as_ordinal(ordinal)
        if normalised is None or normalised not in enum.ord_to_sym():
            raise InvalidOrdinalError(ordinal, enum)
        self._enum = enum
        self._ordinal = normalised

    @property
    def enum(self) -> EnumType:
        return self._enum

    def new(self, value: Any) -> EnumValue:
        """Build another value of the same enum from a symbol."""
        return self._enum.inflate_symbol(value)

    # ── Predicates ──────────────────────────────────────
    def is_(self, symbol: Any) -> bool:
        try:
            ordinal = self._enum.sym_to_ord()[symbol]
        except (KeyError, TypeError):
            raise InvalidSymbolError(symbol, self._enum) from None
        return self._ordinal == ordinal

    def any(self, *symbols: Any) -> bool:
        return any(self.is_(symbol) for symbol in symbols)

    def none(self, *symbols: Any) -> bool:
        return not self.any(*symbols)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("is_"):
            predicate = self._enum.predicates.get(name)
            if predicate is not None:
                return functools.partial(predicate, self)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._enum.predicates))

    # ── Representations ─────────────────────────────────
    def stringify(self) -> str:
        try:
            return self._enum.ord_to_sym()[self._ordinal]
        except KeyError:
            raise InvalidOrdinalError(self._ordinal, self._enum) from None

    def numify(self) -> int:
        return self._ordinal

    __str__ = stringify

    def __int__(self) -> int:
        return self._ordinal

    __index__ = __int__

    def __repr__(self) -> str:
        symbol = self._enum.ord_to_sym().get(self._ordinal)
        if symbol is None:
            return f"<{self._enum.name} ?: {self._ordinal}>"
        return f"<{self._enum.name}.{symbol}: {self._ordinal}>"

    # ── Ordering ────────────────────────────────────────
    def compare(self, other: Any) -> int:
        """Return -1, 0 or 1 comparing ordinals with a value or a symbol."""
        if isinstance(other, EnumValue):
            theirs = other._ordinal
        else:
            try:
                theirs = self._enum.sym_to_ord()[other]
            except (KeyError, TypeError):
                raise InvalidSymbolError(other, self._enum) from None
        return (self._ordinal > theirs) - (self._ordinal < theirs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EnumValue):
            return self._ordinal == other._ordinal
        if isinstance(other, str):
            return self._enum.test_symbol(other) and self.compare(other) == 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ordinal)

    def _ordering(self, other: Any) -> int | None:
        if isinstance(other, (EnumValue, str)):
            return self.compare(other)
        return None

    def __lt__(self, other: Any) -> bool:
        result = self._ordering(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self._ordering(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._ordering(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._ordering(other)
        return NotImplemented if result is None else result >= 0

    # ── Stepping ────────────────────────────────────────
    def increment(self) -> EnumValue:
        """Add one to the ordinal in place. Unchecked."""
        self._ordinal += 1
        return self

    def decrement(self) -> EnumValue:
        """Subtract one from the ordinal in place. Unchecked."""
        self._ordinal -= 1
        return self

    def next(self) -> EnumValue:
        """The value with the next higher ordinal, as a new value."""
        higher = [o for o in self._enum.ord_to_sym() if o > self._ordinal]
        if not higher:
            raise InvalidOrdinalError(self._ordinal + 1, self._enum)
        return EnumValue(self._enum, min(higher))

    def prev(self) -> EnumValue:
        """The value with the next lower ordinal, as a new value."""
        lower = [o for o in self._enum.ord_to_sym() if o < self._ordinal]
        if not lower:
            raise InvalidOrdinalError(self._ordinal - 1, self._enum)
        return EnumValue(self._enum, max(lower))
