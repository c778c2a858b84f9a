"""Inflate enum-like SQLAlchemy columns into ``EnumValue`` instances.

A column stores either the symbol (text) or the ordinal (integer) of a value;
the storage data type itself doesn't matter beyond that choice::

    class ToastRow(Base):
        __tablename__ = "toast"

        id: Mapped[int] = mapped_column(primary_key=True)
        status: Mapped[EnumValue | None] = mapped_column(EnumColumn(ToastStatus, length=20))
        perms: Mapped[EnumValue | None] = mapped_column(EnumColumn(BitField, ordinal_storage=True))

Column info in the ``{"extra": {"enum_class": ..., "enum_ordinal_storage": ...}}``
layout can be turned into an adapter with ``register_column`` or into a column
type with ``EnumColumn.from_info``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from enumtype.core import EnumType, EnumValue
from enumtype.definitions import get_enum
from enumtype.errors import ConfigurationError
from enumtype.logging import get_logger

log = get_logger("columns")


@dataclass(frozen=True)
class ColumnAdapter:
    """Converts between stored column values and values of one enum."""
    enum: EnumType
    ordinal_storage: bool = False

    def inflate(self, raw: Any) -> EnumValue | None:
        if raw is None:
            return None
        if self.ordinal_storage:
            return self.enum.inflate_ordinal(raw)
        return self.enum.inflate_symbol(raw)

    def deflate(self, value: EnumValue | None) -> int | str | None:
        if value is None:
            return None
        if self.ordinal_storage:
            return value.numify()
        return value.stringify()

    def coerce(self, value: Any) -> EnumValue:
        """Coerce a value written to the column using the storage mode."""
        if self.ordinal_storage:
            return self.enum.coerce_ordinal(value)
        return self.enum.coerce_symbol(value)


def resolve_enum(enum_class: Any, column: str | None = None) -> EnumType:
    """Return the ``EnumType`` for ``enum_class``, an enum or a registered name."""
    if isinstance(enum_class, EnumType):
        return enum_class
    if isinstance(enum_class, str):
        enum = get_enum(enum_class)
        if enum is not None:
            return enum
    where = f" (column {column})" if column else ""
    raise ConfigurationError(f"enum_class {enum_class!r}{where} is not registered or isn't an EnumType")


def register_column(column: str, info: Mapping[str, Any] | None) -> ColumnAdapter | None:
    """Build the adapter for a column from its info, or ``None`` if it has no enum.

    Reads ``info["extra"]["enum_class"]`` (required to enable inflation) and
    ``info["extra"]["enum_ordinal_storage"]`` (store ordinals instead of symbols).
    """
    extra = (info or {}).get("extra") or {}
    enum_class = extra.get("enum_class")
    if not enum_class:
        return None

    adapter = ColumnAdapter(resolve_enum(enum_class, column), bool(extra.get("enum_ordinal_storage")))
    log.debug(
        "enum_column_registered",
        column=column, enum=adapter.enum.name, ordinal_storage=adapter.ordinal_storage,
    )
    return adapter


class EnumColumn(TypeDecorator):
    """Column type holding ``EnumValue``s, stored as symbols or as ordinals."""

    impl = String
    cache_ok = True

    def __init__(self, enum: EnumType | str, ordinal_storage: bool = False, length: int | None = None):
        super().__init__(length)
        if ordinal_storage:
            self.impl = Integer()
        self.enum = resolve_enum(enum)
        self.ordinal_storage = ordinal_storage
        self.length = length
        self.adapter = ColumnAdapter(self.enum, ordinal_storage)

    @classmethod
    def from_info(cls, column: str, info: Mapping[str, Any] | None, length: int | None = None) -> EnumColumn | None:
        adapter = register_column(column, info)
        if adapter is None:
            return None
        return cls(adapter.enum, ordinal_storage=adapter.ordinal_storage, length=length)

    def process_bind_param(self, value: Any, dialect: Dialect) -> int | str | None:
        if value is None:
            return None
        return self.adapter.deflate(self.adapter.coerce(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> EnumValue | None:
        return self.adapter.inflate(value)

    @property
    def python_type(self) -> type[EnumValue]:
        return EnumValue
