"""Pydantic integration: use an ``EnumType`` as a model field type.

``EnumType.type_constraint()`` wraps ``EnumValue`` in ``Annotated`` with an
``EnumValidator``::

    Status = ToastStatus.type_constraint()

    class Toast(BaseModel):
        status: Status

    Toast(status="toast").status.is_toast()   # True

Strings are inflated as symbols, values of the same enum pass through, and
anything else is rejected. Values serialize to their symbol in JSON mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from enumtype.errors import InvalidSymbolError

if TYPE_CHECKING:
    from enumtype.core import EnumType, EnumValue


class EnumValidator:
    """Annotated metadata validating field input against one enum."""

    def __init__(self, enum: EnumType):
        self.enum = enum

    def validate(self, value: Any) -> EnumValue:
        if self.enum.owns(value):
            return value
        if isinstance(value, str):
            return self.enum.inflate_symbol(value)
        raise InvalidSymbolError(value, self.enum)

    def __get_pydantic_core_schema__(self, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize, return_schema=core_schema.str_schema(), when_used="json",
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return {"type": "string", "enum": list(self.enum.values())}

    def __repr__(self) -> str:
        return f"EnumValidator({self.enum.name})"


def _serialize(value: EnumValue) -> str:
    return value.stringify()


def enum_validator(enum: EnumType) -> EnumValidator:
    return EnumValidator(enum)
