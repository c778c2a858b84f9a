"""Tests for the pydantic integration (EnumType.type_constraint)."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from enumtype.core import EnumType, EnumValue

ToastStatus = EnumType("ToastStatus", ["bread", "toasting", "toast", "burnt"])
Status = ToastStatus.type_constraint()


class Toast(BaseModel):
    status: Status


class MaybeToast(BaseModel):
    status: Status | None = None


class TestTypeConstraint:
    def test_coerces_symbols(self):
        toast = Toast(status="toast")
        assert isinstance(toast.status, EnumValue)
        assert toast.status.is_toast()

    def test_passes_values_through(self):
        value = ToastStatus("burnt")
        assert Toast(status=value).status is value

    def test_rejects_unknown_symbol(self):
        with pytest.raises(ValidationError, match="Value \\[mould\\] is not valid for enum ToastStatus"):
            Toast(status="mould")

    def test_rejects_ordinals(self):
        with pytest.raises(ValidationError):
            Toast(status=2)

    def test_rejects_values_of_other_enums(self):
        other = EnumType("Other", ["toast"])
        with pytest.raises(ValidationError):
            Toast(status=other("toast"))

    def test_optional_field(self):
        assert MaybeToast().status is None
        assert MaybeToast(status="bread").status == "bread"

    def test_json_serialization_uses_symbol(self):
        toast = Toast(status="toasting")
        assert toast.model_dump_json() == '{"status":"toasting"}'
        assert toast.model_dump()["status"] == ToastStatus("toasting")

    def test_json_round_trip(self):
        toast = Toast(status="burnt")
        assert Toast.model_validate_json(toast.model_dump_json()).status == toast.status

    def test_deep_model_copy_keeps_enum(self):
        toast = Toast(status="toasting")
        duplicate = toast.model_copy(deep=True)
        assert duplicate.status == toast.status
        assert duplicate.status.enum is ToastStatus
        assert duplicate.status.is_toasting()

    def test_json_schema_lists_symbols(self):
        schema = Toast.model_json_schema()
        status = schema["properties"]["status"]
        assert status["type"] == "string"
        assert status["enum"] == ["bread", "toasting", "toast", "burnt"]
