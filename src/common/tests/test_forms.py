from uuid import UUID

import pytest
from fastapi import HTTPException

from src.common.forms import (
    FormValidationError,
    ValueType,
    blank_to_none,
    format_coordinates,
    format_typed_value,
    join_csv_field,
    parse_coordinates,
    parse_optional_uuid,
    parse_typed_value,
    reject_invalid_form,
    require,
    split_csv_field,
)


def test_split_csv_field_keeps_order_and_duplicates():
    assert split_csv_field("Pool, WiFi ,  Parking") == ["Pool", "WiFi", "Parking"]
    assert split_csv_field("a,,a, ") == ["a", "a"]
    assert split_csv_field("") == []
    assert split_csv_field(None) == []


def test_join_csv_field():
    assert join_csv_field(["Pool", "WiFi"]) == "Pool, WiFi"
    assert join_csv_field(None) == ""


def test_coordinates():
    assert parse_coordinates(" 12.5 , -3 ") == (12.5, -3.0)
    assert parse_coordinates("   ") is None
    assert format_coordinates([12.5, -3.0]) == "12.5,-3.0"
    assert format_coordinates(None) == ""

    with pytest.raises(FormValidationError):
        parse_coordinates("nan,1")


@pytest.mark.parametrize(
    "value_type, text, expected",
    [
        (ValueType.BOOLEAN, "true", True),
        (ValueType.BOOLEAN, "yes", False),
        (ValueType.NUMBER, "42", 42),
        (ValueType.NUMBER, "0.25", 0.25),
        (ValueType.STRING, "  spaced ", "  spaced "),
        (ValueType.JSON, '{"a": [1, 2]}', {"a": [1, 2]}),
        ("string", "plain", "plain"),
    ],
)
def test_parse_typed_value(value_type, text, expected):
    assert parse_typed_value(value_type, text) == expected


@pytest.mark.parametrize(
    "value_type, text",
    [(ValueType.NUMBER, "abc"), (ValueType.NUMBER, "inf"), (ValueType.JSON, "{oops")],
)
def test_parse_typed_value_failures(value_type, text):
    with pytest.raises(FormValidationError) as exc_info:
        parse_typed_value(value_type, text)

    assert exc_info.value.field == "default_value"
    assert exc_info.value.message == f"Invalid default value for type {value_type.value}"


def test_format_typed_value():
    assert format_typed_value(False) == "false"
    assert format_typed_value(3) == "3"
    assert format_typed_value(None) == ""
    assert format_typed_value({"a": 1}) == '{\n  "a": 1\n}'


def test_blank_to_none_and_require():
    assert blank_to_none("  ") is None
    assert blank_to_none(0) == 0
    assert require("name", "Ann") == "Ann"

    with pytest.raises(FormValidationError) as exc_info:
        require("first_name", " ")
    assert exc_info.value.message == "First name is required"


def test_reject_invalid_form():
    with pytest.raises(HTTPException) as exc_info:
        with reject_invalid_form():
            raise FormValidationError("email", "Email is required")

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail == {"field": "email", "message": "Email is required"}


def test_parse_optional_uuid():
    assert parse_optional_uuid("group_id", "") is None
    assert parse_optional_uuid("group_id", None) is None
    assert parse_optional_uuid(
        "group_id", " 6f1c2a7e-9b30-4d2e-8a11-0c5e4b7d9f21 "
    ) == UUID("6f1c2a7e-9b30-4d2e-8a11-0c5e4b7d9f21")

    with pytest.raises(FormValidationError) as exc_info:
        parse_optional_uuid("category_id", "hotels")
    assert exc_info.value.field == "category_id"
