"""Conversion of flat form values into store records."""

import contextlib
import json
import math
from enum import Enum
from typing import Any
from uuid import UUID

from fastapi import HTTPException

class FormValidationError(Exception):
    """Raised when a form value cannot be turned into a record. Nothing is sent to the store."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

class ValueType(str, Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    JSON = "json"

def split_csv_field(text: str | None) -> list[str]:
    """Split a comma-separated field into trimmed, non-empty tokens. Order and duplicates are kept."""
    if not text:
        return []
    return [token.strip() for token in text.split(",") if token.strip()]

def join_csv_field(values: list[str] | None) -> str:
    return ", ".join(values or [])

def parse_coordinates(text: str | None, field: str = "coordinates") -> tuple[float, float] | None:
    """Parse "lng,lat" text. Empty text means no coordinates."""
    if not text or not text.strip():
        return None
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise FormValidationError(field, "Coordinates must be written as 'longitude,latitude'")
    try:
        lng, lat = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise FormValidationError(field, "Coordinates must be numbers") from e
    if math.isnan(lng) or math.isnan(lat):
        raise FormValidationError(field, "Coordinates must be numbers")
    return lng, lat

def format_coordinates(coordinates: list[float] | tuple[float, float] | None) -> str:
    if not coordinates:
        return ""
    return f"{coordinates[0]},{coordinates[1]}"

def parse_typed_value(value_type: ValueType | str, text: str, field: str = "default_value") -> Any:
    """Parse text according to its declared type. Failures raise; nothing is coerced to a default."""
    value_type = ValueType(value_type)
    if value_type == ValueType.BOOLEAN:
        return text == "true"
    if value_type == ValueType.NUMBER:
        try:
            number = float(text)
        except (TypeError, ValueError) as e:
            raise FormValidationError(field, f"Invalid default value for type {value_type.value}") from e
        if math.isnan(number) or math.isinf(number):
            raise FormValidationError(field, f"Invalid default value for type {value_type.value}")
        return int(number) if number.is_integer() else number
    if value_type == ValueType.JSON:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise FormValidationError(field, f"Invalid default value for type {value_type.value}") from e
    return text

def format_typed_value(value: Any) -> str:
    """Inverse of parse_typed_value for pre-filling an edit form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2)
    if value is None:
        return ""
    return str(value)

def blank_to_none(value: Any) -> Any:
    """Empty-string sentinels (e.g. an unselected foreign key) become None."""
    if isinstance(value, str) and not value.strip():
        return None
    return value

def parse_optional_uuid(field: str, value: str | None) -> UUID | None:
    """An unselected foreign key is empty text; anything else must be a UUID."""
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        return UUID(text.strip())
    except ValueError as e:
        raise FormValidationError(field, "Please choose a valid option") from e

def require(field: str, value: str | None, message: str | None = None) -> str:
    if value is None or not str(value).strip():
        raise FormValidationError(field, message or f"{field.replace('_', ' ').capitalize()} is required")
    return value

@contextlib.contextmanager
def reject_invalid_form():
    """Report a FormValidationError next to the offending field."""
    try:
        yield
    except FormValidationError as e:
        raise HTTPException(
            status_code=422, detail={"field": e.field, "message": e.message}
        ) from e
