from typing import Any

from pydantic import BaseModel

from src.common.forms import (
    FormValidationError,
    blank_to_none,
    join_csv_field,
    parse_optional_uuid,
    require,
    split_csv_field,
)
from src.transport.dtos import TransportOptionDTO


class TransportForm(BaseModel):
    method_name: str = ""
    description: str = ""
    # comma-separated
    pickup_locations: str = ""
    cost_info: str = ""
    booking_required: bool = False
    booking_phone: str = ""
    capacity_info: str = ""
    # empty means unlimited
    max_capacity: str = ""
    featured: bool = False
    category_id: str = ""

    def to_record(self) -> dict[str, Any]:
        require("method_name", self.method_name, "Method name is required")

        max_capacity = None
        if blank_to_none(self.max_capacity):
            try:
                max_capacity = int(self.max_capacity)
            except ValueError as e:
                raise FormValidationError("max_capacity", "Capacity must be a whole number") from e
            if max_capacity < 0:
                raise FormValidationError("max_capacity", "Capacity cannot be negative")

        return {
            "method_name": self.method_name.strip(),
            "description": blank_to_none(self.description),
            "pickup_locations": split_csv_field(self.pickup_locations),
            "cost_info": blank_to_none(self.cost_info),
            "booking_required": self.booking_required,
            "booking_phone": blank_to_none(self.booking_phone),
            "capacity_info": blank_to_none(self.capacity_info),
            "max_capacity": max_capacity,
            "featured": self.featured,
            "category_id": parse_optional_uuid("category_id", self.category_id),
        }


def transport_to_form(option: TransportOptionDTO) -> TransportForm:
    return TransportForm(
        method_name=option.method_name,
        description=option.description or "",
        pickup_locations=join_csv_field(option.pickup_locations),
        cost_info=option.cost_info or "",
        booking_required=option.booking_required,
        booking_phone=option.booking_phone or "",
        capacity_info=option.capacity_info or "",
        max_capacity="" if option.max_capacity is None else str(option.max_capacity),
        featured=option.featured,
        category_id=str(option.category_id) if option.category_id else "",
    )
