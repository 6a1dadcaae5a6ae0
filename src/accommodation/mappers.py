from typing import Any

from pydantic import BaseModel

from src.accommodation.dtos import AccommodationOptionDTO
from src.common.forms import (
    blank_to_none,
    format_coordinates,
    join_csv_field,
    parse_coordinates,
    parse_optional_uuid,
    require,
    split_csv_field,
)

OPTIONAL_TEXT_FIELDS = (
    "type",
    "area",
    "address",
    "description",
    "website_url",
    "booking_url",
    "phone",
    "email",
    "price_range",
    "distance_from_venue",
    "image_url",
)


class AccommodationForm(BaseModel):
    name: str = ""
    type: str = ""
    area: str = ""
    address: str = ""
    description: str = ""
    website_url: str = ""
    booking_url: str = ""
    phone: str = ""
    email: str = ""
    price_range: str = ""
    distance_from_venue: str = ""
    # comma-separated
    amenities: str = ""
    image_url: str = ""
    # "lng,lat"
    coordinates: str = ""
    featured: bool = False
    category_id: str = ""

    def to_record(self) -> dict[str, Any]:
        require("name", self.name, "Name is required")
        coordinates = parse_coordinates(self.coordinates)

        record: dict[str, Any] = {
            field: blank_to_none(getattr(self, field)) for field in OPTIONAL_TEXT_FIELDS
        }
        record.update(
            name=self.name.strip(),
            amenities=split_csv_field(self.amenities),
            coordinates=list(coordinates) if coordinates else None,
            featured=self.featured,
            category_id=parse_optional_uuid("category_id", self.category_id),
        )
        return record


def accommodation_to_form(option: AccommodationOptionDTO) -> AccommodationForm:
    values = {field: getattr(option, field) or "" for field in OPTIONAL_TEXT_FIELDS}
    return AccommodationForm(
        name=option.name,
        amenities=join_csv_field(option.amenities),
        coordinates=format_coordinates(option.coordinates),
        featured=option.featured,
        category_id=str(option.category_id) if option.category_id else "",
        **values,
    )


class AccommodationCategoryForm(BaseModel):
    name: str = ""
    description: str = ""
    icon: str = ""
    is_active: bool = True

    def to_record(self) -> dict[str, Any]:
        require("name", self.name, "Category name is required")
        return {
            "name": self.name.strip(),
            "description": blank_to_none(self.description),
            "icon": blank_to_none(self.icon),
            "is_active": self.is_active,
        }
