from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class AccommodationCategoryDTO:
    id: UUID
    name: str
    description: str | None = None
    icon: str | None = None
    display_order: int = 0
    is_active: bool = True

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "AccommodationCategoryDTO":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row.get("description"),
            icon=row.get("icon"),
            display_order=row.get("display_order") or 0,
            is_active=row.get("is_active", True),
        )


@dataclass(frozen=True)
class AccommodationOptionDTO:
    id: UUID
    name: str
    category_id: UUID | None = None
    type: str | None = None
    area: str | None = None
    address: str | None = None
    description: str | None = None
    website_url: str | None = None
    booking_url: str | None = None
    phone: str | None = None
    email: str | None = None
    price_range: str | None = None
    distance_from_venue: str | None = None
    amenities: list[str] = field(default_factory=list)
    image_url: str | None = None
    # [longitude, latitude]
    coordinates: list[float] | None = None
    featured: bool = False
    display_order: int = 0
    is_active: bool = True

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "AccommodationOptionDTO":
        return cls(
            id=row["id"],
            name=row["name"],
            category_id=row.get("category_id"),
            type=row.get("type"),
            area=row.get("area"),
            address=row.get("address"),
            description=row.get("description"),
            website_url=row.get("website_url"),
            booking_url=row.get("booking_url"),
            phone=row.get("phone"),
            email=row.get("email"),
            price_range=row.get("price_range"),
            distance_from_venue=row.get("distance_from_venue"),
            amenities=list(row.get("amenities") or []),
            image_url=row.get("image_url"),
            coordinates=list(row["coordinates"]) if row.get("coordinates") else None,
            featured=bool(row.get("featured")),
            display_order=row.get("display_order") or 0,
            is_active=row.get("is_active", True),
        )
