from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class TransportOptionDTO:
    id: UUID
    method_name: str
    category_id: UUID | None = None
    description: str | None = None
    pickup_locations: list[str] = field(default_factory=list)
    cost_info: str | None = None
    booking_required: bool = False
    booking_phone: str | None = None
    capacity_info: str | None = None
    # None means unlimited
    max_capacity: int | None = None
    current_bookings: int = 0
    featured: bool = False
    display_order: int = 0
    is_active: bool = True

    @property
    def remaining_capacity(self) -> int | None:
        if self.max_capacity is None:
            return None
        return max(self.max_capacity - self.current_bookings, 0)

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "TransportOptionDTO":
        return cls(
            id=row["id"],
            method_name=row["method_name"],
            category_id=row.get("category_id"),
            description=row.get("description"),
            pickup_locations=list(row.get("pickup_locations") or []),
            cost_info=row.get("cost_info"),
            booking_required=bool(row.get("booking_required")),
            booking_phone=row.get("booking_phone"),
            capacity_info=row.get("capacity_info"),
            max_capacity=row.get("max_capacity"),
            current_bookings=row.get("current_bookings") or 0,
            featured=bool(row.get("featured")),
            display_order=row.get("display_order") or 0,
            is_active=row.get("is_active", True),
        )
