from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

GENERAL_CATEGORY = "General"


@dataclass(frozen=True)
class FAQCategoryDTO:
    id: UUID
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    display_order: int = 0
    is_active: bool = True

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "FAQCategoryDTO":
        return cls(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            description=row.get("description"),
            icon=row.get("icon"),
            display_order=row.get("display_order") or 0,
            is_active=row.get("is_active", True),
        )


@dataclass(frozen=True)
class FAQItemDTO:
    id: UUID
    question: str
    answer: str
    category_id: UUID | None = None
    display_order: int = 0
    is_active: bool = True
    is_featured: bool = False
    view_count: int = 0

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "FAQItemDTO":
        return cls(
            id=row["id"],
            question=row["question"],
            answer=row["answer"],
            category_id=row.get("category_id"),
            display_order=row.get("display_order") or 0,
            is_active=row.get("is_active", True),
            is_featured=bool(row.get("is_featured")),
            view_count=row.get("view_count") or 0,
        )


@dataclass(frozen=True)
class FAQGroupDTO:
    """Active FAQ items of one category, as shown to guests."""

    name: str
    slug: str
    icon: str | None = None
    description: str | None = None
    items: list[FAQItemDTO] = field(default_factory=list)
