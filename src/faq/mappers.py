import re
from typing import Any

from pydantic import BaseModel

from src.common.forms import blank_to_none, parse_optional_uuid, require
from src.faq.dtos import FAQCategoryDTO, FAQItemDTO


def slugify(name: str) -> str:
    """Lower-case the name and replace each run of whitespace with a hyphen."""
    return re.sub(r"\s+", "-", name.strip().lower())


class FAQCategoryForm(BaseModel):
    name: str = ""
    description: str = ""
    icon: str = ""
    is_active: bool = True

    def to_record(self) -> dict[str, Any]:
        require("name", self.name, "Category name is required")
        return {
            "name": self.name.strip(),
            "slug": slugify(self.name),
            "description": blank_to_none(self.description),
            "icon": blank_to_none(self.icon),
            "is_active": self.is_active,
        }


class FAQItemForm(BaseModel):
    question: str = ""
    answer: str = ""
    category_id: str = ""
    is_active: bool = True
    is_featured: bool = False

    def to_record(self) -> dict[str, Any]:
        require("question", self.question, "Question is required")
        require("answer", self.answer, "Answer is required")
        return {
            "question": self.question.strip(),
            "answer": self.answer.strip(),
            "category_id": parse_optional_uuid("category_id", self.category_id),
            "is_active": self.is_active,
            "is_featured": self.is_featured,
        }


def category_to_form(category: FAQCategoryDTO) -> FAQCategoryForm:
    return FAQCategoryForm(
        name=category.name,
        description=category.description or "",
        icon=category.icon or "",
        is_active=category.is_active,
    )


def item_to_form(item: FAQItemDTO) -> FAQItemForm:
    return FAQItemForm(
        question=item.question,
        answer=item.answer,
        category_id=str(item.category_id) if item.category_id else "",
        is_active=item.is_active,
        is_featured=item.is_featured,
    )
