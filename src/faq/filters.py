from collections.abc import Iterable

from src.common.filtering import ALL, filter_records, matches_category, matches_text
from src.faq.dtos import FAQItemDTO


def filter_faq_items(
    items: Iterable[FAQItemDTO], query: str | None = None, category_id: str | None = ALL
) -> list[FAQItemDTO]:
    return filter_records(
        items,
        lambda i: matches_text(query, i.question, i.answer),
        lambda i: matches_category(category_id, str(i.category_id) if i.category_id else None),
    )
