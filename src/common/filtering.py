"""Search and categorical filtering shared by every admin list.

A record is kept when it matches the free-text query AND every active categorical
filter. Filters return new lists; input order is preserved.
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

ALL = "all"


def matches_text(query: str | None, *fields: str | None) -> bool:
    """Case-insensitive substring match of the query against any field. An empty query matches."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in value.lower() for value in fields if value)


def matches_category(selected: str | None, value) -> bool:
    """Exact match of a categorical filter. None or the "all" sentinel matches everything."""
    if selected is None or selected == ALL:
        return True
    return value == selected


def filter_records(records: Iterable[T], *predicates: Callable[[T], bool]) -> list[T]:
    return [record for record in records if all(predicate(record) for predicate in predicates)]
