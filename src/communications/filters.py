from collections.abc import Iterable

from src.common.filtering import ALL, filter_records, matches_category, matches_text
from src.communications.dtos import CommunicationDTO


def filter_communications(
    communications: Iterable[CommunicationDTO],
    query: str | None = None,
    communication_type: str | None = ALL,
    status: str | None = ALL,
    direction: str | None = ALL,
) -> list[CommunicationDTO]:
    def matches_search(c: CommunicationDTO) -> bool:
        profile = c.profile
        return matches_text(
            query,
            c.content,
            c.subject,
            profile.email if profile else None,
            profile.full_name if profile else None,
        )

    return filter_records(
        communications,
        matches_search,
        lambda c: matches_category(communication_type, c.communication_type.value),
        lambda c: matches_category(status, c.status.value),
        lambda c: matches_category(direction, c.direction.value),
    )
