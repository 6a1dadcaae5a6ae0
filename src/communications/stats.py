from collections.abc import Sequence
from datetime import date

from src.communications.dtos import (
    CommunicationDTO,
    CommunicationStatsDTO,
    CommunicationStatus,
    Direction,
)


def compute_communication_stats(
    communications: Sequence[CommunicationDTO], today: date
) -> CommunicationStatsDTO:
    failed_statuses = (CommunicationStatus.FAILED, CommunicationStatus.BOUNCED)
    return CommunicationStatsDTO(
        total=len(communications),
        sent_today=sum(
            1
            for c in communications
            if c.direction == Direction.OUTBOUND
            and c.created_at is not None
            and c.created_at.date() == today
        ),
        unread=sum(
            1
            for c in communications
            if c.direction == Direction.INBOUND and c.status != CommunicationStatus.READ
        ),
        failed=sum(1 for c in communications if c.status in failed_statuses),
    )
