from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from src.guests.dtos import GuestProfileDTO


class CommunicationType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    TEXT = "text"
    IN_PERSON = "in_person"
    MAIL = "mail"


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class CommunicationStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"
    BOUNCED = "bounced"


@dataclass(frozen=True)
class CommunicationDTO:
    """One message exchanged with a guest, joined with the guest profile."""

    id: UUID
    content: str
    guest_id: UUID | None = None
    communication_type: CommunicationType = CommunicationType.EMAIL
    subject: str | None = None
    direction: Direction = Direction.OUTBOUND
    status: CommunicationStatus = CommunicationStatus.SENT
    sent_by: str | None = None
    scheduled_for: datetime | None = None
    delivered_at: datetime | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None
    profile: GuestProfileDTO | None = None

    @property
    def guest_name(self) -> str:
        if self.profile is None:
            return "Unknown"
        return self.profile.full_name.strip() or self.profile.email or "Unknown"

    @classmethod
    def hydrate(
        cls, row: Mapping[str, Any], profile: GuestProfileDTO | None = None
    ) -> "CommunicationDTO":
        return cls(
            id=row["id"],
            content=row.get("content") or "",
            guest_id=row.get("guest_id"),
            communication_type=CommunicationType(
                row.get("communication_type") or CommunicationType.EMAIL
            ),
            subject=row.get("subject"),
            direction=Direction(row.get("direction") or Direction.OUTBOUND),
            status=CommunicationStatus(row.get("status") or CommunicationStatus.SENT),
            sent_by=row.get("sent_by"),
            scheduled_for=row.get("scheduled_for"),
            delivered_at=row.get("delivered_at"),
            read_at=row.get("read_at"),
            created_at=row.get("created_at"),
            profile=profile,
        )


@dataclass(frozen=True)
class CommunicationStatsDTO:
    total: int = 0
    sent_today: int = 0
    unread: int = 0
    failed: int = 0
