from datetime import datetime
from typing import Any

from pydantic import BaseModel

from src.common.forms import FormValidationError, blank_to_none, require
from src.communications.dtos import CommunicationStatus, CommunicationType, Direction


class MessageForm(BaseModel):
    """Compose form for an outbound message. An empty scheduled_for means send now."""

    guest_id: str = ""
    communication_type: str = CommunicationType.EMAIL.value
    subject: str = ""
    content: str = ""
    scheduled_for: str = ""

    def to_record(self, now: datetime, sent_by: str | None = None) -> dict[str, Any]:
        require("guest_id", self.guest_id, "Please choose a guest")
        require("content", self.content)
        try:
            communication_type = CommunicationType(self.communication_type)
        except ValueError as e:
            raise FormValidationError(
                "communication_type", f"Unknown type '{self.communication_type}'"
            ) from e

        scheduled_for = None
        if blank_to_none(self.scheduled_for):
            try:
                scheduled_for = datetime.fromisoformat(self.scheduled_for)
            except ValueError as e:
                raise FormValidationError("scheduled_for", "Invalid date") from e

        return {
            "guest_id": self.guest_id,
            "communication_type": communication_type,
            "subject": blank_to_none(self.subject),
            "content": self.content,
            "direction": Direction.OUTBOUND,
            "status": CommunicationStatus.DRAFT if scheduled_for else CommunicationStatus.SENT,
            "sent_by": sent_by,
            "scheduled_for": scheduled_for,
            "delivered_at": None if scheduled_for else now,
        }
