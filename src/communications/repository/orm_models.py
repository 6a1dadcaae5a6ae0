from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.communications.dtos import CommunicationStatus, CommunicationType, Direction
from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp, enum_values


class GuestCommunication(Base, TimeStamp):
    __tablename__ = TableNames.GUEST_COMMUNICATIONS.value

    guest_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    communication_type: Mapped[str] = mapped_column(
        Enum(CommunicationType, name="communication_type_enum", values_callable=enum_values),
        default=CommunicationType.EMAIL,
        nullable=False,
    )
    subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    direction: Mapped[str] = mapped_column(
        Enum(Direction, name="communication_direction_enum", values_callable=enum_values),
        default=Direction.OUTBOUND,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        Enum(CommunicationStatus, name="communication_status_enum", values_callable=enum_values),
        default=CommunicationStatus.SENT,
        nullable=False,
        index=True,
    )
    sent_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<GuestCommunication {self.direction} {self.communication_type} to {self.guest_id}>"
