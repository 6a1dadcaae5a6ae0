from uuid import UUID

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class TransportOption(Base, TimeStamp):
    __tablename__ = TableNames.TRANSPORT_OPTIONS.value

    # Transport categories live outside this service; the id is kept as given
    category_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    method_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    pickup_locations: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    cost_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    booking_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    booking_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    capacity_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_bookings: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<TransportOption {self.method_name}>"
