from datetime import datetime
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy import Boolean, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp, enum_values
from src.social.dtos import MessageType, StoryMediaType


class DirectChat(Base, TimeStamp):
    __tablename__ = TableNames.DIRECT_CHATS.value
    __table_args__ = (UniqueConstraint("participant1_id", "participant2_id"),)

    # stored in canonical order, participant1_id < participant2_id
    participant1_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    participant2_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    last_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_message_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )


class ChatMessage(Base, TimeStamp):
    __tablename__ = TableNames.CHAT_MESSAGES.value

    chat_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.DIRECT_CHATS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[str] = mapped_column(
        Enum(MessageType, name="message_type_enum", values_callable=enum_values),
        default=MessageType.TEXT,
        nullable=False,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Story(Base, TimeStamp):
    __tablename__ = TableNames.STORIES.value

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    media_url: Mapped[str] = mapped_column(Text, nullable=False)
    media_type: Mapped[str] = mapped_column(
        Enum(StoryMediaType, name="story_media_type_enum", values_callable=enum_values),
        default=StoryMediaType.PHOTO,
        nullable=False,
    )
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, index=True
    )
