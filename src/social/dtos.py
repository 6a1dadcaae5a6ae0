from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any
from uuid import UUID

STORY_LIFETIME = timedelta(hours=24)
STORIES_BUCKET = "stories"


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"


class StoryMediaType(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"
    TEXT = "text"


class NotAParticipantError(Exception):
    def __init__(self, chat_id: UUID, user_id: str) -> None:
        self.chat_id = chat_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not part of chat {chat_id}")


class SelfChatError(ValueError):
    pass


def participant_pair(user_a: str, user_b: str) -> tuple[str, str]:
    """Canonical order of a chat's participants, so (a, b) and (b, a) are the same chat."""
    if user_a == user_b:
        raise SelfChatError("A direct chat needs two different participants")
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


@dataclass(frozen=True)
class DirectChatDTO:
    id: UUID
    participant1_id: str
    participant2_id: str
    last_message: str | None = None
    last_message_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def participants(self) -> tuple[str, str]:
        return self.participant1_id, self.participant2_id

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "DirectChatDTO":
        return cls(
            id=row["id"],
            participant1_id=row["participant1_id"],
            participant2_id=row["participant2_id"],
            last_message=row.get("last_message"),
            last_message_at=row.get("last_message_at"),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class ChatMessageDTO:
    id: UUID
    chat_id: UUID
    sender_id: str
    content: str
    message_type: MessageType = MessageType.TEXT
    is_read: bool = False
    created_at: datetime | None = None

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "ChatMessageDTO":
        return cls(
            id=row["id"],
            chat_id=row["chat_id"],
            sender_id=row["sender_id"],
            content=row.get("content") or "",
            message_type=MessageType(row.get("message_type") or MessageType.TEXT),
            is_read=bool(row.get("is_read")),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class StoryDTO:
    id: UUID
    user_id: str
    media_url: str
    expires_at: datetime
    media_type: StoryMediaType = StoryMediaType.PHOTO
    caption: str | None = None
    created_at: datetime | None = None

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "StoryDTO":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            media_url=row.get("media_url") or "",
            expires_at=row["expires_at"],
            media_type=StoryMediaType(row.get("media_type") or StoryMediaType.PHOTO),
            caption=row.get("caption"),
            created_at=row.get("created_at"),
        )
