"""Chat and story models. They return DTOs, never ORM models."""

import abc
import logging
from datetime import datetime
from functools import partial
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.table_names import TableNames
from src.models.base import utcnow
from src.realtime.change_feed import ChangeFeed
from src.resources.dtos import RecordNotFoundError
from src.resources.repository import SqlResourceRepository
from src.social.dtos import (
    STORY_LIFETIME,
    ChatMessageDTO,
    DirectChatDTO,
    MessageType,
    NotAParticipantError,
    StoryDTO,
    StoryMediaType,
    participant_pair,
)
from src.social.repository.orm_models import ChatMessage, DirectChat, Story

logger = logging.getLogger(__name__)


class ChatModel(abc.ABC):
    @abc.abstractmethod
    async def list_chats(self, user_id: str) -> list[DirectChatDTO]:
        """Chats the user takes part in, most recently active first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def find_or_create_chat(self, user_id: str, other_user_id: str) -> DirectChatDTO:
        """The one chat between two users, whichever of them asks. Created on first use."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_messages(self, chat_id: UUID) -> list[ChatMessageDTO]:
        """Messages of a chat, oldest first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def send_message(
        self,
        chat_id: UUID,
        sender_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
    ) -> ChatMessageDTO:
        """Store a message and make it the chat's last message."""
        raise NotImplementedError

    @abc.abstractmethod
    async def mark_read(self, chat_id: UUID, reader_id: str) -> int:
        """Flag the other participant's unread messages as read. Returns how many changed."""
        raise NotImplementedError


class SqlChatModel(ChatModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self._chats = SqlResourceRepository(
            DirectChat,
            TableNames.DIRECT_CHATS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )
        self._messages = SqlResourceRepository(
            ChatMessage,
            TableNames.CHAT_MESSAGES,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def _get_chat_for(self, chat_id: UUID, user_id: str) -> DirectChatDTO:
        chat = DirectChatDTO.hydrate(await self._chats.get(chat_id))
        if user_id not in chat.participants:
            raise NotAParticipantError(chat_id, user_id)
        return chat

    async def list_chats(self, user_id: str) -> list[DirectChatDTO]:
        stmt = (
            select(DirectChat)
            .where(
                or_(DirectChat.participant1_id == user_id, DirectChat.participant2_id == user_id)
            )
            .order_by(DirectChat.last_message_at.desc().nulls_last(), DirectChat.created_at.desc())
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [
                DirectChatDTO.hydrate(SqlResourceRepository.to_row(chat))
                for chat in result.scalars().all()
            ]

    async def find_or_create_chat(self, user_id: str, other_user_id: str) -> DirectChatDTO:
        participant1_id, participant2_id = participant_pair(user_id, other_user_id)
        pair = {"participant1_id": participant1_id, "participant2_id": participant2_id}
        existing = await self._chats.list(pair)
        if existing:
            return DirectChatDTO.hydrate(existing[0])

        logger.info(f"Starting chat between {participant1_id} and {participant2_id}")
        return DirectChatDTO.hydrate(await self._chats.insert(pair))

    async def list_messages(self, chat_id: UUID) -> list[ChatMessageDTO]:
        await self._chats.get(chat_id)
        return [
            ChatMessageDTO.hydrate(row) for row in await self._messages.list({"chat_id": chat_id})
        ]

    async def send_message(
        self,
        chat_id: UUID,
        sender_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
    ) -> ChatMessageDTO:
        await self._get_chat_for(chat_id, sender_id)
        message = ChatMessageDTO.hydrate(
            await self._messages.insert(
                {
                    "chat_id": chat_id,
                    "sender_id": sender_id,
                    "content": content,
                    "message_type": message_type,
                    "is_read": False,
                }
            )
        )
        await self._chats.update(
            chat_id, {"last_message": content, "last_message_at": message.created_at}
        )
        return message

    async def mark_read(self, chat_id: UUID, reader_id: str) -> int:
        await self._get_chat_for(chat_id, reader_id)
        unread = [
            row
            for row in await self._messages.list({"chat_id": chat_id, "is_read": False})
            if row["sender_id"] != reader_id
        ]
        for row in unread:
            await self._messages.update(row["id"], {"is_read": True})
        return len(unread)


class StoryModel(abc.ABC):
    @abc.abstractmethod
    async def list_active_stories(self, now: datetime | None = None) -> list[StoryDTO]:
        """Stories that have not expired yet, newest first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def create_story(
        self,
        user_id: str,
        media_url: str,
        media_type: StoryMediaType,
        caption: str | None = None,
    ) -> StoryDTO:
        """Create a story that expires 24 hours from now."""
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_story(self, story_id: UUID, user_id: str) -> None:
        """Only the author can delete a story; anyone else gets RecordNotFoundError."""
        raise NotImplementedError


class SqlStoryModel(StoryModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self._stories = SqlResourceRepository(
            Story,
            TableNames.STORIES,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def list_active_stories(self, now: datetime | None = None) -> list[StoryDTO]:
        stmt = (
            select(Story)
            .where(Story.expires_at > (now or utcnow()))
            .order_by(Story.created_at.desc())
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [
                StoryDTO.hydrate(SqlResourceRepository.to_row(story))
                for story in result.scalars().all()
            ]

    async def create_story(
        self,
        user_id: str,
        media_url: str,
        media_type: StoryMediaType,
        caption: str | None = None,
    ) -> StoryDTO:
        row = await self._stories.insert(
            {
                "user_id": user_id,
                "media_url": media_url,
                "media_type": media_type,
                "caption": caption,
                "expires_at": utcnow() + STORY_LIFETIME,
            }
        )
        return StoryDTO.hydrate(row)

    async def delete_story(self, story_id: UUID, user_id: str) -> None:
        story = await self._stories.get(story_id)
        if story["user_id"] != user_id:
            raise RecordNotFoundError(self._stories.resource, story_id)
        await self._stories.delete(story_id)
