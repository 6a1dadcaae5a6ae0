from dataclasses import replace
from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from src.models.base import utcnow
from src.resources.dtos import RecordNotFoundError
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
from src.social.repository.models import ChatModel, StoryModel
from src.social.router import get_chat_model, get_story_model
from src.social.urls import CHAT_MESSAGES_URL, CHAT_READ_URL, CHATS_URL, STORIES_URL, STORY_URL
from src.storage.file_store import get_file_store


class InMemoryChatModel(ChatModel):
    def __init__(self) -> None:
        self.chats: dict[UUID, DirectChatDTO] = {}
        self.messages: list[ChatMessageDTO] = []

    def _chat_for(self, chat_id: UUID, user_id: str) -> DirectChatDTO:
        if chat_id not in self.chats:
            raise RecordNotFoundError("direct_chats", chat_id)
        chat = self.chats[chat_id]
        if user_id not in chat.participants:
            raise NotAParticipantError(chat_id, user_id)
        return chat

    async def list_chats(self, user_id: str) -> list[DirectChatDTO]:
        return [c for c in self.chats.values() if user_id in c.participants]

    async def find_or_create_chat(self, user_id: str, other_user_id: str) -> DirectChatDTO:
        pair = participant_pair(user_id, other_user_id)
        for chat in self.chats.values():
            if chat.participants == pair:
                return chat
        chat = DirectChatDTO(id=uuid4(), participant1_id=pair[0], participant2_id=pair[1])
        self.chats[chat.id] = chat
        return chat

    async def list_messages(self, chat_id: UUID) -> list[ChatMessageDTO]:
        return [m for m in self.messages if m.chat_id == chat_id]

    async def send_message(
        self,
        chat_id: UUID,
        sender_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
    ) -> ChatMessageDTO:
        chat = self._chat_for(chat_id, sender_id)
        message = ChatMessageDTO(
            id=uuid4(),
            chat_id=chat_id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
            created_at=utcnow(),
        )
        self.messages.append(message)
        self.chats[chat_id] = replace(
            chat, last_message=content, last_message_at=message.created_at
        )
        return message

    async def mark_read(self, chat_id: UUID, reader_id: str) -> int:
        self._chat_for(chat_id, reader_id)
        count = 0
        for index, message in enumerate(self.messages):
            if message.chat_id == chat_id and message.sender_id != reader_id and not message.is_read:
                self.messages[index] = replace(message, is_read=True)
                count += 1
        return count


class InMemoryStoryModel(StoryModel):
    def __init__(self) -> None:
        self.stories: list[StoryDTO] = []

    async def list_active_stories(self, now=None) -> list[StoryDTO]:
        now = now or utcnow()
        return [s for s in self.stories if s.expires_at > now]

    async def create_story(self, user_id, media_url, media_type, caption=None) -> StoryDTO:
        story = StoryDTO(
            id=uuid4(),
            user_id=user_id,
            media_url=media_url,
            media_type=media_type,
            caption=caption,
            expires_at=utcnow() + STORY_LIFETIME,
            created_at=utcnow(),
        )
        self.stories.append(story)
        return story

    async def delete_story(self, story_id: UUID, user_id: str) -> None:
        for story in self.stories:
            if story.id == story_id and story.user_id == user_id:
                self.stories.remove(story)
                return
        raise RecordNotFoundError("stories", story_id)


@pytest.fixture
def chat_model():
    return InMemoryChatModel()


@pytest.fixture
def story_model():
    return InMemoryStoryModel()


@pytest.fixture
def overrides(chat_model, story_model, file_store):
    return {
        get_chat_model: lambda: chat_model,
        get_story_model: lambda: story_model,
        get_file_store: lambda: file_store,
    }


async def test_start_chat_twice_returns_the_same_chat(client_factory, overrides):
    async with client_factory(overrides) as client:
        first = await client.post(CHATS_URL, json={"user_id": "bob", "other_user_id": "alice"})
        second = await client.post(CHATS_URL, json={"user_id": "alice", "other_user_id": "bob"})

    assert first.status_code == 200
    assert first.json()["id"] == second.json()["id"]


async def test_start_chat_with_yourself(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(
            CHATS_URL, json={"user_id": "alice", "other_user_id": "alice"}
        )

    assert response.status_code == 422


async def test_send_and_read_messages(client_factory, overrides, chat_model):
    chat = await chat_model.find_or_create_chat("alice", "bob")
    url = CHAT_MESSAGES_URL.format(chat_id=chat.id)

    async with client_factory(overrides) as client:
        sent = await client.post(url, json={"sender_id": "alice", "content": " See you there "})
        read = await client.post(
            CHAT_READ_URL.format(chat_id=chat.id), json={"reader_id": "bob"}
        )
        listed = await client.get(url)
        chats = await client.get(CHATS_URL, params={"user_id": "bob"})

    assert sent.status_code == 201
    assert sent.json()["content"] == "See you there"
    assert read.json() == {"marked_read": 1}
    assert listed.json()[0]["is_read"] is True
    assert chats.json()[0]["last_message"] == "See you there"


async def test_empty_message_is_rejected(client_factory, overrides, chat_model):
    chat = await chat_model.find_or_create_chat("alice", "bob")

    async with client_factory(overrides) as client:
        response = await client.post(
            CHAT_MESSAGES_URL.format(chat_id=chat.id),
            json={"sender_id": "alice", "content": "   "},
        )

    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "content"
    assert chat_model.messages == []


async def test_outsider_gets_403(client_factory, overrides, chat_model):
    chat = await chat_model.find_or_create_chat("alice", "bob")

    async with client_factory(overrides) as client:
        response = await client.post(
            CHAT_MESSAGES_URL.format(chat_id=chat.id),
            json={"sender_id": "mallory", "content": "hi"},
        )

    assert response.status_code == 403


async def test_upload_video_story(client_factory, overrides, file_store):
    async with client_factory(overrides) as client:
        response = await client.post(
            STORIES_URL,
            data={"user_id": "alice", "caption": "First dance"},
            files={"media": ("dance.MP4", b"video-bytes", "video/mp4")},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["media_type"] == "video"
    assert data["caption"] == "First dance"
    [path] = file_store.files
    assert path.startswith("stories/alice/")
    assert path.endswith(".mp4")
    assert data["media_url"] == f"https://files.test/{path}"


async def test_text_story(client_factory, overrides, file_store):
    async with client_factory(overrides) as client:
        response = await client.post(
            STORIES_URL, data={"user_id": "alice", "text_content": "Hello"}
        )

    assert response.status_code == 201
    assert response.json()["media_type"] == "text"
    assert response.json()["media_url"] == "data:text/plain;base64,SGVsbG8="
    assert file_store.files == {}


async def test_story_needs_content(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(STORIES_URL, data={"user_id": "alice"})

    assert response.status_code == 422


async def test_failed_upload_creates_no_story(client_factory, overrides, story_model, file_store):
    file_store.fail = True

    async with client_factory(overrides) as client:
        response = await client.post(
            STORIES_URL,
            data={"user_id": "alice"},
            files={"media": ("a.jpg", b"img", "image/jpeg")},
        )

    assert response.status_code == 503
    assert story_model.stories == []


async def test_list_and_delete_stories(client_factory, overrides, story_model):
    mine = await story_model.create_story("alice", "https://x/a.jpg", StoryMediaType.PHOTO)
    old = await story_model.create_story("bob", "https://x/b.jpg", StoryMediaType.PHOTO)
    story_model.stories[1] = replace(old, expires_at=utcnow() - timedelta(minutes=1))

    async with client_factory(overrides) as client:
        listed = await client.get(STORIES_URL)
        forbidden = await client.delete(
            STORY_URL.format(story_id=mine.id), params={"user_id": "bob"}
        )
        deleted = await client.delete(
            STORY_URL.format(story_id=mine.id), params={"user_id": "alice"}
        )

    assert [s["user_id"] for s in listed.json()] == ["alice"]
    assert forbidden.status_code == 404
    assert deleted.status_code == 204
