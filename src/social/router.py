import base64
import contextlib
import posixpath
from datetime import datetime
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, ConfigDict

from src.common.forms import FormValidationError, reject_invalid_form, require
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure
from src.social.dtos import (
    STORIES_BUCKET,
    MessageType,
    NotAParticipantError,
    SelfChatError,
    StoryMediaType,
)
from src.social.repository.models import ChatModel, SqlChatModel, SqlStoryModel, StoryModel
from src.social.urls import CHAT_MESSAGES_URL, CHAT_READ_URL, CHATS_URL, STORIES_URL, STORY_URL
from src.storage.file_store import FileStore, get_file_store

router = APIRouter()


class DirectChatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    participant1_id: str
    participant2_id: str
    last_message: str | None
    last_message_at: datetime | None


class ChatMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    chat_id: UUID
    sender_id: str
    content: str
    message_type: MessageType
    is_read: bool
    created_at: datetime | None


class StoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    media_url: str
    media_type: StoryMediaType
    caption: str | None
    expires_at: datetime
    created_at: datetime | None


class StartChatRequest(BaseModel):
    user_id: str
    other_user_id: str


class SendMessageRequest(BaseModel):
    sender_id: str
    content: str
    message_type: MessageType = MessageType.TEXT


class MarkReadRequest(BaseModel):
    reader_id: str


class MarkReadResponse(BaseModel):
    marked_read: int


@contextlib.contextmanager
def reject_outsiders():
    try:
        yield
    except NotAParticipantError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e


def get_chat_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> ChatModel:
    return SqlChatModel(change_feed=change_feed)


def get_story_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> StoryModel:
    return SqlStoryModel(change_feed=change_feed)


def story_media_type(content_type: str | None) -> StoryMediaType:
    if content_type and content_type.startswith("video/"):
        return StoryMediaType.VIDEO
    return StoryMediaType.PHOTO


def text_story_url(text: str) -> str:
    encoded = base64.b64encode(text.encode()).decode()
    return f"data:text/plain;base64,{encoded}"


@router.get(CHATS_URL, response_model=list[DirectChatResponse])
async def list_chats(
    user_id: str,
    chat_model: ChatModel = Depends(get_chat_model),
) -> list[DirectChatResponse]:
    with report_failure("Failed to load chats"):
        chats = await chat_model.list_chats(user_id)
    return [DirectChatResponse.model_validate(c) for c in chats]


@router.post(CHATS_URL, response_model=DirectChatResponse)
async def start_chat(
    request: StartChatRequest,
    chat_model: ChatModel = Depends(get_chat_model),
) -> DirectChatResponse:
    try:
        with report_failure("Failed to start chat"):
            chat = await chat_model.find_or_create_chat(request.user_id, request.other_user_id)
    except SelfChatError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DirectChatResponse.model_validate(chat)


@router.get(CHAT_MESSAGES_URL, response_model=list[ChatMessageResponse])
async def list_messages(
    chat_id: UUID,
    chat_model: ChatModel = Depends(get_chat_model),
) -> list[ChatMessageResponse]:
    with report_failure("Failed to load messages"):
        messages = await chat_model.list_messages(chat_id)
    return [ChatMessageResponse.model_validate(m) for m in messages]


@router.post(
    CHAT_MESSAGES_URL, response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED
)
async def send_message(
    chat_id: UUID,
    request: SendMessageRequest,
    chat_model: ChatModel = Depends(get_chat_model),
) -> ChatMessageResponse:
    with reject_invalid_form():
        content = require("content", request.content, "Message cannot be empty").strip()
    with reject_outsiders(), report_failure("Failed to send message"):
        message = await chat_model.send_message(
            chat_id, request.sender_id, content, request.message_type
        )
    return ChatMessageResponse.model_validate(message)


@router.post(CHAT_READ_URL, response_model=MarkReadResponse)
async def mark_read(
    chat_id: UUID,
    request: MarkReadRequest,
    chat_model: ChatModel = Depends(get_chat_model),
) -> MarkReadResponse:
    with reject_outsiders(), report_failure("Failed to mark messages as read"):
        count = await chat_model.mark_read(chat_id, request.reader_id)
    return MarkReadResponse(marked_read=count)


@router.get(STORIES_URL, response_model=list[StoryResponse])
async def list_stories(
    story_model: StoryModel = Depends(get_story_model),
) -> list[StoryResponse]:
    with report_failure("Failed to load stories"):
        stories = await story_model.list_active_stories()
    return [StoryResponse.model_validate(s) for s in stories]


@router.post(STORIES_URL, response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    user_id: str = Form(...),
    caption: str = Form(""),
    text_content: str = Form(""),
    media: UploadFile | None = None,
    story_model: StoryModel = Depends(get_story_model),
    file_store: FileStore = Depends(get_file_store),
) -> StoryResponse:
    """A story is either an uploaded photo or video, or plain text."""
    if media is None and not text_content.strip():
        with reject_invalid_form():
            raise FormValidationError("media", "A story needs a photo, a video or some text")

    with report_failure("Failed to create story"):
        if media is not None:
            extension = posixpath.splitext(media.filename or "")[1].lower()
            url = await file_store.upload(
                STORIES_BUCKET,
                f"{user_id}/{uuid4()}{extension}",
                await media.read(),
                content_type=media.content_type or "application/octet-stream",
            )
            media_type = story_media_type(media.content_type)
        else:
            url = text_story_url(text_content)
            media_type = StoryMediaType.TEXT
        story = await story_model.create_story(user_id, url, media_type, caption or None)
    return StoryResponse.model_validate(story)


@router.delete(STORY_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_story(
    story_id: UUID,
    user_id: str,
    story_model: StoryModel = Depends(get_story_model),
) -> None:
    with report_failure("Failed to delete story"):
        await story_model.delete_story(story_id, user_id)
