"""SqlChatModel and SqlStoryModel against an in-memory database."""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.models.base import utcnow
from src.realtime.change_feed import ChangeFeed
from src.resources.dtos import RecordNotFoundError
from src.social.dtos import NotAParticipantError, SelfChatError, StoryMediaType
from src.social.repository.models import SqlChatModel, SqlStoryModel


async def test_find_or_create_chat_ignores_participant_order(db_session):
    chats = SqlChatModel(session_overwrite=db_session)

    first = await chats.find_or_create_chat("bob", "alice")
    second = await chats.find_or_create_chat("alice", "bob")

    assert first.id == second.id
    assert first.participants == ("alice", "bob")
    assert len(await chats.list_chats("alice")) == 1


async def test_chat_with_yourself_is_refused(db_session):
    chats = SqlChatModel(session_overwrite=db_session)

    with pytest.raises(SelfChatError):
        await chats.find_or_create_chat("alice", "alice")


async def test_messages_are_oldest_first_and_update_the_chat(db_session):
    chats = SqlChatModel(session_overwrite=db_session)
    chat = await chats.find_or_create_chat("alice", "bob")

    await chats.send_message(chat.id, "alice", "Are you coming?")
    await chats.send_message(chat.id, "bob", "Wouldn't miss it")

    messages = await chats.list_messages(chat.id)
    assert [m.content for m in messages] == ["Are you coming?", "Wouldn't miss it"]

    [updated] = await chats.list_chats("bob")
    assert updated.last_message == "Wouldn't miss it"
    assert updated.last_message_at is not None


async def test_outsider_cannot_send(db_session):
    chats = SqlChatModel(session_overwrite=db_session)
    chat = await chats.find_or_create_chat("alice", "bob")

    with pytest.raises(NotAParticipantError):
        await chats.send_message(chat.id, "mallory", "hi")


async def test_mark_read_only_touches_the_other_side(db_session):
    chats = SqlChatModel(session_overwrite=db_session)
    chat = await chats.find_or_create_chat("alice", "bob")
    await chats.send_message(chat.id, "alice", "one")
    await chats.send_message(chat.id, "alice", "two")
    await chats.send_message(chat.id, "bob", "three")

    assert await chats.mark_read(chat.id, "bob") == 2
    # a second pass finds nothing new
    assert await chats.mark_read(chat.id, "bob") == 0

    read = {m.content: m.is_read for m in await chats.list_messages(chat.id)}
    assert read == {"one": True, "two": True, "three": False}


async def test_sending_publishes_message_and_chat_changes(db_session):
    feed = ChangeFeed()
    seen = []
    feed.subscribe("chat_messages", lambda event: seen.append(event.action.value))
    chats = SqlChatModel(change_feed=feed, session_overwrite=db_session)
    chat = await chats.find_or_create_chat("alice", "bob")

    await chats.send_message(chat.id, "alice", "hello")

    assert seen == ["insert"]


async def test_unknown_chat_messages(db_session):
    chats = SqlChatModel(session_overwrite=db_session)

    with pytest.raises(RecordNotFoundError):
        await chats.list_messages(uuid4())


async def test_new_story_expires_in_a_day(db_session):
    stories = SqlStoryModel(session_overwrite=db_session)
    before = utcnow()

    story = await stories.create_story("alice", "https://cdn/s.jpg", StoryMediaType.PHOTO)

    lifetime = story.expires_at.replace(tzinfo=None) - before.replace(tzinfo=None)
    assert timedelta(hours=23, minutes=59) < lifetime <= timedelta(hours=24, seconds=5)


async def test_expired_stories_are_not_listed(db_session):
    stories = SqlStoryModel(session_overwrite=db_session)
    await stories.create_story("alice", "https://cdn/a.jpg", StoryMediaType.PHOTO)

    assert len(await stories.list_active_stories()) == 1
    assert await stories.list_active_stories(now=utcnow() + timedelta(hours=25)) == []


async def test_only_the_author_deletes_a_story(db_session):
    stories = SqlStoryModel(session_overwrite=db_session)
    story = await stories.create_story("alice", "https://cdn/a.jpg", StoryMediaType.PHOTO)

    with pytest.raises(RecordNotFoundError):
        await stories.delete_story(story.id, "bob")

    await stories.delete_story(story.id, "alice")
    assert await stories.list_active_stories() == []
