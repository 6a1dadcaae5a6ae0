import pytest

from src.config.table_names import TableNames
from src.faq.dtos import GENERAL_CATEGORY
from src.faq.repository.read_models import SqlFAQReadModel
from src.faq.repository.write_models import SqlFAQWriteModel
from src.realtime.change_feed import ChangeAction, ChangeFeed
from src.resources.dtos import RecordNotFoundError


@pytest.fixture
def write_model(db_session):
    return SqlFAQWriteModel(session_overwrite=db_session)


@pytest.fixture
def read_model(db_session):
    return SqlFAQReadModel(session_overwrite=db_session)


async def test_new_entries_are_appended(write_model, read_model):
    first = await write_model.create_category({"name": "Travel", "slug": "travel"})
    second = await write_model.create_category({"name": "Dress code", "slug": "dress-code"})
    item = await write_model.create_item({"question": "Parking?", "answer": "Yes"})

    assert (first.display_order, second.display_order) == (0, 1)
    assert item.view_count == 0
    assert [c.slug for c in await read_model.list_categories()] == ["travel", "dress-code"]


async def test_reorder_items(write_model, read_model):
    a = await write_model.create_item({"question": "A?", "answer": "a"})
    b = await write_model.create_item({"question": "B?", "answer": "b"})
    c = await write_model.create_item({"question": "C?", "answer": "c"})

    await write_model.reorder_items([c.id, a.id, b.id])

    items = await read_model.list_items()
    assert [i.question for i in items] == ["C?", "A?", "B?"]
    assert [i.display_order for i in items] == [0, 1, 2]


async def test_reorder_publishes_one_change_per_item(db_session):
    feed = ChangeFeed()
    events = []
    feed.subscribe(TableNames.FAQ_ITEMS, events.append)
    write_model = SqlFAQWriteModel(change_feed=feed, session_overwrite=db_session)
    a = await write_model.create_item({"question": "A?", "answer": "a"})
    b = await write_model.create_item({"question": "B?", "answer": "b"})
    events.clear()

    await write_model.reorder_items([b.id, a.id])

    assert [e.action for e in events] == [ChangeAction.UPDATE, ChangeAction.UPDATE]


async def test_record_view(write_model):
    item = await write_model.create_item({"question": "Kids?", "answer": "Welcome"})

    await write_model.record_view(item.id)
    item = await write_model.record_view(item.id)

    assert item.view_count == 2


async def test_list_items_of_one_category(write_model, read_model):
    travel = await write_model.create_category({"name": "Travel", "slug": "travel"})
    await write_model.create_item({"question": "Train?", "answer": "Yes", "category_id": travel.id})
    await write_model.create_item({"question": "Gifts?", "answer": "No"})

    items = await read_model.list_items(travel.id)

    assert [i.question for i in items] == ["Train?"]


async def test_public_faqs_grouping(write_model, read_model):
    travel = await write_model.create_category({"name": "Travel", "slug": "travel", "icon": "car"})
    hidden = await write_model.create_category({"name": "Old", "slug": "old", "is_active": False})
    empty = await write_model.create_category({"name": "Empty", "slug": "empty"})
    await write_model.create_item({"question": "Parking?", "answer": "Yes", "category_id": travel.id})
    await write_model.create_item(
        {"question": "Shuttle?", "answer": "No", "category_id": travel.id, "is_active": False}
    )
    await write_model.create_item({"question": "Legacy?", "answer": "-", "category_id": hidden.id})
    await write_model.create_item({"question": "Gifts?", "answer": "None needed"})

    groups = await read_model.public_faqs()

    assert [g.name for g in groups] == ["Travel", GENERAL_CATEGORY]
    assert [i.question for i in groups[0].items] == ["Parking?"]
    assert groups[0].icon == "car"
    assert [i.question for i in groups[1].items] == ["Gifts?"]
    assert empty.id not in {i.category_id for g in groups for i in g.items}


async def test_delete_unknown_item(write_model):
    item = await write_model.create_item({"question": "Q?", "answer": "A"})
    await write_model.delete_item(item.id)

    with pytest.raises(RecordNotFoundError):
        await write_model.delete_item(item.id)
