import pytest

from src.config.table_names import TableNames
from src.realtime.change_feed import ChangeAction, ChangeFeed
from src.transport.repository.models import SqlTransportModel
from src.transport.router import get_transport_read_model, get_transport_write_model
from src.transport.urls import (
    PUBLIC_TRANSPORT_URL,
    TRANSPORT_OPTION_FORM_URL,
    TRANSPORT_OPTION_URL,
    TRANSPORT_OPTIONS_URL,
)


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def overrides(db_session, feed):
    model = SqlTransportModel(change_feed=feed, session_overwrite=db_session)
    return {
        get_transport_read_model: lambda: model,
        get_transport_write_model: lambda: model,
    }


async def test_create_update_and_list(client_factory, overrides, feed):
    changes = []
    feed.subscribe(TableNames.TRANSPORT_OPTIONS, changes.append)

    async with client_factory(overrides) as client:
        created = await client.post(
            TRANSPORT_OPTIONS_URL,
            json={"method_name": "Shuttle", "pickup_locations": "Hotel A, Station", "max_capacity": "30"},
        )
        option = created.json()
        updated = await client.put(
            TRANSPORT_OPTION_URL.format(option_id=option["id"]),
            json={"method_name": "Shuttle bus", "max_capacity": ""},
        )
        listed = await client.get(TRANSPORT_OPTIONS_URL)

    assert created.status_code == 201
    assert option["pickup_locations"] == ["Hotel A", "Station"]
    assert option["remaining_capacity"] == 30
    assert updated.json()["max_capacity"] is None
    assert updated.json()["remaining_capacity"] is None
    assert [o["method_name"] for o in listed.json()] == ["Shuttle bus"]
    assert [c.action for c in changes] == [ChangeAction.INSERT, ChangeAction.UPDATE]


async def test_missing_method_name(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(TRANSPORT_OPTIONS_URL, json={"description": "?"})

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "field": "method_name",
        "message": "Method name is required",
    }


async def test_public_list_only_shows_active_options(client_factory, overrides, db_session):
    model = SqlTransportModel(session_overwrite=db_session)
    await model.create_option({"method_name": "Taxi"})
    hidden = await model.create_option({"method_name": "Boat"})
    await model.update_option(hidden.id, {"is_active": False})

    async with client_factory(overrides) as client:
        response = await client.get(PUBLIC_TRANSPORT_URL)

    assert [o["method_name"] for o in response.json()] == ["Taxi"]


async def test_delete_unknown_option(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.delete(
            TRANSPORT_OPTION_URL.format(option_id="00000000-0000-0000-0000-000000000000")
        )

    assert response.status_code == 404


async def test_edit_form(client_factory, overrides):
    async with client_factory(overrides) as client:
        option = (
            await client.post(
                TRANSPORT_OPTIONS_URL,
                json={"method_name": "Shuttle", "pickup_locations": "Hotel A, Station"},
            )
        ).json()
        form = await client.get(TRANSPORT_OPTION_FORM_URL.format(option_id=option["id"]))
        deleted = await client.delete(TRANSPORT_OPTION_URL.format(option_id=option["id"]))
        gone = await client.get(TRANSPORT_OPTION_FORM_URL.format(option_id=option["id"]))

    assert form.json()["pickup_locations"] == "Hotel A, Station"
    assert form.json()["max_capacity"] == ""
    assert deleted.status_code == 204
    assert gone.status_code == 404
