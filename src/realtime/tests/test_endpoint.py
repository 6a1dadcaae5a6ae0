import time

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from src.config.table_names import TableNames
from src.main import app
from src.realtime.change_feed import ChangeAction, ChangeEvent, ChangeFeed, get_change_feed
from src.realtime.urls import REALTIME_URL


@pytest.fixture
def feed():
    feed = ChangeFeed()
    app.dependency_overrides[get_change_feed] = lambda: feed
    yield feed
    app.dependency_overrides.clear()


def wait_for_subscriber(feed: ChangeFeed, resource: TableNames) -> None:
    for _ in range(100):
        if feed.subscriber_count(resource):
            return
        time.sleep(0.01)
    raise AssertionError(f"nobody subscribed to {resource.value}")


def test_unknown_resource_is_refused(feed):
    client = TestClient(app)

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(REALTIME_URL.format(resource="passwords")):
            pass


def test_changes_are_pushed(feed):
    client = TestClient(app)

    with client.websocket_connect(REALTIME_URL.format(resource="rsvps")) as ws:
        wait_for_subscriber(feed, TableNames.RSVPS)
        ws.portal.call(
            feed.publish,
            ChangeEvent(resource=TableNames.RSVPS.value, action=ChangeAction.UPDATE),
        )
        message = ws.receive_json()

    assert message["resource"] == "rsvps"
    assert message["action"] == "update"
    assert "occurred_at" in message
