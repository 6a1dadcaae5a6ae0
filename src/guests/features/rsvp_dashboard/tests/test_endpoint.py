from dataclasses import replace
from uuid import uuid4

import pytest

from src.guests.dtos import ActionInProgressError, RSVPStatus
from src.guests.features.rsvp_dashboard.controller import SEND_REMINDERS, RSVPDashboard
from src.guests.features.rsvp_dashboard.router import get_dashboard, get_rsvp_dashboard
from src.guests.urls import ADMIN_RSVP_REMINDERS_URL, ADMIN_RSVP_STATS_URL, ADMIN_RSVPS_URL
from src.realtime.change_feed import ChangeFeed


class BusyDashboard(RSVPDashboard):
    async def send_reminders(self):
        raise ActionInProgressError(SEND_REMINDERS)


@pytest.fixture
async def dashboard(rsvp_model, email_service, communication_log):
    dashboard = RSVPDashboard(
        read_model=rsvp_model,
        change_feed=ChangeFeed(),
        email_service=email_service,
        communication_write_model=communication_log,
    )
    await dashboard.load()
    return dashboard


async def test_list_rsvps_filters_by_status(client_factory, dashboard):
    async with client_factory({get_rsvp_dashboard: lambda: dashboard}) as client:
        response = await client.get(ADMIN_RSVPS_URL, params={"status": "pending"})

    assert response.status_code == 200
    data = response.json()
    assert len(data["rsvps"]) == 2
    assert {r["status"] for r in data["rsvps"]} == {"pending"}
    assert data["last_updated"] is None


async def test_list_rsvps_includes_profile(client_factory, dashboard):
    async with client_factory({get_rsvp_dashboard: lambda: dashboard}) as client:
        response = await client.get(ADMIN_RSVPS_URL, params={"query": "lee"})

    [rsvp] = response.json()["rsvps"]
    assert rsvp["profile"]["email"] == "ann@example.com"


async def test_stats_ignore_the_filters(client_factory, dashboard):
    async with client_factory({get_rsvp_dashboard: lambda: dashboard}) as client:
        response = await client.get(ADMIN_RSVP_STATS_URL, params={"status": "attending"})

    data = response.json()
    assert data["total"] == 3
    assert data["pending"] == 2
    assert data["response_rate"] == 33


async def test_send_reminders(client_factory, dashboard, email_service):
    async with client_factory({get_rsvp_dashboard: lambda: dashboard}) as client:
        response = await client.post(ADMIN_RSVP_REMINDERS_URL)

    assert response.status_code == 200
    assert response.json() == {"sent": 1, "failed": 0, "skipped": 1}
    assert len(email_service.reminders) == 1


async def test_reminders_already_running(client_factory, rsvp_model):
    busy = BusyDashboard(read_model=rsvp_model, change_feed=ChangeFeed())

    async with client_factory({get_rsvp_dashboard: lambda: busy}) as client:
        response = await client.post(ADMIN_RSVP_REMINDERS_URL)

    assert response.status_code == 409


async def test_list_rsvps_filters_by_event(client_factory, dashboard, ceremony):
    async with client_factory({get_rsvp_dashboard: lambda: dashboard}) as client:
        same_event = await client.get(
            ADMIN_RSVPS_URL, params={"event_id": str(ceremony.id), "status": "pending"}
        )
        other_event = await client.get(ADMIN_RSVPS_URL, params={"event_id": str(uuid4())})

    assert len(same_event.json()["rsvps"]) == 2
    assert other_event.json()["rsvps"] == []


async def test_live_dashboard_still_refetches_every_request(client_factory, rsvp_model):
    live = RSVPDashboard(read_model=rsvp_model, change_feed=ChangeFeed())
    await live.start()
    assert live.is_live

    # written by another process: nothing is published on this feed
    rsvp_model.rsvps = [replace(r, status=RSVPStatus.DECLINED) for r in rsvp_model.rsvps]

    async with client_factory({get_dashboard: lambda: live}) as client:
        response = await client.get(ADMIN_RSVP_STATS_URL)

    assert response.json()["declined"] == 3
    assert response.json()["pending"] == 0
