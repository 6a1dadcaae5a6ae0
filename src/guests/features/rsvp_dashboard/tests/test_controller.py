import asyncio

import pytest

from src.communications.dtos import CommunicationStatus
from src.config.table_names import TableNames
from src.guests.dtos import ActionInProgressError, RSVPStatus
from src.guests.features.rsvp_dashboard.controller import RSVPDashboard
from src.realtime.change_feed import ChangeAction, ChangeEvent, ChangeFeed
from src.resources.dtos import RemoteCallError


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def dashboard(rsvp_model, feed, email_service, communication_log):
    return RSVPDashboard(
        read_model=rsvp_model,
        change_feed=feed,
        email_service=email_service,
        communication_write_model=communication_log,
        rsvp_url="https://wedding.example/rsvp",
        deadline_days=7,
    )


def rsvp_changed(action: ChangeAction = ChangeAction.UPDATE) -> ChangeEvent:
    return ChangeEvent(resource=TableNames.RSVPS.value, action=action)


async def test_start_loads_and_subscribes(dashboard, feed):
    await dashboard.start()

    assert len(dashboard.rsvps) == 3
    assert len(dashboard.events) == 1
    assert dashboard.is_live
    assert feed.subscriber_count(TableNames.RSVPS) == 1


async def test_each_notification_refetches_once(dashboard, feed, rsvp_model):
    await dashboard.start()
    calls = rsvp_model.list_calls

    event = rsvp_changed(ChangeAction.INSERT)
    await feed.publish(event)

    assert rsvp_model.list_calls == calls + 1
    assert dashboard.last_updated == event.occurred_at


async def test_notification_does_not_patch_the_list(dashboard, feed, rsvp_model):
    await dashboard.start()
    rsvp_model.rsvps.pop()

    await feed.publish(rsvp_changed(ChangeAction.DELETE))

    # the list reflects the store, whatever the event said
    assert len(dashboard.rsvps) == 2


async def test_other_resources_are_ignored(dashboard, feed, rsvp_model):
    await dashboard.start()
    calls = rsvp_model.list_calls

    await feed.publish(ChangeEvent(resource=TableNames.GUESTS.value, action=ChangeAction.UPDATE))

    assert rsvp_model.list_calls == calls
    assert dashboard.last_updated is None


async def test_failed_refetch_keeps_previous_lists(dashboard, feed, rsvp_model):
    await dashboard.start()
    rsvp_model.fail = True

    await feed.publish(rsvp_changed())

    assert len(dashboard.rsvps) == 3


async def test_load_failure_is_reported(dashboard, rsvp_model):
    rsvp_model.fail = True

    with pytest.raises(RemoteCallError):
        await dashboard.load()


async def test_close_unsubscribes(dashboard, feed, rsvp_model):
    await dashboard.start()
    dashboard.close()
    calls = rsvp_model.list_calls

    await feed.publish(rsvp_changed())

    assert not dashboard.is_live
    assert feed.subscriber_count(TableNames.RSVPS) == 0
    assert rsvp_model.list_calls == calls
    dashboard.close()


async def test_starting_twice_subscribes_once(dashboard, feed):
    await dashboard.start()
    await dashboard.start()

    assert feed.subscriber_count(TableNames.RSVPS) == 1


async def test_stats_and_filtering(dashboard):
    await dashboard.load()

    assert dashboard.stats.total == 3
    assert dashboard.stats.attending == 1
    assert dashboard.stats.total_guests == 2
    assert dashboard.stats.capacity_used == 10
    assert [r.status for r in dashboard.filtered("ben", "pending")] == [RSVPStatus.PENDING]
    assert dashboard.filtered("ben", "attending") == []


async def test_send_reminders(dashboard, email_service, communication_log):
    await dashboard.load()

    result = await dashboard.send_reminders()

    # one pending RSVP has no guest profile to write to
    assert (result.sent, result.failed, result.skipped) == (1, 0, 1)
    [reminder] = email_service.reminders
    assert reminder["to_address"] == "ben@example.com"
    assert reminder["rsvp_url"] == "https://wedding.example/rsvp"
    assert reminder["response_deadline"] == "Saturday, 05 September 2026"
    [logged] = communication_log.records
    assert logged.status == CommunicationStatus.SENT
    assert logged.subject.endswith("Ceremony")


async def test_failed_reminder_is_counted_and_logged(dashboard, email_service, communication_log):
    await dashboard.load()
    email_service.failing_addresses.add("ben@example.com")

    result = await dashboard.send_reminders()

    assert (result.sent, result.failed) == (0, 1)
    assert communication_log.records[0].status == CommunicationStatus.FAILED


async def test_reminders_cannot_overlap(dashboard, email_service):
    await dashboard.load()
    release = asyncio.Event()
    original = email_service.send_rsvp_reminder

    async def slow_reminder(**kwargs):
        await release.wait()
        await original(**kwargs)

    email_service.send_rsvp_reminder = slow_reminder

    first = asyncio.create_task(dashboard.send_reminders())
    await asyncio.sleep(0)
    with pytest.raises(ActionInProgressError):
        await dashboard.send_reminders()

    release.set()
    result = await first
    assert result.sent == 1

    # finished runs release the guard
    await dashboard.send_reminders()
    assert len(email_service.reminders) == 2
