"""Admin view over every RSVP, kept fresh by re-fetching on change notifications."""

import logging
from datetime import datetime

from src.communications.dtos import CommunicationStatus, CommunicationType, Direction
from src.communications.repository.write_models import CommunicationWriteModel
from src.config.settings import settings
from src.config.table_names import TableNames
from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates
from src.guests.dtos import (
    RSVPDTO,
    ActionInProgressError,
    EventDTO,
    ReminderResultDTO,
    RSVPStatsDTO,
    RSVPStatus,
)
from src.guests.filters import filter_rsvps
from src.guests.repository.read_models import RSVPReadModel
from src.guests.stats import compute_rsvp_stats, effective_rsvp_deadline
from src.realtime.change_feed import ChangeEvent, ChangeFeed, Subscription
from src.resources.dtos import RemoteCallError

logger = logging.getLogger(__name__)

SEND_REMINDERS = "send_reminders"

DATE_FORMAT = "%A, %d %B %Y"


class RSVPDashboard:
    """
    Owns the fetched RSVP and event lists.

    A change notification never patches the lists: it marks last_updated and
    triggers one full re-fetch. A failed fetch keeps the previous lists.
    """

    def __init__(
        self,
        read_model: RSVPReadModel,
        change_feed: ChangeFeed,
        email_service: EmailServiceBase | None = None,
        communication_write_model: CommunicationWriteModel | None = None,
        rsvp_url: str | None = None,
        deadline_days: int | None = None,
    ) -> None:
        self.read_model = read_model
        self.change_feed = change_feed
        self.email_service = email_service
        self.communication_write_model = communication_write_model
        self.rsvp_url = rsvp_url or f"{settings.frontend_url}/rsvp"
        self.deadline_days = (
            settings.rsvp_deadline_days if deadline_days is None else deadline_days
        )

        self.rsvps: list[RSVPDTO] = []
        self.events: list[EventDTO] = []
        self.last_updated: datetime | None = None
        self._subscription: Subscription | None = None
        self._in_flight: set[str] = set()

    @property
    def is_live(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def load(self) -> None:
        try:
            rsvps = await self.read_model.list_rsvps()
            events = await self.read_model.list_events()
        except Exception as e:
            logger.exception("Failed to load RSVP data")
            raise RemoteCallError("Failed to load RSVP data") from e

        self.rsvps = rsvps
        self.events = events

    async def start(self) -> None:
        await self.load()
        if not self.is_live:
            self._subscription = self.change_feed.subscribe(TableNames.RSVPS, self._on_change)

    def close(self) -> None:
        if self._subscription:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_change(self, event: ChangeEvent) -> None:
        logger.debug(f"RSVP {event.action.value} received, refreshing")
        self.last_updated = event.occurred_at
        await self.load()

    @property
    def stats(self) -> RSVPStatsDTO:
        return compute_rsvp_stats(self.rsvps, self.events)

    def filtered(
        self,
        query: str | None = None,
        status: str | None = None,
        event_id: str | None = None,
    ) -> list[RSVPDTO]:
        return filter_rsvps(self.rsvps, query=query, status=status, event_id=event_id)

    async def send_reminders(self) -> ReminderResultDTO:
        """
        Email every guest whose RSVP is still pending and log each attempt as an
        outbound communication. Raises ActionInProgressError while a previous
        run has not finished.
        """
        if SEND_REMINDERS in self._in_flight:
            raise ActionInProgressError(SEND_REMINDERS)
        if self.email_service is None:
            raise RemoteCallError("No email service configured")

        self._in_flight.add(SEND_REMINDERS)
        try:
            return await self._send_reminders()
        finally:
            self._in_flight.discard(SEND_REMINDERS)

    async def _send_reminders(self) -> ReminderResultDTO:
        events = {event.id: event for event in self.events}
        sent = failed = skipped = 0

        for rsvp in self.rsvps:
            if rsvp.status != RSVPStatus.PENDING:
                continue
            event = events.get(rsvp.event_id)
            if event is None or rsvp.profile is None or not rsvp.profile.email:
                skipped += 1
                continue

            subject = EmailTemplates.REMINDER_SUBJECT.format(event_title=event.title)
            deadline = effective_rsvp_deadline(event, self.deadline_days)
            try:
                await self.email_service.send_rsvp_reminder(
                    to_address=rsvp.profile.email,
                    guest_name=rsvp.profile.full_name.strip() or rsvp.profile.email,
                    event_title=event.title,
                    event_date=event.event_date.strftime(DATE_FORMAT),
                    rsvp_url=self.rsvp_url,
                    response_deadline=deadline.strftime(DATE_FORMAT),
                )
                status = CommunicationStatus.SENT
                sent += 1
            except Exception:
                logger.exception(f"Failed to send RSVP reminder to {rsvp.profile.email}")
                status = CommunicationStatus.FAILED
                failed += 1

            if self.communication_write_model:
                await self.communication_write_model.record(
                    {
                        "guest_id": rsvp.guest_id,
                        "communication_type": CommunicationType.EMAIL,
                        "subject": subject,
                        "content": f"RSVP reminder for {event.title}, respond by "
                        f"{deadline.strftime(DATE_FORMAT)}",
                        "direction": Direction.OUTBOUND,
                        "status": status,
                    }
                )

        logger.info(f"RSVP reminders: {sent} sent, {failed} failed, {skipped} skipped")
        return ReminderResultDTO(sent=sent, failed=failed, skipped=skipped)
