import logging
from typing import Protocol

import httpx

from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates
from src.resources.dtos import RemoteCallError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    couple_names: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send email via Resend and return its id."""
        try:
            async with self._http_client_class() as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {self._config.resend_api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self._config.emails_from,
                        "to": [to_address],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send '{subject}' to {to_address}: {e}")
            raise RemoteCallError(f"Failed to send email to {to_address}") from e

        resend_email_id = response.json().get("id")
        logger.info(f"Sent '{subject}' to {to_address} ({resend_email_id})")
        return resend_email_id

    async def send_invitation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
        rsvp_url: str,
        response_deadline: str,
    ) -> None:
        values = dict(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
            rsvp_url=rsvp_url,
            response_deadline=response_deadline,
            couple_names=self._config.couple_names,
        )
        await self._send(
            to_address=to_address,
            subject=EmailTemplates.INVITATION_SUBJECT,
            html_body=EmailTemplates.INVITATION_HTML.format(**values),
            text_body=EmailTemplates.INVITATION_TEXT.format(**values),
        )

    async def send_rsvp_reminder(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        rsvp_url: str,
        response_deadline: str,
    ) -> None:
        values = dict(
            guest_name=guest_name,
            event_title=event_title,
            event_date=event_date,
            rsvp_url=rsvp_url,
            response_deadline=response_deadline,
            couple_names=self._config.couple_names,
        )
        await self._send(
            to_address=to_address,
            subject=EmailTemplates.REMINDER_SUBJECT.format(event_title=event_title),
            html_body=EmailTemplates.REMINDER_HTML.format(**values),
            text_body=EmailTemplates.REMINDER_TEXT.format(**values),
        )
