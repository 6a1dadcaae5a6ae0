"""Unit tests for ResendEmailService, mocking the HTTP client."""

from types import SimpleNamespace

import httpx
import pytest

from src.email_service.resend_service import RESEND_API_URL, ResendEmailService
from src.resources.dtos import RemoteCallError

CONFIG = SimpleNamespace(
    resend_api_key="re_test",
    emails_from="hello@wedding.example",
    couple_names="Anna & Ben",
)


class MockResponse:
    def __init__(self, *, json_data=None, status_code=200):
        self._json_data = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=httpx.Request("POST", RESEND_API_URL),
                response=httpx.Response(self.status_code),
            )

    def json(self):
        return self._json_data


class MockHttpClient:
    def __init__(self, response: MockResponse):
        self.response = response
        self.post_calls: list[dict] = []

    def __call__(self, **kwargs) -> "MockHttpClient":
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return None

    async def post(self, url: str, **kwargs) -> MockResponse:
        self.post_calls.append({"url": url, **kwargs})
        return self.response


async def test_send_rsvp_reminder():
    client = MockHttpClient(MockResponse(json_data={"id": "email-1"}))
    service = ResendEmailService(config=CONFIG, http_client_class=client)

    await service.send_rsvp_reminder(
        to_address="guest@example.com",
        guest_name="Jane Doe",
        event_title="Ceremony",
        event_date="Saturday, 12 June 2027",
        rsvp_url="https://wedding.example/rsvp",
        response_deadline="Saturday, 05 June 2027",
    )

    [call] = client.post_calls
    assert call["url"] == RESEND_API_URL
    assert call["headers"]["Authorization"] == "Bearer re_test"
    payload = call["json"]
    assert payload["to"] == ["guest@example.com"]
    assert payload["from"] == "hello@wedding.example"
    assert "Ceremony" in payload["subject"]
    assert "Jane Doe" in payload["text"]
    assert "Saturday, 05 June 2027" in payload["html"]


async def test_send_invitation_failure_raises_remote_call_error():
    client = MockHttpClient(MockResponse(status_code=422))
    service = ResendEmailService(config=CONFIG, http_client_class=client)

    with pytest.raises(RemoteCallError):
        await service.send_invitation(
            to_address="guest@example.com",
            guest_name="Jane Doe",
            event_title="Ceremony",
            event_date="Saturday, 12 June 2027",
            event_location="Villa Rosa",
            rsvp_url="https://wedding.example/rsvp",
            response_deadline="Saturday, 05 June 2027",
        )
