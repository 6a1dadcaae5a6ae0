from abc import ABC, abstractmethod


class EmailServiceBase(ABC):
    @abstractmethod
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
        pass

    @abstractmethod
    async def send_rsvp_reminder(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        rsvp_url: str,
        response_deadline: str,
    ) -> None:
        pass
