import abc
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.communications.dtos import CommunicationDTO
from src.communications.repository.orm_models import GuestCommunication
from src.config.database import async_session_manager
from src.guests.dtos import GuestProfileDTO
from src.guests.repository.orm_models import Guest
from src.resources.repository import SqlResourceRepository


class CommunicationReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_communications(self) -> list[CommunicationDTO]:
        """All communications, newest first, joined with the guest profile."""
        raise NotImplementedError


class SqlCommunicationReadModel(CommunicationReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_communications(self) -> list[CommunicationDTO]:
        stmt = (
            select(GuestCommunication, Guest)
            .outerjoin(Guest, GuestCommunication.guest_id == Guest.uuid)
            .order_by(GuestCommunication.created_at.desc())
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [
                CommunicationDTO.hydrate(
                    SqlResourceRepository.to_row(communication),
                    GuestProfileDTO(
                        email=guest.email,
                        first_name=guest.first_name,
                        last_name=guest.last_name,
                        phone=guest.phone,
                    )
                    if guest
                    else None,
                )
                for communication, guest in result.all()
            ]
