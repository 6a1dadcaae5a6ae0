import abc
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.accommodation.dtos import AccommodationCategoryDTO, AccommodationOptionDTO
from src.accommodation.repository.orm_models import AccommodationCategory, AccommodationOption
from src.config.table_names import TableNames
from src.resources.repository import SqlResourceRepository


class AccommodationReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_categories(self) -> list[AccommodationCategoryDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_options(self, active_only: bool = False) -> list[AccommodationOptionDTO]:
        """Options in display order."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_option(self, option_id: UUID) -> AccommodationOptionDTO:
        raise NotImplementedError


class SqlAccommodationReadModel(AccommodationReadModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self._categories = SqlResourceRepository(
            AccommodationCategory,
            TableNames.ACCOMMODATION_CATEGORIES,
            session_overwrite=session_overwrite,
        )
        self._options = SqlResourceRepository(
            AccommodationOption,
            TableNames.ACCOMMODATION_OPTIONS,
            session_overwrite=session_overwrite,
        )

    async def list_categories(self) -> list[AccommodationCategoryDTO]:
        return [AccommodationCategoryDTO.hydrate(row) for row in await self._categories.list()]

    async def list_options(self, active_only: bool = False) -> list[AccommodationOptionDTO]:
        filters = {"is_active": True} if active_only else None
        return [AccommodationOptionDTO.hydrate(row) for row in await self._options.list(filters)]

    async def get_option(self, option_id: UUID) -> AccommodationOptionDTO:
        return AccommodationOptionDTO.hydrate(await self._options.get(option_id))
