from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.accommodation.dtos import AccommodationCategoryDTO, AccommodationOptionDTO
from src.accommodation.repository.orm_models import AccommodationCategory, AccommodationOption
from src.config.table_names import TableNames
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository


class AccommodationWriteModel(ABC):
    @abstractmethod
    async def create_category(self, values: Mapping[str, Any]) -> AccommodationCategoryDTO:
        raise NotImplementedError

    @abstractmethod
    async def create_option(self, values: Mapping[str, Any]) -> AccommodationOptionDTO:
        """Append an option after the existing ones."""
        raise NotImplementedError

    @abstractmethod
    async def update_option(
        self, option_id: UUID, values: Mapping[str, Any]
    ) -> AccommodationOptionDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_option(self, option_id: UUID) -> None:
        raise NotImplementedError


class SqlAccommodationWriteModel(AccommodationWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._categories = SqlResourceRepository(
            AccommodationCategory,
            TableNames.ACCOMMODATION_CATEGORIES,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )
        self._options = SqlResourceRepository(
            AccommodationOption,
            TableNames.ACCOMMODATION_OPTIONS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def create_category(self, values: Mapping[str, Any]) -> AccommodationCategoryDTO:
        display_order = len(await self._categories.list())
        row = await self._categories.insert({**values, "display_order": display_order})
        return AccommodationCategoryDTO.hydrate(row)

    async def create_option(self, values: Mapping[str, Any]) -> AccommodationOptionDTO:
        display_order = len(await self._options.list())
        row = await self._options.insert({**values, "display_order": display_order})
        return AccommodationOptionDTO.hydrate(row)

    async def update_option(
        self, option_id: UUID, values: Mapping[str, Any]
    ) -> AccommodationOptionDTO:
        return AccommodationOptionDTO.hydrate(await self._options.update(option_id, values))

    async def delete_option(self, option_id: UUID) -> None:
        await self._options.delete(option_id)
