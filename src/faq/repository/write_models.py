from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.table_names import TableNames
from src.faq.dtos import FAQCategoryDTO, FAQItemDTO
from src.faq.repository.orm_models import FAQCategory, FAQItem
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository


class FAQWriteModel(ABC):
    @abstractmethod
    async def create_category(self, values: Mapping[str, Any]) -> FAQCategoryDTO:
        """Append a category after the existing ones."""
        raise NotImplementedError

    @abstractmethod
    async def update_category(self, category_id: UUID, values: Mapping[str, Any]) -> FAQCategoryDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_category(self, category_id: UUID) -> None:
        raise NotImplementedError

    @abstractmethod
    async def create_item(self, values: Mapping[str, Any]) -> FAQItemDTO:
        """Append an item after the existing ones, with no views."""
        raise NotImplementedError

    @abstractmethod
    async def update_item(self, item_id: UUID, values: Mapping[str, Any]) -> FAQItemDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_item(self, item_id: UUID) -> None:
        raise NotImplementedError

    @abstractmethod
    async def reorder_items(self, item_ids: Sequence[UUID]) -> None:
        """Set each item's display_order to its position in item_ids."""
        raise NotImplementedError

    @abstractmethod
    async def record_view(self, item_id: UUID) -> FAQItemDTO:
        raise NotImplementedError


class SqlFAQWriteModel(FAQWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._categories = SqlResourceRepository(
            FAQCategory,
            TableNames.FAQ_CATEGORIES,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )
        self._items = SqlResourceRepository(
            FAQItem,
            TableNames.FAQ_ITEMS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def create_category(self, values: Mapping[str, Any]) -> FAQCategoryDTO:
        display_order = len(await self._categories.list())
        row = await self._categories.insert({**values, "display_order": display_order})
        return FAQCategoryDTO.hydrate(row)

    async def update_category(self, category_id: UUID, values: Mapping[str, Any]) -> FAQCategoryDTO:
        return FAQCategoryDTO.hydrate(await self._categories.update(category_id, values))

    async def delete_category(self, category_id: UUID) -> None:
        await self._categories.delete(category_id)

    async def create_item(self, values: Mapping[str, Any]) -> FAQItemDTO:
        display_order = len(await self._items.list())
        row = await self._items.insert({**values, "display_order": display_order, "view_count": 0})
        return FAQItemDTO.hydrate(row)

    async def update_item(self, item_id: UUID, values: Mapping[str, Any]) -> FAQItemDTO:
        return FAQItemDTO.hydrate(await self._items.update(item_id, values))

    async def delete_item(self, item_id: UUID) -> None:
        await self._items.delete(item_id)

    async def reorder_items(self, item_ids: Sequence[UUID]) -> None:
        for position, item_id in enumerate(item_ids):
            await self._items.update(item_id, {"display_order": position})

    async def record_view(self, item_id: UUID) -> FAQItemDTO:
        item = await self._items.get(item_id)
        row = await self._items.update(item_id, {"view_count": (item["view_count"] or 0) + 1})
        return FAQItemDTO.hydrate(row)
