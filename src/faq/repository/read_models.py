import abc
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.table_names import TableNames
from src.faq.dtos import GENERAL_CATEGORY, FAQCategoryDTO, FAQGroupDTO, FAQItemDTO
from src.faq.repository.orm_models import FAQCategory, FAQItem
from src.resources.repository import SqlResourceRepository


class FAQReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_categories(self) -> list[FAQCategoryDTO]:
        """All categories in display order."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_items(self, category_id: UUID | None = None) -> list[FAQItemDTO]:
        """All items in display order, optionally of one category only."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_category(self, category_id: UUID) -> FAQCategoryDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_item(self, item_id: UUID) -> FAQItemDTO:
        """Raises RecordNotFoundError for an unknown item."""
        raise NotImplementedError

    async def public_faqs(self) -> list[FAQGroupDTO]:
        """
        Active items grouped by category, in category display order.
        Items of an inactive category are hidden; uncategorised items form a
        trailing "General" group.
        """
        all_categories = await self.list_categories()
        categories = [c for c in all_categories if c.is_active]
        known = {c.id for c in all_categories}
        items = [i for i in await self.list_items() if i.is_active]

        groups = []
        for category in categories:
            category_items = [i for i in items if i.category_id == category.id]
            if category_items:
                groups.append(
                    FAQGroupDTO(
                        name=category.name,
                        slug=category.slug,
                        icon=category.icon,
                        description=category.description,
                        items=category_items,
                    )
                )

        general = [i for i in items if i.category_id is None or i.category_id not in known]
        if general:
            groups.append(FAQGroupDTO(name=GENERAL_CATEGORY, slug="general", items=general))
        return groups


class SqlFAQReadModel(FAQReadModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self._categories = SqlResourceRepository(
            FAQCategory, TableNames.FAQ_CATEGORIES, session_overwrite=session_overwrite
        )
        self._items = SqlResourceRepository(
            FAQItem, TableNames.FAQ_ITEMS, session_overwrite=session_overwrite
        )

    async def list_categories(self) -> list[FAQCategoryDTO]:
        return [FAQCategoryDTO.hydrate(row) for row in await self._categories.list()]

    async def list_items(self, category_id: UUID | None = None) -> list[FAQItemDTO]:
        filters = {"category_id": category_id} if category_id else None
        return [FAQItemDTO.hydrate(row) for row in await self._items.list(filters)]

    async def get_category(self, category_id: UUID) -> FAQCategoryDTO:
        return FAQCategoryDTO.hydrate(await self._categories.get(category_id))

    async def get_item(self, item_id: UUID) -> FAQItemDTO:
        return FAQItemDTO.hydrate(await self._items.get(item_id))
