"""Feature flag read and write models. They return DTOs, never ORM models."""

import abc
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.table_names import TableNames
from src.feature_flags.dtos import FeatureFlagDTO, FlagNotFoundError
from src.feature_flags.repository.orm_models import FeatureFlag
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository


class FeatureFlagReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_flags(self) -> list[FeatureFlagDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_flag(self, flag_key: str) -> FeatureFlagDTO:
        """Raises FlagNotFoundError for an unknown key."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_flag_by_id(self, flag_id: UUID) -> FeatureFlagDTO:
        raise NotImplementedError


class FeatureFlagWriteModel(abc.ABC):
    @abc.abstractmethod
    async def create_flag(self, values: Mapping[str, Any]) -> FeatureFlagDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def update_flag(self, flag_id: UUID, values: Mapping[str, Any]) -> FeatureFlagDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def toggle_flag(self, flag_id: UUID) -> FeatureFlagDTO:
        """Flip is_enabled."""
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_flag(self, flag_id: UUID) -> None:
        raise NotImplementedError


class SqlFeatureFlagModel(FeatureFlagReadModel, FeatureFlagWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._flags = SqlResourceRepository(
            FeatureFlag,
            TableNames.FEATURE_FLAGS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def list_flags(self) -> list[FeatureFlagDTO]:
        return [FeatureFlagDTO.hydrate(row) for row in await self._flags.list()]

    async def get_flag(self, flag_key: str) -> FeatureFlagDTO:
        rows = await self._flags.list({"flag_key": flag_key})
        if not rows:
            raise FlagNotFoundError(flag_key)
        return FeatureFlagDTO.hydrate(rows[0])

    async def get_flag_by_id(self, flag_id: UUID) -> FeatureFlagDTO:
        return FeatureFlagDTO.hydrate(await self._flags.get(flag_id))

    async def create_flag(self, values: Mapping[str, Any]) -> FeatureFlagDTO:
        return FeatureFlagDTO.hydrate(await self._flags.insert(values))

    async def update_flag(self, flag_id: UUID, values: Mapping[str, Any]) -> FeatureFlagDTO:
        return FeatureFlagDTO.hydrate(await self._flags.update(flag_id, values))

    async def toggle_flag(self, flag_id: UUID) -> FeatureFlagDTO:
        flag = await self._flags.get(flag_id)
        row = await self._flags.update(flag_id, {"is_enabled": not flag["is_enabled"]})
        return FeatureFlagDTO.hydrate(row)

    async def delete_flag(self, flag_id: UUID) -> None:
        await self._flags.delete(flag_id)
