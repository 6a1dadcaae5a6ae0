import logging
from abc import ABC, abstractmethod
from typing import Protocol

import httpx

from src.config.settings import settings
from src.resources.dtos import RemoteCallError

logger = logging.getLogger(__name__)


class FileStore(ABC):
    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Store bytes under bucket/path and return a publicly resolvable URL."""
        raise NotImplementedError


class StorageConfig(Protocol):
    storage_url: str
    storage_api_key: str
    storage_timeout_seconds: float


class SupabaseFileStore(FileStore):
    """File store backed by the Supabase storage HTTP API."""

    def __init__(
        self,
        config: StorageConfig = settings,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ) -> None:
        self._config = config
        self._http_client_class = http_client_class

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._config.storage_url.rstrip('/')}/storage/v1/object/public/{bucket}/{path}"

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        url = f"{self._config.storage_url.rstrip('/')}/storage/v1/object/{bucket}/{path}"
        try:
            async with self._http_client_class(
                timeout=self._config.storage_timeout_seconds
            ) as client:
                response = await client.post(
                    url,
                    content=data,
                    headers={
                        "Authorization": f"Bearer {self._config.storage_api_key}",
                        "Content-Type": content_type,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Upload of {bucket}/{path} failed: {e}")
            raise RemoteCallError(f"Upload of {bucket}/{path} failed") from e

        return self.public_url(bucket, path)


def get_file_store() -> FileStore:
    """Dependency to get the file store."""
    return SupabaseFileStore()
