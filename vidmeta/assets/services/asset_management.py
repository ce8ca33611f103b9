"""
Asset lifecycle services.

- get_asset: Fetch an asset record, serving ready assets from the cache
- create_asset: Write a new pending record for a local file or remote URL
- update_asset: Merge a patch into a record, apply the provider transform, save
"""
import logging
from typing import Any, Mapping

import aiohttp

from vidmeta.assets.cache import AssetCache
from vidmeta.assets.helpers import deep_merge, is_remote, now_ms
from vidmeta.assets.schemas import Asset, to_wire_keys
from vidmeta.assets.services.file_utils import get_size_bytes
from vidmeta.assets.services.path_utils import (
    compute_original_file_path,
    get_asset_config_path,
)
from vidmeta.assets.store import AssetStoreClient
from vidmeta.assets.transforms import TransformLike, TransformRegistry, transform_asset
from vidmeta.config import VideoConfig, get_video_config

AssetPatch = Mapping[str, Any] | Asset


class AssetService:
    """Reads and writes asset records for one configuration.

    The service owns its cache. Concurrent updates of the same asset are not
    serialized: both read the current record and the last save wins.
    """

    def __init__(
        self,
        config: VideoConfig,
        transforms: TransformRegistry | Mapping[str, TransformLike] | None = None,
        cache: AssetCache | None = None,
        store: AssetStoreClient | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.config = config
        if not isinstance(transforms, TransformRegistry):
            transforms = TransformRegistry(transforms)
        self.transforms = transforms
        self.cache = cache if cache is not None else AssetCache()
        if store is None:
            store = AssetStoreClient(config.require_api_base_url(), session=session)
        self.store = store

    def get_asset_config_path(self, file_path: str) -> str:
        return get_asset_config_path(file_path, self.config)

    async def get_asset(self, file_path: str) -> Asset:
        """
        Fetch the asset for a file path or URL.
        Raises AssetNotFoundError if the store has no record for it.
        """
        key = self.get_asset_config_path(file_path)
        cached = self.cache.lookup(key)
        if cached is not None:
            return cached

        asset = Asset.from_record(await self.store.load(key))
        self.cache.insert(key, asset)
        return asset

    async def create_asset(
        self,
        file_path: str,
        asset_details: AssetPatch | None = None,
    ) -> Asset:
        """
        Create and save a new asset record.
        Status defaults to pending; provider, timestamps and file path are
        always set by the service.
        """
        key = self.get_asset_config_path(file_path)

        now = now_ms()
        record: dict[str, Any] = {"status": "pending", **_patch_to_record(asset_details)}
        record.update(
            originalFilePath=compute_original_file_path(file_path),
            provider=self.config.provider,
            providerMetadata={},
            createdAt=now,
            updatedAt=now,
        )

        if not is_remote(file_path):
            size = get_size_bytes(file_path)
            if size is not None:
                record["size"] = size

        asset = Asset.from_record(record)
        await self.store.save(key, asset.to_record())
        logging.info("created asset %s with status %s", key, asset.status)
        return asset

    async def update_asset(self, file_path: str, asset_details: AssetPatch) -> Asset:
        """
        Deep merge asset_details into the current record and save the result.
        Returns the saved asset, after the provider transform ran on it.
        """
        key = self.get_asset_config_path(file_path)
        current = await self.get_asset(file_path)

        # updatedAt must move forward even for two updates within one millisecond
        updated_at = max(now_ms(), current.updated_at + 1)
        merged = deep_merge(
            current.to_record(),
            _patch_to_record(asset_details),
            {"createdAt": current.created_at, "updatedAt": updated_at},
        )

        asset = transform_asset(self.transforms, Asset.from_record(merged))
        await self.store.save(key, asset.to_record())
        logging.info("updated asset %s with status %s", key, asset.status)
        return asset

    async def close(self) -> None:
        await self.store.close()

    async def __aenter__(self) -> "AssetService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def _patch_to_record(asset_details: AssetPatch | None) -> dict[str, Any]:
    if asset_details is None:
        return {}
    if isinstance(asset_details, Asset):
        return asset_details.to_record()
    return to_wire_keys(dict(asset_details))


default_transforms = TransformRegistry()
_default_service: AssetService | None = None


def register_transform(provider: str, transform: TransformLike) -> None:
    """Register a transform used by the module-level asset functions.

    Must be called before the first asset call, the default service reads
    the registry once when it is created.
    """
    default_transforms.register(provider, transform)


def get_default_service() -> AssetService:
    global _default_service
    if _default_service is None:
        _default_service = AssetService(
            get_video_config(), transforms=TransformRegistry(default_transforms)
        )
    return _default_service


async def reset_default_service() -> None:
    global _default_service
    if _default_service is not None:
        await _default_service.close()
    _default_service = None


async def get_asset(file_path: str) -> Asset:
    return await get_default_service().get_asset(file_path)


async def create_asset(file_path: str, asset_details: AssetPatch | None = None) -> Asset:
    return await get_default_service().create_asset(file_path, asset_details)


async def update_asset(file_path: str, asset_details: AssetPatch) -> Asset:
    return await get_default_service().update_asset(file_path, asset_details)
