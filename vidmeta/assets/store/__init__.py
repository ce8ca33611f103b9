from vidmeta.assets.store.client import (
    AssetStoreClient,
    build_record_url,
    load_asset_record,
    save_asset_record,
)

__all__ = [
    "AssetStoreClient",
    "build_record_url",
    "load_asset_record",
    "save_asset_record",
]
