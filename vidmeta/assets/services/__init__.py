# Asset services layer
# Business logic composing path resolution, the metadata store, the cache and
# provider transforms

from vidmeta.assets.services.asset_management import (
    AssetService,
    create_asset,
    get_asset,
    get_default_service,
    register_transform,
    reset_default_service,
    update_asset,
)
from vidmeta.assets.services.path_utils import (
    compute_original_file_path,
    default_remote_source_asset_path,
    get_asset_config_path,
    get_asset_path,
)

__all__ = [
    # asset_management.py
    "AssetService",
    "create_asset",
    "get_asset",
    "get_default_service",
    "register_transform",
    "reset_default_service",
    "update_asset",
    # path_utils.py
    "compute_original_file_path",
    "default_remote_source_asset_path",
    "get_asset_config_path",
    "get_asset_path",
]
