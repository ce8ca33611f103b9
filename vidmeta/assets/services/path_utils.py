import os
import posixpath
import urllib.parse

from vidmeta.assets.helpers import is_remote, to_safe_path
from vidmeta.config import VideoConfig

ASSET_CONFIG_SUFFIX = ".json"


def default_remote_source_asset_path(url: str) -> str:
    """Safe relative path for a remote URL: decoded ``host + path``.

    The scheme, port and query string are dropped so the path usually ends
    with the video file extension.
    """
    parsed = urllib.parse.urlsplit(url)
    return to_safe_path(urllib.parse.unquote(f"{parsed.hostname or ''}{parsed.path}"))


def get_asset_path(file_path: str, config: VideoConfig) -> str:
    """Storage path of the asset for ``file_path``.

    Local paths are used as given. Remote URLs are mapped to a safe path
    inside the configured ``folder``.
    """
    if not is_remote(file_path):
        return file_path

    folder = config.require_folder()
    remote_source_asset_path = config.remote_source_asset_path or default_remote_source_asset_path
    return posixpath.normpath(
        posixpath.join(folder, remote_source_asset_path(file_path).lstrip("/"))
    )


def get_asset_config_path(file_path: str, config: VideoConfig) -> str:
    """Storage key of the metadata record for ``file_path``."""
    return f"{get_asset_path(file_path, config)}{ASSET_CONFIG_SUFFIX}"


def compute_original_file_path(file_path: str) -> str:
    """Reference stored in ``originalFilePath``: remote URLs verbatim, local
    paths relative to the working directory."""
    if is_remote(file_path):
        return file_path
    return os.path.relpath(file_path, os.getcwd())
