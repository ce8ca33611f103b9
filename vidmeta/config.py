"""Video asset configuration.

Values come from an optional JSON file (``video.config.json`` in the working
directory unless another path is given) and are overridden by environment
variables. Applications that build their configuration in code install it
with ``set_video_config``.
"""
import json
import logging
import os
from typing import Callable, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from vidmeta.assets.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "video.config.json"
DEFAULT_PROVIDER = "mux"

ENV_OVERRIDES = {
    "VIDMETA_API_BASE_URL": "api_base_url",
    "VIDMETA_PROVIDER": "provider",
    "VIDMETA_FOLDER": "folder",
}


class VideoConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    api_base_url: str | None = None
    provider: str = DEFAULT_PROVIDER
    folder: str | None = None
    # Maps a remote URL to the relative path its metadata is stored under.
    remote_source_asset_path: Callable[[str], str] | None = None

    def require_api_base_url(self) -> str:
        if not self.api_base_url:
            raise ConfigurationError("Missing video `apiBaseUrl` config.")
        return self.api_base_url

    def require_folder(self) -> str:
        if not self.folder:
            raise ConfigurationError("Missing video `folder` config.")
        return self.folder


def load_video_config(
    path: str | os.PathLike | None = None,
    environ: Mapping[str, str] | None = None,
) -> VideoConfig:
    environ = os.environ if environ is None else environ
    values: dict = {}

    config_path = os.fspath(path) if path is not None else DEFAULT_CONFIG_FILE
    if path is not None or os.path.isfile(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Unable to read video config {config_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Video config {config_path} must be a JSON object")
        values.update(loaded)
        logging.debug("loaded video config from %s", config_path)

    for env_name, field_name in ENV_OVERRIDES.items():
        if environ.get(env_name):
            values.pop(to_camel(field_name), None)
            values[field_name] = environ[env_name]

    try:
        return VideoConfig.model_validate(values)
    except ValidationError as ve:
        raise ConfigurationError(f"Invalid video config: {ve}") from ve


_video_config: VideoConfig | None = None


def get_video_config() -> VideoConfig:
    global _video_config
    if _video_config is None:
        _video_config = load_video_config()
    return _video_config


def set_video_config(config: VideoConfig | None) -> None:
    """Install the process configuration. ``None`` reloads it on next use."""
    global _video_config
    _video_config = config
