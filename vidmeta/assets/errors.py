class AssetError(Exception):
    """Base class for asset metadata errors."""


class ConfigurationError(AssetError):
    """A required configuration value is missing or invalid."""


class AssetNotFoundError(AssetError, LookupError):
    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Asset not found: {key}")
        self.key = key


class StoreWriteError(AssetError):
    """The remote metadata store rejected a write."""

    def __init__(self, key: str, status: int):
        super().__init__(f"Unable to save video asset {key}, status code: {status}")
        self.key = key
        self.status = status
