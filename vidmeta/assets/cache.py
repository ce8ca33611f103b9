"""In-memory memo of assets that reached the ``ready`` status."""
import logging

from vidmeta.assets.schemas import Asset


class AssetCache:
    """Maps storage keys to ready assets.

    Entries are written once per key and never expire; the cache lives as
    long as its owner (usually an ``AssetService``). Not thread-safe.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Asset] = {}

    def lookup(self, key: str) -> Asset | None:
        asset = self._entries.get(key)
        if asset is None:
            logging.debug("asset cache MISS %s", key)
        else:
            logging.debug("asset cache HIT %s", key)
        return asset

    def insert(self, key: str, asset: Asset) -> bool:
        """Store ``asset`` under ``key`` if it is ready. Returns True if stored."""
        if not asset.is_ready:
            return False
        self._entries[key] = asset
        logging.debug("asset cache ADDED %s", key)
        return True

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
