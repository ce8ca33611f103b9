"""Tests for the ready-asset cache."""
import pytest

from vidmeta.assets.cache import AssetCache
from vidmeta.assets.schemas import Asset
from assets_test.helpers import make_record


def _asset(status: str) -> Asset:
    return Asset.from_record(make_record(status=status))


class TestAssetCache:
    def test_lookup_miss_returns_none(self):
        assert AssetCache().lookup("missing.json") is None

    def test_ready_asset_is_stored(self):
        cache = AssetCache()
        asset = _asset("ready")

        assert cache.insert("v.mp4.json", asset) is True
        assert cache.lookup("v.mp4.json") is asset
        assert "v.mp4.json" in cache
        assert len(cache) == 1

    @pytest.mark.parametrize("status", ["sourced", "pending", "uploading", "processing", "error"])
    def test_non_ready_asset_is_ignored(self, status):
        cache = AssetCache()

        assert cache.insert("v.mp4.json", _asset(status)) is False
        assert cache.lookup("v.mp4.json") is None
        assert len(cache) == 0

    def test_non_ready_insert_keeps_existing_entry(self):
        cache = AssetCache()
        ready = _asset("ready")
        cache.insert("v.mp4.json", ready)

        cache.insert("v.mp4.json", _asset("processing"))

        assert cache.lookup("v.mp4.json") is ready

    def test_caches_are_independent(self):
        a, b = AssetCache(), AssetCache()
        a.insert("v.mp4.json", _asset("ready"))
        assert b.lookup("v.mp4.json") is None

    def test_clear(self):
        cache = AssetCache()
        cache.insert("v.mp4.json", _asset("ready"))
        cache.clear()
        assert len(cache) == 0
