"""Tests for the storage volume and the catalog cache."""

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from edge.cache import CatalogCache
from edge.storage import VolumeStorage
from versioning.errors import ReadFailure
from versioning.models import CatalogEntry

from conftest import write_asset


class TestVolumeStorage:
    """Tests for listing and reading the volume."""

    def test_lists_asset_directories(self, volume):
        storage = VolumeStorage(volume)
        entries = {e.storage_name: e.default_path for e in storage.list_stored_assets()}
        assert entries == {
            "bob@1.3.3": "index.css",
            "bob@1.3.4": "index.css",
            "bob@2.0.0": "index.css",
            "alice@0.1.0": "alice.js",
            "nodefault@1.0.0": None,
        }

    def test_main_wins_over_style(self, tmp_path):
        write_asset(tmp_path, "x@1.0.0", {}, manifest={"main": "x.js", "style": "x.css"})
        assert VolumeStorage(tmp_path).list_stored_assets() == [CatalogEntry("x@1.0.0", "x.js")]

    def test_invalid_manifest_has_no_default(self, tmp_path):
        asset_dir = write_asset(tmp_path, "x@1.0.0", {})
        (asset_dir / "package.json").write_text("{not json", encoding="utf-8")
        assert VolumeStorage(tmp_path).list_stored_assets() == [CatalogEntry("x@1.0.0", None)]

    def test_hidden_directories_are_skipped(self, tmp_path):
        (tmp_path / ".cache").mkdir()
        assert VolumeStorage(tmp_path).list_stored_assets() == []

    def test_missing_volume_lists_nothing(self, tmp_path):
        assert VolumeStorage(tmp_path / "missing").list_stored_assets() == []

    def test_read_file(self, volume):
        storage = VolumeStorage(volume)
        assert storage.read_file("/bob@2.0.0/dist/index.js") == b"var version = '2.0.0';\n"

    @pytest.mark.parametrize("uri", [
        "/bob@2.0.0/missing.js",
        "/bob@2.0.0",
        "/",
        "/../outside.txt",
        "/bob@2.0.0/../../outside.txt",
    ])
    def test_read_failures(self, volume, uri):
        (volume.parent / "outside.txt").write_text("secret", encoding="utf-8")
        with pytest.raises(ReadFailure):
            VolumeStorage(volume).read_file(uri)

    def test_resolve_file(self, volume):
        storage = VolumeStorage(volume)
        assert storage.resolve_file("/404.html") == (volume / "404.html").resolve()
        assert storage.resolve_file("/bob@1") is None


class TestCatalogCache:
    """Tests for catalog snapshot caching."""

    def _loader(self):
        calls = []

        def load():
            calls.append(1)
            return [CatalogEntry("bob@1.0.0", None)]

        return load, calls

    def test_disabled_cache_always_loads(self):
        load, calls = self._loader()
        cache = CatalogCache(load, ttl=0)
        cache.snapshot()
        cache.snapshot()
        assert len(calls) == 2
        assert cache.stats()["enabled"] is False

    def test_enabled_cache_reuses_snapshot(self):
        load, calls = self._loader()
        cache = CatalogCache(load, ttl=60)
        first = cache.snapshot()
        second = cache.snapshot()
        assert first is second
        assert isinstance(first, tuple)
        assert len(calls) == 1
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["cached_entries"] == 1

    def test_expired_snapshot_is_reloaded(self):
        load, calls = self._loader()
        cache = CatalogCache(load, ttl=60)
        cache.snapshot()
        cache._entry.expires_at = time.time() - 1
        cache.snapshot()
        assert len(calls) == 2

    def test_concurrent_callers_share_one_load(self):
        calls = []

        def slow_load():
            calls.append(1)
            time.sleep(0.05)
            return [CatalogEntry("bob@1.0.0", None)]

        cache = CatalogCache(slow_load, ttl=60)
        with ThreadPoolExecutor(max_workers=8) as pool:
            snapshots = list(pool.map(lambda _: cache.snapshot(), range(8)))

        assert len(calls) == 1
        assert all(s is snapshots[0] for s in snapshots)
        stats = cache.stats()
        assert stats["hits"] + stats["misses"] == 8
        assert stats["misses"] == 1
