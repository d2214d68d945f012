"""Cache stores and the cache manager."""

import pytest

from larabake.cache import ArrayStore, CacheManager, FileStore
from larabake.exceptions import MissingCacheConfigException


async def test_array_store_roundtrip():
    store = ArrayStore()
    await store.put("k", {"a": [1, 2]})

    assert await store.get("k") == {"a": [1, 2]}
    assert await store.has("k")
    assert await store.forget("k")
    assert await store.get("k", "default") == "default"


async def test_array_store_expired_entry_is_dropped(monkeypatch):
    store = ArrayStore()
    await store.put("k", "v", ttl=10)

    import larabake.cache.stores.array_store as array_store
    real_time = array_store.time.time
    monkeypatch.setattr(array_store.time, "time", lambda: real_time() + 11)

    assert await store.get("k") is None


async def test_file_store_roundtrip(tmp_path):
    store = FileStore(tmp_path / "cache", prefix="app_")
    await store.put("element_a/b", "<p>cached</p>")

    assert await store.get("element_a/b") == "<p>cached</p>"
    assert (tmp_path / "cache" / "app_element_a_b.cache").exists()

    await store.flush()
    assert await store.get("element_a/b") is None


async def test_file_store_unserializable_value_is_not_written(tmp_path):
    store = FileStore(tmp_path / "cache")
    assert await store.put("k", object()) is False


async def test_remember_computes_once():
    store = ArrayStore()
    calls = []

    async def compute():
        calls.append(1)
        return "value"

    assert await store.remember("k", 60, compute) == "value"
    assert await store.remember("k", 60, compute) == "value"
    assert calls == [1]


async def test_manager_routes_to_named_configs(tmp_path):
    manager = CacheManager({
        "default": {"driver": "array"},
        "views": {"driver": "file", "path": tmp_path / "views", "ttl": 600},
    })

    await manager.write("k", "in views", "views")

    assert await manager.read("k", "views") == "in views"
    assert await manager.read("k") is None
    assert isinstance(manager.store("views"), FileStore)
    assert manager.configured() == ["default", "views"]


async def test_manager_unknown_config_raises():
    manager = CacheManager({"default": {"driver": "array"}})
    with pytest.raises(MissingCacheConfigException):
        await manager.read("k", "nope")


def test_manager_unknown_driver_raises():
    manager = CacheManager({"default": {"driver": "memcached"}})
    with pytest.raises(ValueError):
        manager.store()


async def test_set_config_replaces_store():
    manager = CacheManager({"default": {"driver": "array"}})
    await manager.write("k", "v")

    manager.set_config("default", {"driver": "array"})

    assert await manager.read("k") is None


async def test_manager_defaults_to_in_memory_store():
    manager = CacheManager()
    assert isinstance(manager.store(), ArrayStore)
