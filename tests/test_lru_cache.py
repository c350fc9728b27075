import pytest

from loquat.lru_cache import LruCache


def test_lru_cache_creation():
    cache = LruCache(10)
    assert cache.capacity == 10
    assert len(cache) == 0
    assert not cache


def test_default_capacity():
    assert LruCache().capacity == 1000


def test_lru_cache_insert_and_get():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    cache.insert("key3", 30)
    assert len(cache) == 3
    assert cache.get("key1") == 10
    assert cache.get("key2") == 20
    assert cache.get("key3") == 30


def test_get_missing_returns_none():
    cache = LruCache(3)
    assert cache.get("absent") is None


def test_lru_cache_eviction():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    cache.insert("key3", 30)
    cache.get("key1")
    evicted = cache.insert("key4", 40)
    assert evicted == 20
    assert len(cache) == 3
    assert "key1" in cache
    assert "key2" not in cache
    assert "key3" in cache
    assert "key4" in cache


def test_lru_cache_update():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    assert cache.insert("key1", 100) is None
    assert len(cache) == 2
    assert cache.get("key1") == 100
    assert cache.most_recent() == "key1"


def test_lru_cache_remove():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    assert cache.remove("key1") == 10
    assert len(cache) == 1
    assert "key1" not in cache
    assert "key2" in cache
    assert cache.remove("key1") is None


def test_lru_cache_clear():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    cache.clear()
    assert len(cache) == 0
    assert cache.most_recent() is None
    assert cache.least_recent() is None


def test_lru_cache_most_least_recent():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    cache.insert("key3", 30)
    assert cache.most_recent() == "key3"
    assert cache.least_recent() == "key1"
    cache.get("key1")
    assert cache.most_recent() == "key1"
    assert cache.least_recent() == "key2"


def test_lru_cache_set_capacity():
    cache = LruCache(5)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    cache.insert("key3", 30)
    assert len(cache) == 3
    cache.set_capacity(2)
    assert cache.capacity == 2
    assert len(cache) == 2
    assert "key1" not in cache
    assert "key2" in cache
    assert "key3" in cache


def test_lru_cache_peek():
    cache = LruCache(3)
    cache.insert("key1", 10)
    cache.insert("key2", 20)
    assert cache.peek("key1") == 10
    assert cache.most_recent() == "key2"
    assert cache.get("key1") == 10
    assert cache.most_recent() == "key1"


def test_lru_cache_zero_capacity():
    with pytest.raises(ValueError, match="LRU cache capacity must be greater than 0"):
        LruCache(0)


def test_set_capacity_zero_rejected():
    cache = LruCache(2)
    with pytest.raises(ValueError, match="LRU cache capacity must be greater than 0"):
        cache.set_capacity(0)


def test_iteration_order_least_to_most_recent():
    cache = LruCache(3)
    cache.insert("a", 1)
    cache.insert("b", 2)
    cache.insert("c", 3)
    cache.get("a")
    assert list(cache) == ["b", "c", "a"]