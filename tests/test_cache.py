"""Tests for the device-local cache."""

import json

from waypoint.store.cache import LocalCache


def test_get_missing_key_returns_empty_list(cache):
    assert cache.get("tasks") == []
    assert cache.has("tasks") is False


def test_put_then_get_preserves_order(cache):
    items = [{"id": "b"}, {"id": "a"}, {"id": "c"}]

    assert cache.put("tasks", items) is True
    assert cache.get("tasks") == items
    assert cache.has("tasks") is True


def test_invalid_json_reads_as_empty(cache, cache_dir):
    cache_dir.mkdir(parents=True)
    (cache_dir / "tasks.cache").write_text("{not json", encoding="utf-8")

    assert cache.get("tasks") == []


def test_non_array_value_is_wrapped(cache):
    cache.set_item("tasks", json.dumps({"id": "only"}))

    assert cache.get("tasks") == [{"id": "only"}]


def test_unserializable_collection_is_reported_not_raised(cache):
    assert cache.put("tasks", [{"id": object()}]) is False
    assert cache.get("tasks") == []


def test_write_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file where the cache directory should be")
    cache = LocalCache(blocker / "cache")

    assert cache.put("tasks", [{"id": "1"}]) is False


def test_invalid_key_is_rejected(cache):
    assert cache.set_item("../escape", "x") is False
    assert cache.get_item("../escape") is None


def test_scalar_defaults_to_empty_string(cache):
    assert cache.get_scalar("notepadContent") == ""

    assert cache.put_scalar("notepadContent", "hello\nworld") is True
    assert cache.get_scalar("notepadContent") == "hello\nworld"


def test_copy_and_remove(cache):
    cache.put("weeklyGoals", [{"id": "p1"}])

    assert cache.copy("weeklyGoals", "plans") is True
    assert cache.get("plans") == [{"id": "p1"}]

    cache.remove("weeklyGoals")
    assert cache.has("weeklyGoals") is False
    assert cache.copy("weeklyGoals", "other") is False
