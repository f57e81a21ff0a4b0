"""Tests for the dual-backend synchronization engine."""

import json
from unittest.mock import AsyncMock

import pendulum
import pytest

from waypoint.errors import RemoteError
from waypoint.model.entry_type import EntryType
from waypoint.repository.goal import PLAN_CODEC
from waypoint.repository.task import TASK_CODEC
from waypoint.store.sync import SyncEngine


def _task(id: str, title: str = "task") -> dict:
    now = pendulum.datetime(2024, 1, 1, tz="UTC")
    return {
        "id": id,
        "title": title,
        "completed": False,
        "priority": "none",
        "list_id": "inbox",
        "created_at": now,
        "updated_at": now,
    }


@pytest.mark.asyncio
async def test_write_without_session_stays_local(engine, cache, remote):
    outcome = await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)

    assert outcome.cache_ok is True
    assert outcome.remote_ok is None
    assert outcome.remote_attempted is False
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["t1"]
    assert remote.records_for("user-1", EntryType.TASKS) == []


@pytest.mark.asyncio
async def test_write_replaces_all_remote_records(engine, cache, signed_in_remote):
    await engine.write_collection(
        EntryType.TASKS, [_task("t1"), _task("t2")], TASK_CODEC
    )
    outcome = await engine.write_collection(EntryType.TASKS, [_task("t3")], TASK_CODEC)

    records = signed_in_remote.records_for("user-1", EntryType.TASKS)
    assert outcome.remote_ok is True
    assert [json.loads(record["content"])["id"] for record in records] == ["t3"]
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["t3"]


@pytest.mark.asyncio
async def test_empty_write_clears_remote(engine, signed_in_remote):
    await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)
    await engine.write_collection(EntryType.TASKS, [], TASK_CODEC)

    assert signed_in_remote.records_for("user-1", EntryType.TASKS) == []


@pytest.mark.asyncio
async def test_remote_records_carry_wire_format(engine, signed_in_remote):
    await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)

    [record] = signed_in_remote.records_for("user-1", EntryType.TASKS)
    content = json.loads(record["content"])
    assert record["entry_type"] == EntryType.TASKS
    assert record["id"] != "t1"
    assert content["listId"] == "inbox"
    assert content["createdAt"].startswith("2024-01-01T00:00:00")


@pytest.mark.asyncio
async def test_read_prefers_remote_and_writes_through(engine, cache, signed_in_remote):
    cache.put(EntryType.TASKS, [TASK_CODEC.encode(_task("stale"))])
    await signed_in_remote.insert_many(
        [
            {
                "id": "r1",
                "entry_type": EntryType.TASKS,
                "content": TASK_CODEC.dumps(_task("fresh")),
            }
        ]
    )

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["fresh"]
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["fresh"]


@pytest.mark.asyncio
async def test_read_skips_unparseable_remote_records(engine, cache, signed_in_remote):
    await signed_in_remote.insert_many(
        [
            {"id": "r1", "entry_type": EntryType.TASKS, "content": "{broken"},
            {
                "id": "r2",
                "entry_type": EntryType.TASKS,
                "content": TASK_CODEC.dumps(_task("good")),
            },
        ]
    )

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["good"]
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["good"]


@pytest.mark.asyncio
async def test_read_skips_remote_records_without_content(engine, cache, signed_in_remote):
    await signed_in_remote.insert_many(
        [
            {"id": "r1", "entry_type": EntryType.TASKS},  # type: ignore[typeddict-item]
            {
                "id": "r2",
                "entry_type": EntryType.TASKS,
                "content": TASK_CODEC.dumps(_task("good")),
            },
        ]
    )

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["good"]


@pytest.mark.asyncio
async def test_scalar_record_without_content_falls_back_to_cache(
    engine, cache, signed_in_remote
):
    cache.put_scalar(EntryType.NOTEPAD_CONTENT, "local notes")
    await signed_in_remote.insert_many(
        [{"id": "a", "entry_type": EntryType.NOTEPAD_CONTENT}]  # type: ignore[typeddict-item]
    )

    assert await engine.read_scalar(EntryType.NOTEPAD_CONTENT) == "local notes"


@pytest.mark.asyncio
async def test_empty_remote_falls_back_to_cache(engine, cache, signed_in_remote):
    cache.put(EntryType.TASKS, [TASK_CODEC.encode(_task("local"))])

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["local"]


@pytest.mark.asyncio
async def test_remote_failure_falls_back_to_cache(cache):
    remote = AsyncMock()
    remote.has_session.return_value = True
    remote.select_by_type.side_effect = RemoteError("connection reset")
    engine = SyncEngine(cache, remote)
    cache.put(EntryType.TASKS, [TASK_CODEC.encode(_task("local"))])

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["local"]
    remote.select_by_type.assert_awaited_once_with(EntryType.TASKS)


@pytest.mark.asyncio
async def test_session_check_failure_counts_as_no_session(cache):
    remote = AsyncMock()
    remote.has_session.side_effect = RemoteError("auth service down")
    engine = SyncEngine(cache, remote)

    outcome = await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)

    assert outcome.remote_ok is None
    remote.delete_by_type.assert_not_awaited()


@pytest.mark.asyncio
async def test_remote_write_failure_is_reported_not_raised(cache):
    remote = AsyncMock()
    remote.has_session.return_value = True
    remote.insert_many.side_effect = RemoteError("quota exceeded")
    engine = SyncEngine(cache, remote)

    outcome = await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)

    assert outcome.cache_ok is True
    assert outcome.remote_ok is False
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["t1"]


@pytest.mark.asyncio
async def test_unserializable_collection_is_reported_not_raised(
    engine, cache, signed_in_remote
):
    await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)
    broken = _task("t2")
    broken["due_date"] = 42

    outcome = await engine.write_collection(
        EntryType.TASKS, [_task("t1"), broken], TASK_CODEC
    )

    assert outcome.cache_ok is False
    assert outcome.remote_ok is None
    assert [item["id"] for item in cache.get(EntryType.TASKS)] == ["t1"]
    assert len(signed_in_remote.records_for("user-1", EntryType.TASKS)) == 1


@pytest.mark.asyncio
async def test_cache_survives_remote_outage_between_sessions(engine, signed_in_remote):
    await engine.write_collection(EntryType.TASKS, [_task("t1")], TASK_CODEC)
    signed_in_remote.sign_out()

    tasks = await engine.read_collection(EntryType.TASKS, TASK_CODEC)

    assert [task["id"] for task in tasks] == ["t1"]


@pytest.mark.asyncio
async def test_remote_records_are_scoped_to_principal(engine, signed_in_remote):
    await engine.write_collection(EntryType.TASKS, [_task("mine")], TASK_CODEC)
    signed_in_remote.sign_in("user-2")

    await engine.write_collection(EntryType.TASKS, [_task("theirs")], TASK_CODEC)

    mine = signed_in_remote.records_for("user-1", EntryType.TASKS)
    assert [json.loads(record["content"])["id"] for record in mine] == ["mine"]


@pytest.mark.asyncio
async def test_legacy_key_is_migrated_once(engine, cache):
    cache.put("weeklyGoals", [{"id": "p1", "title": "Old plan"}])

    plans = await engine.read_collection(EntryType.PLANS, PLAN_CODEC)

    assert [plan["id"] for plan in plans] == ["p1"]
    assert cache.has(EntryType.PLANS) is True

    await engine.write_collection(EntryType.PLANS, [], PLAN_CODEC)
    assert await engine.read_collection(EntryType.PLANS, PLAN_CODEC) == []


@pytest.mark.asyncio
async def test_migrated_data_survives_removal_of_legacy_key(engine, cache):
    cache.put("weeklyGoals", [{"id": "p1", "title": "Old plan"}])
    await engine.read_collection(EntryType.PLANS, PLAN_CODEC)

    cache.remove("weeklyGoals")
    plans = await engine.read_collection(EntryType.PLANS, PLAN_CODEC)

    assert [plan["id"] for plan in plans] == ["p1"]
    assert [plan["title"] for plan in plans] == ["Old plan"]


@pytest.mark.asyncio
async def test_legacy_key_ignored_once_new_key_exists(engine, cache):
    cache.put(EntryType.PLANS, [{"id": "new"}])
    cache.put("weeklyGoals", [{"id": "old"}])

    plans = await engine.read_collection(EntryType.PLANS, PLAN_CODEC)

    assert [plan["id"] for plan in plans] == ["new"]


@pytest.mark.asyncio
async def test_scalar_round_trip_with_session(engine, cache, signed_in_remote):
    outcome = await engine.write_scalar(EntryType.NOTEPAD_CONTENT, "first")
    await engine.write_scalar(EntryType.NOTEPAD_CONTENT, "second")

    records = signed_in_remote.records_for("user-1", EntryType.NOTEPAD_CONTENT)
    assert outcome.remote_ok is True
    assert [record["content"] for record in records] == ["second"]
    assert await engine.read_scalar(EntryType.NOTEPAD_CONTENT) == "second"


@pytest.mark.asyncio
async def test_scalar_read_uses_first_remote_record(engine, cache, signed_in_remote):
    await signed_in_remote.insert_many(
        [
            {"id": "a", "entry_type": EntryType.NOTEPAD_CONTENT, "content": "remote"},
            {"id": "b", "entry_type": EntryType.NOTEPAD_CONTENT, "content": "other"},
        ]
    )

    assert await engine.read_scalar(EntryType.NOTEPAD_CONTENT) == "remote"
    assert cache.get_scalar(EntryType.NOTEPAD_CONTENT) == "remote"


@pytest.mark.asyncio
async def test_scalar_legacy_key_migration(engine, cache):
    cache.put_scalar("notepad_content", "from an older client")

    assert await engine.read_scalar(EntryType.NOTEPAD_CONTENT) == "from an older client"
