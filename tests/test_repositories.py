"""Tests for entity repositories and their cascades."""

import asyncio
from unittest.mock import AsyncMock, patch

import pendulum
import pytest

from waypoint import time
from waypoint.errors import IdGenerationError, RemoteError
from waypoint.model.entry_type import EntryType
from waypoint.model.task import INBOX_LIST_ID
from waypoint.repository.registry import build_repositories
from waypoint.store.sync import SyncEngine
from waypoint.template.tag import TAG_COLORS


@pytest.fixture
def frozen_clock(monkeypatch):
    """Make time.now_utc return whatever the test sets on the returned list."""
    current = [pendulum.datetime(2024, 5, 1, 9, 0, tz="UTC")]
    monkeypatch.setattr(time, "now_utc", lambda: current[0])
    return current


async def _goal_tree(repos):
    goal = (await repos.three_year_goals.create({"title": "Run a marathon"})).data
    target = (
        await repos.ninety_day_targets.create(
            {"title": "Run 10k", "three_year_goal_id": goal["id"]}
        )
    ).data
    plan = (
        await repos.plans.create(
            {"title": "Three runs a week", "ninety_day_target_id": target["id"]}
        )
    ).data
    return goal, target, plan


@pytest.mark.asyncio
async def test_create_applies_template_and_stamps(repos, frozen_clock):
    result = await repos.tasks.create({"title": "Buy milk", "priority": "high"})

    assert result.success is True
    task = result.data
    assert task["title"] == "Buy milk"
    assert task["priority"] == "high"
    assert task["completed"] is False
    assert task["list_id"] == INBOX_LIST_ID
    assert task["created_at"] == task["updated_at"] == frozen_clock[0]
    assert result.outcome.cache_ok is True
    assert result.outcome.remote_ok is None


@pytest.mark.asyncio
async def test_create_preserves_insertion_order(repos):
    for title in ("one", "two", "three"):
        await repos.tasks.create({"title": title})

    tasks = (await repos.tasks.get_all()).data
    assert [task["title"] for task in tasks] == ["one", "two", "three"]
    assert len({task["id"] for task in tasks}) == 3


@pytest.mark.asyncio
async def test_create_ignores_caller_supplied_id(repos):
    task = (await repos.tasks.create({"id": "mine", "title": "x"})).data

    assert task["id"] != "mine"


@pytest.mark.asyncio
async def test_create_reports_exhausted_id_generation(repos):
    with patch(
        "waypoint.repository.entity.generate_unique_entity_id",
        side_effect=IdGenerationError("exhausted"),
    ):
        result = await repos.tasks.create({"title": "x"})

    assert result.success is False
    assert result.error == "Failed to create task"
    assert (await repos.tasks.get_all()).data == []


@pytest.mark.asyncio
async def test_concurrent_creates_are_not_lost(repos):
    results = await asyncio.gather(
        *(repos.tasks.create({"title": f"task {n}"}) for n in range(10))
    )

    assert all(result.success for result in results)
    tasks = (await repos.tasks.get_all()).data
    assert sorted(task["title"] for task in tasks) == sorted(
        f"task {n}" for n in range(10)
    )


@pytest.mark.asyncio
async def test_update_merges_and_keeps_identity(repos, frozen_clock):
    created = (await repos.tasks.create({"title": "Draft"})).data
    frozen_clock[0] = frozen_clock[0].add(minutes=5)

    result = await repos.tasks.update(
        created["id"],
        {"title": "Final", "id": "other", "created_at": pendulum.datetime(2000, 1, 1)},
    )

    assert result.success is True
    assert result.data["id"] == created["id"]
    assert result.data["title"] == "Final"
    assert result.data["created_at"] == created["created_at"]
    assert result.data["updated_at"] == frozen_clock[0]


@pytest.mark.asyncio
async def test_update_never_moves_updated_at_backwards(repos, frozen_clock):
    created = (await repos.tasks.create({"title": "Draft"})).data
    frozen_clock[0] = frozen_clock[0].subtract(hours=1)

    updated = (await repos.tasks.update(created["id"], {"title": "Again"})).data

    assert updated["updated_at"] == created["updated_at"]


@pytest.mark.asyncio
async def test_missing_entities_report_not_found(repos, cache):
    await repos.tasks.create({"title": "first"})
    await repos.tasks.create({"title": "second"})
    tasks_before = (await repos.tasks.get_all()).data
    blob_before = cache.get_item(EntryType.TASKS)

    failing_calls = [
        lambda: repos.tasks.update("nope", {"title": "x"}),
        lambda: repos.tasks.delete("nope"),
        lambda: repos.tasks.toggle_completion("nope"),
    ]
    for call in failing_calls:
        failed = await call()
        assert failed.success is False
        assert failed.error == "Task not found"
        assert (await repos.tasks.get_all()).data == tasks_before
        assert cache.get_item(EntryType.TASKS) == blob_before

    assert (await repos.tasks.get("nope")).error == "Task not found"
    assert (await repos.lists.delete("nope")).error == "List not found"
    assert (await repos.plans.delete("nope")).error == "Plan not found"
    assert (
        await repos.ninety_day_targets.update("nope", {})
    ).error == "90-day target not found"


@pytest.mark.asyncio
async def test_update_accepts_iso_string_dates(repos, cache):
    task = (await repos.tasks.create({"title": "Plan trip"})).data

    result = await repos.tasks.update(task["id"], {"due_date": "2024-05-01"})

    assert result.success is True
    assert result.outcome.cache_ok is True
    [stored] = (await repos.tasks.get_all()).data
    assert stored["due_date"] == pendulum.datetime(2024, 5, 1, tz="UTC")
    assert cache.get(EntryType.TASKS)[0]["dueDate"] == "2024-05-01T00:00:00+00:00"


@pytest.mark.asyncio
async def test_unstorable_value_is_reported_through_outcome(repos, cache):
    task = (await repos.tasks.create({"title": "Plan trip"})).data
    blob_before = cache.get_item(EntryType.TASKS)

    result = await repos.tasks.update(task["id"], {"due_date": 42})

    assert result.outcome.cache_ok is False
    assert cache.get_item(EntryType.TASKS) == blob_before


@pytest.mark.asyncio
async def test_toggle_completion_flips_state(repos):
    task = (await repos.tasks.create({"title": "Toggle me"})).data

    done = (await repos.tasks.toggle_completion(task["id"])).data
    reopened = (await repos.tasks.toggle_completion(task["id"])).data

    assert done["completed"] is True
    assert reopened["completed"] is False


@pytest.mark.asyncio
async def test_delete_removes_only_target(repos):
    keep = (await repos.tasks.create({"title": "keep"})).data
    drop = (await repos.tasks.create({"title": "drop"})).data

    result = await repos.tasks.delete(drop["id"])

    assert result.success is True
    tasks = (await repos.tasks.get_all()).data
    assert [task["id"] for task in tasks] == [keep["id"]]


@pytest.mark.asyncio
async def test_delete_list_moves_tasks_to_inbox(repos):
    work = (await repos.lists.create({"name": "Work"})).data
    home = (await repos.lists.create({"name": "Home"})).data
    moved = (await repos.tasks.create({"title": "Report", "list_id": work["id"]})).data
    stays = (await repos.tasks.create({"title": "Dishes", "list_id": home["id"]})).data

    result = await repos.lists.delete(work["id"])

    assert result.success is True
    assert "created_at" not in work
    by_id = {task["id"]: task for task in (await repos.tasks.get_all()).data}
    assert by_id[moved["id"]]["list_id"] == INBOX_LIST_ID
    assert by_id[stays["id"]]["list_id"] == home["id"]
    assert (await repos.tasks.get_by_list(INBOX_LIST_ID)).data == [by_id[moved["id"]]]


@pytest.mark.asyncio
async def test_delete_goal_removes_targets_and_their_plans(repos):
    goal, target, plan = await _goal_tree(repos)
    _, other_target, other_plan = await _goal_tree(repos)

    result = await repos.three_year_goals.delete(goal["id"])

    assert result.success is True
    targets = (await repos.ninety_day_targets.get_all()).data
    plans = (await repos.plans.get_all()).data
    assert [t["id"] for t in targets] == [other_target["id"]]
    assert [p["id"] for p in plans] == [other_plan["id"]]


@pytest.mark.asyncio
async def test_delete_target_removes_its_plans(repos):
    goal, target, plan = await _goal_tree(repos)

    await repos.ninety_day_targets.delete(target["id"])

    assert (await repos.plans.get_all()).data == []
    assert [g["id"] for g in (await repos.three_year_goals.get_all()).data] == [
        goal["id"]
    ]


@pytest.mark.asyncio
async def test_delete_tag_strips_it_from_tasks(repos):
    urgent = (await repos.tags.create({"name": "urgent"})).data
    later = (await repos.tags.create({"name": "later"})).data
    task = (
        await repos.tasks.create({"title": "t", "tags": [urgent["id"], later["id"]]})
    ).data

    await repos.tags.delete(urgent["id"])

    assert (await repos.tasks.get(task["id"])).data["tags"] == [later["id"]]


@pytest.mark.asyncio
async def test_tag_defaults_to_palette_color(repos):
    tag = (await repos.tags.create({"name": "focus"})).data

    assert tag["color"] in TAG_COLORS


@pytest.mark.asyncio
async def test_mutations_sync_to_remote_when_signed_in(repos, signed_in_remote):
    task = (await repos.tasks.create({"title": "Synced"})).data

    result = await repos.tasks.update(task["id"], {"title": "Synced twice"})

    assert result.outcome.remote_ok is True
    [record] = signed_in_remote.records_for("user-1", EntryType.TASKS)
    assert '"Synced twice"' in record["content"]


@pytest.mark.asyncio
async def test_remote_failure_still_succeeds_locally(cache):
    remote = AsyncMock()
    remote.has_session.return_value = True
    remote.select_by_type.return_value = []
    remote.delete_by_type.side_effect = RemoteError("offline")
    remote.insert_many.side_effect = RemoteError("offline")
    repos = build_repositories(SyncEngine(cache, remote))

    result = await repos.tasks.create({"title": "Offline"})

    assert result.success is True
    assert result.outcome.cache_ok is True
    assert result.outcome.remote_ok is False
    assert [item["title"] for item in cache.get(EntryType.TASKS)] == ["Offline"]


@pytest.mark.asyncio
async def test_notepad_content(repos):
    assert (await repos.notepad.get_content()).data == ""

    result = await repos.notepad.save_content("- call mom")

    assert result.success is True
    assert (await repos.notepad.get_content()).data == "- call mom"
