# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from pathlib import Path

from waypoint.model.entry_type import LEGACY_ENTRY_TYPES
from waypoint.repository.goal import (
    NinetyDayTargetRepository,
    PlanRepository,
    ThreeYearGoalRepository,
)
from waypoint.repository.notepad import NotepadRepository
from waypoint.repository.tag import TagRepository
from waypoint.repository.task import TaskRepository
from waypoint.repository.task_list import TaskListRepository
from waypoint.store.cache import LocalCache
from waypoint.store.remote import RemoteStore
from waypoint.store.sync import SyncEngine


@dataclass(frozen=True)
class Repositories:
    engine: SyncEngine
    tasks: TaskRepository
    lists: TaskListRepository
    tags: TagRepository
    three_year_goals: ThreeYearGoalRepository
    ninety_day_targets: NinetyDayTargetRepository
    plans: PlanRepository
    notepad: NotepadRepository


def open_engine(cache_dir: Path, remote: RemoteStore) -> SyncEngine:
    return SyncEngine(LocalCache(cache_dir), remote, LEGACY_ENTRY_TYPES)


def build_repositories(engine: SyncEngine) -> Repositories:
    tasks = TaskRepository(engine)
    plans = PlanRepository(engine)
    ninety_day_targets = NinetyDayTargetRepository(engine, plans)
    return Repositories(
        engine=engine,
        tasks=tasks,
        lists=TaskListRepository(engine, tasks),
        tags=TagRepository(engine, tasks),
        three_year_goals=ThreeYearGoalRepository(engine, ninety_day_targets),
        ninety_day_targets=ninety_day_targets,
        plans=plans,
        notepad=NotepadRepository(engine),
    )
