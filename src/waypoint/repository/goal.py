# SPDX-License-Identifier: MIT

from typing import Optional

from waypoint.model.entity_id import EntityId
from waypoint.model.entry_type import EntryType
from waypoint.model.goal import NinetyDayTarget, Plan, ThreeYearGoal
from waypoint.model.result import SyncOutcome
from waypoint.repository.entity import EntityRepository
from waypoint.store.codec import EntityCodec, typed_dict_fields
from waypoint.store.sync import SyncEngine
from waypoint.template.goal import (
    get_ninety_day_target_template,
    get_plan_template,
    get_three_year_goal_template,
)

_GOAL_DATETIME_FIELDS = ("created_at", "updated_at", "start_date", "end_date")

THREE_YEAR_GOAL_CODEC: EntityCodec[ThreeYearGoal] = EntityCodec(
    "three-year goal",
    typed_dict_fields(ThreeYearGoal),
    datetime_fields=_GOAL_DATETIME_FIELDS
)
NINETY_DAY_TARGET_CODEC: EntityCodec[NinetyDayTarget] = EntityCodec(
    "90-day target",
    typed_dict_fields(NinetyDayTarget),
    datetime_fields=_GOAL_DATETIME_FIELDS
)
PLAN_CODEC: EntityCodec[Plan] = EntityCodec(
    "plan", typed_dict_fields(Plan), datetime_fields=_GOAL_DATETIME_FIELDS
)


class PlanRepository(EntityRepository[Plan]):
    def __init__(self, engine: SyncEngine) -> None:
        super().__init__(
            engine,
            EntryType.PLANS,
            PLAN_CODEC,
            label="Plan",
            template=get_plan_template,
        )


class NinetyDayTargetRepository(EntityRepository[NinetyDayTarget]):
    def __init__(self, engine: SyncEngine, plans: PlanRepository) -> None:
        super().__init__(
            engine,
            EntryType.NINETY_DAY_TARGETS,
            NINETY_DAY_TARGET_CODEC,
            label="90-day target",
            template=get_ninety_day_target_template,
        )
        self._plans = plans

    async def _after_delete(self, ids: list[EntityId]) -> Optional[SyncOutcome]:
        removed = set(ids)
        return await self._plans.remove_where(
            lambda plan: plan.get("ninety_day_target_id") in removed
        )


class ThreeYearGoalRepository(EntityRepository[ThreeYearGoal]):
    def __init__(
        self, engine: SyncEngine, targets: NinetyDayTargetRepository
    ) -> None:
        super().__init__(
            engine,
            EntryType.THREE_YEAR_GOALS,
            THREE_YEAR_GOAL_CODEC,
            label="Three-year goal",
            template=get_three_year_goal_template,
        )
        self._targets = targets

    async def _after_delete(self, ids: list[EntityId]) -> Optional[SyncOutcome]:
        # Removing the targets cascades on to their plans
        removed = set(ids)
        return await self._targets.remove_where(
            lambda target: target.get("three_year_goal_id") in removed
        )
