# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

import pendulum

from waypoint.model.entity_id import EntityId

type GoalStatus = Literal["not_started", "in_progress", "completed", "abandoned"]

GOAL_STATUSES: tuple[GoalStatus, ...] = (
    "not_started",
    "in_progress",
    "completed",
    "abandoned",
)


class ThreeYearGoal(TypedDict):
    id: EntityId
    title: str
    description: NotRequired[Optional[str]]
    start_date: Optional[pendulum.DateTime]
    end_date: Optional[pendulum.DateTime]
    status: GoalStatus
    icon: NotRequired[Optional[str]]
    vision_id: NotRequired[Optional[EntityId]]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime


class NinetyDayTarget(TypedDict):
    id: EntityId
    title: str
    description: NotRequired[Optional[str]]
    start_date: Optional[pendulum.DateTime]
    end_date: Optional[pendulum.DateTime]
    status: GoalStatus
    three_year_goal_id: EntityId
    icon: NotRequired[Optional[str]]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime


class Plan(TypedDict):
    id: EntityId
    title: str
    description: NotRequired[Optional[str]]
    start_date: Optional[pendulum.DateTime]
    end_date: Optional[pendulum.DateTime]
    status: GoalStatus
    ninety_day_target_id: EntityId
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
