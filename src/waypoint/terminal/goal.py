# SPDX-License-Identifier: MIT

"""Commands for three-year goals, their ninety-day targets and their plans."""

from typing import Annotated, Any, Optional

import pendulum
import typer
from rich import print

from waypoint.model.entity_id import EntityId
from waypoint.model.goal import NinetyDayTarget, Plan, ThreeYearGoal
from waypoint.repository.registry import Repositories
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.parse import DATETIME_HELP, parse_datetime
from waypoint.terminal.session import resolve_id, run, unwrap
from waypoint.terminal.validate import validate_status
from waypoint.view.views import goal as goal_report
from waypoint.view.views.util import short_id

goal_app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)
target_app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)
plan_app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

STATUS_HELP = "valid input: not_started, in_progress, completed, abandoned"

TitleOption = Annotated[Optional[str], typer.Option("--title", "-ti")]
DescriptionOption = Annotated[Optional[str], typer.Option("--description", "-de")]
StartOption = Annotated[
    Optional[pendulum.DateTime],
    typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
]
EndOption = Annotated[
    Optional[pendulum.DateTime],
    typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
]
StatusOption = Annotated[
    Optional[str],
    typer.Option("--status", "-st", callback=validate_status, help=STATUS_HELP),
]
IconOption = Annotated[Optional[str], typer.Option("--icon", "-i")]


def _fields(
    title: Optional[str] = None,
    description: Optional[str] = None,
    start: Optional[pendulum.DateTime] = None,
    end: Optional[pendulum.DateTime] = None,
    status: Optional[str] = None,
    icon: Optional[str] = None,
) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if title is not None:
        fields["title"] = title
    if description is not None:
        fields["description"] = description
    if start is not None:
        fields["start_date"] = start
    if end is not None:
        fields["end_date"] = end
    if status is not None:
        fields["status"] = status
    if icon is not None:
        fields["icon"] = icon
    return fields


# === Three-year goals ===


@goal_app.command("add, a", no_args_is_help=True)
def goal_add(
    title: str,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
    icon: IconOption = None,
) -> None:
    async def _add(repos: Repositories) -> ThreeYearGoal:
        data = _fields(title, description, start, end, status, icon)
        return unwrap(await repos.three_year_goals.create(data))

    goal = run(_add)
    print(f"[green]Created three-year goal {short_id(goal['id'])}[/green]")


@goal_app.command("ls")
def goal_ls() -> None:
    async def _ls(repos: Repositories) -> list[ThreeYearGoal]:
        return unwrap(await repos.three_year_goals.get_all())

    goal_report.goals_view("three-year goals", list(run(_ls)))


@goal_app.command("modify, m", no_args_is_help=True)
def goal_modify(
    id: str,
    title: TitleOption = None,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
    icon: IconOption = None,
) -> None:
    async def _modify(repos: Repositories) -> ThreeYearGoal:
        goals = unwrap(await repos.three_year_goals.get_all())
        goal_id = resolve_id(goals, id, "Three-year goal")
        updates = _fields(title, description, start, end, status, icon)
        return unwrap(await repos.three_year_goals.update(goal_id, updates))

    goal = run(_modify)
    print(f"[green]Updated three-year goal {short_id(goal['id'])}[/green]")


@goal_app.command("delete, del", no_args_is_help=True)
def goal_delete(id: str) -> None:
    """Delete a goal together with its ninety-day targets and their plans."""

    async def _delete(repos: Repositories) -> EntityId:
        goals = unwrap(await repos.three_year_goals.get_all())
        goal_id = resolve_id(goals, id, "Three-year goal")
        unwrap(await repos.three_year_goals.delete(goal_id))
        return goal_id

    goal_id = run(_delete)
    print(f"[green]Deleted three-year goal {short_id(goal_id)}[/green]")


# === Ninety-day targets ===


@target_app.command("add, a", no_args_is_help=True)
def target_add(
    goal_id: Annotated[str, typer.Argument(help="id of the three-year goal")],
    title: str,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
    icon: IconOption = None,
) -> None:
    async def _add(repos: Repositories) -> NinetyDayTarget:
        goals = unwrap(await repos.three_year_goals.get_all())
        data = _fields(title, description, start, end, status, icon)
        data["three_year_goal_id"] = resolve_id(goals, goal_id, "Three-year goal")
        return unwrap(await repos.ninety_day_targets.create(data))

    target = run(_add)
    print(f"[green]Created 90-day target {short_id(target['id'])}[/green]")


@target_app.command("ls")
def target_ls(
    goal_id: Annotated[
        Optional[str], typer.Option("--goal", "-g", help="only targets of this goal")
    ] = None,
) -> None:
    async def _ls(repos: Repositories) -> list[NinetyDayTarget]:
        targets = unwrap(await repos.ninety_day_targets.get_all())
        if goal_id is None:
            return targets
        goals = unwrap(await repos.three_year_goals.get_all())
        parent_id = resolve_id(goals, goal_id, "Three-year goal")
        return [target for target in targets if target["three_year_goal_id"] == parent_id]

    goal_report.goals_view("90-day targets", list(run(_ls)), "three_year_goal_id")


@target_app.command("modify, m", no_args_is_help=True)
def target_modify(
    id: str,
    title: TitleOption = None,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
    icon: IconOption = None,
) -> None:
    async def _modify(repos: Repositories) -> NinetyDayTarget:
        targets = unwrap(await repos.ninety_day_targets.get_all())
        target_id = resolve_id(targets, id, "90-day target")
        updates = _fields(title, description, start, end, status, icon)
        return unwrap(await repos.ninety_day_targets.update(target_id, updates))

    target = run(_modify)
    print(f"[green]Updated 90-day target {short_id(target['id'])}[/green]")


@target_app.command("delete, del", no_args_is_help=True)
def target_delete(id: str) -> None:
    """Delete a target together with its plans."""

    async def _delete(repos: Repositories) -> EntityId:
        targets = unwrap(await repos.ninety_day_targets.get_all())
        target_id = resolve_id(targets, id, "90-day target")
        unwrap(await repos.ninety_day_targets.delete(target_id))
        return target_id

    target_id = run(_delete)
    print(f"[green]Deleted 90-day target {short_id(target_id)}[/green]")


# === Plans ===


@plan_app.command("add, a", no_args_is_help=True)
def plan_add(
    target_id: Annotated[str, typer.Argument(help="id of the 90-day target")],
    title: str,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
) -> None:
    async def _add(repos: Repositories) -> Plan:
        targets = unwrap(await repos.ninety_day_targets.get_all())
        data = _fields(title, description, start, end, status)
        data["ninety_day_target_id"] = resolve_id(targets, target_id, "90-day target")
        return unwrap(await repos.plans.create(data))

    plan = run(_add)
    print(f"[green]Created plan {short_id(plan['id'])}[/green]")


@plan_app.command("ls")
def plan_ls(
    target_id: Annotated[
        Optional[str], typer.Option("--target", "-tr", help="only plans of this target")
    ] = None,
) -> None:
    async def _ls(repos: Repositories) -> list[Plan]:
        plans = unwrap(await repos.plans.get_all())
        if target_id is None:
            return plans
        targets = unwrap(await repos.ninety_day_targets.get_all())
        parent_id = resolve_id(targets, target_id, "90-day target")
        return [plan for plan in plans if plan["ninety_day_target_id"] == parent_id]

    goal_report.goals_view("plans", list(run(_ls)), "ninety_day_target_id")


@plan_app.command("modify, m", no_args_is_help=True)
def plan_modify(
    id: str,
    title: TitleOption = None,
    description: DescriptionOption = None,
    start: StartOption = None,
    end: EndOption = None,
    status: StatusOption = None,
) -> None:
    async def _modify(repos: Repositories) -> Plan:
        plans = unwrap(await repos.plans.get_all())
        plan_id = resolve_id(plans, id, "Plan")
        updates = _fields(title, description, start, end, status)
        return unwrap(await repos.plans.update(plan_id, updates))

    plan = run(_modify)
    print(f"[green]Updated plan {short_id(plan['id'])}[/green]")


@plan_app.command("delete, del", no_args_is_help=True)
def plan_delete(id: str) -> None:
    async def _delete(repos: Repositories) -> EntityId:
        plans = unwrap(await repos.plans.get_all())
        plan_id = resolve_id(plans, id, "Plan")
        unwrap(await repos.plans.delete(plan_id))
        return plan_id

    plan_id = run(_delete)
    print(f"[green]Deleted plan {short_id(plan_id)}[/green]")
