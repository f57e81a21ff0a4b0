# SPDX-License-Identifier: MIT

import asyncio
from typing import Any, Awaitable, Callable, Mapping, NoReturn, Optional, Sequence

import typer
from rich.console import Console

from waypoint import configuration
from waypoint.model.entity_id import EntityId
from waypoint.model.result import Result, SyncOutcome
from waypoint.repository.registry import Repositories, build_repositories, open_engine
from waypoint.store.remote import NullRemoteStore

err_console = Console(stderr=True)


def open_repositories() -> Repositories:
    # The terminal never holds an authenticated session; everything stays local.
    engine = open_engine(configuration.DATA_CACHE_DIR, NullRemoteStore())
    return build_repositories(engine)


def run[T](command: Callable[[Repositories], Awaitable[T]]) -> T:
    """Run one command's coroutine against a fresh set of repositories."""
    return asyncio.run(command(open_repositories()))


def fail(message: str) -> NoReturn:
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def unwrap[T](result: Result[T]) -> T:
    if not result.success:
        fail(result.error or "Unknown error")
    warn_on_outcome(result.outcome)
    return result.data  # type: ignore[return-value]


def warn_on_outcome(outcome: Optional[SyncOutcome]) -> None:
    if outcome is None:
        return
    if not outcome.cache_ok:
        err_console.print("[yellow]Warning: change could not be saved to the local cache[/yellow]")
    if outcome.remote_ok is False:
        err_console.print("[yellow]Warning: change was not synchronized to the remote[/yellow]")


def resolve_id(
    entities: Sequence[Mapping[str, Any]], id_prefix: str, label: str
) -> EntityId:
    """Resolve a full id or a unique id prefix, as shown in the tables."""
    for entity in entities:
        if entity["id"] == id_prefix:
            return entity["id"]

    matches = [entity["id"] for entity in entities if entity["id"].startswith(id_prefix)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        fail(f"{label} not found")
    fail(f"Ambiguous {label.lower()} id '{id_prefix}', matches {len(matches)} entries")


def resolve_named_id(
    entities: Sequence[Mapping[str, Any]], value: str, label: str
) -> EntityId:
    """Resolve an entity by its (case-insensitive) name, or by id prefix."""
    for entity in entities:
        if str(entity.get("name", "")).lower() == value.lower():
            return entity["id"]
    return resolve_id(entities, value, label)
