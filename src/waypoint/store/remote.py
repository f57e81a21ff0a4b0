# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, Protocol, runtime_checkable

from waypoint.errors import RemoteError
from waypoint.model.entity_id import generate_entity_id
from waypoint.model.record import Record


@runtime_checkable
class RemoteStore(Protocol):
    """
    Network record store reachable only inside an authenticated session.

    Every operation except ``has_session`` raises ``RemoteError`` on transport
    or authentication failure, including when no session exists. Queries only
    ever see the records of the signed-in principal.
    """

    async def has_session(self) -> bool: ...

    async def select_by_type(self, entry_type: str) -> list[Record]: ...

    async def insert_many(self, records: list[Record]) -> int:
        """Append records. A failure part way through is not rolled back."""
        ...

    async def delete_by_type(self, entry_type: str) -> int: ...

    async def upsert_scalar(self, entry_type: str, content: str) -> None: ...


class NullRemoteStore:
    """A remote that never has a session. Every read and write stays local."""

    async def has_session(self) -> bool:
        return False

    async def select_by_type(self, entry_type: str) -> list[Record]:
        raise RemoteError("no remote configured")

    async def insert_many(self, records: list[Record]) -> int:
        raise RemoteError("no remote configured")

    async def delete_by_type(self, entry_type: str) -> int:
        raise RemoteError("no remote configured")

    async def upsert_scalar(self, entry_type: str, content: str) -> None:
        raise RemoteError("no remote configured")


class InMemoryRemoteStore:
    """
    Process-local RemoteStore keeping records per principal.

    ``sign_in``/``sign_out`` stand in for the external auth collaborator.
    """

    def __init__(self) -> None:
        self._records: dict[str, list[Record]] = {}
        self._principal: Optional[str] = None

    def sign_in(self, principal: str) -> None:
        self._principal = principal
        self._records.setdefault(principal, [])

    def sign_out(self) -> None:
        self._principal = None

    @property
    def principal(self) -> Optional[str]:
        return self._principal

    def __rows(self) -> list[Record]:
        if self._principal is None:
            raise RemoteError("not authenticated")
        return self._records[self._principal]

    def records_for(self, principal: str, entry_type: str) -> list[Record]:
        return [
            deepcopy(record)
            for record in self._records.get(principal, [])
            if record["entry_type"] == entry_type
        ]

    async def has_session(self) -> bool:
        return self._principal is not None

    async def select_by_type(self, entry_type: str) -> list[Record]:
        return [
            deepcopy(record)
            for record in self.__rows()
            if record["entry_type"] == entry_type
        ]

    async def insert_many(self, records: list[Record]) -> int:
        rows = self.__rows()
        for record in records:
            rows.append(deepcopy(record))
        return len(records)

    async def delete_by_type(self, entry_type: str) -> int:
        rows = self.__rows()
        kept = [record for record in rows if record["entry_type"] != entry_type]
        deleted = len(rows) - len(kept)
        rows[:] = kept
        return deleted

    async def upsert_scalar(self, entry_type: str, content: str) -> None:
        rows = self.__rows()
        existing = [record for record in rows if record["entry_type"] == entry_type]
        for record in existing:
            record["content"] = content
        if existing:
            return
        rows.append(
            {"id": generate_entity_id(), "entry_type": entry_type, "content": content}
        )
