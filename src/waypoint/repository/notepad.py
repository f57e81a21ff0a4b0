# SPDX-License-Identifier: MIT

from waypoint.model.entry_type import EntryType
from waypoint.model.result import Result
from waypoint.store.sync import SyncEngine


class NotepadRepository:
    def __init__(self, engine: SyncEngine) -> None:
        self._engine = engine
        self.entry_type = EntryType.NOTEPAD_CONTENT

    async def get_content(self) -> Result[str]:
        return Result.ok(await self._engine.read_scalar(self.entry_type))

    async def save_content(self, content: str) -> Result[None]:
        outcome = await self._engine.write_scalar(self.entry_type, content)
        return Result.ok(outcome=outcome)
