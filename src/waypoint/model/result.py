# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SyncOutcome:
    """Where a write actually landed.

    ``cache_ok`` reports the local cache write. ``remote_ok`` is ``None`` when
    no authenticated session existed and the remote was never attempted.
    """

    cache_ok: bool
    remote_ok: Optional[bool] = None

    @property
    def remote_attempted(self) -> bool:
        return self.remote_ok is not None

    def merge(self, other: "SyncOutcome") -> "SyncOutcome":
        if self.remote_ok is None:
            remote_ok = other.remote_ok
        elif other.remote_ok is None:
            remote_ok = self.remote_ok
        else:
            remote_ok = self.remote_ok and other.remote_ok
        return SyncOutcome(
            cache_ok=self.cache_ok and other.cache_ok, remote_ok=remote_ok
        )


@dataclass(frozen=True)
class Result[T]:
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    outcome: Optional[SyncOutcome] = None

    @classmethod
    def ok(
        cls, data: Optional[T] = None, outcome: Optional[SyncOutcome] = None
    ) -> "Result[T]":
        return cls(success=True, data=data, outcome=outcome)

    @classmethod
    def fail(cls, error: str) -> "Result[T]":
        return cls(success=False, error=error)
