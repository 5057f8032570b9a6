from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import MergeDecision
from .merge_policy import MergePolicy


class AttendanceLogRepository(Protocol):
    def append_entry(
        self,
        *,
        staff_id: int,
        time: datetime,
        photo_url: Optional[str] = None,
        location: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def merge_or_append_location(
        self,
        *,
        staff_id: int,
        location: str,
        now: datetime,
        policy: MergePolicy,
    ) -> MergeDecision:
        """Read the last entry, ask the policy, then update it or append.

        Must run as one atomic unit against the store so two racing events for
        the same staff member cannot both merge into (or both skip) the entry.
        """

        raise NotImplementedError
