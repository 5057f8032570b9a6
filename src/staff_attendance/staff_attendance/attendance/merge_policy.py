from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_MERGE_WINDOW_MINUTES
from ..core.enums import MergeDecision
from ..staff.model import LogEntry


class MergePolicy(ABC):
    """Strategy Pattern: decide whether a location joins the previous entry."""

    @abstractmethod
    def decide(self, *, last_entry: Optional[LogEntry], now: datetime) -> MergeDecision:
        raise NotImplementedError


@dataclass(frozen=True)
class LastEntryMergePolicy(MergePolicy):
    """Merge into the last entry only, if it has no location and is recent.

    Never searches further back: a location that misses the window becomes its
    own entry. Photos do not go through the policy at all, they always append.
    """

    window_minutes: int = DEFAULT_MERGE_WINDOW_MINUTES

    @property
    def window(self) -> timedelta:
        return timedelta(minutes=self.window_minutes)

    def decide(self, *, last_entry: Optional[LogEntry], now: datetime) -> MergeDecision:
        if last_entry is None:
            return MergeDecision.APPEND
        if last_entry.location:
            return MergeDecision.APPEND
        if now - last_entry.time < self.window:
            return MergeDecision.MERGE
        return MergeDecision.APPEND
