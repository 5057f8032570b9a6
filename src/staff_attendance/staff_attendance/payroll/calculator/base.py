from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...staff.model import LogEntry


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_days(self, entries: Sequence[LogEntry], *, year: int, month: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def total_pay(self, days: int, daily_rate: float) -> float:
        raise NotImplementedError
