from __future__ import annotations

from typing import Sequence

from .base import PayrollCalculator
from ...staff.model import LogEntry


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: one paid day per distinct calendar date with a check-in."""

    def worked_days(self, entries: Sequence[LogEntry], *, year: int, month: int) -> int:
        return len({e.work_date for e in entries if e.time.year == year and e.time.month == month})

    def total_pay(self, days: int, daily_rate: float) -> float:
        return days * float(daily_rate or 0)
