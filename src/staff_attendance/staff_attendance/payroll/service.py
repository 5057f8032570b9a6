from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..staff.model import StaffMember
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class PayrollLine:
    staff_id: int
    name: str
    daily_rate: float
    days: int
    total: float


@dataclass(frozen=True)
class PayrollReport:
    year: int
    month: int
    rows: list[PayrollLine]

    @property
    def grand_total(self) -> float:
        return sum(r.total for r in self.rows)


class PayrollReportService:
    def __init__(self, *, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def monthly_for_staff(self, staff: StaffMember, *, year: int, month: int) -> PayrollLine:
        days = self._calculator.worked_days(staff.attendance_log, year=year, month=month)
        return PayrollLine(
            staff_id=staff.staff_id,
            name=staff.name,
            daily_rate=staff.daily_rate,
            days=days,
            total=self._calculator.total_pay(days, staff.daily_rate),
        )

    def build_monthly_report(self, staff: Sequence[StaffMember], *, year: int, month: int) -> PayrollReport:
        rows = [self.monthly_for_staff(s, year=year, month=month) for s in staff]
        return PayrollReport(year=year, month=month, rows=rows)
