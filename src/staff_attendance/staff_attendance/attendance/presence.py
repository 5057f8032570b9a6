from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..staff.model import LogEntry, StaffMember


def is_present_today(staff: StaffMember, today: date) -> bool:
    """Only the last entry counts: the log is append-only in time order."""
    last = staff.last_entry
    return last is not None and last.work_date == today


def entries_on(staff: StaffMember, day: date) -> list[LogEntry]:
    return [e for e in staff.attendance_log if e.work_date == day]


@dataclass(frozen=True)
class PresenceSummary:
    present: list[StaffMember]
    absent: list[StaffMember]

    @property
    def total(self) -> int:
        return len(self.present) + len(self.absent)


@dataclass(frozen=True)
class DayDetail:
    day: date
    entries: list[LogEntry]

    @property
    def present(self) -> bool:
        return bool(self.entries)


class PresenceService:
    """Read-side: who checked in today, and what happened on a given date.

    Point-in-time queries; nothing is cached, the dashboard simply polls.
    """

    def split_today(self, staff: Sequence[StaffMember], *, today: Optional[date] = None) -> PresenceSummary:
        today = today or now_local().date()
        present: list[StaffMember] = []
        absent: list[StaffMember] = []
        for s in staff:
            (present if is_present_today(s, today) else absent).append(s)
        return PresenceSummary(present=present, absent=absent)

    def day_detail(self, staff: StaffMember, day: date) -> DayDetail:
        return DayDetail(day=day, entries=entries_on(staff, day))

    def present_dates(self, staff: StaffMember, year: int, month: int) -> list[date]:
        """Calendar tiles to highlight for one month, ascending."""
        days = {e.work_date for e in staff.attendance_log if e.time.year == year and e.time.month == month}
        return sorted(days)
