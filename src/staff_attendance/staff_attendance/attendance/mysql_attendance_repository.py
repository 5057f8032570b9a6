from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import MergeDecision
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..staff.model import LogEntry
from .merge_policy import MergePolicy
from .repository import AttendanceLogRepository


class MySQLAttendanceRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_entry(
        self,
        *,
        staff_id: int,
        time: datetime,
        photo_url: Optional[str] = None,
        location: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(staff_id, logged_at, photo_url, location)
                VALUES(%s,%s,%s,%s)
                """,
                (int(staff_id), time, photo_url, location),
            )
            return int(cur.lastrowid)

    def merge_or_append_location(
        self,
        *,
        staff_id: int,
        location: str,
        now: datetime,
        policy: MergePolicy,
    ) -> MergeDecision:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the staff record serialises concurrent events for that person.
            cur.execute("SELECT staff_id FROM staff WHERE staff_id=%s FOR UPDATE", (int(staff_id),))
            if not fetchone(cur):
                raise NotFoundError("Staff member not found")

            cur.execute(
                """
                SELECT entry_id, logged_at, photo_url, location
                FROM attendance_logs
                WHERE staff_id=%s
                ORDER BY entry_id DESC
                LIMIT 1
                """,
                (int(staff_id),),
            )
            r = fetchone(cur)
            last = None
            if r:
                last = LogEntry(
                    entry_id=int(r["entry_id"]),
                    time=r["logged_at"],
                    photo_url=r.get("photo_url"),
                    location=r.get("location"),
                )

            if policy.decide(last_entry=last, now=now) == MergeDecision.MERGE and last is not None:
                cur.execute(
                    "UPDATE attendance_logs SET location=%s WHERE entry_id=%s AND location IS NULL",
                    (location, last.entry_id),
                )
                if cur.rowcount == 1:
                    return MergeDecision.MERGE

            cur.execute(
                """
                INSERT INTO attendance_logs(staff_id, logged_at, photo_url, location)
                VALUES(%s,%s,NULL,%s)
                """,
                (int(staff_id), now, location),
            )
            return MergeDecision.APPEND
