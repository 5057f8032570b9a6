from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.validators import normalize_phone
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Document, LogEntry, StaffMember
from .repository import StaffRepository

_STAFF_COLUMNS = """
    staff_id, owner_id, name, phone, daily_rate, profile_picture_url,
    chat_link_id, linked_at, created_at
"""


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _hydrate(self, cur, rows: list[dict[str, Any]]) -> list[StaffMember]:
        """Attach documents and log entries to staff rows with two extra queries."""
        if not rows:
            return []
        ids = [int(r["staff_id"]) for r in rows]

        cur.execute(
            f"""
            SELECT document_id, staff_id, name, url, uploaded_at
            FROM staff_documents
            WHERE staff_id IN ({in_clause(ids)})
            ORDER BY document_id ASC
            """,
            tuple(ids),
        )
        docs: dict[int, list[Document]] = defaultdict(list)
        for d in fetchall(cur):
            docs[int(d["staff_id"])].append(
                Document(
                    document_id=int(d["document_id"]),
                    name=d["name"],
                    url=d["url"],
                    uploaded_at=d["uploaded_at"],
                )
            )

        cur.execute(
            f"""
            SELECT entry_id, staff_id, logged_at, photo_url, location
            FROM attendance_logs
            WHERE staff_id IN ({in_clause(ids)})
            ORDER BY entry_id ASC
            """,
            tuple(ids),
        )
        logs: dict[int, list[LogEntry]] = defaultdict(list)
        for e in fetchall(cur):
            logs[int(e["staff_id"])].append(
                LogEntry(
                    entry_id=int(e["entry_id"]),
                    time=e["logged_at"],
                    photo_url=e.get("photo_url"),
                    location=e.get("location"),
                )
            )

        return [
            StaffMember(
                staff_id=int(r["staff_id"]),
                owner_id=r["owner_id"],
                name=r["name"],
                phone=r["phone"],
                daily_rate=float(r.get("daily_rate") or 0),
                profile_picture_url=r.get("profile_picture_url"),
                chat_link_id=r.get("chat_link_id"),
                linked_at=r.get("linked_at"),
                created_at=r.get("created_at"),
                documents=tuple(docs[int(r["staff_id"])]),
                attendance_log=tuple(logs[int(r["staff_id"])]),
            )
            for r in rows
        ]

    def _get_one(self, where: str, params: tuple, *, order_by: str = "staff_id DESC") -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STAFF_COLUMNS} FROM staff WHERE {where} ORDER BY {order_by} LIMIT 1", params)
            r = fetchone(cur)
            if not r:
                return None
            return self._hydrate(cur, [r])[0]

    def get_by_id(self, staff_id: int) -> Optional[StaffMember]:
        return self._get_one("staff_id=%s", (int(staff_id),))

    def get_by_owner_and_phone(self, owner_id: str, phone_digits: str) -> Optional[StaffMember]:
        return self._get_one("owner_id=%s AND phone_digits=%s", (owner_id, phone_digits), order_by="staff_id ASC")

    def find_by_phone(self, phone_digits: str) -> Optional[StaffMember]:
        return self._get_one("phone_digits=%s", (phone_digits,))

    def find_by_chat(self, chat_id: str) -> Optional[StaffMember]:
        return self._get_one("chat_link_id=%s", (str(chat_id),), order_by="linked_at DESC, staff_id DESC")

    def list_by_owner(self, owner_id: str) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STAFF_COLUMNS} FROM staff WHERE owner_id=%s ORDER BY staff_id DESC",
                (owner_id,),
            )
            return self._hydrate(cur, fetchall(cur))

    def create_staff(
        self,
        *,
        owner_id: str,
        name: str,
        phone: str,
        daily_rate: float,
        profile_picture_url: Optional[str],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(owner_id, name, phone, phone_digits, daily_rate, profile_picture_url, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (owner_id, name, phone, normalize_phone(phone), daily_rate, profile_picture_url, created_at),
            )
            return int(cur.lastrowid)

    def update_staff(self, *, staff_id: int, name: str, phone: str, daily_rate: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff
                SET name=%s, phone=%s, phone_digits=%s, daily_rate=%s
                WHERE staff_id=%s
                """,
                (name, phone, normalize_phone(phone), daily_rate, int(staff_id)),
            )
            return cur.rowcount > 0

    def set_chat_link(self, *, staff_id: int, chat_id: str, linked_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE staff SET chat_link_id=%s, linked_at=%s WHERE staff_id=%s",
                (str(chat_id), linked_at, int(staff_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, staff_id: int) -> bool:
        # Documents and log rows go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE staff_id=%s", (int(staff_id),))
            return cur.rowcount > 0
