from __future__ import annotations

from datetime import datetime

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import DocumentRepository


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_document(self, *, staff_id: int, name: str, url: str, uploaded_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO staff_documents(staff_id, name, url, uploaded_at) VALUES(%s,%s,%s,%s)",
                (int(staff_id), name, url, uploaded_at),
            )
            return int(cur.lastrowid)

    def delete_document(self, *, staff_id: int, document_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM staff_documents WHERE document_id=%s AND staff_id=%s",
                (int(document_id), int(staff_id)),
            )
            return cur.rowcount > 0
