from __future__ import annotations

from datetime import datetime
from typing import Protocol


class DocumentRepository(Protocol):
    def add_document(self, *, staff_id: int, name: str, url: str, uploaded_at: datetime) -> int:
        raise NotImplementedError

    def delete_document(self, *, staff_id: int, document_id: int) -> bool:
        raise NotImplementedError
