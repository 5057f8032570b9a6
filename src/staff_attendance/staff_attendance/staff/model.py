from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.validators import normalize_phone
from ..core.constants import MAPS_URL_TEMPLATE
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LogEntry:
    """Domain entity: one attendance check-in.

    A selfie and a location usually arrive as two messages; the reconciler folds
    them into the same entry, so either reference may be missing for a while.
    """

    entry_id: int
    time: datetime
    photo_url: Optional[str] = None
    location: Optional[str] = None

    @property
    def work_date(self) -> date:
        return self.time.date()

    @property
    def map_url(self) -> Optional[str]:
        if not self.location:
            return None
        return MAPS_URL_TEMPLATE.format(location=self.location)


@dataclass(frozen=True)
class Document:
    """Named file attached to a staff member by the owner."""

    document_id: int
    name: str
    url: str
    uploaded_at: datetime


@dataclass(frozen=True)
class StaffMember:
    """Domain entity: a tracked worker (a nurse) owned by exactly one account.

    Note: Plain data object; persistence lives in the repositories.
    """

    staff_id: int
    owner_id: str
    name: str
    phone: str
    daily_rate: float = 0.0
    profile_picture_url: Optional[str] = None
    chat_link_id: Optional[str] = None
    linked_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    documents: tuple[Document, ...] = field(default_factory=tuple)
    attendance_log: tuple[LogEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.owner_id:
            raise ValidationError("ownerId is required")
        if self.daily_rate is None or self.daily_rate < 0:
            raise ValidationError("dailyRate must not be negative")

    @property
    def phone_digits(self) -> str:
        return normalize_phone(self.phone)

    @property
    def last_entry(self) -> Optional[LogEntry]:
        return self.attendance_log[-1] if self.attendance_log else None

    def find_document(self, document_id: int) -> Optional[Document]:
        for doc in self.documents:
            if doc.document_id == document_id:
                return doc
        return None
