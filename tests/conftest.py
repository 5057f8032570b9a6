from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from staff_attendance.container import assemble
from staff_attendance.core.enums import MergeDecision
from staff_attendance.core.exceptions import NotFoundError
from staff_attendance.staff.model import Document, LogEntry, StaffMember
from staff_attendance.storage.blob_store import LocalBlobStore


class InMemoryStore:
    """Fake for the three MySQL repositories, sharing one set of tables."""

    def __init__(self):
        self.staff: dict[int, StaffMember] = {}
        self._next_id = 0

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    # StaffRepository
    def get_by_id(self, staff_id: int) -> Optional[StaffMember]:
        return self.staff.get(int(staff_id))

    def get_by_owner_and_phone(self, owner_id: str, phone_digits: str) -> Optional[StaffMember]:
        for s in sorted(self.staff.values(), key=lambda s: s.staff_id):
            if s.owner_id == owner_id and s.phone_digits == phone_digits:
                return s
        return None

    def find_by_phone(self, phone_digits: str) -> Optional[StaffMember]:
        matches = [s for s in self.staff.values() if s.phone_digits == phone_digits]
        return max(matches, key=lambda s: s.staff_id) if matches else None

    def find_by_chat(self, chat_id: str) -> Optional[StaffMember]:
        matches = [s for s in self.staff.values() if s.chat_link_id == str(chat_id)]
        return max(matches, key=lambda s: (s.linked_at, s.staff_id)) if matches else None

    def list_by_owner(self, owner_id: str):
        return sorted((s for s in self.staff.values() if s.owner_id == owner_id), key=lambda s: -s.staff_id)

    def create_staff(self, *, owner_id, name, phone, daily_rate, profile_picture_url, created_at) -> int:
        sid = self._id()
        self.staff[sid] = StaffMember(
            staff_id=sid,
            owner_id=owner_id,
            name=name,
            phone=phone,
            daily_rate=daily_rate,
            profile_picture_url=profile_picture_url,
            created_at=created_at,
        )
        return sid

    def update_staff(self, *, staff_id, name, phone, daily_rate) -> bool:
        s = self.staff.get(int(staff_id))
        if not s:
            return False
        self.staff[s.staff_id] = replace(s, name=name, phone=phone, daily_rate=daily_rate)
        return True

    def set_chat_link(self, *, staff_id, chat_id, linked_at) -> bool:
        s = self.staff.get(int(staff_id))
        if not s:
            return False
        self.staff[s.staff_id] = replace(s, chat_link_id=str(chat_id), linked_at=linked_at)
        return True

    def delete_by_id(self, staff_id: int) -> bool:
        return self.staff.pop(int(staff_id), None) is not None

    # AttendanceLogRepository
    def append_entry(self, *, staff_id, time, photo_url=None, location=None) -> int:
        s = self.staff[int(staff_id)]
        entry = LogEntry(entry_id=self._id(), time=time, photo_url=photo_url, location=location)
        self.staff[s.staff_id] = replace(s, attendance_log=s.attendance_log + (entry,))
        return entry.entry_id

    def merge_or_append_location(self, *, staff_id, location, now, policy) -> MergeDecision:
        s = self.staff.get(int(staff_id))
        if not s:
            raise NotFoundError("Staff member not found")
        last = s.last_entry
        decision = policy.decide(last_entry=last, now=now)
        if decision == MergeDecision.MERGE and last is not None:
            merged = replace(last, location=location)
            self.staff[s.staff_id] = replace(s, attendance_log=s.attendance_log[:-1] + (merged,))
            return MergeDecision.MERGE
        self.append_entry(staff_id=s.staff_id, time=now, location=location)
        return MergeDecision.APPEND

    # DocumentRepository
    def add_document(self, *, staff_id, name, url, uploaded_at) -> int:
        s = self.staff[int(staff_id)]
        doc = Document(document_id=self._id(), name=name, url=url, uploaded_at=uploaded_at)
        self.staff[s.staff_id] = replace(s, documents=s.documents + (doc,))
        return doc.document_id

    def delete_document(self, *, staff_id, document_id) -> bool:
        s = self.staff.get(int(staff_id))
        if not s or not s.find_document(int(document_id)):
            return False
        kept = tuple(d for d in s.documents if d.document_id != int(document_id))
        self.staff[s.staff_id] = replace(s, documents=kept)
        return True

    # seeding helpers
    def seed(self, *, owner_id="owner-1", name="Asha", phone="9876543210", daily_rate=500.0, chat_id=None) -> StaffMember:
        sid = self.create_staff(
            owner_id=owner_id,
            name=name,
            phone=phone,
            daily_rate=daily_rate,
            profile_picture_url=None,
            created_at=datetime(2025, 6, 1, 8, 0, 0),
        )
        if chat_id is not None:
            self.set_chat_link(staff_id=sid, chat_id=chat_id, linked_at=datetime(2025, 6, 1, 8, 0, sid))
        return self.staff[sid]

    def add_entries(self, staff_id: int, *entries) -> None:
        """Each entry is (time, photo_url, location)."""
        for time, photo_url, location in entries:
            self.append_entry(staff_id=staff_id, time=time, photo_url=photo_url, location=location)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def blobs(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "uploads")


@pytest.fixture
def container(store, blobs):
    return assemble(staff_repo=store, attendance_repo=store, documents_repo=store, blobs=blobs)
