from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from .model import Document, LogEntry, StaffMember


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def entry_to_dict(e: LogEntry) -> dict[str, Any]:
    return {
        "id": e.entry_id,
        "time": _iso(e.time),
        "photoUrl": e.photo_url,
        "location": e.location,
        "mapUrl": e.map_url,
    }


def document_to_dict(d: Document) -> dict[str, Any]:
    return {"id": d.document_id, "name": d.name, "url": d.url, "uploadedAt": _iso(d.uploaded_at)}


def staff_to_dict(s: StaffMember) -> dict[str, Any]:
    """Field names match what the dashboard reads."""
    return {
        "id": s.staff_id,
        "ownerId": s.owner_id,
        "name": s.name,
        "phone": s.phone,
        "dailyRate": s.daily_rate,
        "profilePicUrl": s.profile_picture_url,
        "chatLinkId": s.chat_link_id,
        "createdAt": _iso(s.created_at),
        "documents": [document_to_dict(d) for d in s.documents],
        "logs": [entry_to_dict(e) for e in s.attendance_log],
    }


def staff_brief(s: StaffMember) -> dict[str, Any]:
    last = s.last_entry
    return {
        "id": s.staff_id,
        "name": s.name,
        "phone": s.phone,
        "profilePicUrl": s.profile_picture_url,
        "lastCheckIn": _iso(last.time) if last else None,
    }
