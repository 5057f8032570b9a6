from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..attendance.service import AttendanceReconciler
from ..core.enums import LinkOutcome
from ..linking.service import ChatLinkResolver
from .router import Action, AttemptLink, Greet, Ignore, IngestLocation, IngestPhoto

logger = logging.getLogger(__name__)

GREETING = (
    "Welcome to Silver Case! 🏥\n"
    "Please reply with your **Phone Number** so I can link you to your agency."
)
LINKED = "✅ Profile Linked! Hi {name}.\n\nWhen you reach work, send me a **Selfie** and your **Location**."
PHONE_NOT_FOUND = "❌ Phone number not found. Ask your admin to add you first."
SELFIE_RECEIVED = "📸 Selfie Received!"
LOCATION_RECEIVED = "📍 Location Received! Attendance Marked. ✅"


class FileSource(Protocol):
    def download_file(self, file_id: str) -> bytes:
        raise NotImplementedError


class BotDispatcher:
    """Executes routed actions against the services and returns the reply text.

    None means "say nothing": ignored messages and events from unlinked chats.
    """

    def __init__(self, resolver: ChatLinkResolver, reconciler: AttendanceReconciler, files: FileSource):
        self._resolver = resolver
        self._reconciler = reconciler
        self._files = files

    def dispatch(self, chat_id: str, action: Action) -> Optional[str]:
        if isinstance(action, Greet):
            return GREETING

        if isinstance(action, AttemptLink):
            result = self._resolver.link(chat_id, action.phone)
            if result.outcome == LinkOutcome.NOT_FOUND or result.staff is None:
                return PHONE_NOT_FOUND
            return LINKED.format(name=result.staff.name)

        if isinstance(action, IngestPhoto):
            ingested = self._reconciler.ingest_photo(chat_id, lambda: self._files.download_file(action.file_id))
            return SELFIE_RECEIVED if ingested else None

        if isinstance(action, IngestLocation):
            ingested = self._reconciler.ingest_location(chat_id, action.latitude, action.longitude)
            return LOCATION_RECEIVED if ingested else None

        if isinstance(action, Ignore):
            logger.debug("Ignored message from chat %s: %s", chat_id, action.reason)
        return None
