from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import MergeDecision
from ..linking.service import ChatLinkResolver
from ..storage.blob_store import BlobStore, selfie_filename
from .merge_policy import LastEntryMergePolicy, MergePolicy
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    staff_id: int
    staff_name: str
    decision: MergeDecision


def format_location(latitude: float, longitude: float) -> str:
    return f"{latitude},{longitude}"


class AttendanceReconciler:
    """Use case: fold bot selfie/location events into the attendance log.

    Events from chats that are not linked to a staff member return None; stray
    bot traffic is normal and is not an error.
    """

    def __init__(
        self,
        attendance: AttendanceLogRepository,
        resolver: ChatLinkResolver,
        blobs: BlobStore,
        *,
        policy: MergePolicy | None = None,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._blobs = blobs
        self._policy = policy or LastEntryMergePolicy()

    def ingest_photo(
        self,
        chat_id: str,
        fetch_photo: Callable[[], bytes],
        *,
        now: datetime | None = None,
    ) -> Optional[IngestResult]:
        staff = self._resolver.resolve(chat_id)
        if not staff:
            logger.debug("Dropped photo from unlinked chat %s", chat_id)
            return None

        now = now or now_local()
        url = self._blobs.save(selfie_filename(now), fetch_photo())
        self._attendance.append_entry(staff_id=staff.staff_id, time=now, photo_url=url)
        logger.info("Selfie logged for staff %s at %s", staff.staff_id, now.isoformat(timespec="seconds"))
        return IngestResult(staff_id=staff.staff_id, staff_name=staff.name, decision=MergeDecision.APPEND)

    def ingest_location(
        self,
        chat_id: str,
        latitude: float,
        longitude: float,
        *,
        now: datetime | None = None,
    ) -> Optional[IngestResult]:
        staff = self._resolver.resolve(chat_id)
        if not staff:
            logger.debug("Dropped location from unlinked chat %s", chat_id)
            return None

        now = now or now_local()
        decision = self._attendance.merge_or_append_location(
            staff_id=staff.staff_id,
            location=format_location(latitude, longitude),
            now=now,
            policy=self._policy,
        )
        logger.info("Location for staff %s: %s", staff.staff_id, decision.value)
        return IngestResult(staff_id=staff.staff_id, staff_name=staff.name, decision=decision)
