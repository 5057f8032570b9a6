from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.validators import normalize_phone, parse_rate, require_non_empty, require_phone
from ..core.exceptions import AuthorizationError, NotFoundError, StorageError
from ..storage.blob_store import BlobStore, upload_filename
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """A file received from a client, detached from the web framework."""

    filename: str
    data: bytes


def matches_search(staff: StaffMember, search: Optional[str]) -> bool:
    if not search or not search.strip():
        return True
    needle = search.strip().lower()
    return needle in (staff.name or "").lower() or needle in (staff.phone or "")


class StaffDirectoryService:
    """Use case: owner manages staff records."""

    def __init__(
        self,
        staff: StaffRepository,
        blobs: BlobStore,
        *,
        require_owner_on_delete: bool = False,
    ):
        self._staff = staff
        self._blobs = blobs
        self._require_owner_on_delete = bool(require_owner_on_delete)

    def get(self, staff_id: int) -> StaffMember:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError("Staff member not found")
        return staff

    def list(self, owner_id: Optional[str], *, search: Optional[str] = None) -> list[StaffMember]:
        if not owner_id:
            return []
        return [s for s in self._staff.list_by_owner(owner_id) if matches_search(s, search)]

    def add(
        self,
        *,
        owner_id: str,
        name: str,
        phone: str,
        daily_rate: Any = 0,
        profile_picture: Optional[UploadedFile] = None,
        now: Optional[datetime] = None,
    ) -> StaffMember:
        """Create a staff member, or return the existing one for (owner, phone)."""
        owner_id = require_non_empty(owner_id, "ownerId")
        name = require_non_empty(name, "name")
        phone = require_phone(phone)
        rate = parse_rate(daily_rate)
        now = now or now_local()

        existing = self._staff.get_by_owner_and_phone(owner_id, normalize_phone(phone))
        if existing:
            return existing

        picture_url = None
        if profile_picture is not None and profile_picture.filename:
            picture_url = self._blobs.save(upload_filename(now, profile_picture.filename), profile_picture.data)

        staff_id = self._staff.create_staff(
            owner_id=owner_id,
            name=name,
            phone=phone,
            daily_rate=rate,
            profile_picture_url=picture_url,
            created_at=now,
        )
        logger.info("Added staff %s (%s) for owner %s", staff_id, name, owner_id)
        return self.get(staff_id)

    def update(self, staff_id: int, *, name: str, phone: str, daily_rate: Any) -> StaffMember:
        """Patch name/phone/rate only; log and chat link are left alone."""
        current = self.get(staff_id)
        name = require_non_empty(name, "name")
        phone = require_phone(phone)
        rate = parse_rate(daily_rate)

        self._staff.update_staff(staff_id=current.staff_id, name=name, phone=phone, daily_rate=rate)
        return self.get(current.staff_id)

    def remove(self, staff_id: int, *, owner_id: Optional[str] = None) -> None:
        """Delete by id.

        Ownership is not checked unless `require_owner_on_delete` is enabled;
        the dashboard relies on being able to delete any record by id.
        """
        staff = self.get(staff_id)
        if self._require_owner_on_delete and staff.owner_id != owner_id:
            raise AuthorizationError("You do not own this staff member")

        self._delete_blobs(staff)
        if not self._staff.delete_by_id(staff.staff_id):
            raise NotFoundError("Staff member not found")
        logger.info("Deleted staff %s of owner %s", staff.staff_id, staff.owner_id)

    def _delete_blobs(self, staff: StaffMember) -> None:
        """Try every document and profile blob; raise after the sweep if any failed.

        Runs before the row delete, so a failure keeps the record and a retry
        skips blobs that are already gone.
        """
        urls = [d.url for d in staff.documents]
        if staff.profile_picture_url:
            urls.append(staff.profile_picture_url)

        failed: list[str] = []
        for url in urls:
            try:
                if not self._blobs.delete(url):
                    logger.warning("Blob %s was already missing while deleting staff %s", url, staff.staff_id)
            except StorageError as e:
                logger.error("Could not delete blob %s of staff %s: %s", url, staff.staff_id, e)
                failed.append(url)
        if failed:
            raise StorageError(f"Could not delete {len(failed)} file(s) of staff {staff.staff_id}")
