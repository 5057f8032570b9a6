from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import NotFoundError, ValidationError
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from ..staff.service import UploadedFile
from ..storage.blob_store import BlobStore, upload_filename
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentLockerService:
    """Use case: owner attaches and removes named files on a staff record."""

    def __init__(self, documents: DocumentRepository, staff: StaffRepository, blobs: BlobStore):
        self._documents = documents
        self._staff = staff
        self._blobs = blobs

    def _get_staff(self, staff_id: int) -> StaffMember:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError("Staff member not found")
        return staff

    def upload(
        self,
        staff_id: int,
        file: Optional[UploadedFile],
        *,
        name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> StaffMember:
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")
        staff = self._get_staff(staff_id)
        now = now or now_local()

        url = self._blobs.save(upload_filename(now, file.filename), file.data)
        display_name = (name or "").strip() or file.filename
        self._documents.add_document(staff_id=staff.staff_id, name=display_name, url=url, uploaded_at=now)
        logger.info("Document %r attached to staff %s", display_name, staff.staff_id)
        return self._get_staff(staff.staff_id)

    def delete(self, staff_id: int, document_id: int) -> StaffMember:
        staff = self._get_staff(staff_id)
        doc = staff.find_document(int(document_id))
        if not doc:
            raise NotFoundError("Document not found")

        # Blob first: a StorageError leaves the row in place. A blob already
        # missing on disk is tolerated.
        if not self._blobs.delete(doc.url):
            logger.warning("Blob for document %s was already missing: %s", doc.document_id, doc.url)

        if not self._documents.delete_document(staff_id=staff.staff_id, document_id=doc.document_id):
            raise NotFoundError("Document not found")
        return self._get_staff(staff.staff_id)
