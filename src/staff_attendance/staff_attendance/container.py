from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.merge_policy import LastEntryMergePolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.presence import PresenceService
from .attendance.repository import AttendanceLogRepository
from .attendance.service import AttendanceReconciler
from .core.constants import DEFAULT_MERGE_WINDOW_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.repository import DocumentRepository
from .documents.service import DocumentLockerService
from .linking.service import ChatLinkResolver
from .payroll.service import PayrollReportService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffDirectoryService
from .storage.blob_store import LocalBlobStore


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    attendance_repo: AttendanceLogRepository
    documents_repo: DocumentRepository
    blobs: LocalBlobStore

    staff_service: StaffDirectoryService
    link_resolver: ChatLinkResolver
    reconciler: AttendanceReconciler
    presence_service: PresenceService
    payroll_service: PayrollReportService
    document_service: DocumentLockerService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    staff_repo: StaffRepository,
    attendance_repo: AttendanceLogRepository,
    documents_repo: DocumentRepository,
    blobs: LocalBlobStore,
    merge_window_minutes: int = DEFAULT_MERGE_WINDOW_MINUTES,
    require_owner_on_delete: bool = False,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of whatever repositories the caller provides."""
    link_resolver = ChatLinkResolver(staff_repo)
    return Container(
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        documents_repo=documents_repo,
        blobs=blobs,
        staff_service=StaffDirectoryService(staff_repo, blobs, require_owner_on_delete=require_owner_on_delete),
        link_resolver=link_resolver,
        reconciler=AttendanceReconciler(
            attendance_repo,
            link_resolver,
            blobs,
            policy=LastEntryMergePolicy(window_minutes=int(merge_window_minutes)),
        ),
        presence_service=PresenceService(),
        payroll_service=PayrollReportService(),
        document_service=DocumentLockerService(documents_repo, staff_repo, blobs),
        conn=conn,
    )


def build_container(settings: Any) -> Container:
    """MySQL-backed container from a settings module (see config/)."""
    conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    return assemble(
        staff_repo=MySQLStaffRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        documents_repo=MySQLDocumentRepository(conn),
        blobs=LocalBlobStore(getattr(settings, "UPLOAD_DIR", "uploads")),
        merge_window_minutes=int(getattr(settings, "MERGE_WINDOW_MINUTES", DEFAULT_MERGE_WINDOW_MINUTES)),
        require_owner_on_delete=bool(getattr(settings, "REQUIRE_OWNER_ON_DELETE", False)),
        conn=conn,
    )
