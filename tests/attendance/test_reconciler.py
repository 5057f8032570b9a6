from __future__ import annotations

from datetime import datetime

from staff_attendance.attendance.merge_policy import LastEntryMergePolicy
from staff_attendance.attendance.service import AttendanceReconciler
from staff_attendance.core.enums import MergeDecision
from staff_attendance.linking.service import ChatLinkResolver

JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


def _reconciler(store, blobs) -> AttendanceReconciler:
    return AttendanceReconciler(store, ChatLinkResolver(store), blobs, policy=LastEntryMergePolicy())


def test_photo_then_location_within_window_is_one_entry(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)

    rec.ingest_photo("100", lambda: JPEG, now=datetime(2025, 6, 1, 9, 0, 0))
    result = rec.ingest_location("100", 12.97, 77.59, now=datetime(2025, 6, 1, 9, 2, 30))

    log = store.get_by_id(staff.staff_id).attendance_log
    assert result.decision == MergeDecision.MERGE
    assert len(log) == 1
    assert log[0].photo_url.startswith("/uploads/selfie_")
    assert log[0].location == "12.97,77.59"
    assert log[0].time == datetime(2025, 6, 1, 9, 0, 0)


def test_location_after_window_is_a_separate_entry(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)

    rec.ingest_photo("100", lambda: JPEG, now=datetime(2025, 6, 1, 9, 0, 0))
    result = rec.ingest_location("100", 12.97, 77.59, now=datetime(2025, 6, 1, 9, 10, 0))

    log = store.get_by_id(staff.staff_id).attendance_log
    assert result.decision == MergeDecision.APPEND
    assert len(log) == 2
    assert log[0].location is None
    assert log[1].photo_url is None
    assert log[1].location == "12.97,77.59"


def test_location_on_empty_log_creates_location_only_entry(store, blobs):
    staff = store.seed(chat_id="100")
    _reconciler(store, blobs).ingest_location("100", 1.5, 2.5, now=datetime(2025, 6, 1, 9, 0))

    (entry,) = store.get_by_id(staff.staff_id).attendance_log
    assert entry.photo_url is None
    assert entry.location == "1.5,2.5"


def test_second_location_does_not_merge_into_located_entry(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)

    rec.ingest_photo("100", lambda: JPEG, now=datetime(2025, 6, 1, 9, 0, 0))
    rec.ingest_location("100", 1.0, 2.0, now=datetime(2025, 6, 1, 9, 1, 0))
    rec.ingest_location("100", 3.0, 4.0, now=datetime(2025, 6, 1, 9, 2, 0))

    log = store.get_by_id(staff.staff_id).attendance_log
    assert [e.location for e in log] == ["1.0,2.0", "3.0,4.0"]


def test_photo_always_appends_even_inside_window(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)

    rec.ingest_location("100", 1.0, 2.0, now=datetime(2025, 6, 1, 9, 0, 0))
    rec.ingest_photo("100", lambda: JPEG, now=datetime(2025, 6, 1, 9, 0, 30))
    rec.ingest_photo("100", lambda: JPEG + b"2", now=datetime(2025, 6, 1, 9, 0, 45))

    log = store.get_by_id(staff.staff_id).attendance_log
    assert len(log) == 3
    assert log[0].photo_url is None
    assert log[1].location is None and log[2].location is None


def test_selfie_is_written_to_blob_store(store, blobs):
    store.seed(chat_id="100")
    now = datetime(2025, 6, 1, 9, 0, 0)
    _reconciler(store, blobs).ingest_photo("100", lambda: JPEG, now=now)

    stored = list(blobs.root.iterdir())
    assert len(stored) == 1
    assert stored[0].name == f"selfie_{int(now.timestamp() * 1000)}.jpg"
    assert stored[0].read_bytes() == JPEG


def test_unlinked_chat_is_a_silent_no_op(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)

    def _must_not_download():
        raise AssertionError("photo fetched for an unlinked chat")

    assert rec.ingest_photo("999", _must_not_download, now=datetime(2025, 6, 1, 9, 0)) is None
    assert rec.ingest_location("999", 1.0, 2.0, now=datetime(2025, 6, 1, 9, 0)) is None
    assert store.get_by_id(staff.staff_id).attendance_log == ()


def test_log_stays_in_time_order_across_days(store, blobs):
    staff = store.seed(chat_id="100")
    rec = _reconciler(store, blobs)
    times = [
        datetime(2025, 6, 1, 9, 0),
        datetime(2025, 6, 1, 18, 0),
        datetime(2025, 6, 2, 8, 55),
    ]
    for t in times:
        rec.ingest_photo("100", lambda: JPEG, now=t)

    log = store.get_by_id(staff.staff_id).attendance_log
    assert [e.time for e in log] == sorted(e.time for e in log)
