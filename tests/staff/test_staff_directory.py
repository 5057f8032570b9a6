from __future__ import annotations

from datetime import datetime

import pytest

from staff_attendance.core.exceptions import AuthorizationError, NotFoundError, StorageError, ValidationError
from staff_attendance.staff.service import StaffDirectoryService, UploadedFile


def test_add_is_idempotent_on_owner_and_phone(store, blobs):
    svc = StaffDirectoryService(store, blobs)

    first = svc.add(owner_id="owner-1", name="Asha", phone="9876543210", daily_rate=500)
    second = svc.add(owner_id="owner-1", name="Someone Else", phone="98765 43210", daily_rate=900)

    assert first.staff_id == second.staff_id
    assert second.name == "Asha"
    assert second.daily_rate == 500
    assert len(store.staff) == 1


def test_same_phone_under_another_owner_is_a_new_record(store, blobs):
    svc = StaffDirectoryService(store, blobs)
    a = svc.add(owner_id="owner-1", name="Asha", phone="9876543210")
    b = svc.add(owner_id="owner-2", name="Asha", phone="9876543210")
    assert a.staff_id != b.staff_id


def test_add_defaults_rate_to_zero_and_validates(store, blobs):
    svc = StaffDirectoryService(store, blobs)
    assert svc.add(owner_id="o", name="N", phone="1234567890").daily_rate == 0

    with pytest.raises(ValidationError):
        svc.add(owner_id="", name="N", phone="1234567890")
    with pytest.raises(ValidationError):
        svc.add(owner_id="o", name="N", phone="no digits")
    with pytest.raises(ValidationError):
        svc.add(owner_id="o", name="N", phone="5555555555", daily_rate=-1)


def test_add_stores_profile_picture(store, blobs):
    svc = StaffDirectoryService(store, blobs)
    staff = svc.add(
        owner_id="o",
        name="N",
        phone="1234567890",
        profile_picture=UploadedFile(filename="me.png", data=b"png"),
        now=datetime(2025, 6, 1, 9, 0),
    )
    assert staff.profile_picture_url.startswith("/uploads/")
    assert staff.profile_picture_url.endswith("-me.png")
    assert blobs.path_for(staff.profile_picture_url).read_bytes() == b"png"


def test_list_is_owner_scoped_newest_first_with_search(store, blobs):
    svc = StaffDirectoryService(store, blobs)
    svc.add(owner_id="o1", name="Asha", phone="1111111111")
    svc.add(owner_id="o1", name="Bina", phone="2222222222")
    svc.add(owner_id="o2", name="Chitra", phone="3333333333")

    assert [s.name for s in svc.list("o1")] == ["Bina", "Asha"]
    assert [s.name for s in svc.list("o1", search="ash")] == ["Asha"]
    assert [s.name for s in svc.list("o1", search="2222")] == ["Bina"]
    assert svc.list(None) == []
    assert svc.list("") == []


def test_update_patches_fields_but_not_link_or_log(store, blobs):
    staff = store.seed(chat_id="100")
    store.add_entries(staff.staff_id, (datetime(2025, 6, 1, 9, 0), "/uploads/x.jpg", None))
    svc = StaffDirectoryService(store, blobs)

    updated = svc.update(staff.staff_id, name="Asha K", phone="9999999999", daily_rate="650")

    assert updated.name == "Asha K"
    assert updated.phone == "9999999999"
    assert updated.daily_rate == 650
    assert updated.owner_id == staff.owner_id
    assert updated.chat_link_id == "100"
    assert len(updated.attendance_log) == 1


def test_update_unknown_raises_not_found(store, blobs):
    with pytest.raises(NotFoundError):
        StaffDirectoryService(store, blobs).update(42, name="x", phone="1234567890", daily_rate=1)


def test_remove_is_unscoped_by_default(store, blobs):
    staff = store.seed(owner_id="owner-1")
    StaffDirectoryService(store, blobs).remove(staff.staff_id, owner_id="someone-else")
    assert store.get_by_id(staff.staff_id) is None


def test_remove_can_require_owner(store, blobs):
    staff = store.seed(owner_id="owner-1")
    svc = StaffDirectoryService(store, blobs, require_owner_on_delete=True)

    with pytest.raises(AuthorizationError):
        svc.remove(staff.staff_id, owner_id="someone-else")
    svc.remove(staff.staff_id, owner_id="owner-1")
    assert store.get_by_id(staff.staff_id) is None


def test_remove_deletes_document_blobs(store, blobs):
    staff = store.seed()
    url = blobs.save("1-contract.pdf", b"pdf")
    store.add_document(staff_id=staff.staff_id, name="Contract", url=url, uploaded_at=datetime(2025, 6, 1))
    store.add_document(staff_id=staff.staff_id, name="Gone", url="/uploads/missing.pdf", uploaded_at=datetime(2025, 6, 1))

    StaffDirectoryService(store, blobs).remove(staff.staff_id)

    assert not blobs.path_for(url).exists()


def test_remove_unknown_raises_not_found(store, blobs):
    with pytest.raises(NotFoundError):
        StaffDirectoryService(store, blobs).remove(404)


def test_remove_keeps_record_when_a_blob_cannot_be_deleted(store, blobs):
    staff = store.seed()
    stuck = blobs.save("1-stuck.pdf", b"pdf")
    blobs.path_for(stuck).unlink()
    blobs.path_for(stuck).mkdir()
    other = blobs.save("2-other.pdf", b"pdf")
    store.add_document(staff_id=staff.staff_id, name="Stuck", url=stuck, uploaded_at=datetime(2025, 6, 1))
    store.add_document(staff_id=staff.staff_id, name="Other", url=other, uploaded_at=datetime(2025, 6, 1))

    with pytest.raises(StorageError):
        StaffDirectoryService(store, blobs).remove(staff.staff_id)

    assert store.get_by_id(staff.staff_id) is not None
    assert not blobs.path_for(other).exists()


def test_remove_succeeds_on_retry_after_blob_is_cleared(store, blobs):
    staff = store.seed()
    stuck = blobs.save("1-stuck.pdf", b"pdf")
    blobs.path_for(stuck).unlink()
    blobs.path_for(stuck).mkdir()
    store.add_document(staff_id=staff.staff_id, name="Stuck", url=stuck, uploaded_at=datetime(2025, 6, 1))
    svc = StaffDirectoryService(store, blobs)

    with pytest.raises(StorageError):
        svc.remove(staff.staff_id)
    blobs.path_for(stuck).rmdir()
    svc.remove(staff.staff_id)

    assert store.get_by_id(staff.staff_id) is None
