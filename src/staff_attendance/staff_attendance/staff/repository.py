from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import StaffMember


class StaffRepository(Protocol):
    """Repository interface for staff records.

    Note (DIP): services depend on this interface, not on a concrete database.
    Returned StaffMember objects carry their documents and attendance log.
    """

    def get_by_id(self, staff_id: int) -> Optional[StaffMember]:
        raise NotImplementedError

    def get_by_owner_and_phone(self, owner_id: str, phone_digits: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def find_by_phone(self, phone_digits: str) -> Optional[StaffMember]:
        """Any owner's staff with this phone; the newest record when several match."""

        raise NotImplementedError

    def find_by_chat(self, chat_id: str) -> Optional[StaffMember]:
        """The most recently linked staff member for a chat."""

        raise NotImplementedError

    def list_by_owner(self, owner_id: str) -> Sequence[StaffMember]:
        """Newest first."""

        raise NotImplementedError

    def create_staff(
        self,
        *,
        owner_id: str,
        name: str,
        phone: str,
        daily_rate: float,
        profile_picture_url: Optional[str],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def update_staff(self, *, staff_id: int, name: str, phone: str, daily_rate: float) -> bool:
        raise NotImplementedError

    def set_chat_link(self, *, staff_id: int, chat_id: str, linked_at: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, staff_id: int) -> bool:
        raise NotImplementedError
