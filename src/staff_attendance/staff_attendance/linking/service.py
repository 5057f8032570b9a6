from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import normalize_phone
from ..core.constants import MIN_LINK_PHONE_DIGITS
from ..core.enums import LinkOutcome
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository

logger = logging.getLogger(__name__)


def looks_like_phone(text: Optional[str]) -> bool:
    """Link trigger: trimmed text made only of digits, at least 10 of them."""
    if not text:
        return False
    value = text.strip()
    return len(value) >= MIN_LINK_PHONE_DIGITS and value.isascii() and value.isdigit()


@dataclass(frozen=True)
class LinkResult:
    outcome: LinkOutcome
    staff: Optional[StaffMember] = None


class ChatLinkResolver:
    """Use case: tie a bot chat to a staff member via the phone handshake.

    Phone lookup spans all owners. There is no unlink; when several records
    point at one chat, the most recently linked one wins.
    """

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def link(self, chat_id: str, phone_text: str, *, now: Optional[datetime] = None) -> LinkResult:
        digits = normalize_phone(phone_text)
        staff = self._staff.find_by_phone(digits) if digits else None
        if not staff:
            logger.info("Link attempt from chat %s with unknown phone", chat_id)
            return LinkResult(outcome=LinkOutcome.NOT_FOUND)

        if staff.chat_link_id == str(chat_id):
            current = self.resolve(chat_id)
            if current and current.staff_id == staff.staff_id:
                return LinkResult(outcome=LinkOutcome.ALREADY_LINKED, staff=staff)

        self._staff.set_chat_link(staff_id=staff.staff_id, chat_id=str(chat_id), linked_at=now or now_local())
        logger.info("Linked chat %s to staff %s", chat_id, staff.staff_id)
        return LinkResult(outcome=LinkOutcome.LINKED, staff=self._staff.get_by_id(staff.staff_id) or staff)

    def resolve(self, chat_id: str) -> Optional[StaffMember]:
        return self._staff.find_by_chat(str(chat_id))
