"""Inbound bot message routing.

`route` is a pure function from a chat id and a raw Telegram message to an
Action; it does no I/O, so the bot's behaviour can be tested without a
transport. Executing the Action is the dispatcher's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..linking.service import looks_like_phone

START_COMMAND = "/start"


@dataclass(frozen=True)
class Greet:
    pass


@dataclass(frozen=True)
class AttemptLink:
    phone: str


@dataclass(frozen=True)
class IngestPhoto:
    file_id: str


@dataclass(frozen=True)
class IngestLocation:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Ignore:
    reason: str


Action = Union[Greet, AttemptLink, IngestPhoto, IngestLocation, Ignore]


def _command_name(text: str) -> str:
    # "/start@agency_bot payload" -> "/start"
    return text.split()[0].split("@")[0].lower()


def route(chat_id: str, message: Mapping[str, Any]) -> Action:
    photos = message.get("photo") or []
    if photos:
        # Telegram lists sizes smallest first.
        return IngestPhoto(file_id=str(photos[-1]["file_id"]))

    location = message.get("location")
    if location:
        return IngestLocation(latitude=float(location["latitude"]), longitude=float(location["longitude"]))

    text = (message.get("text") or "").strip()
    if not text:
        return Ignore(reason="unsupported message")
    if text.startswith("/"):
        if _command_name(text) == START_COMMAND:
            return Greet()
        return Ignore(reason="unknown command")
    if looks_like_phone(text):
        return AttemptLink(phone=text)
    return Ignore(reason="plain text")
