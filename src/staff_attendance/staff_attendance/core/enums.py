from __future__ import annotations

from enum import Enum


class MergeDecision(str, Enum):
    """What the reconciler does with an incoming location event."""

    MERGE = "MERGE"
    APPEND = "APPEND"


class LinkOutcome(str, Enum):
    """Result of a phone-number handshake from the bot."""

    LINKED = "LINKED"
    ALREADY_LINKED = "ALREADY_LINKED"
    NOT_FOUND = "NOT_FOUND"
