"""Moderation events (bans, timeouts, deleted messages) recorded as log lines."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .constants import PREVIEW_LENGTH
from .formatting import current_time, format_ban_entry, format_deleted_entry
from .log_buffer import BoundedAppendLog, LogEntry

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChatUser:
    """The affected user as seen in one channel."""

    channel: str        # e.g. "#chan"
    display_nick: str   # channel-scoped display name


class ModerationLog:
    """Formats moderation events and appends them to a bounded log.

    The clock is any zero-argument callable returning the timestamp text,
    so tests can pin it.
    """

    def __init__(
        self,
        log_buffer: BoundedAppendLog | None = None,
        clock: Callable[[], str] = current_time,
        preview_length: int = PREVIEW_LENGTH,
    ) -> None:
        self._log = log_buffer if log_buffer is not None else BoundedAppendLog()
        self._clock = clock
        self._preview_length = preview_length

    @property
    def log(self) -> BoundedAppendLog:
        return self._log

    @property
    def displayed_count(self) -> int:
        return self._log.displayed_count

    def snapshot(self) -> list[LogEntry]:
        return self._log.snapshot()

    def add_ban(
        self,
        user: ChatUser,
        duration: int,
        reason: str | None = None,
        target_msg_id: str | None = None,
    ) -> LogEntry:
        """Record a ban or timeout.

        Args:
            user: The affected user.
            duration: Seconds; ``0``/``-1`` for a ban, ``-2`` for a deleted message.
            reason: Moderator-supplied reason, if any.
            target_msg_id: Id of the targeted message, if any.
        """
        text = format_ban_entry(
            self._clock(), user.channel, user.display_nick, duration, reason,
        )
        log.debug("Moderation action in %s (msg id %s): %s", user.channel, target_msg_id, text)
        return self._log.append(text)

    def add_deleted_message(
        self,
        user: ChatUser,
        target_msg_id: str | None,
        message: str | None,
    ) -> LogEntry:
        """Record a deleted message with a preview of its content."""
        text = format_deleted_entry(
            self._clock(), user.channel, user.display_nick, message,
            preview_length=self._preview_length,
        )
        log.debug("Message %s deleted in %s", target_msg_id, user.channel)
        return self._log.append(text)

    def clear(self) -> None:
        self._log.clear()
