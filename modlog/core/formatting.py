"""Text formatting for moderation log lines.

All helpers are pure functions except :func:`current_time`, which reads the
wall clock.
"""

from __future__ import annotations

from datetime import datetime

from .constants import (
    DAY,
    DURATION_BAN,
    DURATION_DELETED,
    DURATION_PERMANENT,
    ELLIPSIS,
    HOUR,
    MINUTE,
    PREVIEW_LENGTH,
    TIME_FORMAT,
    Action,
)


def current_time(fmt: str = TIME_FORMAT) -> str:
    """Current local time, e.g. ``"12:00:00"``."""
    return datetime.now().strftime(fmt)


def format_duration(seconds: int) -> str:
    """Compact duration using the largest whole unit: 45s, 1m, 1h, 1d.

    Integer division only, no rounding.
    """
    if seconds < MINUTE:
        return f"{seconds}s"
    if seconds < HOUR:
        return f"{seconds // MINUTE}m"
    if seconds < DAY:
        return f"{seconds // HOUR}h"
    return f"{seconds // DAY}d"


def action_for_duration(duration: int) -> tuple[Action, str]:
    """Map a ban/timeout duration to its action and duration text.

    ``0`` and ``-1`` are bans, ``-2`` a deleted message; every other value
    is a timeout.
    """
    if duration == DURATION_DELETED:
        return Action.DELETED, ""
    if duration in (DURATION_BAN, DURATION_PERMANENT):
        return Action.BAN, ""
    return Action.TIMEOUT, format_duration(duration)


def truncate_message(message: str, limit: int = PREVIEW_LENGTH) -> str:
    if len(message) > limit:
        return message[:limit] + ELLIPSIS
    return message


def format_ban_entry(
    time: str,
    channel: str,
    nick: str,
    duration: int,
    reason: str | None = None,
) -> str:
    """``[time] [channel] ACTION (duration): nick - Reason: reason``.

    The duration and reason segments are left out when empty.
    """
    action, duration_text = action_for_duration(duration)
    line = f"[{time}] [{channel}] {action.value}"
    if duration_text:
        line += f" ({duration_text})"
    line += f": {nick}"
    if reason:
        line += f" - Reason: {reason}"
    return line


def format_deleted_entry(
    time: str,
    channel: str,
    nick: str,
    message: str | None = None,
    preview_length: int = PREVIEW_LENGTH,
) -> str:
    """``[time] [channel] DELETED: nick - Message: "preview"``."""
    line = f"[{time}] [{channel}] {Action.DELETED.value}: {nick}"
    if message:
        line += f' - Message: "{truncate_message(message, preview_length)}"'
    return line


def format_title(title: str, count: int) -> str:
    """Window title with the entry count, e.g. ``"Moderation Log (12)"``."""
    if count > 0:
        return f"{title} ({count})"
    return title
