"""Log capacity, duration sentinels, and the Action enum."""

from enum import Enum


class Action(Enum):
    """Moderation action shown in a log line."""
    BAN = "BAN"
    TIMEOUT = "TIMEOUT"
    DELETED = "DELETED"


# Buffer / view bounds
MAX_NUMBER_LINES = 500
TRIM_BATCH = 10          # rendered lines removed at once when over the limit
SCROLL_SLACK = 4         # scrollbar steps still counted as "at the bottom"

# Deleted-message preview
PREVIEW_LENGTH = 100
ELLIPSIS = "..."

# Duration sentinels sent by the chat client (seconds otherwise)
DURATION_BAN = 0
DURATION_PERMANENT = -1
DURATION_DELETED = -2

# Duration unit thresholds in seconds
MINUTE = 60
HOUR = 3600
DAY = 86400

TIME_FORMAT = "%H:%M:%S"

TITLE = "Moderation Log"
SHORT_TITLE = "Mod Log"
