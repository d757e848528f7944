"""Dialog windows for the application."""

from .moderation_dialog import ModerationLogDialog

__all__ = ["ModerationLogDialog"]
