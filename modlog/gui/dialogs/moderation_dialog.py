"""Moderation log dialog — bans, timeouts, and deleted messages as they happen."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from PyQt6.QtCore import QByteArray, pyqtSignal
from PyQt6.QtGui import QHideEvent
from PyQt6.QtWidgets import QDialog, QVBoxLayout, QWidget

from ...core.config import ConfigManager, get_config
from ...core.formatting import current_time, format_title
from ...core.log_buffer import BoundedAppendLog, LogEntry
from ...core.moderation_log import ChatUser, ModerationLog
from ..widgets.log_viewer import LogViewer

log = logging.getLogger(__name__)


class ModerationLogDialog(QDialog):
    """Dialog showing the moderation log with an entry counter in the title.

    Owns its :class:`ModerationLog` and renders it as a log sink.
    ``new_message`` fires after every entry so the host window can
    highlight the dialog while it is hidden or inactive.
    """

    new_message = pyqtSignal()

    def __init__(
        self,
        config: ConfigManager | None = None,
        clock: Callable[[], str] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config or get_config()
        self._title = self._config.get("ui.title")
        self._short_title = self._config.get("ui.short_title")
        self._has_new_message = False

        if clock is None:
            clock = partial(current_time, self._config.get("log.time_format"))
        self._max_lines = self._config.get_positive_int("log.max_lines")
        buffer = BoundedAppendLog(self._max_lines)
        self._moderation = ModerationLog(
            buffer,
            clock=clock,
            preview_length=self._config.get_positive_int("log.preview_length"),
        )

        self._build_ui()
        self._moderation.log.add_sink(self)
        self._update_title(0)
        self._restore_geometry()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._viewer = LogViewer(
            max_lines=self._max_lines,
            trim_batch=self._config.get_positive_int("log.trim_batch"),
        )
        self._viewer.clear_requested.connect(self.clear)
        layout.addWidget(self._viewer)

        self.resize(400, 300)

    # ── Public API ──────────────────────────────────────

    @property
    def viewer(self) -> LogViewer:
        return self._viewer

    @property
    def moderation_log(self) -> ModerationLog:
        return self._moderation

    @property
    def short_title(self) -> str:
        return self._short_title

    @property
    def displayed_count(self) -> int:
        return self._moderation.displayed_count

    @property
    def has_new_message(self) -> bool:
        return self._has_new_message

    def add_ban(
        self,
        user: ChatUser,
        duration: int,
        reason: str | None = None,
        target_msg_id: str | None = None,
    ) -> LogEntry:
        return self._moderation.add_ban(user, duration, reason, target_msg_id)

    def add_deleted_message(
        self, user: ChatUser, target_msg_id: str | None, message: str | None,
    ) -> LogEntry:
        return self._moderation.add_deleted_message(user, target_msg_id, message)

    def clear(self) -> None:
        """Clear all log entries."""
        self._moderation.clear()

    def show_dialog(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()
        self._has_new_message = False

    # ── Log sink ────────────────────────────────────────

    def on_append(self, entry: LogEntry, displayed_count: int) -> None:
        try:
            self._viewer.log(entry.text)
        except Exception:
            log.exception("Failed to render log entry #%d", entry.sequence)
        self._update_title(displayed_count)
        if not self.isVisible() or not self.isActiveWindow():
            self._has_new_message = True
        self.new_message.emit()

    def on_clear(self) -> None:
        try:
            self._viewer.clear_log()
        except Exception:
            log.exception("Failed to clear log view")
        self._update_title(0)

    # ── Internals ───────────────────────────────────────

    def _update_title(self, count: int) -> None:
        self.setWindowTitle(format_title(self._title, count))

    def _restore_geometry(self) -> None:
        geometry_b64 = self._config.get("window.geometry")
        if not geometry_b64:
            return
        geometry = QByteArray.fromBase64(geometry_b64.encode("ascii"))
        if not self.restoreGeometry(geometry):
            log.warning("Ignoring invalid saved window geometry")

    def _save_geometry(self) -> None:
        geometry_b64 = self.saveGeometry().toBase64().data().decode("ascii")
        self._config.set("window.geometry", geometry_b64)

    def hideEvent(self, event: QHideEvent) -> None:  # noqa: N802
        self._save_geometry()
        super().hideEvent(event)
