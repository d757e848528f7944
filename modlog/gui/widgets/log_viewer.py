"""Moderation log viewer widget."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QContextMenuEvent, QTextCursor
from PyQt6.QtWidgets import QMenu, QPlainTextEdit, QWidget

from ...core.constants import MAX_NUMBER_LINES, SCROLL_SLACK, TRIM_BATCH


class LogViewer(QPlainTextEdit):
    """Read-only scrolling log display for moderation events.

    Follows new lines only while the view is scrolled to the bottom. Once
    more than ``max_lines`` lines are shown, the oldest ``trim_batch`` lines
    are dropped in one go, so the view can hold up to ``trim_batch - 1``
    fewer lines than the logical buffer. Lines are counted as text blocks, so
    a message containing newlines takes up several of them.
    """

    MAX_LINES = MAX_NUMBER_LINES

    clear_requested = pyqtSignal()

    def __init__(
        self,
        max_lines: int = MAX_LINES,
        trim_batch: int = TRIM_BATCH,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._max_lines = max(1, max_lines)
        self._trim_batch = max(1, trim_batch)
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.setContentsMargins(2, 1, 2, 3)

    @property
    def max_lines(self) -> int:
        return self._max_lines

    @property
    def line_count(self) -> int:
        if self.document().isEmpty():
            return 0
        return self.document().blockCount()

    def is_at_bottom(self) -> bool:
        bar = self.verticalScrollBar()
        return bar.value() >= bar.maximum() - SCROLL_SLACK

    def log(self, message: str) -> None:
        """Append a message to the log."""
        bar = self.verticalScrollBar()
        follow = self.is_at_bottom()
        previous = bar.value()

        self.appendPlainText(message)
        removed = self._trim()

        if follow:
            bar.setValue(bar.maximum())
        else:
            bar.setValue(max(0, previous - removed))

    def clear_log(self) -> None:
        self.clear()

    def _trim(self) -> int:
        """Drop the oldest lines once over the limit. Returns lines removed."""
        count = self.line_count
        if count <= self._max_lines:
            return 0
        amount = min(max(self._trim_batch, count - self._max_lines), count - 1)
        cursor = QTextCursor(self.document())
        cursor.movePosition(QTextCursor.MoveOperation.Start)
        cursor.movePosition(
            QTextCursor.MoveOperation.NextBlock,
            QTextCursor.MoveMode.KeepAnchor,
            amount,
        )
        cursor.removeSelectedText()
        return amount

    # ── Context menu ────────────────────────────────────

    def build_context_menu(self) -> QMenu:
        """Standard text menu plus a "Clear Log" action."""
        menu = self.createStandardContextMenu()
        menu.addSeparator()
        act_clear = menu.addAction("Clear Log")
        if act_clear:
            act_clear.triggered.connect(self._on_clear_triggered)
        return menu

    def contextMenuEvent(self, event: QContextMenuEvent) -> None:  # noqa: N802
        menu = self.build_context_menu()
        menu.exec(event.globalPos())
        menu.deleteLater()

    def _on_clear_triggered(self) -> None:
        self.clear_requested.emit()
