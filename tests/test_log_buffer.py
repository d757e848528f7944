"""Tests for the bounded append log — pure Python, no Qt dependency."""

import pytest

from modlog.core.log_buffer import BoundedAppendLog, LogEntry


def _texts(log):
    return [entry.text for entry in log.snapshot()]


class RecordingSink:
    def __init__(self):
        self.events = []

    def on_append(self, entry, displayed_count):
        self.events.append(("append", entry.text, displayed_count))

    def on_clear(self):
        self.events.append(("clear",))


# ── BoundedAppendLog tests ─────────────────────────────────


class TestBoundedAppendLog:
    def test_initial_state(self):
        log = BoundedAppendLog(capacity=5)
        assert len(log) == 0
        assert log.displayed_count == 0
        assert log.snapshot() == []
        assert log.capacity == 5

    def test_default_capacity(self):
        assert BoundedAppendLog().capacity == 500

    @pytest.mark.parametrize("capacity", [0, -1, -500])
    def test_non_positive_capacity_rejected(self, capacity):
        with pytest.raises(ValueError):
            BoundedAppendLog(capacity)

    @pytest.mark.parametrize("text", [None, 42, b"bytes"])
    def test_non_string_text_rejected(self, text):
        log = BoundedAppendLog(3)
        with pytest.raises(TypeError):
            log.append(text)
        assert log.displayed_count == 0

    def test_append_returns_entry(self):
        log = BoundedAppendLog(3)
        entry = log.append("A")
        assert entry.text == "A"
        assert log.snapshot() == [entry]

    def test_empty_string_is_a_valid_entry(self):
        log = BoundedAppendLog(3)
        log.append("")
        assert log.displayed_count == 1
        assert _texts(log) == [""]

    @pytest.mark.parametrize("extra", [0, 1, 7, 20])
    def test_length_bounded_and_count_total(self, extra):
        capacity = 5
        log = BoundedAppendLog(capacity)
        for i in range(capacity + extra):
            log.append(f"line {i}")
            assert len(log.snapshot()) <= capacity
        assert log.displayed_count == capacity + extra
        assert _texts(log)[-1] == f"line {capacity + extra - 1}"

    def test_evicts_oldest_first(self):
        log = BoundedAppendLog(capacity=3)
        for text in "ABCD":
            log.append(text)
        assert _texts(log) == ["B", "C", "D"]
        assert log.displayed_count == 4

    def test_clear_resets(self):
        log = BoundedAppendLog(capacity=3)
        for text in "ABCD":
            log.append(text)
        log.clear()
        assert log.snapshot() == []
        assert log.snapshot() == []
        assert log.displayed_count == 0

    def test_clear_is_idempotent(self):
        log = BoundedAppendLog(capacity=3)
        log.clear()
        log.clear()
        assert len(log) == 0
        assert log.displayed_count == 0

    def test_sequence_strictly_increasing(self):
        log = BoundedAppendLog(capacity=4)
        for i in range(10):
            log.append(str(i))
        sequences = [e.sequence for e in log.snapshot()]
        assert sequences == sorted(sequences)
        assert len(set(sequences)) == len(sequences)

    def test_order_preserved_while_retained(self):
        log = BoundedAppendLog(capacity=10)
        first = log.append("first")
        second = log.append("second")
        snap = log.snapshot()
        assert snap.index(first) < snap.index(second)

    def test_sequence_not_reused_after_clear(self):
        log = BoundedAppendLog(capacity=3)
        before = log.append("A")
        log.clear()
        after = log.append("B")
        assert after.sequence > before.sequence
        assert log.displayed_count == 1

    def test_snapshot_is_copy(self):
        log = BoundedAppendLog(capacity=3)
        log.append("A")
        snap = log.snapshot()
        snap.clear()
        assert len(log) == 1


# ── Sink tests ─────────────────────────────────────────────


class TestSinks:
    def test_sink_sees_appends_and_clear_in_order(self):
        log = BoundedAppendLog(capacity=2)
        sink = RecordingSink()
        log.add_sink(sink)
        log.append("A")
        log.append("B")
        log.append("C")
        log.clear()
        assert sink.events == [
            ("append", "A", 1),
            ("append", "B", 2),
            ("append", "C", 3),
            ("clear",),
        ]

    def test_add_sink_twice_notifies_once(self):
        log = BoundedAppendLog(capacity=2)
        sink = RecordingSink()
        log.add_sink(sink)
        log.add_sink(sink)
        log.append("A")
        assert len(sink.events) == 1

    def test_removed_sink_not_notified(self):
        log = BoundedAppendLog(capacity=2)
        sink = RecordingSink()
        log.add_sink(sink)
        log.remove_sink(sink)
        log.remove_sink(sink)
        log.append("A")
        assert sink.events == []

    def test_sink_error_propagates(self):
        class FailingSink(RecordingSink):
            def on_append(self, entry, displayed_count):
                raise RuntimeError("render failed")

        log = BoundedAppendLog(capacity=2)
        log.add_sink(FailingSink())
        with pytest.raises(RuntimeError):
            log.append("A")
        # State was updated before notification
        assert log.displayed_count == 1


# ── LogEntry tests ─────────────────────────────────────────


class TestLogEntry:
    def test_frozen(self):
        entry = LogEntry(sequence=0, text="A")
        with pytest.raises(AttributeError):
            entry.text = "B"
