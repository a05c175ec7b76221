"""Tests for the history file codec."""

from __future__ import annotations

import io

import pytest

from histfile.core.codec import (
    TRANSITIONS,
    Action,
    DecodeState,
    LineKind,
    classify,
    decode,
    decode_text,
    encode,
    encode_text,
    iter_entries,
    parse_timestamp,
    write_entries,
)
from histfile.core.types import Entry, FormatError, HistoryError


class TestClassify:
    """Tests for line classification."""

    def test_hash_prefix_is_marker(self):
        """Lines starting with # are markers."""
        assert classify("#123") is LineKind.MARKER
        assert classify("#") is LineKind.MARKER

    def test_other_lines_are_items(self):
        """Everything else is an item, including indented hashes."""
        assert classify("ls -la") is LineKind.ITEM
        assert classify(" #123") is LineKind.ITEM
        assert classify("") is LineKind.ITEM


class TestTransitions:
    """Tests for the decoder transition table."""

    def test_table_covers_every_state_and_line_kind(self):
        """Every (state, kind) pair has a transition."""
        for state in DecodeState:
            for kind in LineKind:
                assert (state, kind) in TRANSITIONS

    def test_marker_while_awaiting_item_stays_awaiting_item(self):
        """A second marker replaces the timestamp without emitting."""
        action, next_state = TRANSITIONS[(DecodeState.AWAITING_ITEM, LineKind.MARKER)]
        assert action is Action.CAPTURE_TIMESTAMP
        assert next_state is DecodeState.AWAITING_ITEM

    def test_item_without_timestamp_is_legacy(self):
        """An item with no captured timestamp emits a legacy entry."""
        action, next_state = TRANSITIONS[(DecodeState.AWAITING_TIMESTAMP, LineKind.ITEM)]
        assert action is Action.EMIT_LEGACY
        assert next_state is DecodeState.AWAITING_TIMESTAMP

    def test_item_after_marker_returns_to_awaiting_timestamp(self):
        """A stamped item resets the decoder."""
        action, next_state = TRANSITIONS[(DecodeState.AWAITING_ITEM, LineKind.ITEM)]
        assert action is Action.EMIT_STAMPED
        assert next_state is DecodeState.AWAITING_TIMESTAMP


class TestParseTimestamp:
    """Tests for marker line parsing."""

    def test_parses_decimal(self):
        """Digits after # are the timestamp."""
        assert parse_timestamp("#1735300800000") == 1735300800000

    def test_parses_signed(self):
        """A leading sign is accepted."""
        assert parse_timestamp("#-5") == -5
        assert parse_timestamp("#+7") == 7

    @pytest.mark.parametrize("line", ["#", "#abc", "# 12", "#12 ", "#1_000", "#1.5", "##12"])
    def test_rejects_non_decimal(self, line: str):
        """Anything but a plain integer raises FormatError."""
        with pytest.raises(FormatError):
            parse_timestamp(line)

    def test_error_carries_position(self):
        """FormatError records the line number and text."""
        with pytest.raises(FormatError) as exc_info:
            parse_timestamp("#oops", line_number=7)

        assert exc_info.value.line_number == 7
        assert exc_info.value.line == "#oops"
        assert "line 7" in str(exc_info.value)


class TestDecode:
    """Tests for decoding lines into entries."""

    def test_empty_input(self):
        """No lines, no entries."""
        assert decode([]) == []
        assert decode_text("") == []

    def test_stamped_entries(self):
        """Marker/item pairs decode in order."""
        entries = decode_text("#100\nls\n#200\npwd\n")
        assert entries == [Entry("ls", 100), Entry("pwd", 200)]

    def test_legacy_lines_get_zero_timestamp(self):
        """A file with no markers yields one entry per line, timestamp 0."""
        entries = decode_text("ls\npwd\ncd /tmp\n")
        assert entries == [Entry("ls", 0), Entry("pwd", 0), Entry("cd /tmp", 0)]

    def test_legacy_then_stamped(self):
        """Legacy lines may precede stamped entries."""
        entries = decode_text("old command\n#42\nnew command\n")
        assert entries == [Entry("old command", 0), Entry("new command", 42)]

    def test_last_marker_wins(self):
        """Consecutive markers: the last one stamps the item."""
        assert decode_text("#10\n#20\nhello\n") == [Entry("hello", 20)]

    def test_dangling_marker_dropped(self):
        """A marker with no following item produces nothing."""
        assert decode_text("#10\n") == []
        assert decode_text("#10\nls\n#20\n") == [Entry("ls", 10)]

    def test_timestamp_not_reused_after_item(self):
        """An item after a stamped item is legacy, not re-stamped."""
        assert decode_text("#10\nls\npwd\n") == [Entry("ls", 10), Entry("pwd", 0)]

    def test_empty_item_line(self):
        """An empty line after a marker is an empty value."""
        assert decode_text("#10\n\n") == [Entry("", 10)]

    def test_missing_final_newline(self):
        """The last line need not be terminated."""
        assert decode_text("#10\nls") == [Entry("ls", 10)]

    def test_crlf_terminators_stripped(self):
        """Windows line endings are not part of the value."""
        assert decode(["#10\r\n", "ls\r\n"]) == [Entry("ls", 10)]

    def test_reads_open_stream(self):
        """A text stream can be decoded directly."""
        stream = io.StringIO("#1\na\n#2\nb\n")
        assert decode(stream) == [Entry("a", 1), Entry("b", 2)]

    def test_malformed_timestamp_raises(self):
        """A bad marker raises FormatError, which is a HistoryError."""
        with pytest.raises(FormatError) as exc_info:
            decode_text("#1\na\n#x\nb\n")

        assert isinstance(exc_info.value, HistoryError)
        assert exc_info.value.line_number == 3

    def test_malformed_marker_after_marker_raises(self):
        """The replacing marker is validated too."""
        with pytest.raises(FormatError):
            decode_text("#1\n#bad\nls\n")


class TestIterEntries:
    """Tests for streaming decode."""

    def test_is_lazy(self):
        """Entries before a bad line are yielded before the error."""
        stream = iter_entries(["#1", "a", "#2", "b", "#x", "c"])

        assert next(stream) == Entry("a", 1)
        assert next(stream) == Entry("b", 2)
        with pytest.raises(FormatError):
            next(stream)

    def test_stops_after_error(self):
        """Decoding does not resume after a FormatError."""
        stream = iter_entries(["#x", "a", "#1", "b"])

        with pytest.raises(FormatError):
            next(stream)
        with pytest.raises(StopIteration):
            next(stream)


class TestEncode:
    """Tests for encoding entries."""

    def test_two_lines_per_entry(self):
        """Each entry is a marker line then its value."""
        lines = list(encode([Entry("ls", 100), Entry("pwd", 0)]))
        assert lines == ["#100", "ls", "#0", "pwd"]

    def test_empty(self):
        """No entries, no lines."""
        assert list(encode([])) == []
        assert encode_text([]) == ""

    def test_encode_text_terminates_every_line(self):
        """Full file text ends each line with a newline."""
        assert encode_text([Entry("ls", 1)]) == "#1\nls\n"

    def test_write_entries(self):
        """write_entries writes to a stream and counts lines."""
        out = io.StringIO()

        count = write_entries(out, [Entry("a", 1), Entry("b", 2)])

        assert count == 4
        assert out.getvalue() == "#1\na\n#2\nb\n"

    def test_values_are_not_escaped(self):
        """Values are written verbatim."""
        assert encode_text([Entry("echo '#not a marker'", 5)]) == "#5\necho '#not a marker'\n"


class TestRoundTrip:
    """Encode then decode returns the same entries."""

    def test_round_trip(self):
        """Values, timestamps and order survive."""
        entries = [
            Entry("git status", 1735300800000),
            Entry("", 1735300800001),
            Entry("echo 'héllo wörld' | tr a-z A-Z", 1735300800001),
            Entry("  indented  ", 0),
            Entry("for i in 1 2 3; do echo $i; done", 1),
            Entry("git status", 1735300800000),
        ]

        assert decode_text(encode_text(entries)) == entries
