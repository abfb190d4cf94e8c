"""Tests for saving entry lists to disk and loading them back.

The file format is a two-line comment header followed by one
``name=value`` line per entry.  Values may be percent-encoded on save
and decoded on load; the two flags are independent.
"""

import re
from pathlib import Path

import pytest

from py_entrylist.entries import EntryList, MatchMode
from py_entrylist.logging import Logger, LogLevel
from py_entrylist.persistence import PRODUCER, load_entries, save_entries

EXPECTED_SCENARIO_LENGTH = 3

_HEADER = re.compile(
    r"^# automatically generated by py-entrylist at "
    r"[A-Z][a-z]{2}, \d{2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} GMT\.$"
)


def _scenario() -> EntryList:
    """Build the user/role list used throughout these tests."""
    return EntryList.from_pairs([("user", "alice"), ("role", "admin"), ("role", "root")])


# -- Save ----------------------------------------------------------------------


class TestSave:
    """Verify the written file format."""

    def test_returns_count(self, tmp_path: Path) -> None:
        """save_entries returns how many entries were written."""
        assert save_entries(_scenario(), tmp_path / "out.conf") == EXPECTED_SCENARIO_LENGTH

    def test_header(self, tmp_path: Path) -> None:
        """The first two lines name the producer, the time and the path."""
        path = tmp_path / "out.conf"
        save_entries(_scenario(), path)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert PRODUCER == "py-entrylist"
        assert _HEADER.match(lines[0])
        assert lines[1] == f"# {path}"

    def test_body_in_list_order(self, tmp_path: Path) -> None:
        """Entries follow the header, one per line, in order."""
        path = tmp_path / "out.conf"
        save_entries(_scenario(), path)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[2:] == ["user=alice", "role=admin", "role=root"]

    def test_encoded_values(self, tmp_path: Path) -> None:
        """With encoding on, a space in a value is written as %20."""
        entries = EntryList.from_pairs([("user", "alice"), ("x", "a b")])
        path = tmp_path / "out.conf"
        save_entries(entries, path, encode_values=True)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[2:] == ["user=alice", "x=a%20b"]

    def test_names_never_encoded(self, tmp_path: Path) -> None:
        """Only values are encoded."""
        entries = EntryList.from_pairs([("my name", "a b")])
        path = tmp_path / "out.conf"
        save_entries(entries, path, encode_values=True)
        assert path.read_text(encoding="utf-8").splitlines()[2] == "my name=a%20b"

    def test_plain_values_written_raw(self, tmp_path: Path) -> None:
        """With encoding off, values are written unchanged."""
        entries = EntryList.from_pairs([("x", "a b")])
        path = tmp_path / "out.conf"
        save_entries(entries, path)
        assert path.read_text(encoding="utf-8").splitlines()[2] == "x=a b"

    def test_empty_list(self, tmp_path: Path) -> None:
        """An empty list writes only the header."""
        path = tmp_path / "out.conf"
        assert save_entries(EntryList(), path) == 0
        assert len(path.read_text(encoding="utf-8").splitlines()) == len(("header", "path"))

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        """A path inside a missing directory cannot be written."""
        assert save_entries(_scenario(), tmp_path / "missing" / "out.conf") == -1

    def test_failure_is_logged(self, tmp_path: Path) -> None:
        """A failed save records an ERROR in the logger."""
        logger = Logger()
        save_entries(_scenario(), tmp_path / "missing" / "out.conf", logger=logger)
        errors = logger.filter(min_level=LogLevel.ERROR, source="persistence")
        assert len(errors) == 1
        assert "cannot save" in errors[0].message

    @pytest.mark.parametrize("encode_values", [False, True])
    def test_unencodable_value(self, tmp_path: Path, encode_values: bool) -> None:
        """A value UTF-8 cannot encode makes the save fail with -1, not raise."""
        logger = Logger()
        entries = EntryList.from_pairs([("x", "\ud800")])
        path = tmp_path / "out.conf"
        assert save_entries(entries, path, encode_values=encode_values, logger=logger) == -1
        assert len(logger.filter(min_level=LogLevel.ERROR, source="persistence")) == 1

    def test_success_is_logged(self, tmp_path: Path) -> None:
        """A successful save records an INFO line with the count."""
        logger = Logger()
        save_entries(_scenario(), tmp_path / "out.conf", logger=logger)
        last = logger.filter()[-1]
        assert last.level is LogLevel.INFO
        assert "saved 3 entries" in last.message


# -- Load ----------------------------------------------------------------------


class TestLoad:
    """Verify reading saved files."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Loading a file that does not exist gives None."""
        assert load_entries(tmp_path / "nope.conf") is None

    def test_missing_file_is_logged(self, tmp_path: Path) -> None:
        """A failed load records an ERROR."""
        logger = Logger()
        load_entries(tmp_path / "nope.conf", logger=logger)
        assert logger.filter(min_level=LogLevel.ERROR)

    def test_header_lines_are_not_entries(self, tmp_path: Path) -> None:
        """The comment header is skipped on load."""
        path = tmp_path / "out.conf"
        save_entries(_scenario(), path)
        loaded = load_entries(path)
        assert loaded is not None
        assert len(loaded) == EXPECTED_SCENARIO_LENGTH

    def test_decode_values(self, tmp_path: Path) -> None:
        """With decoding on, escapes in values are decoded."""
        path = tmp_path / "hand.conf"
        path.write_text("x=a%20b\n", encoding="utf-8")
        loaded = load_entries(path, decode_values=True)
        assert loaded is not None
        assert loaded.value("x") == "a b"

    def test_flags_are_independent(self, tmp_path: Path) -> None:
        """Encoded files read without decoding keep their escapes."""
        path = tmp_path / "out.conf"
        save_entries(EntryList.from_pairs([("x", "a b")]), path, encode_values=True)
        loaded = load_entries(path)
        assert loaded is not None
        assert loaded.value("x") == "a%20b"

    def test_duplicates_survive(self, tmp_path: Path) -> None:
        """First and last matches are preserved through a save and load."""
        path = tmp_path / "out.conf"
        save_entries(_scenario(), path)
        loaded = load_entries(path)
        assert loaded is not None
        assert loaded.value("role", MatchMode.FIRST) == "admin"
        assert loaded.value("role", MatchMode.LAST) == "root"


# -- Round trip ----------------------------------------------------------------


class TestRoundTrip:
    """Verify that encoded saves load back unchanged."""

    def test_encoded_round_trip(self, tmp_path: Path) -> None:
        """Names, values and order survive encode-on-save and decode-on-load."""
        entries = EntryList.from_pairs(
            [
                ("user", "alice"),
                ("query", "a=1&b=2"),
                ("note", "  padded  "),
                ("path", "/tmp/x y#z"),
                ("plus", "1+1"),
                ("unicode", "héllo"),
                ("note", "second"),
            ]
        )
        path = tmp_path / "out.conf"
        save_entries(entries, path, encode_values=True)
        loaded = load_entries(path, decode_values=True)
        assert loaded is not None
        assert loaded.items() == entries.items()

    def test_plain_round_trip_keeps_unusual_characters(self, tmp_path: Path) -> None:
        """Without encoding, non-newline control and Unicode spacing characters survive."""
        entries = EntryList.from_pairs(
            [
                ("ff", "a\x0cb"),
                ("vt", "a\x0bb"),
                ("fs", "a\x1cb"),
                ("nel", "a\x85b"),
                ("ls", "a\u2028b"),
                ("nbsp", "\xa0v\xa0"),
            ]
        )
        path = tmp_path / "out.conf"
        save_entries(entries, path)
        loaded = load_entries(path)
        assert loaded is not None
        assert loaded.items() == entries.items()

    def test_round_trip_after_remove_and_reverse(self, tmp_path: Path) -> None:
        """The file reflects the list's current order."""
        entries = _scenario()
        entries.remove("user")
        entries.reverse()
        path = tmp_path / "out.conf"
        save_entries(entries, path, encode_values=True)
        loaded = load_entries(path, decode_values=True)
        assert loaded is not None
        assert loaded.items() == [("role", "root"), ("role", "admin")]
