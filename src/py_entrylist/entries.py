"""Entry lists — ordered name/value pairs that tolerate duplicate names.

Parsed query strings, form posts, cookies and simple ``name=value``
configuration files all share one shape: a sequence of string pairs in
the order they were written, where the same name may appear more than
once (``?tag=a&tag=b``).  A plain ``dict`` loses both the order of
repeated names and every value but one, so we keep a list.

Key design properties:
    - **Order matters** — entries stay in insertion order until the
      caller reverses or removes them.
    - **Duplicates are allowed** — lookups choose between the *first*
      match, the *last* match (later values override earlier ones
      without deleting them), or a case-insensitive first match.
    - **Names are never empty** — inserting with an empty name is
      rejected and leaves the list unchanged.
    - **One mutable container** — every operation works in place, so an
      empty list is still an ``EntryList`` object, never ``None``.

Positions reported by ``position`` are 1-based: 0 means "not present".
"""

import re
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TextIO

from py_entrylist.codec import strcase_equal

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


class EntryError(Exception):
    """Raise when an entry would violate its invariants."""


class InsertMode(StrEnum):
    """How ``EntryList.add`` treats a name that is already present."""

    APPEND = "append"
    REPLACE = "replace"


class MatchMode(StrEnum):
    """Which entry a lookup selects when several share a name.

    - FIRST — the earliest entry with exactly this name.
    - LAST — the most recently inserted entry with exactly this name.
    - NOCASE — the earliest entry whose name matches ignoring ASCII case.
    """

    FIRST = "first"
    LAST = "last"
    NOCASE = "nocase"


@dataclass
class Entry:
    """A single name/value pair.

    The value may be replaced in place; the name never changes once the
    entry exists.
    """

    name: str
    value: str

    def __post_init__(self) -> None:
        """Reject empty names."""
        if not self.name:
            msg = "Entry name must not be empty"
            raise EntryError(msg)

    def __setattr__(self, attr: str, value: object) -> None:
        """Allow the value to change but never rebind the name."""
        if attr == "name" and "name" in self.__dict__:
            msg = f"Entry name '{self.name}' cannot be changed"
            raise EntryError(msg)
        super().__setattr__(attr, value)


def parse_int(text: str) -> int:
    """Parse the leading base-10 integer in *text*, like C ``atoi``.

    Leading whitespace and a sign are accepted and trailing characters
    are ignored, so ``" 42px"`` is 42.  Text with no leading digits is 0.
    """
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class EntryList:
    """An ordered, mutable list of entries with duplicate names permitted."""

    def __init__(self) -> None:
        """Create an empty list."""
        self._entries: list[Entry] = []

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "EntryList":
        """Build a list by appending each ``(name, value)`` pair in order.

        Pairs with an empty name are skipped, as with ``add``.
        """
        entries = cls()
        for name, value in pairs:
            entries.add(name, value)
        return entries

    # -- Mutation -----------------------------------------------------------

    def add(
        self,
        name: str,
        value: str,
        mode: InsertMode = InsertMode.APPEND,
    ) -> Entry | None:
        """Insert a name/value pair.

        Args:
            name: The entry name; must not be empty.
            value: The entry value.
            mode: APPEND always adds a new entry at the end.  REPLACE
                overwrites the value of the first entry with exactly this
                name (keeping its position), and appends if there is none.

        Returns:
            The entry created or updated, or None if *name* was empty.

        """
        if not name:
            return None

        if mode is InsertMode.REPLACE:
            for entry in self._entries:
                if entry.name == name:
                    entry.value = value
                    return entry

        entry = Entry(name=name, value=value)
        self._entries.append(entry)
        return entry

    def remove(self, name: str) -> int:
        """Remove every entry named exactly *name*.

        The remaining entries keep their relative order.

        Returns:
            How many entries were removed (0 for an empty or absent name).

        """
        if not name:
            return 0
        kept = [entry for entry in self._entries if entry.name != name]
        removed = len(self._entries) - len(kept)
        self._entries = kept
        return removed

    def reverse(self) -> None:
        """Reverse the order of the entries in place."""
        self._entries.reverse()

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    # -- Queries ------------------------------------------------------------

    def find(self, name: str, match: MatchMode = MatchMode.FIRST) -> Entry | None:
        """Return the entry selected by *match*, or None if there is none."""
        if match is MatchMode.LAST:
            found = None
            for entry in self._entries:
                if entry.name == name:
                    found = entry
            return found

        for entry in self._entries:
            if match is MatchMode.NOCASE:
                if strcase_equal(entry.name, name):
                    return entry
            elif entry.name == name:
                return entry
        return None

    def value(self, name: str, match: MatchMode = MatchMode.FIRST) -> str | None:
        """Return the value of the entry selected by *match*, or None."""
        entry = self.find(name, match)
        return entry.value if entry is not None else None

    def int_value(self, name: str, match: MatchMode = MatchMode.FIRST) -> int:
        """Return the selected value parsed as an integer.

        A missing name and a non-numeric value both give 0; callers that
        need to tell them apart should use ``value`` instead.
        """
        text = self.value(name, match)
        if text is None:
            return 0
        return parse_int(text)

    def position(self, name: str) -> int:
        """Return the 1-based position of the first entry named *name*, or 0."""
        for number, entry in enumerate(self._entries, start=1):
            if entry.name == name:
                return number
        return 0

    def items(self) -> list[tuple[str, str]]:
        """Return all ``(name, value)`` pairs in order."""
        return [(entry.name, entry.value) for entry in self._entries]

    def debug_print(self, stream: TextIO | None = None) -> int:
        """Write one ``'name' = 'value'`` line per entry for debugging.

        Args:
            stream: Where to write (default: standard output).

        Returns:
            The number of entries printed.

        """
        out = stream if stream is not None else sys.stdout
        count = 0
        for entry in self._entries:
            out.write(f"'{entry.name}' = '{entry.value}'\n")
            count += 1
        return count

    def __iter__(self) -> Iterator[Entry]:
        """Iterate over the entries in their current order."""
        return iter(self._entries)

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        """Return True if some entry is named exactly *name*."""
        return any(entry.name == name for entry in self._entries)

    def __repr__(self) -> str:
        """Show the pairs, e.g. ``EntryList([('a', '1')])``."""
        return f"EntryList({self.items()!r})"
