"""Ordered, duplicate-tolerant name/value lists and their file format.

Re-exports public symbols so callers can write::

    from py_entrylist import EntryList, save_entries
"""

from py_entrylist.codec import format_gmt, strcase_equal, url_decode, url_encode
from py_entrylist.entries import Entry, EntryError, EntryList, InsertMode, MatchMode
from py_entrylist.kvfile import load_key_value_lines, parse_key_value_lines
from py_entrylist.logging import LogEntry, Logger, LogLevel
from py_entrylist.persistence import PRODUCER, load_entries, save_entries

__all__ = [
    "PRODUCER",
    "Entry",
    "EntryError",
    "EntryList",
    "InsertMode",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MatchMode",
    "format_gmt",
    "load_entries",
    "load_key_value_lines",
    "parse_key_value_lines",
    "save_entries",
    "strcase_equal",
    "url_decode",
    "url_encode",
]
