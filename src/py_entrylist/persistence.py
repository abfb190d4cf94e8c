"""Entry-list persistence — save to and load from a text file.

The on-disk format is line-oriented and human-editable::

    # automatically generated by py-entrylist at Mon, 19 Oct 2026 10:00:00 GMT.
    # /etc/app/settings.conf
    user=alice
    role=admin

    - ``save_entries(entries, path)`` — write the header and one line per entry.
    - ``load_entries(path)`` — parse the file back into an EntryList.

Values can optionally be percent-encoded on save and decoded on load.
The two flags are independent: it is up to the caller to pair them.
Names are never encoded, and a newline inside a name or (unencoded)
value will break the line format.

Failures do not raise.  An unwritable destination makes ``save_entries``
return -1 and an unreadable source makes ``load_entries`` return None;
either way the reason is recorded in the optional logger.  A save that
fails halfway leaves whatever was already written.
"""

from pathlib import Path

from py_entrylist.codec import format_gmt, url_decode, url_encode
from py_entrylist.entries import EntryList
from py_entrylist.kvfile import load_key_value_lines
from py_entrylist.logging import Logger, LogLevel

PRODUCER = "py-entrylist"

_SOURCE = "persistence"


def _log(logger: Logger | None, level: LogLevel, message: str) -> None:
    if logger is not None:
        logger.log(level, message, source=_SOURCE)


def save_entries(
    entries: EntryList,
    path: Path,
    *,
    encode_values: bool = False,
    logger: Logger | None = None,
) -> int:
    """Write *entries* to *path* in ``name=value`` format.

    Args:
        entries: The list to save, written in its current order.
        path: The file to create or overwrite.
        encode_values: Percent-encode each value before writing it.
        logger: Optional log buffer for success and failure records.

    Returns:
        The number of entries written, or -1 if *path* could not be
        written.

    """
    try:
        with path.open("w", encoding="utf-8", newline="\n") as fp:
            fp.write(f"# automatically generated by {PRODUCER} at {format_gmt()}.\n")
            fp.write(f"# {path}\n")
            count = 0
            for entry in entries:
                value = url_encode(entry.value) if encode_values else entry.value
                fp.write(f"{entry.name}={value}\n")
                count += 1
    except (OSError, UnicodeEncodeError) as e:
        _log(logger, LogLevel.ERROR, f"cannot save to {path}: {e}")
        return -1

    _log(logger, LogLevel.INFO, f"saved {count} entries to {path}")
    return count


def load_entries(
    path: Path,
    *,
    decode_values: bool = False,
    logger: Logger | None = None,
) -> EntryList | None:
    """Load entries previously written by ``save_entries`` (or by hand).

    Args:
        path: The file to read.
        decode_values: Percent-decode every value after parsing.
        logger: Optional log buffer for success and failure records.

    Returns:
        The loaded entries, or None if *path* could not be read.

    """
    entries = load_key_value_lines(path)
    if entries is None:
        _log(logger, LogLevel.ERROR, f"cannot load from {path}")
        return None

    if decode_values:
        for entry in entries:
            entry.value = url_decode(entry.value)

    _log(logger, LogLevel.INFO, f"loaded {len(entries)} entries from {path}")
    return entries
