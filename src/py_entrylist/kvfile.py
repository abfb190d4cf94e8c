r"""Comment-aware ``name=value`` file parser.

The format is the one written by ``py_entrylist.persistence`` and by
hand-edited configuration files alike::

    # comments start with a hash
    user = alice
    role=admin
    role=root

Rules:
    - Lines end at ``\n`` only; other line-break characters are data.
    - Surrounding ASCII whitespace is stripped from each line, name and
      value.  Other whitespace (such as ``\xa0``) is kept.
    - Blank lines and lines starting with ``#`` are skipped.
    - Each line splits at its *first* ``=``, so values may contain ``=``.
    - A line with no ``=`` becomes a name with an empty value.
    - Repeated names are all kept, in file order.
"""

from pathlib import Path

from py_entrylist.entries import EntryList

_COMMENT = "#"
_BLANKS = " \t\r\n\v\f"


def parse_key_value_lines(text: str) -> EntryList:
    """Parse ``name=value`` lines from *text* into a new EntryList."""
    entries = EntryList()
    for raw in text.split("\n"):
        line = raw.strip(_BLANKS)
        if not line or line.startswith(_COMMENT):
            continue
        name, _, value = line.partition("=")
        entries.add(name.strip(_BLANKS), value.strip(_BLANKS))
    return entries


def load_key_value_lines(path: Path) -> EntryList | None:
    """Read and parse a ``name=value`` file.

    Returns:
        The parsed entries, or None if the file cannot be read as UTF-8
        text.

    """
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return parse_key_value_lines(text)
