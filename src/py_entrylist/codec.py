"""Small text primitives shared by the entry list and its file format.

- **Percent-encoding** — the escaping used for URL query values.  Every
  byte outside ``A-Z a-z 0-9 - _ . ~`` is written as ``%XX`` so a value
  can sit safely on a single ``name=value`` line.
- **ASCII case folding** — header-style names compare case-insensitively,
  but only for ASCII letters.  ``str.lower`` would also fold non-ASCII
  letters, so we use a fixed translation table instead.
- **GMT timestamps** — the human-readable date written into file headers.
"""

import string
import time
from urllib.parse import quote, unquote_plus

GMT_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def url_encode(text: str) -> str:
    """Percent-encode *text* for use as a query or file value.

    Spaces become ``%20`` (not ``+``) so the result never needs a
    second, form-specific decoding rule.
    """
    return quote(text, safe="")


def url_decode(text: str) -> str:
    """Decode ``%XX`` escapes and ``+`` (as a space) in *text*.

    Malformed escapes such as ``%zz`` are left as they are.
    """
    return unquote_plus(text)


def ascii_fold(text: str) -> str:
    """Lower-case the ASCII letters of *text*, leaving everything else."""
    return text.translate(_ASCII_FOLD)


def strcase_equal(a: str, b: str) -> bool:
    """Compare two strings ignoring ASCII case."""
    return len(a) == len(b) and ascii_fold(a) == ascii_fold(b)


def format_gmt(when: float | None = None) -> str:
    """Format a Unix timestamp (default: now) as a GMT date string.

    Example: ``Mon, 19 Oct 2026 10:00:00 GMT``.
    """
    return time.strftime(GMT_FORMAT, time.gmtime(when))
