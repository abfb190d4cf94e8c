"""Structured log buffer for entry-list operations.

Saving and loading touch the filesystem, and the web front end mutates
a shared list on behalf of HTTP clients.  Both record what happened in
an in-memory log so callers (and tests) can inspect it afterwards:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — an append-only log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for records** — log records should be immutable.
    - **Filter returns a list, not a generator** — the log is typically
      small and callers usually want to iterate multiple times.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log records."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "persistence").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._records: list[LogEntry] = []

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new record to the log."""
        self._records.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return records matching the given criteria.

        Args:
            min_level: If set, only return records at or above this level.
            source: If set, only return records from this source.

        Returns:
            A filtered list of log records.

        """
        result = self._records
        if min_level is not None:
            result = [r for r in result if r.level >= min_level]
        if source is not None:
            result = [r for r in result if r.source == source]
        return result if result is not self._records else list(result)

    def clear(self) -> None:
        """Remove all log records."""
        self._records.clear()
