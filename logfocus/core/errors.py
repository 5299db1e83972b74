"""Exceptions raised by the logfocus filter engine.

Every error carries the severity at which a host should report it. None of
them is fatal: the operation that raised did not take effect and the filter
list is unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from logfocus.core.host import Severity


class LogFocusError(Exception):
    """Base exception for logfocus errors."""

    severity: Severity = "error"


class FilterNotFoundError(LogFocusError):
    """Raised when a filter index is out of range."""

    severity: Severity = "warning"

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Filter not found: index {index} (have {count} filters)")


class CapacityExceededError(LogFocusError):
    """Raised when adding a filter would exceed the configured maximum."""

    severity: Severity = "warning"

    def __init__(self, max_filters: int):
        self.max_filters = max_filters
        super().__init__(f"Maximum number of filters reached ({max_filters}).")


class InvalidPatternError(LogFocusError):
    """Raised for an empty or unparseable regex pattern."""

    severity: Severity = "warning"

    def __init__(self, pattern: str, reason: Optional[str] = None):
        self.pattern = pattern
        self.reason = reason
        if not pattern:
            message = "Invalid pattern: pattern is empty"
        else:
            message = f"Invalid pattern {pattern!r}"
            if reason:
                message += f": {reason}"
        super().__init__(message)


class InvalidColorError(LogFocusError):
    """Raised when a color is not a ``#RRGGBB`` code."""

    severity: Severity = "warning"

    def __init__(self, color: str):
        self.color = color
        super().__init__(f"Invalid color {color!r}: expected #RRGGBB")


class FilterFileError(LogFocusError):
    """Raised when the filters file cannot be read or written."""

    severity: Severity = "error"

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message)


class FilterParseError(LogFocusError):
    """Raised when the filters file does not hold a valid filter list.

    Attributes:
        path: Path to the filters file (if available)
        entry_index: Index of the offending entry (if available)
    """

    severity: Severity = "warning"

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        entry_index: Optional[int] = None,
    ):
        self.path = path
        self.entry_index = entry_index

        parts = []
        if path:
            parts.append(f"Error in {path}")
        if entry_index is not None:
            parts.append(f"filter entry {entry_index + 1}")
        if parts:
            message = f"{' '.join(parts)}: {message}"

        super().__init__(message)
