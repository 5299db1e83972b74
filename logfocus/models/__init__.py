"""Data models for logfocus."""

from logfocus.models.filter_def import (
    LogFilter,
    StoredFilter,
    is_valid_color,
    random_color,
)

__all__ = [
    "LogFilter",
    "StoredFilter",
    "is_valid_color",
    "random_color",
]
