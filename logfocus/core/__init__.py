"""Core logic for logfocus.

This module provides the filter engine:
- FilterStore: The ordered, capacity-bounded filter list
- FilterFile: JSON persistence of the filter list
- MatchEngine: Regex matching of lines against filters
- HighlightProjector: Line highlights for highlighted filters
- FocusViewBuilder: Focus views from shown filters
- FilterSession: The command surface used by the CLI and TUI
- ConfigLoader: Configuration file loading
"""

from logfocus.core.config import (
    Config,
    ConfigError,
    ConfigLoader,
    FilterConfig,
)
from logfocus.core.errors import (
    CapacityExceededError,
    FilterFileError,
    FilterNotFoundError,
    FilterParseError,
    InvalidColorError,
    InvalidPatternError,
    LogFocusError,
)
from logfocus.core.focus import FocusStats, FocusViewBuilder
from logfocus.core.highlight import HighlightProjector, LineMark
from logfocus.core.host import NotificationSink, RenderSurface, Severity, TextSource
from logfocus.core.match import MatchEngine
from logfocus.core.persistence import FilterFile
from logfocus.core.session import FilterSession
from logfocus.core.store import FilterStore

__all__ = [
    "CapacityExceededError",
    "Config",
    "ConfigError",
    "ConfigLoader",
    "FilterConfig",
    "FilterFile",
    "FilterFileError",
    "FilterNotFoundError",
    "FilterParseError",
    "FilterSession",
    "FilterStore",
    "FocusStats",
    "FocusViewBuilder",
    "HighlightProjector",
    "InvalidColorError",
    "InvalidPatternError",
    "LineMark",
    "LogFocusError",
    "MatchEngine",
    "NotificationSink",
    "RenderSurface",
    "Severity",
    "TextSource",
]
