"""logfocus - highlight and focus log files with a small set of regex filters."""

__version__ = "0.1.0"
