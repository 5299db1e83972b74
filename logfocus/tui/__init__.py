"""Textual UI components for logfocus.

This module provides the TUI (Terminal User Interface) for interactive
filtering and highlighting of log files using the Textual framework.
"""

from logfocus.tui.app import LogFocusApp, run_tui

__all__ = ["LogFocusApp", "run_tui"]
