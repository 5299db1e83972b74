"""Line styling shared by the terminal hosts.

LineStyleMap is a RenderSurface that records marks in memory instead of
drawing them, so the CLI and the TUI can ask which background a given
line should get.
"""

from __future__ import annotations

import itertools
from typing import Optional, Sequence


class LineStyleMap:
    """In-memory RenderSurface.

    When several marks cover one line, the mark placed first wins. The
    projector places marks in filter order, so the earliest filter in the
    list decides the line's color.
    """

    def __init__(self) -> None:
        self._styles: dict[str, str] = {}
        self._marks: dict[int, tuple[str, frozenset[int]]] = {}
        self._next_handle = itertools.count(1)

    def define_style(self, name: str, color: str) -> None:
        self._styles[name] = color

    def mark_lines(self, style: str, line_numbers: Sequence[int]) -> int:
        handle = next(self._next_handle)
        self._marks[handle] = (style, frozenset(line_numbers))
        return handle

    def dispose(self, handle: int) -> None:
        mark = self._marks.pop(handle, None)
        if mark is None:
            return
        style = mark[0]
        # Styles only live as long as a mark uses them
        if all(other != style for other, _ in self._marks.values()):
            self._styles.pop(style, None)

    @property
    def styles(self) -> dict[str, str]:
        return dict(self._styles)

    def __len__(self) -> int:
        return len(self._marks)

    def color_for_line(self, line_number: int) -> Optional[str]:
        """Return the background color of a 1-based line, or None."""
        for style, numbers in self._marks.values():
            if line_number in numbers:
                return self._styles.get(style)
        return None

    def rich_style_for_line(self, line_number: int) -> str:
        """Return a Rich style string for a line ("" when unmarked)."""
        color = self.color_for_line(line_number)
        return f"on {color}" if color else ""
