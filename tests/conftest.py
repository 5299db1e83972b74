"""Shared pytest fixtures for logfocus tests."""

import pytest
from pathlib import Path

from logfocus.core.config import Config, FilterConfig


class RecordingNotifier:
    """NotificationSink that keeps every message for assertions."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, message, severity="information"):
        self.messages.append((message, severity))

    @property
    def last(self):
        return self.messages[-1] if self.messages else None

    def severities(self):
        return [severity for _, severity in self.messages]


class RecordingSurface:
    """RenderSurface that records styles, marks and disposals."""

    def __init__(self):
        self.styles: dict[str, str] = {}
        self.marks: dict[int, tuple[str, list[int]]] = {}
        self.disposed: list[int] = []
        self._next = 0

    def define_style(self, name, color):
        self.styles[name] = color

    def mark_lines(self, style, line_numbers):
        self._next += 1
        self.marks[self._next] = (style, list(line_numbers))
        return self._next

    def dispose(self, handle):
        self.disposed.append(handle)
        del self.marks[handle]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def filters_file(tmp_path):
    """Path for a filters file that does not exist yet."""
    return tmp_path / "filters.json"


@pytest.fixture
def config(filters_file):
    """Config pointing at a temporary filters file."""
    return Config(filters=FilterConfig(file=filters_file, max_filters=20))


@pytest.fixture
def small_log(tmp_path):
    """Minimal log for unit tests."""
    content = """\
2023-01-01 10:00:00 INFO service started
2023-01-01 10:00:01 DEBUG polling queue
2023-01-01 10:00:02 ERROR disk full on /var
2023-01-01 10:00:03 WARN retrying write
2023-01-01 10:00:04 ERROR write failed [code=28]
2023-01-01 10:00:05 INFO shutting down
"""
    f = tmp_path / "app.log"
    f.write_text(content)
    return f


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Run with an empty home directory and no git root override."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("LOGFOCUS_GIT_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


# Pytest markers
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark test as slow running")
