"""Shared fixtures: an in-memory engine and a synchronous notification bus."""

import sys
import threading
import time

import pytest

from adocview.contexts.rendering.lifecycle import EngineManager
from adocview.settings import PreviewBackend, PreviewSettings

TITLE_FRAGMENT = '<h1>Title</h1>\n<div class="paragraph"><p>content</p></div>'


class FakeEngine:
    """
    Stand-in for the asciidoc engine.

    Prints the configured stdout/stderr text while rendering, optionally raises,
    and records how many renders ran at the same time.
    """

    def __init__(self, fragment=TITLE_FRAGMENT, stdout="", stderr="", error=None, delay=0.0):
        self.fragment = fragment
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.delay = delay
        self.diagnostics = []
        self.libraries = []
        self.extensions = []
        self.loaded_extension = b""
        self.calls = []
        self._active = 0
        self._active_lock = threading.Lock()
        self.max_active = 0

    def require_library(self, name):
        self.libraries.append(name)

    def load_extension(self, stream, name):
        self.loaded_extension = stream.read()
        return name

    def register_extension(self, hook):
        self.extensions.append(hook)

    def render(self, text, options):
        with self._active_lock:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            self.calls.append((text, options))
            if self.stdout:
                sys.stdout.write(self.stdout)
            if self.stderr:
                sys.stderr.write(self.stderr)
            if self.delay:
                time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.fragment
        finally:
            with self._active_lock:
                self._active -= 1


class RecordingBus:
    """Bus that keeps notifications in a list instead of delivering them."""

    def __init__(self):
        self.notifications = []

    def notify(self, notification):
        self.notifications.append(notification)


@pytest.fixture
def bus():
    return RecordingBus()


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def manager(engine, bus):
    return EngineManager(factory=lambda: engine, bus=bus)


@pytest.fixture
def webview_settings(tmp_path):
    return PreviewSettings(
        preview_backend=PreviewBackend.WEBVIEW,
        logs_path=tmp_path / "logs",
        notification_log=tmp_path / "logs" / "notifications.log",
    )


@pytest.fixture
def browser_settings(tmp_path):
    return PreviewSettings(
        preview_backend=PreviewBackend.BROWSER,
        logs_path=tmp_path / "logs",
        notification_log=tmp_path / "logs" / "notifications.log",
    )


@pytest.fixture
def make_engine():
    """Factory for engines with custom behaviour: make_engine(stdout="...", error=...)."""
    return FakeEngine
