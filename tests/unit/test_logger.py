"""Unit tests for session logging."""

import sys

import pytest
from loguru import logger

from adocview import __version__
from adocview.contexts.rendering.logger import log_render_result, setup_rendering_logger
from adocview.utils.logger import distribution_version, session_header


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_session_header_records_versions():
    header = session_header({"Preview backend": "browser"})

    assert header["adocview"] == __version__
    assert "asciidoc" in header
    assert "pygments" in header
    assert header["Preview backend"] == "browser"


@pytest.mark.unit
def test_distribution_version_missing():
    assert distribution_version("no-such-distribution-xyz") == "not installed"


@pytest.mark.unit
def test_rendering_log_file(monkeypatch, tmp_path, restore_logger):
    """Test that a session log starts with the header and receives render results."""
    monkeypatch.setenv("ADOCVIEW_PREVIEW_BACKEND", "browser")

    log_file = setup_rendering_logger(tmp_path / "session", console=False)
    log_render_result("guide.adoc", False, 0.5, stderr=b"asciidoc: ERROR: line 1\n")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert log_file.name == "render.log"
    assert f"adocview: {__version__}" in text
    assert "Preview backend: browser" in text
    assert "[render] guide.adoc: rendering failed" in text
    assert "asciidoc: ERROR: line 1" in text
