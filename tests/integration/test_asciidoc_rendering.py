"""
Integration tests for rendering with the real asciidoc engine.
"""

import sys

import pytest

from adocview.contexts.notifications import Severity

pytest.importorskip("asciidoc", reason="asciidoc not installed - pip install 'adocview[asciidoc]'")

from adocview.contexts.rendering import EngineManager, RenderError, RenderRequest, render_document  # noqa: E402


@pytest.fixture
def real_manager(bus):
    return EngineManager(bus=bus)


@pytest.mark.integration
def test_render_title_and_paragraph(tmp_path, real_manager, bus, webview_settings):
    request = RenderRequest(source_text="= Title\n\ncontent", base_dir=tmp_path, name="doc")

    html = render_document(request, manager=real_manager, bus=bus, settings=webview_settings)

    assert html.startswith('<div id="content">\n')
    assert html.endswith("\n</div>")
    assert "content" in html
    assert "<html" not in html
    assert "<head" not in html


@pytest.mark.integration
def test_render_resolves_includes_from_base_dir(tmp_path, real_manager, bus, webview_settings):
    (tmp_path / "chapter.adoc").write_text("Included paragraph.\n", encoding="utf-8")
    request = RenderRequest(
        source_text="= Book\n\ninclude::chapter.adoc[]\n", base_dir=tmp_path, name="book"
    )

    html = render_document(request, manager=real_manager, bus=bus, settings=webview_settings)

    assert "Included paragraph." in html


@pytest.mark.integration
def test_engine_is_shared_between_renders(tmp_path, real_manager, bus, webview_settings):
    for i in range(3):
        request = RenderRequest(source_text=f"Paragraph {i}.\n", base_dir=tmp_path, name=f"doc{i}")
        html = render_document(request, manager=real_manager, bus=bus, settings=webview_settings)
        assert f"Paragraph {i}." in html
        assert f"Paragraph {i - 1}." not in html

    assert real_manager.construction_count == 1


@pytest.mark.integration
def test_out_of_sequence_section_publishes_one_error(
    tmp_path, real_manager, bus, webview_settings
):
    """Test that an engine warning reaches the bus as a single important error."""
    request = RenderRequest(
        source_text="= Title\n\n== One\n\n==== Too deep\n", base_dir=tmp_path, name="doc"
    )

    render_document(request, manager=real_manager, bus=bus, settings=webview_settings)

    errors = [n for n in bus.notifications if n.severity is Severity.ERROR]
    assert len(errors) == 1
    assert errors[0].important is True
    assert "doc" in errors[0].title
    assert "section title out of sequence" in errors[0].body


@pytest.mark.integration
def test_missing_include_raises_render_error(tmp_path, real_manager, bus, webview_settings):
    """Test that a failed render raises RenderError, restores streams and keeps the engine usable."""
    before_out, before_err = sys.stdout, sys.stderr
    request = RenderRequest(
        source_text="= Book\n\ninclude::missing.adoc[]\n", base_dir=tmp_path, name="book"
    )

    with pytest.raises(RenderError) as excinfo:
        render_document(request, manager=real_manager, bus=bus, settings=webview_settings)

    assert excinfo.value.name == "book"
    assert sys.stdout is before_out
    assert sys.stderr is before_err
    assert any("book" in n.title for n in bus.notifications)

    html = render_document(
        RenderRequest(source_text="Still works.\n", base_dir=tmp_path, name="next"),
        manager=real_manager,
        bus=bus,
        settings=webview_settings,
    )
    assert "Still works." in html
