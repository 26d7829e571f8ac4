"""
Preview Rendering Module

Renders AsciiDoc source to the HTML fragment shown in the preview panel using
the shared engine.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, PackageLoader, select_autoescape
from pygments.formatters import HtmlFormatter

from adocview import __version__
from adocview.contexts.notifications import NotificationBus, get_bus, publish
from adocview.contexts.rendering.capture import (
    add_diagnostics,
    capture_output,
    scoped_working_directory,
)
from adocview.contexts.rendering.exceptions import RenderError
from adocview.contexts.rendering.lifecycle import EngineManager, default_manager
from adocview.contexts.rendering.logger import _log_debug, log_render_result, log_render_start
from adocview.contexts.rendering.options import build_render_options
from adocview.settings import PreviewSettings, get_settings

CONTENT_OPEN = '<div id="content">\n'
CONTENT_CLOSE = "\n</div>"


@dataclass(frozen=True)
class RenderRequest:
    """
    One document to render.

    Attributes:
        source_text: AsciiDoc markup
        base_dir: Directory includes are resolved against
        images_dir: Where generated images (diagrams) should be written (optional)
        name: Document name, used to label notifications and log lines
    """

    source_text: str
    base_dir: Path
    images_dir: Optional[Path] = None
    name: str = "document"


def wrap_content(fragment: str) -> str:
    """Wrap a rendered fragment in the preview's content element."""
    return CONTENT_OPEN + fragment + CONTENT_CLOSE


def render_document(
    request: RenderRequest,
    manager: Optional[EngineManager] = None,
    bus: Optional[NotificationBus] = None,
    settings: Optional[PreviewSettings] = None,
) -> str:
    """
    Render a document to a wrapped HTML fragment.

    Every call holds the engine lock for its whole duration: the engine is not
    reentrant and output capture swaps process-wide streams. Whatever the engine
    prints is published as notifications, also when rendering fails.

    Args:
        request: Document to render
        manager: Engine manager (default: process-wide manager)
        bus: Notification bus (default: process-wide bus)
        settings: Preview settings (default: read from the environment)

    Returns:
        '<div id="content">\\n' + fragment + '\\n</div>'

    Raises:
        InitializationError: If the engine cannot be constructed
        RenderError: If the engine fails to render the document
    """
    manager = manager or default_manager
    bus = bus or get_bus()
    settings = settings or get_settings()

    handle = manager.ensure_engine(request.name)

    with handle.lock:
        options = build_render_options(request, settings)
        log_render_start(request.name, options.base_dir, request.images_dir)
        _log_debug(f"  Options: {options.as_dict()}")

        start_time = time.time()
        success = False
        captured = None
        try:
            with capture_output() as captured:
                try:
                    with scoped_working_directory(options.base_dir):
                        fragment = handle.engine.render(request.source_text, options)
                except RenderError as e:
                    if e.name is None:
                        e.name = request.name
                    raise
                finally:
                    add_diagnostics(captured, handle.engine.diagnostics)
            success = True
        finally:
            if captured is not None:
                log_render_result(
                    request.name,
                    success,
                    time.time() - start_time,
                    stdout=captured.stdout,
                    stderr=captured.stderr,
                )
                publish(request.name, captured.stdout, captured.stderr, bus)

    return wrap_content(fragment)


def render_file(
    path: Union[str, Path],
    images_dir: Optional[Path] = None,
    manager: Optional[EngineManager] = None,
    bus: Optional[NotificationBus] = None,
    settings: Optional[PreviewSettings] = None,
) -> str:
    """Render an AsciiDoc file, resolving includes relative to its directory."""
    path = Path(path).resolve()
    request = RenderRequest(
        source_text=path.read_text(encoding="utf-8"),
        base_dir=path.parent,
        images_dir=images_dir,
        name=path.name,
    )
    return render_document(request, manager=manager, bus=bus, settings=settings)


_page_env = Environment(
    loader=PackageLoader("adocview.contexts.rendering", "templates"),
    autoescape=select_autoescape(["html", "jinja"]),
    keep_trailing_newline=True,
)


def render_preview_page(content: str, title: str, highlight_style: str = "default") -> str:
    """
    Embed rendered content in a standalone HTML page.

    Args:
        content: Output of render_document()
        title: Page title
        highlight_style: Pygments style for highlighted source blocks

    Returns:
        Complete HTML document
    """
    stylesheet = HtmlFormatter(style=highlight_style).get_style_defs(".highlight")
    template = _page_env.get_template("preview_page.html.jinja")
    return template.render(
        content=content, title=title, stylesheet=stylesheet, version=__version__
    )
