"""
Rendering Context

Responsibilities:
- Constructs the shared rendering engine once per process
- Captures engine output during construction and rendering
- Builds per-document render options
- Renders AsciiDoc to wrapped HTML fragments for the preview panel

Owns: engine lifecycle, output capture, preview HTML
Never: Parses AsciiDoc itself
"""

from adocview.contexts.rendering.exceptions import InitializationError, RenderError
from adocview.contexts.rendering.lifecycle import EngineManager, default_manager
from adocview.contexts.rendering.renderer import (
    RenderRequest,
    render_document,
    render_file,
    render_preview_page,
)

__all__ = [
    "EngineManager",
    "InitializationError",
    "RenderError",
    "RenderRequest",
    "default_manager",
    "render_document",
    "render_file",
    "render_preview_page",
]
