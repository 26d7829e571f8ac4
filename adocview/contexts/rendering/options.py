"""
Render options.

Builds the engine configuration for one render call from the request and the
process-wide preview settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Mapping, Optional

from adocview.settings import PreviewBackend, PreviewSettings

if TYPE_CHECKING:
    from adocview.contexts.rendering.renderer import RenderRequest


class SafeMode(str, Enum):
    """Engine safety levels, least restrictive first."""

    UNSAFE = "unsafe"
    SAFE = "safe"
    SERVER = "server"
    SECURE = "secure"


HTML5_BACKEND = "html5"


@dataclass(frozen=True)
class RenderOptions:
    """
    Engine configuration for a single render call.

    Attributes:
        base_dir: Directory includes and relative paths are resolved against
        safe: Safety level (previews always render unsafe so includes work)
        backend: Output format
        header_footer: Render a full document instead of a fragment
        sourcemap: Ask the engine to track source line numbers
        attributes: Document attributes passed to the engine
    """

    base_dir: Path
    safe: SafeMode = SafeMode.UNSAFE
    backend: str = HTML5_BACKEND
    header_footer: bool = False
    sourcemap: bool = True
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only view so a built options object can't be changed after the fact
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def as_dict(self) -> Dict[str, object]:
        return {
            "base_dir": str(self.base_dir),
            "safe": self.safe.value,
            "backend": self.backend,
            "header_footer": self.header_footer,
            "sourcemap": self.sourcemap,
            "attributes": dict(self.attributes),
        }


def default_attributes() -> Dict[str, str]:
    """Attributes every preview render starts from."""
    return {
        "showtitle": "",
        "source-highlighter": "pygments",
        "pygments-css": "style",
        "env": "preview",
        "env-preview": "",
    }


def images_output_dir(images_dir: Optional[Path], settings: PreviewSettings) -> Optional[str]:
    """
    Directory generated images should be written to, or None.

    Only the webview panel reads images straight from disk, so the output
    directory is only set when that panel is active.
    """
    if images_dir is None:
        return None
    if settings.preview_backend is not PreviewBackend.WEBVIEW:
        return None
    return str(Path(images_dir).expanduser().absolute().resolve())


def build_render_options(request: "RenderRequest", settings: PreviewSettings) -> RenderOptions:
    """
    Build the options for one render call.

    Args:
        request: Document being rendered
        settings: Active preview settings

    Returns:
        Fresh RenderOptions (unsafe, html5, fragment only, sourcemap on)
    """
    attributes = default_attributes()

    outdir = images_output_dir(request.images_dir, settings)
    if outdir is not None:
        attributes["outdir"] = outdir

    return RenderOptions(
        base_dir=Path(request.base_dir),
        safe=SafeMode.UNSAFE,
        backend=HTML5_BACKEND,
        header_footer=False,
        sourcemap=True,
        attributes=attributes,
    )
