"""
Rendering engine adapter.

Wraps the asciidoc distribution (asciidoc.api.AsciiDocAPI). The engine keeps
module-level state between calls and prints to the process streams, so one
instance is shared per process and every call to it is serialized through the
lock on its EngineHandle.

The asciidoc import happens in AsciiDocEngine.create(); the rest of the package
imports without the optional engine installed.
"""

import importlib
import io
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol

from adocview.contexts.rendering.exceptions import InitializationError, RenderError
from adocview.contexts.rendering.options import RenderOptions, SafeMode


class Engine(Protocol):
    """Operations the rendering context needs from an engine."""

    diagnostics: List[str]

    def require_library(self, name: str) -> None: ...

    def load_extension(self, stream: BinaryIO, name: str) -> Path: ...

    def register_extension(self, hook: Path) -> None: ...

    def render(self, text: str, options: RenderOptions) -> str: ...


@dataclass(eq=False)
class EngineHandle:
    """
    The process-wide engine together with the lock that guards it.

    Attributes:
        engine: Shared engine instance
        lock: Held for the whole duration of every engine call
    """

    engine: Engine
    lock: threading.Lock = field(default_factory=threading.Lock)


class AsciiDocEngine:
    """
    Engine backed by asciidoc's Python API.

    Per-call options and attributes are rebuilt for every render so nothing
    leaks from one document into the next. Configuration files registered as
    extensions apply to every render.
    """

    def __init__(self, api, module):
        self._api = api
        # asciidoc.asciidoc; its `message` object is replaced on every execute
        self._module = module
        self._extensions: List[Path] = []
        self._extension_dir: Optional[Path] = None
        self.diagnostics: List[str] = []

    @classmethod
    def create(cls) -> "AsciiDocEngine":
        """
        Construct the engine.

        Raises:
            InitializationError: If the asciidoc distribution is not installed
        """
        try:
            from asciidoc import asciidoc as asciidoc_module
            from asciidoc.api import AsciiDocAPI
        except ImportError as e:
            raise InitializationError(
                "asciidoc is not installed; install it with: pip install 'adocview[asciidoc]'"
            ) from e
        return cls(AsciiDocAPI(), asciidoc_module)

    def require_library(self, name: str) -> None:
        """
        Make sure a library the engine loads at render time is importable.

        Raises:
            InitializationError: If the library cannot be imported
        """
        try:
            importlib.import_module(name)
        except ImportError as e:
            raise InitializationError(f"Required library not available: {name}") from e

    def load_extension(self, stream: BinaryIO, name: str) -> Path:
        """
        Materialize a configuration script as a file the engine can read.

        The file lives for as long as the process, like the engine itself.

        Returns:
            Path to register with register_extension()
        """
        if self._extension_dir is None:
            self._extension_dir = Path(tempfile.mkdtemp(prefix="adocview-ext-"))
        path = self._extension_dir / name
        path.write_bytes(stream.read())
        return path

    def register_extension(self, hook: Path) -> None:
        self._extensions.append(Path(hook))

    def render(self, text: str, options: RenderOptions) -> str:
        """
        Render text to a markup fragment (or full document if header_footer is set).

        Raises:
            RenderError: If the engine reports a failure
        """
        api = self._api
        api.options = type(api.options)()
        api.attributes = {}

        if not options.header_footer:
            api.options("--no-header-footer")
        if options.safe is not SafeMode.UNSAFE:
            api.options("--safe")
        for conf_file in self._extensions:
            api.options("--conf-file", str(conf_file))

        api.attributes.update(options.attributes)
        api.attributes["docdir"] = str(options.base_dir)
        if options.sourcemap:
            api.attributes["sourcemap"] = ""

        infile = io.StringIO(text)
        outfile = io.StringIO()
        try:
            api.execute(infile, outfile, backend=options.backend)
        except (Exception, SystemExit) as e:
            # The API reports failures through several exception types (and
            # sys.exit); all of them mean the document could not be rendered.
            raise RenderError(
                f"asciidoc failed: {e!r}", messages=self._live_messages()
            ) from e
        finally:
            self.diagnostics = self._live_messages()

        return outfile.getvalue()

    def _live_messages(self) -> List[str]:
        """Messages of the last execute, read from the engine module's current Message object."""
        message = getattr(self._module, "message", None)
        return list(getattr(message, "messages", None) or [])
