"""
Engine lifecycle.

Owns the single shared rendering engine of the process. The engine is built on
first use by whichever caller gets there first; everybody else waits for that
construction and then shares the result.

Init/teardown rules:
- The slot starts empty and is filled at most once per successful construction.
- A failed construction leaves the slot empty; the next caller tries again.
- The engine lives until the process exits. reset() empties the slot for tests
  and for hosts that reload their configuration.
"""

import threading
import time
from importlib import resources
from typing import Callable, Optional, Sequence

from adocview.contexts.notifications import NotificationBus, get_bus, publish
from adocview.contexts.rendering.capture import capture_output
from adocview.contexts.rendering.engine import AsciiDocEngine, Engine, EngineHandle
from adocview.contexts.rendering.exceptions import InitializationError
from adocview.contexts.rendering.logger import _log_debug, _log_error, log_engine_created

RESOURCE_PACKAGE = "adocview.contexts.rendering.resources"

# Configuration loaded into every engine
EXTENSION_RESOURCE = "preview.conf"

# Libraries the engine imports at render time (source highlighting)
REQUIRED_LIBRARIES = ("pygments",)


class EngineManager:
    """
    Lazily constructs and hands out the shared engine.

    Args:
        factory: Callable returning a new engine
        required_libraries: Libraries the engine must be able to load
        extension_resource: Name of the bundled configuration script
        resource_package: Package the script is loaded from
        bus: Bus for notifications about construction output (default: process bus)
    """

    def __init__(
        self,
        factory: Callable[[], Engine] = AsciiDocEngine.create,
        required_libraries: Sequence[str] = REQUIRED_LIBRARIES,
        extension_resource: str = EXTENSION_RESOURCE,
        resource_package: str = RESOURCE_PACKAGE,
        bus: Optional[NotificationBus] = None,
    ):
        self._factory = factory
        self._required_libraries = tuple(required_libraries)
        self._extension_resource = extension_resource
        self._resource_package = resource_package
        self._bus = bus
        self._handle: Optional[EngineHandle] = None
        self._construction_lock = threading.Lock()
        self.construction_count = 0

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    def ensure_engine(self, name: str = "engine") -> EngineHandle:
        """
        Return the shared engine, constructing it if this is the first use.

        Safe to call from any number of threads. Output the engine prints while
        being constructed is published as notifications named after `name`.

        Raises:
            InitializationError: If construction fails (bundled resource or
                required library missing, engine not installed)
        """
        handle = self._handle
        if handle is not None:
            return handle

        with self._construction_lock:
            # Another thread may have finished construction while we waited
            if self._handle is None:
                self._handle = self._construct(name)
            return self._handle

    def reset(self) -> None:
        """Forget the current engine; the next ensure_engine() builds a new one."""
        with self._construction_lock:
            self._handle = None

    def _construct(self, name: str) -> EngineHandle:
        _log_debug(f"Constructing rendering engine (requested by {name})")
        start_time = time.time()

        captured = None
        try:
            with capture_output() as captured:
                engine = self._factory()
                for library in self._required_libraries:
                    engine.require_library(library)
                hook = self._load_extension(engine)
                engine.register_extension(hook)
        except Exception as e:
            _log_error(f"Engine construction failed: {e}")
            raise
        finally:
            if captured is not None:
                publish(name, captured.stdout, captured.stderr, self._bus or get_bus())

        self.construction_count += 1
        log_engine_created(type(engine).__name__, time.time() - start_time)
        return EngineHandle(engine=engine)

    def _load_extension(self, engine: Engine):
        try:
            resource = resources.files(self._resource_package).joinpath(self._extension_resource)
            stream = resource.open("rb")
        except (FileNotFoundError, ModuleNotFoundError) as e:
            raise InitializationError(
                f"unable to load script {self._extension_resource}"
            ) from e
        with stream:
            return engine.load_extension(stream, self._extension_resource)


default_manager = EngineManager()
