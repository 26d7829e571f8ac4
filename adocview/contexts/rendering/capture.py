"""
Output capture for engine calls.

The rendering engine reports progress and problems by writing to the process's
standard output and error streams. While an engine call runs, those streams are
swapped for in-memory buffers and swapped back afterwards on every exit path.

sys.stdout/sys.stderr are process globals: only one capture may be installed at
a time. Callers serialize captures with the engine lock.
"""

import io
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO, Tuple, TypeVar, Union

T = TypeVar("T")


def _text_writer(buffer: io.BytesIO) -> io.TextIOWrapper:
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", write_through=True)


@dataclass
class OutputCapture:
    """
    Buffers for one engine call plus the streams they replaced.

    Attributes:
        stdout_buffer: Receives everything written to sys.stdout
        stderr_buffer: Receives everything written to sys.stderr
        previous_stdout: Stream installed before the capture
        previous_stderr: Stream installed before the capture
    """

    stdout_buffer: io.BytesIO = field(default_factory=io.BytesIO)
    stderr_buffer: io.BytesIO = field(default_factory=io.BytesIO)
    previous_stdout: Optional[TextIO] = None
    previous_stderr: Optional[TextIO] = None

    def __post_init__(self):
        self.stdout_writer = _text_writer(self.stdout_buffer)
        self.stderr_writer = _text_writer(self.stderr_buffer)

    @property
    def stdout(self) -> bytes:
        self.stdout_writer.flush()
        return self.stdout_buffer.getvalue()

    @property
    def stderr(self) -> bytes:
        self.stderr_writer.flush()
        return self.stderr_buffer.getvalue()


@contextmanager
def capture_output() -> Iterator[OutputCapture]:
    """
    Redirect sys.stdout and sys.stderr into a fresh OutputCapture.

    The previous streams are restored by identity when the block exits,
    whether it returns or raises.

    Example:
        with capture_output() as captured:
            engine.render(text, options)
        publish(name, captured.stdout, captured.stderr, bus)
    """
    captured = OutputCapture(previous_stdout=sys.stdout, previous_stderr=sys.stderr)
    sys.stdout = captured.stdout_writer
    sys.stderr = captured.stderr_writer
    try:
        yield captured
    finally:
        sys.stdout = captured.previous_stdout
        sys.stderr = captured.previous_stderr
        captured.stdout_writer.flush()
        captured.stderr_writer.flush()


def with_captured_output(action: Callable[[], T]) -> Tuple[T, bytes, bytes]:
    """
    Run action with output captured.

    Returns:
        Tuple of (action result, captured stdout, captured stderr)
    """
    with capture_output() as captured:
        result = action()
    return result, captured.stdout, captured.stderr


def add_diagnostics(captured: OutputCapture, messages: Iterable[str]) -> None:
    """
    Append structured engine messages to the captured error output.

    Messages the engine already printed to stderr are not repeated.
    """
    already_printed = captured.stderr.decode("utf-8", errors="replace")
    for message in messages:
        if message and message not in already_printed:
            captured.stderr_writer.write(message.rstrip("\n") + "\n")
    captured.stderr_writer.flush()


@contextmanager
def scoped_working_directory(path: Union[str, Path, None]) -> Iterator[None]:
    """
    Temporarily switch the process working directory.

    The engine resolves includes and configuration files relative to the working
    directory. Like the output streams, the working directory is process-wide, so
    this must only be used while holding the engine lock (or the construction lock),
    and nothing else in the package may depend on the working directory.
    A None path, or one that does not exist yet (an unsaved document), leaves the
    working directory untouched.
    """
    if path is None or not Path(path).is_dir():
        yield
        return

    previous = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(previous)
