"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from adocview.settings import get_settings
from adocview.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, console: bool = True) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        console: Also log to stderr (off for hosts that own the terminal)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_header={"Preview backend": get_settings().preview_backend.value},
        console=console,
    )


# Wrapper functions with automatic [render] prefix


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_engine_created(engine_type: str, elapsed_time: float) -> None:
    _log_success(f"Rendering engine ready: {engine_type} ({elapsed_time:.2f}s)")


def log_render_start(name: str, base_dir: Path, images_dir) -> None:
    """Log start of a render with its context."""
    _log_debug(f"Rendering: {name}")
    _log_debug(f"  Base directory: {base_dir}")
    if images_dir is not None:
        _log_debug(f"  Images directory: {images_dir}")


def log_render_result(
    name: str,
    success: bool,
    elapsed_time: float,
    stdout: bytes = b"",
    stderr: bytes = b"",
) -> None:
    """
    Log the outcome of a render.

    Args:
        name: Document name
        success: Whether the engine returned a fragment
        elapsed_time: Time spent in the engine (including waiting for the engine lock)
        stdout: Output captured from the engine
        stderr: Error output captured from the engine
    """
    if success:
        _log_debug(f"{name}: rendered ({elapsed_time:.2f}s)")
    else:
        _log_error(f"{name}: rendering failed ({elapsed_time:.2f}s)")

    # Use opt(raw=True) so multi-line engine output keeps its own formatting
    if stderr:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nENGINE STDERR ({name}):\n{'=' * 80}\n"
            f"{stderr.decode('utf-8', errors='replace')}\n"
        )
    if stdout and not success:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nENGINE STDOUT ({name}):\n{'=' * 80}\n"
            f"{stdout.decode('utf-8', errors='replace')}\n"
        )
