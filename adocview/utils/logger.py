"""
Session logging for adocview.

Configures loguru once per session: a DEBUG log file inside the session
directory and an INFO console on stderr. Every session file starts with a header
recording which adocview and engine versions produced it, so a preview problem
reported from a log can be matched to the asciidoc release that rendered it.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from importlib import metadata
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from adocview import __version__

# Distribution names reported in the session header
ENGINE_DISTRIBUTIONS = ("asciidoc", "pygments")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {thread.name} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def distribution_version(name: str) -> str:
    """Installed version of a distribution, or "not installed"."""
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def session_header(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Key-value pairs written at the top of each session log.

    Args:
        extra: Context-specific entries appended after the version lines
    """
    header = {
        "adocview": __version__,
        "Python": sys.version.split()[0],
    }
    for name in ENGINE_DISTRIBUTIONS:
        header[name] = distribution_version(name)
    header["Command"] = " ".join(sys.argv)
    header.update(extra or {})
    return header


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_header: Optional[Dict[str, str]] = None,
    console: bool = True,
) -> Path:
    """
    Configure loguru for one session of a context.

    Replaces any previously installed handlers, so calling it again starts a
    new session (used by long-running hosts when the logs directory changes).

    Args:
        context_name: Context identifier (e.g., "render"); names the log file
        log_dir: Directory for this logging session
        extra_header: Additional entries for the session header
        console: Also log INFO and above to stderr

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", enqueue=True)
    if console:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_session_header(session_header(extra_header))
    return log_file


def log_session_header(header: Dict[str, str]) -> None:
    logger.info("=" * 80)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
