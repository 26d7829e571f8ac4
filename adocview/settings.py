"""
Preview settings.

Read-only, process-wide settings consulted by the rendering context. Values come
from the environment (optionally populated from a .env file).

Environment variables:
    ADOCVIEW_PREVIEW_BACKEND: Active preview panel ("webview" or "browser")
    ADOCVIEW_LOGS_PATH: Directory for rendering session logs
    ADOCVIEW_NOTIFICATION_LOG: JSON Lines file recording delivered notifications
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOGS_PATH = "outs/logs"

# Relative paths are anchored here once. Rendering temporarily changes the
# working directory, so later lookups must not depend on it.
_launch_dir = Path.cwd()


class PreviewBackend(str, Enum):
    """Preview panel implementations that can display rendered HTML."""

    # In-process panel that loads images from the local file system
    WEBVIEW = "webview"
    BROWSER = "browser"


@dataclass(frozen=True)
class PreviewSettings:
    preview_backend: PreviewBackend = PreviewBackend.WEBVIEW
    logs_path: Path = Path(DEFAULT_LOGS_PATH)
    notification_log: Path = Path(DEFAULT_LOGS_PATH) / "notifications.log"


def _absolute(path: str) -> Path:
    resolved = Path(path).expanduser()
    return resolved if resolved.is_absolute() else _launch_dir / resolved


def get_settings() -> PreviewSettings:
    """
    Build settings from the current environment.

    Raises:
        ValueError: If ADOCVIEW_PREVIEW_BACKEND names an unknown backend
    """
    backend_name = os.getenv("ADOCVIEW_PREVIEW_BACKEND", PreviewBackend.WEBVIEW.value)
    try:
        backend = PreviewBackend(backend_name.strip().lower())
    except ValueError:
        choices = ", ".join(b.value for b in PreviewBackend)
        raise ValueError(
            f"ADOCVIEW_PREVIEW_BACKEND must be one of: {choices}, got: {backend_name}"
        ) from None

    logs_path = _absolute(os.getenv("ADOCVIEW_LOGS_PATH", DEFAULT_LOGS_PATH))
    notification_log = _absolute(
        os.getenv("ADOCVIEW_NOTIFICATION_LOG", str(logs_path / "notifications.log"))
    )

    return PreviewSettings(
        preview_backend=backend,
        logs_path=logs_path,
        notification_log=notification_log,
    )
