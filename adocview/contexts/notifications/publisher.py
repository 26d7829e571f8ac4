"""
Notification Publisher

Turns output captured from the rendering engine into notifications.
"""

from loguru import logger

from adocview.contexts.notifications.bus import Notification, NotificationBus, Severity


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def publish(name: str, stdout: bytes, stderr: bytes, bus: NotificationBus) -> None:
    """
    Publish captured engine output.

    Non-empty stdout becomes one low-importance INFO notification, non-empty
    stderr one important ERROR notification. Nothing is published for empty
    buffers. Never raises: a failing bus is logged and ignored so that it
    cannot mask the result or error of the operation that produced the output.

    Args:
        name: Name of the operation (usually the document name)
        stdout: Captured standard output bytes
        stderr: Captured standard error bytes
        bus: Bus to deliver to
    """
    notifications = []
    if stdout:
        notifications.append(
            Notification(
                title=f"Message during rendering {name}",
                body=_decode(stdout),
                severity=Severity.INFO,
                important=False,
            )
        )
    if stderr:
        notifications.append(
            Notification(
                title=f"Error during rendering {name}",
                body=_decode(stderr),
                severity=Severity.ERROR,
                important=True,
            )
        )

    for notification in notifications:
        try:
            bus.notify(notification)
        except Exception as e:
            logger.error(f"[notify] Could not publish '{notification.title}': {e!r}")
