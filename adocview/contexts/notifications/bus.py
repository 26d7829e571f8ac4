"""
Notification Bus

Fire-and-forget delivery of notifications to subscribers. `notify()` hands the
notification to a worker thread and returns immediately; subscriber failures
are logged and never reach the caller.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from adocview.utils.notification_log import log_notification_event
from adocview.utils.timestamp import now_exact


class Severity(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """
    One-shot user notification.

    Attributes:
        title: Short headline, names the operation that produced it
        body: Message text
        severity: INFO or ERROR
        important: Whether the host should draw attention to it
        timestamp: Creation time (ISO 8601)
    """

    title: str
    body: str
    severity: Severity = Severity.INFO
    important: bool = False
    timestamp: str = field(default_factory=now_exact)


Subscriber = Callable[[Notification], None]


class NotificationBus:
    """
    Asynchronous notification bus.

    Subscribers are called on a small worker pool in registration order for each
    notification. Delivery is best-effort: an exception raised by one subscriber
    is logged and does not stop delivery to the others.
    """

    def __init__(self, max_workers: int = 1):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self._pending: List[Future] = []
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="adocview-notify"
        )

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber. Returns a callable that unsubscribes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def _unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return _unsubscribe

    def notify(self, notification: Notification) -> None:
        """Queue a notification for delivery and return without waiting."""
        with self._lock:
            subscribers = list(self._subscribers)
            self._pending = [f for f in self._pending if not f.done()]
            future = self._executor.submit(self._deliver, notification, subscribers)
            self._pending.append(future)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for queued deliveries to finish.

        Returns:
            True if every pending delivery completed within the timeout
        """
        with self._lock:
            pending = list(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    @staticmethod
    def _deliver(notification: Notification, subscribers: List[Subscriber]) -> None:
        for subscriber in subscribers:
            try:
                subscriber(notification)
            except Exception as e:
                logger.error(f"[notify] Subscriber failed for '{notification.title}': {e!r}")


def log_notification(notification: Notification) -> None:
    """Subscriber that mirrors notifications into the application log."""
    body = notification.body.rstrip("\n")
    if notification.severity is Severity.ERROR:
        logger.warning(f"[notify] {notification.title}: {body}")
    else:
        logger.info(f"[notify] {notification.title}: {body}")


def record_notification(notification: Notification) -> None:
    """Subscriber that appends notifications to the notification history log."""
    log_notification_event(
        title=notification.title,
        body=notification.body,
        severity=notification.severity.value,
        important=notification.important,
    )


_default_bus: Optional[NotificationBus] = None
_default_bus_lock = threading.Lock()


def get_bus() -> NotificationBus:
    """Return the process-wide bus, creating it with the default subscribers on first use."""
    global _default_bus
    if _default_bus is None:
        with _default_bus_lock:
            if _default_bus is None:
                bus = NotificationBus()
                bus.subscribe(log_notification)
                bus.subscribe(record_notification)
                _default_bus = bus
    return _default_bus
