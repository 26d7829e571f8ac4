"""
Notifications Context

Responsibilities:
- Defines severity-tagged user notifications
- Delivers them asynchronously to subscribers (log, notification history)
- Converts captured engine output into notifications

Owns: notification delivery
Never: Fails the operation whose output it reports
"""

from adocview.contexts.notifications.bus import (
    Notification,
    NotificationBus,
    Severity,
    get_bus,
)
from adocview.contexts.notifications.publisher import publish

__all__ = ["Notification", "NotificationBus", "Severity", "get_bus", "publish"]
