"""
Notification history log.

Records every delivered notification to a JSON Lines file (one JSON object per
line) so that messages shown during a preview session can be reviewed later,
e.g. with scripts/tail_notifications.py.

Usage:
    from adocview.utils.notification_log import get_recent_notifications

    # Last 10 error notifications
    events = get_recent_notifications(10, severity="error")
"""

import json
import threading
from pathlib import Path
from typing import Optional

from adocview.settings import get_settings
from adocview.utils.timestamp import now_exact

# Appends from concurrent delivery workers must not interleave
_write_lock = threading.Lock()


def log_notification_event(
    title: str,
    body: str,
    severity: str,
    important: bool,
    log_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Append a notification record to the notification log.

    Args:
        title: Notification title
        body: Notification body text
        severity: Severity name ("info" or "error")
        important: Whether the notification was flagged important
        log_file: Target file (default: ADOCVIEW_NOTIFICATION_LOG from settings)
        **extra_fields: Additional fields stored with the record
    """
    if log_file is None:
        log_file = get_settings().notification_log

    record = {
        "timestamp": now_exact(),
        "title": title,
        "body": body,
        "severity": severity,
        "important": important,
        **extra_fields,
    }

    with _write_lock:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")


def get_recent_notifications(
    n: int = 10, severity: Optional[str] = None, log_file: Optional[Path] = None
) -> list[dict]:
    """
    Get the last n notification records, optionally filtered by severity.

    Args:
        n: Number of recent records to return (default: 10)
        severity: Only return records with this severity (optional)
        log_file: Source file (default: ADOCVIEW_NOTIFICATION_LOG from settings)

    Returns:
        List of record dicts (most recent last)
    """
    if log_file is None:
        log_file = get_settings().notification_log

    if not log_file.exists():
        return []

    records = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                records.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if severity:
        records = [r for r in records if r.get("severity") == severity]

    return records[-n:] if len(records) > n else records
