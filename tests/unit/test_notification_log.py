"""Unit tests for the JSON Lines notification history."""

import pytest

from adocview.contexts.notifications.bus import Notification, Severity, record_notification
from adocview.utils.notification_log import get_recent_notifications, log_notification_event
from adocview.utils.timestamp import format_timestamp


@pytest.mark.unit
def test_log_and_read_back(tmp_path):
    log_file = tmp_path / "logs" / "notifications.log"

    log_notification_event("Message during rendering a", "one\n", "info", False, log_file=log_file)
    log_notification_event("Error during rendering b", "two\n", "error", True, log_file=log_file)

    records = get_recent_notifications(10, log_file=log_file)

    assert [r["title"] for r in records] == [
        "Message during rendering a",
        "Error during rendering b",
    ]
    assert records[1]["important"] is True


@pytest.mark.unit
def test_filter_by_severity_and_limit(tmp_path):
    log_file = tmp_path / "notifications.log"
    for i in range(5):
        log_notification_event(f"e{i}", "x", "error", True, log_file=log_file)
        log_notification_event(f"i{i}", "x", "info", False, log_file=log_file)

    errors = get_recent_notifications(2, severity="error", log_file=log_file)

    assert [r["title"] for r in errors] == ["e3", "e4"]


@pytest.mark.unit
def test_missing_log_returns_empty(tmp_path):
    assert get_recent_notifications(log_file=tmp_path / "nope.log") == []


@pytest.mark.unit
def test_malformed_lines_are_skipped(tmp_path):
    log_file = tmp_path / "notifications.log"
    log_file.write_text('not json\n{"title": "ok", "severity": "info"}\n', encoding="utf-8")

    assert [r["title"] for r in get_recent_notifications(log_file=log_file)] == ["ok"]


@pytest.mark.unit
def test_record_notification_subscriber(monkeypatch, tmp_path):
    log_file = tmp_path / "notifications.log"
    monkeypatch.setenv("ADOCVIEW_NOTIFICATION_LOG", str(log_file))

    record_notification(
        Notification(title="Error during rendering doc", body="bad\n", severity=Severity.ERROR, important=True)
    )

    [record] = get_recent_notifications(log_file=log_file)
    assert record["severity"] == "error"
    assert record["body"] == "bad\n"


@pytest.mark.unit
def test_format_timestamp():
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"
    assert format_timestamp("not a timestamp") == "not a timestamp"
