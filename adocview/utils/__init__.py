"""
Shared utilities for adocview.

Common functionality used across contexts:
- Logger setup
- Notification history
- Timestamps
"""

from adocview.utils.timestamp import format_timestamp, now, now_exact

__all__ = ["format_timestamp", "now", "now_exact"]
