"""
utils/time_utils.py

Purpose: Time helpers

- ISO timestamps stored on documents
- Demo-mode identifiers
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Returns the current UTC time (timezone-aware).
    """
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    ISO-8601 timestamp used for createdAt / updatedAt / addedAt fields.
    """
    return utc_now().isoformat()


def epoch_millis() -> int:
    """
    Milliseconds since the epoch, used for demo-mode user ids.
    """
    return int(utc_now().timestamp() * 1000)
