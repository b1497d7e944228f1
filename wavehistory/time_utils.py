"""Helpers for displaying history node timestamps."""

import time
from datetime import datetime
from typing import Optional

from .config import TIME_FORMAT


def format_relative_time(timestamp: float, now: Optional[float] = None) -> str:
    """Format a node timestamp relative to the present.

    Args:
        timestamp: Seconds since the epoch, as stored on HistoryNode
        now: Reference time in seconds since the epoch (defaults to time.time())

    Returns:
        "just now" for the last minute, "<m>m ago" for the last hour,
        the clock time for earlier today, and the full date otherwise
    """
    if now is None:
        now = time.time()
    elapsed = now - timestamp

    if elapsed < TIME_FORMAT.JUST_NOW_SECONDS:
        return "just now"

    if elapsed < TIME_FORMAT.MINUTES_THRESHOLD_SECONDS:
        return f"{int(elapsed // 60)}m ago"

    moment = datetime.fromtimestamp(timestamp)
    if moment.date() == datetime.fromtimestamp(now).date():
        return moment.strftime(TIME_FORMAT.SAME_DAY_FORMAT)

    return moment.strftime(TIME_FORMAT.DATE_FORMAT)
