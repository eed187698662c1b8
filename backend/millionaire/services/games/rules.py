"""Game status rules that are independent from HTTP and DB.

Status is never stored. It is recomputed from the persisted fields each time
so that an elapsed time window shows up without a background clock.
"""

from datetime import datetime, timedelta
from typing import Optional

from .ladder import MAX_LEVEL

IN_PROGRESS = 'in_progress'
WON = 'won'
FAIL = 'fail'
TIMEOUT = 'timeout'
CASHED_OUT = 'cashed_out'

TERMINAL_STATUSES = (WON, FAIL, TIMEOUT, CASHED_OUT)


def time_expired(created_at: datetime, now: datetime, time_limit: timedelta) -> bool:
    return now - created_at > time_limit


def compute_status(current_level: int, is_failed: bool, finished_at: Optional[datetime],
                   created_at: datetime, now: datetime, time_limit: timedelta) -> str:
    expired = time_expired(created_at, now, time_limit)
    if finished_at is None and not expired and current_level <= MAX_LEVEL:
        return IN_PROGRESS

    # Running out of time outranks a recorded wrong answer
    if expired:
        return TIMEOUT
    if is_failed:
        return FAIL
    if current_level > MAX_LEVEL:
        return WON
    return CASHED_OUT


def seconds_left(created_at: datetime, now: datetime, time_limit: timedelta) -> int:
    remaining = (created_at + time_limit - now).total_seconds()
    return max(0, int(remaining))
