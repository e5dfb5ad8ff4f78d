import re
from datetime import datetime, timezone
from typing import Optional

TIMESTAMP_FORMAT = '%Y%m%d%H%M%S'

_TIMESTAMP_RE = re.compile(r'[0-9]{14}')


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """Return the current UTC time as YYYYMMDDHHMMSS"""
    now = now or datetime.now(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def is_valid_timestamp(timestamp: str) -> bool:
    """
    Check a YYYYMMDDHHMMSS timestamp.

    Field ranges only: day 1-31 is accepted for every month, leap years
    are not considered.
    """
    if not isinstance(timestamp, str) or not _TIMESTAMP_RE.fullmatch(timestamp):
        return False

    month = int(timestamp[4:6])
    day = int(timestamp[6:8])
    hour = int(timestamp[8:10])
    minute = int(timestamp[10:12])
    second = int(timestamp[12:14])

    return (
        1 <= month <= 12
        and 1 <= day <= 31
        and 0 <= hour <= 23
        and 0 <= minute <= 59
        and 0 <= second <= 59
    )
