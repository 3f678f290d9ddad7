"""
learnosity_sdk/core/time.py

THE ONLY TIMESTAMP FUNCTION IN THE SDK.

Security packet wire format: YYYYMMDD-HHMM (UTC, minute precision)

The clock itself is injectable: anything that needs "now" takes a
zero-argument callable returning an aware datetime, defaulting to utc_now.
"""

from datetime import datetime, timezone
from typing import Optional

TIMESTAMP_FORMAT = "%Y%m%d-%H%M"


def utc_now() -> datetime:
    """Default clock: current time in UTC."""
    return datetime.now(timezone.utc)


def security_timestamp(now: Optional[datetime] = None) -> str:
    """
    Return a security packet timestamp, e.g. "20200101-0930".

    Naive datetimes are taken to be UTC already; aware ones are converted.
    """
    if now is None:
        now = utc_now()
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)
