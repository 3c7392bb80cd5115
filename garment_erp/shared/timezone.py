"""
Centralized timezone management for the factory's local time.
All datetime operations should use this module for consistency.
"""

from datetime import datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo

from garment_erp.core.setting import config

# Factory timezone definition
LOCAL_TZ = ZoneInfo(config.TIMEZONE)


def get_local_now() -> datetime:
    """
    Get current datetime in the factory timezone.

    Returns:
        datetime: Current time (timezone-aware)
    """
    return datetime.now(tz=LOCAL_TZ)


def get_local_today() -> str:
    """Today's date in the factory timezone as YYYY-MM-DD."""
    return get_local_now().strftime("%Y-%m-%d")


def get_naive_utc_now() -> datetime:
    """
    Get current datetime in UTC.
    Used for token expiration calculations in JWT.

    Note:
        This returns UTC (not local time) because JWT tokens use UTC timestamps.
        Use get_local_now() for all application datetime operations.
    """
    return datetime.now(tz=dt_timezone.utc)
