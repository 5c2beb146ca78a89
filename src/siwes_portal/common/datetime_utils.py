from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in the portal timezone, as a naive datetime.

    Attendance dates and times are stored without offsets, so the zone is
    applied here once and dropped.
    """
    if not tz_name:
        return datetime.now()
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)
