from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import CSV_FILENAME_TEMPLATE, CSV_HEADER


def export_filename(day: date) -> str:
    return CSV_FILENAME_TEMPLATE.format(date=day.strftime("%Y-%m-%d"))


def records_to_csv(records: Sequence[AttendanceRecord]) -> Optional[str]:
    """One row per record, in list order. None when there is nothing to export."""
    if not records:
        return None

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in records:
        writer.writerow(
            [
                r.student_name,
                r.student_id or "",
                r.record_date.strftime("%Y-%m-%d"),
                r.record_time.strftime("%H:%M:%S"),
                r.location or "Unknown",
            ]
        )
    return out.getvalue()
