"""Localized label and date normalization for imported task rows.

Unrecognized or absent values fall back to a default instead of failing the row.
"""

from __future__ import annotations

import datetime
import re
from typing import Any, Optional

from taskdesk.models.tasks import TaskPriority, TaskStatus

STATUS_LABELS: dict[str, TaskStatus] = {
    "Chờ xử lý": TaskStatus.PENDING,
    "Đang thực hiện": TaskStatus.IN_PROGRESS,
    "Hoàn thành": TaskStatus.COMPLETED,
    "Quá hạn": TaskStatus.OVERDUE,
}

PRIORITY_LABELS: dict[str, TaskPriority] = {
    "Thấp": TaskPriority.LOW,
    "Trung bình": TaskPriority.MEDIUM,
    "Cao": TaskPriority.HIGH,
}

# 1900 date system. Serial 60 is 1900-02-29, a day that never existed.
_EXCEL_EPOCH = datetime.date(1899, 12, 30)
_PHANTOM_LEAP_DAY = 60

_DMY_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{1,4})\s*$")


def map_status(label: Optional[str]) -> TaskStatus:
    if not label:
        return TaskStatus.PENDING
    return STATUS_LABELS.get(label.strip(), TaskStatus.PENDING)


def map_priority(label: Optional[str]) -> TaskPriority:
    if not label:
        return TaskPriority.MEDIUM
    return PRIORITY_LABELS.get(label.strip(), TaskPriority.MEDIUM)


def serial_to_date(serial: float) -> Optional[datetime.date]:
    """Convert a spreadsheet day serial to a calendar date; the time fraction is dropped."""
    try:
        days = int(serial)
    except (OverflowError, ValueError):
        return None
    if days <= 0 or days == _PHANTOM_LEAP_DAY:
        return None
    if days < _PHANTOM_LEAP_DAY:
        days += 1
    try:
        return _EXCEL_EPOCH + datetime.timedelta(days=days)
    except OverflowError:
        return None


def parse_due_date(value: Any) -> Optional[str]:
    """Normalize a due-date cell to ``yyyy-mm-dd``, or None when it has no usable shape."""
    if value is None or value == "":
        return None

    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = serial_to_date(value)
        return parsed.isoformat() if parsed else None

    text = str(value).strip()

    match = _DMY_RE.match(text)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    if "-" in text:
        return text.split("T")[0]

    return None
