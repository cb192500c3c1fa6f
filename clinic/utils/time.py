from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_TIME_24 = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
_TIME_12 = re.compile(r"^(\d{1,2}):(\d{2})\s*([APap][Mm])$")


@dataclass(frozen=True)
class TimeBlock:
    start: time
    end: time

    @property
    def label(self) -> str:
        return self.start.strftime("%H:%M")


DEFAULT_TIME_BLOCKS: tuple[TimeBlock, ...] = (
    TimeBlock(start=time(8, 0), end=time(10, 0)),
    TimeBlock(start=time(10, 0), end=time(12, 0)),
    TimeBlock(start=time(13, 0), end=time(15, 0)),
    TimeBlock(start=time(15, 0), end=time(17, 0)),
)


def clinic_timezone(offset_hours: int) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: str | None) -> date | None:
    """Parse ``YYYY-MM-DD`` or ``MM/DD/YYYY``; returns None for anything else."""
    if not value:
        return None
    value = value.strip()
    try:
        if _ISO_DATE.match(value):
            return date.fromisoformat(value)
        match = _US_DATE.match(value)
        if match:
            month, day, year = (int(part) for part in match.groups())
            return date(year, month, day)
    except ValueError:
        return None
    return None


def parse_time(value: str | None) -> time | None:
    """Parse ``HH:MM``, ``HH:MM:SS`` or ``H:MM AM/PM`` into a 24-hour time."""
    if not value:
        return None
    value = value.strip()
    try:
        match = _TIME_24.match(value)
        if match:
            hh, mm, ss = match.groups()
            return time(int(hh), int(mm), int(ss or 0))
        match = _TIME_12.match(value)
        if match:
            hh, mm, meridian = int(match.group(1)), int(match.group(2)), match.group(3).upper()
            if meridian == "PM" and hh != 12:
                hh += 12
            if meridian == "AM" and hh == 12:
                hh = 0
            return time(hh, mm)
    except ValueError:
        return None
    return None


def block_end_instant(day: date, block: TimeBlock, tzinfo: timezone) -> datetime:
    return datetime.combine(day, block.end, tzinfo)


def find_block(blocks: tuple[TimeBlock, ...], start: time) -> TimeBlock | None:
    for block in blocks:
        if block.start == start:
            return block
    return None
