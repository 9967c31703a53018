"""
Local calendar day -> UTC instant range.

Survey timestamps are stored in UTC while callers think in a civil time zone.
A UTC-day filter would put records created near local midnight on the wrong
day, so the window is computed with zone-aware arithmetic: a local day can be
23 or 25 hours long across a DST transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import InvalidDateInput

RESOLUTION = timedelta(microseconds=1)


@dataclass(frozen=True)
class DayWindow:
    """Inclusive range `[start_utc, end_utc]`."""

    start_utc: datetime
    end_utc: datetime

    @property
    def span(self) -> timedelta:
        return self.end_utc - self.start_utc + RESOLUTION

    def contains(self, instant: datetime) -> bool:
        return self.start_utc <= instant <= self.end_utc


def _zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidDateInput(f"Unknown time zone: {tz_name!r}.") from exc


def _parse(value: str) -> date | datetime:
    raw = (value or "").strip()
    if not raw:
        raise InvalidDateInput("Date is empty.")
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidDateInput(f"Invalid date: {value!r}.") from exc


def local_date(value: str | date | datetime, zone: ZoneInfo) -> date:
    if isinstance(value, str):
        value = _parse(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(zone)
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidDateInput(f"Unsupported date value: {value!r}.")


def _local_midnight_utc(day: date, zone: ZoneInfo) -> datetime:
    # A midnight skipped by DST resolves to the first existing local instant.
    return datetime.combine(day, time.min, tzinfo=zone).astimezone(timezone.utc)


def resolve_day_window(value: str | date | datetime, tz_name: str) -> DayWindow:
    zone = _zone(tz_name)
    try:
        day = local_date(value, zone)
        start_utc = _local_midnight_utc(day, zone)
        next_start_utc = _local_midnight_utc(day + timedelta(days=1), zone)
    except (OverflowError, ValueError) as exc:
        raise InvalidDateInput(f"Date out of supported range: {value!r}.") from exc
    return DayWindow(start_utc=start_utc, end_utc=next_start_utc - RESOLUTION)


def today_window(tz_name: str, *, now: datetime | None = None) -> DayWindow:
    return resolve_day_window(now or datetime.now(timezone.utc), tz_name)
