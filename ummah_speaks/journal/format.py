"""Display helpers for journal entries."""

from __future__ import annotations

from datetime import UTC, date, datetime

_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_ISLAMIC_MONTHS = (
    "Muharram",
    "Safar",
    "Rabiʻ I",
    "Rabiʻ II",
    "Jumada I",
    "Jumada II",
    "Rajab",
    "Shaʻban",
    "Ramadan",
    "Shawwal",
    "Dhuʻl-Qiʻdah",
    "Dhuʻl-Hijjah",
)

# 16 July 622 (Julian) as a proleptic Gregorian ordinal.
_ISLAMIC_EPOCH = 227015


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def format_relative(timestamp: datetime, now: datetime | None = None) -> str:
    """Describe *timestamp* relative to *now*.

    Buckets are closed on their lower bound: exactly 60 minutes is "1h ago",
    exactly 24 hours is "Yesterday". Anything a week or older gets a short
    absolute date such as ``"Oct 12"``.
    """
    timestamp = _as_aware(timestamp)
    now = _as_aware(now) if now is not None else datetime.now(UTC)

    seconds = (now - timestamp).total_seconds()
    mins = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if mins < 1:
        return "Just now"
    if mins < 60:
        return f"{mins}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"

    local = timestamp.astimezone()
    return f"{_MONTHS[local.month - 1]} {local.day}"


def _fixed_from_islamic(year: int, month: int, day: int) -> int:
    return (
        day
        + 29 * (month - 1)
        + (6 * month - 1) // 11
        + (year - 1) * 354
        + (3 + 11 * year) // 30
        + _ISLAMIC_EPOCH
        - 1
    )


def islamic_date(on: date) -> tuple[int, int, int]:
    """Convert a Gregorian date to ``(year, month, day)`` in the tabular
    Islamic calendar."""
    fixed = on.toordinal()
    year = (30 * (fixed - _ISLAMIC_EPOCH) + 10646) // 10631
    prior_days = fixed - _fixed_from_islamic(year, 1, 1)
    month = (11 * prior_days + 330) // 325
    day = fixed - _fixed_from_islamic(year, month, 1) + 1
    return year, month, day


def islamic_date_label(on: date | None = None) -> str:
    year, month, day = islamic_date(on or date.today())
    return f"{day} {_ISLAMIC_MONTHS[month - 1]} {year} AH"
