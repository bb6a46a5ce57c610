"""Timestamp parsing and calendar-day normalization.

Callers of the resolvers pass calendar dates ("as of 2024-01-05"), not
precise instants. A date query covers the whole day in the reference time
zone: lower bounds snap to the first instant of the day, upper bounds to
the last one.

Every instant returned here is in UTC. Two datetimes sharing one zone
compare by wall clock, which misorders the repeated hour of a DST
fall-back; the reference zone is only used to decide which calendar day
an instant belongs to.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo

DateLike = date | datetime | str


def _localize(raw: object, tz: tzinfo) -> datetime | None:
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, date):
        value = datetime.combine(raw, time.min)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value


def parse_instant(raw: object, tz: tzinfo) -> datetime | None:
    """Parse a ledger timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (with or without offset, "Z" included),
    date-only strings (midnight), ``date`` and ``datetime`` objects.
    Naive values are taken to be local to ``tz``. Returns None for anything
    that cannot be parsed.
    """
    value = _localize(raw, tz)
    if value is None:
        return None
    return value.astimezone(timezone.utc)


def calendar_day(value: DateLike, tz: tzinfo) -> date:
    """Return the calendar day of ``value`` as seen in ``tz``."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value

    localized = _localize(value, tz)
    if localized is None:
        raise ValueError(f"Unparsable date: {value!r}")
    return localized.astimezone(tz).date()


def start_of_day(value: DateLike, tz: tzinfo) -> datetime:
    """First instant (UTC) of the calendar day containing ``value``."""
    local = datetime.combine(calendar_day(value, tz), time.min, tzinfo=tz)
    return local.astimezone(timezone.utc)


def end_of_day(value: DateLike, tz: tzinfo) -> datetime:
    """Last instant (UTC) of the calendar day containing ``value``.

    ``fold=1`` picks the later occurrence when the last local hour repeats.
    """
    local = datetime.combine(calendar_day(value, tz), time.max, tzinfo=tz).replace(fold=1)
    return local.astimezone(timezone.utc)
