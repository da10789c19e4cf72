"""Resolution of relative date expressions ("nächsten Montag") to calendar dates.

Patterns and day/month names come from the locale table; the arithmetic
here is language-neutral. Resolution is always relative to a reference
date supplied by the caller (an entry's creation time), never "now".
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from kontext.locale import Locale, get_locale

FRIDAY = 4
WEDNESDAY = 2

Resolver = Callable[[re.Match[str], date, Locale], date | None]


def _days_until(weekday: int, ref: date) -> int:
    """Days from *ref* to the next *weekday*; the same weekday counts as a week away."""
    return (weekday - ref.weekday()) % 7 or 7


def _weekday_from_match(match: re.Match[str], locale: Locale) -> int | None:
    return locale.weekdays.get(match.group(1).lower())


def add_months(ref: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    month_index = ref.month - 1 + months
    year = ref.year + month_index // 12
    month = month_index % 12 + 1
    day = min(ref.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# -- Resolvers ---------------------------------------------------------------


def _today(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref


def _tomorrow(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=1)


def _day_after_tomorrow(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=2)


def _next_weekday(match: re.Match[str], ref: date, locale: Locale) -> date | None:
    weekday = _weekday_from_match(match, locale)
    if weekday is None:
        return None
    return ref + timedelta(days=_days_until(weekday, ref))


def _weekday_after_next(match: re.Match[str], ref: date, locale: Locale) -> date | None:
    weekday = _weekday_from_match(match, locale)
    if weekday is None:
        return None
    return ref + timedelta(days=_days_until(weekday, ref) + 7)


def _in_days(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=int(match.group(1)))


def _in_weeks(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(weeks=int(match.group(1)))


def _in_months(match: re.Match[str], ref: date, locale: Locale) -> date:
    return add_months(ref, int(match.group(1)))


def _next_week(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=7)


def _end_of_week(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=_days_until(FRIDAY, ref))


def _middle_of_week(match: re.Match[str], ref: date, locale: Locale) -> date:
    return ref + timedelta(days=_days_until(WEDNESDAY, ref))


RESOLVERS: dict[str, Resolver] = {
    "today": _today,
    "tomorrow": _tomorrow,
    "day_after_tomorrow": _day_after_tomorrow,
    "next_weekday": _next_weekday,
    "weekday_after_next": _weekday_after_next,
    "in_days": _in_days,
    "in_weeks": _in_weeks,
    "in_months": _in_months,
    "next_week": _next_week,
    "end_of_week": _end_of_week,
    "middle_of_week": _middle_of_week,
}


# -- Public API --------------------------------------------------------------


@dataclass
class RelativeDateMatch:
    match: re.Match[str]
    resolver: str

    @property
    def index(self) -> int:
        return self.match.start()

    def resolve(self, ref: date, locale: Locale | None = None) -> date | None:
        return RESOLVERS[self.resolver](self.match, ref, locale or get_locale())


def find_relative_date(content: str, locale: Locale | None = None) -> RelativeDateMatch | None:
    """Return the first relative date expression in *content*, in table order."""
    locale = locale or get_locale()
    for entry in locale.relative_dates:
        match = entry.pattern.search(content)
        if match:
            return RelativeDateMatch(match=match, resolver=entry.resolver)
    return None


def local_date(moment: datetime, timezone: str) -> date:
    """Calendar date of *moment* in *timezone*. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(ZoneInfo(timezone)).date()


def format_date_long(day: date, locale: Locale | None = None) -> str:
    """Human-readable date, e.g. ``Montag, 5. Oktober 2026``."""
    locale = locale or get_locale()
    day_name = locale.day_names[day.weekday()]
    month_name = locale.month_names[day.month - 1]
    return f"{day_name}, {day.day}. {month_name} {day.year}"
