"""Week-by-week calendar grid around a reference day.

The grid is plain data: renderers walk it and never change it.
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from types import MappingProxyType

from .shared import (
    TRACE_LEVEL_NUM,
    WEEKS_AFTER,
    WEEKS_BEFORE,
    get_logger,
    month_label,
)

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)
SATURDAY = 5
SUNDAY = 6


class InvalidArgumentError(ValueError):
    """Raised when a window size or a reference date cannot be used."""


@dataclass(frozen=True)
class Day:
    date: date
    day_of_month: int
    is_today: bool
    is_saturday: bool
    is_sunday: bool
    closes_month_right: bool
    closes_month_below: bool
    closes_year_right: bool
    closes_year_below: bool


@dataclass(frozen=True)
class Week:
    monday: date
    month_label: str
    days: tuple
    is_first_month_week: bool
    closes_month_below: bool = False
    closes_year_below: bool = False

    @property
    def year(self):
        return self.monday.year

    @property
    def month(self):
        return self.monday.month


@dataclass(frozen=True)
class Grid:
    anchor: date
    start: date
    stop: date
    weeks: tuple
    month_spans: MappingProxyType = field(hash=False)
    last_month: str

    def days(self):
        for week in self.weeks:
            yield from week.days

    @property
    def today(self):
        return next(day for day in self.days() if day.is_today)


def _check_window_size(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"{name} must be a non-negative integer, got {value!r}"
        )
    if value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value}")


def to_anchor_day(reference_date):
    """Truncate a date or datetime to its UTC calendar day.

    Naive datetimes are read as UTC wall-clock values.
    """
    if isinstance(reference_date, datetime):
        if reference_date.tzinfo is not None:
            reference_date = reference_date.astimezone(timezone.utc)
        return reference_date.date()
    if isinstance(reference_date, date):
        return reference_date
    raise InvalidArgumentError(
        f"reference date must be a date or datetime, got {reference_date!r}"
    )



def _make_day(current, anchor, stop):
    # Neighbours are only looked up inside the window, so dates near
    # date.max never overflow.
    days_left = (stop - current).days
    is_sunday = current.weekday() == SUNDAY
    has_right = days_left > 1 and not is_sunday
    has_below = days_left > 7
    next_day = current + ONE_DAY if has_right else None
    next_week = current + ONE_WEEK if has_below else None
    return Day(
        date=current,
        day_of_month=current.day,
        is_today=current == anchor,
        is_saturday=current.weekday() == SATURDAY,
        is_sunday=is_sunday,
        closes_month_right=has_right and next_day.month != current.month,
        closes_month_below=has_below and next_week.month != current.month,
        closes_year_right=has_right and next_day.year != current.year,
        closes_year_below=has_below and next_week.year != current.year,
    )


def _window(anchor, weeks_before, weeks_after):
    weekday = anchor.weekday()
    try:
        start = anchor - timedelta(days=weekday + 7 * weeks_before)
        stop = anchor + timedelta(days=7 - weekday + 7 * weeks_after)
    except OverflowError as e:
        raise InvalidArgumentError(
            f"window of {weeks_before} weeks before and {weeks_after} weeks after "
            f"{anchor.isoformat()} leaves the supported date range"
        ) from e
    return start, stop


def _span_boundaries(weeks):
    """For each week, tell whether its month run ends on another month/year.

    Returns (closes_month_below, closes_year_below) pairs, computed by
    comparing the week's month with the month of the run that follows it
    inside the window.
    """
    flags = [None] * len(weeks)
    following = None
    for idx in reversed(range(len(weeks))):
        key = (weeks[idx].year, weeks[idx].month)
        if idx + 1 < len(weeks):
            next_key = (weeks[idx + 1].year, weeks[idx + 1].month)
            if next_key != key:
                following = next_key
        closes_month = following is not None
        closes_year = closes_month and following[0] != key[0]
        flags[idx] = (closes_month, closes_year)
    return flags


def retract_first_week_borders(weeks):
    """Clear the month-cell border flags of the grid's first week.

    The first week sits at the top of the document; its month cell never
    draws a closing border of its own.
    """
    if not weeks:
        return weeks
    first = dataclasses.replace(
        weeks[0], closes_month_below=False, closes_year_below=False
    )
    return (first,) + tuple(weeks[1:])


def build_grid(
    reference_date=None, weeks_before=WEEKS_BEFORE, weeks_after=WEEKS_AFTER, logger=None
):
    """Lay out the weeks around ``reference_date``.

    The window starts on the Monday ``weeks_before`` weeks before the week
    holding the reference day and stops (exclusive) on the Monday following
    the week ``weeks_after`` weeks after it, so the grid always holds
    ``weeks_before + weeks_after + 1`` full Monday-to-Sunday weeks.

    Raises InvalidArgumentError for negative or non-integer window sizes,
    and for windows reaching past the range of ``datetime.date``.
    """
    _check_window_size("weeks_before", weeks_before)
    _check_window_size("weeks_after", weeks_after)
    if logger is None:
        logger = get_logger()
    if reference_date is None:
        reference_date = datetime.now(timezone.utc)

    anchor = to_anchor_day(reference_date)
    start, stop = _window(anchor, weeks_before, weeks_after)
    logger.debug(
        f"Building grid around {anchor.isoformat()}: window [{start.isoformat()}, {stop.isoformat()})"
    )

    # First pass: days, weeks and neighbour-derived flags.
    week_days = []
    current = start
    while current < stop:
        if current.weekday() == 0:
            week_days.append([])
            logger.log(TRACE_LEVEL_NUM, f"Opened week starting {current.isoformat()}")
        week_days[-1].append(_make_day(current, anchor, stop))
        current += ONE_DAY

    month_spans = {}
    weeks = []
    for days in week_days:
        monday = days[0].date
        label = month_label(monday.year, monday.month)
        is_first = label not in month_spans
        month_spans[label] = month_spans.get(label, 0) + 1
        weeks.append(
            Week(
                monday=monday,
                month_label=label,
                days=tuple(days),
                is_first_month_week=is_first,
            )
        )

    weeks = [
        dataclasses.replace(
            week, closes_month_below=closes_month, closes_year_below=closes_year
        )
        for week, (closes_month, closes_year) in zip(weeks, _span_boundaries(weeks))
    ]

    # Second pass: explicit correction of the top week.
    weeks = retract_first_week_borders(tuple(weeks))

    logger.debug(
        f"Grid built: {len(weeks)} weeks across {len(month_spans)} month labels."
    )
    return Grid(
        anchor=anchor,
        start=start,
        stop=stop,
        weeks=weeks,
        month_spans=MappingProxyType(month_spans),
        last_month=weeks[-1].month_label,
    )
