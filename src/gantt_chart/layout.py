from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Sequence

from .calendar_utils import days_in_month, first_day_of_month, iter_months, last_day_of_month, month_short_name
from .chart_models import Column, ColumnLayout, Item, ResolvedInterval

log = logging.getLogger(__name__)

DAYS_PER_FULL_COLUMN = 31


class GanttChartError(Exception):
    """Base class for every error the chart tool reports to the user."""


class MalformedInput(GanttChartError):
    """Raised when the input document fails structural or date parsing."""


class NoItems(GanttChartError):
    """Raised when a chart declares no items at all."""


class MissingFirstStart(GanttChartError):
    """Raised when the first item omits its start date."""


class MissingFirstResource(GanttChartError):
    """Raised when the first item omits its resource index."""


class ResourceIndexOutOfRange(GanttChartError):
    """Raised when an item references a resource that does not exist."""


@dataclass(frozen=True)
class CarryState:
    """
    Date cursor and resource index carried from item to item.

    `enter` applies an item's explicit values; `leave` advances the cursor
    past the item's duration.
    """

    cursor: date | None = None
    resource_index: int | None = None

    def enter(self, item: Item) -> "CarryState":
        cursor = item.start_date if item.start_date is not None else self.cursor
        resource_index = item.resource_index if item.resource_index is not None else self.resource_index
        return replace(self, cursor=cursor, resource_index=resource_index)

    def leave(self, item: Item) -> "CarryState":
        if item.duration is None or self.cursor is None:
            return self
        return replace(self, cursor=self.cursor + timedelta(days=item.duration))


def resolve_interval(items: Sequence[Item], resource_count: int) -> ResolvedInterval:
    """
    Validate items and derive the project interval snapped to whole months.

    - The first item must carry both a start date and a resource index.
    - Every explicit resource index must address an existing resource.
    - Start dates may jump backwards; the earliest observed date wins.
    """

    if not items:
        raise NoItems("chart must contain at least one item")

    first = items[0]
    if first.start_date is None:
        raise MissingFirstStart(f"items[0] '{first.title}': first item must have a start date")
    if first.resource_index is None:
        raise MissingFirstResource(f"items[0] '{first.title}': first item must have a resource index")

    start: date = first.start_date
    end: date = first.start_date
    state = CarryState()

    for idx, item in enumerate(items):
        if item.start_date is not None and item.start_date < start:
            start = item.start_date
        if item.resource_index is not None:
            _check_resource_index(item.resource_index, resource_count, idx)

        try:
            state = state.enter(item).leave(item)
        except OverflowError as exc:
            raise MalformedInput(
                f"items[{idx}] '{item.title}': end date is outside the supported calendar range"
            ) from exc
        if state.cursor is not None and state.cursor > end:
            end = state.cursor

    try:
        interval = ResolvedInterval(first_day_of_month(start), last_day_of_month(end))
    except ValueError as exc:
        raise MalformedInput(f"project end {end} is outside the supported calendar range") from exc
    log.debug("resolved interval %s..%s (%d days)", interval.start_date, interval.end_date, interval.total_days)
    return interval


def _check_resource_index(resource_index: int, resource_count: int, idx: int) -> None:
    if not 0 <= resource_index < resource_count:
        raise ResourceIndexOutOfRange(
            f"items[{idx}]: resource index {resource_index} is out of range "
            f"(chart has {resource_count} resource{'s' if resource_count != 1 else ''})"
        )


def layout_columns(interval: ResolvedInterval, max_month_width: float) -> ColumnLayout:
    """One column per month; a 31-day month is `max_month_width` wide."""

    columns: list[Column] = []
    total_width = 0.0
    total_days = 0
    for year, month in iter_months(interval.start_date, interval.end_date):
        days = days_in_month(year, month)
        width = max_month_width * days / DAYS_PER_FULL_COLUMN
        columns.append(
            Column(year=year, month=month, month_name=month_short_name(month), days=days, width_units=width)
        )
        total_width += width
        total_days += days

    return ColumnLayout(columns=tuple(columns), total_width=total_width, total_days=total_days)


def date_to_x(day: date, interval: ResolvedInterval, column_layout: ColumnLayout, origin_x: float) -> float:
    """Horizontal position of the start of `day` within the column area starting at `origin_x`."""
    elapsed = (day - interval.start_date).days
    return origin_x + elapsed / column_layout.total_days * column_layout.total_width
