from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal


LineStyle = Literal["outer-lines", "inner-lines", "marker"]
"""Stroke classes shared by grid lines and the marker."""

LabelStyle = Literal["title", "heading", "task-heading", "item"]
"""Text classes: chart title, month heading, 'Tasks' heading, item/legend text."""


@dataclass(frozen=True)
class Resource:
    """Named category that drives bar colours; identity is its list position."""

    title: str
    color: int | None = None


@dataclass(frozen=True)
class Item:
    """
    One chart row as declared in the input document.

    `start_date` and `resource_index` may be omitted after the first item and
    are then carried over from the previous item.
    """

    title: str
    start_date: date | None = None
    duration: int | None = None
    resource_index: int | None = None
    open: bool = False

    @property
    def is_milestone(self) -> bool:
        """Items without a duration render as a single-date diamond."""
        return self.duration is None


@dataclass(frozen=True)
class ChartSpec:
    """Root chart description: title, resources and items in layout order."""

    title: str
    resources: tuple[Resource, ...] = ()
    items: tuple[Item, ...] = ()
    marked_date: date | None = None


@dataclass(frozen=True)
class ResolvedInterval:
    """Project interval snapped to whole months (both ends inclusive)."""

    start_date: date
    end_date: date

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class Column:
    """A month-wide slice of the grid."""

    year: int
    month: int
    month_name: str
    days: int
    width_units: float


@dataclass(frozen=True)
class ColumnLayout:
    columns: tuple[Column, ...]
    total_width: float
    total_days: int


@dataclass(frozen=True)
class Row:
    """
    Laid-out item.

    `length` is None for milestones and a (possibly zero) bar length for tasks.
    """

    title: str
    resource_index: int
    x_offset: float
    length: float | None = None
    open: bool = False

    @property
    def is_milestone(self) -> bool:
        return self.length is None


@dataclass(frozen=True)
class Gutter:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class StyleRule:
    """CSS-like rule, e.g. `.marker { stroke-width: 2; ... }`."""

    selector: str
    declarations: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: LineStyle


@dataclass(frozen=True)
class Label:
    """Text anchored at (x, y); y is the vertical centre of the text."""

    x: float
    y: float
    text: str
    style: LabelStyle


@dataclass(frozen=True)
class TaskBar:
    """Rounded rectangle; `style` is a `resource-<i>-closed|open` class."""

    x: float
    y: float
    width: float
    height: float
    radius: float
    resource_index: int
    open: bool = False

    @property
    def style(self) -> str:
        variant = "open" if self.open else "closed"
        return f"resource-{self.resource_index}-{variant}"


@dataclass(frozen=True)
class Diamond:
    """Milestone glyph centred on (cx, cy) with half-diagonal `n`."""

    cx: float
    cy: float
    n: float

    @property
    def points(self) -> tuple[tuple[float, float], ...]:
        return (
            (self.cx, self.cy - self.n),
            (self.cx + self.n, self.cy),
            (self.cx, self.cy + self.n),
            (self.cx - self.n, self.cy),
        )


@dataclass(frozen=True)
class LegendEntry:
    resource_index: int
    name: str
    swatch: TaskBar
    label: Label


@dataclass(frozen=True)
class Scene:
    """
    Fully resolved, back-end agnostic chart.

    The scalar fields and `columns`/`rows` describe the layout; the remaining
    fields are the primitives a back end draws, in drawing order.
    """

    title: str
    width: float
    height: float
    gutter: Gutter
    row_gutter: Gutter
    title_width: float
    max_month_width: float
    row_height: float
    corner_radius: float
    styles: tuple[StyleRule, ...]
    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    resource_colors: tuple[int, ...]
    title_label: Label
    task_heading: Label
    column_labels: tuple[Label, ...] = ()
    column_lines: tuple[Line, ...] = ()
    row_lines: tuple[Line, ...] = ()
    row_labels: tuple[Label, ...] = ()
    bars: tuple[TaskBar, ...] = ()
    milestones: tuple[Diamond, ...] = ()
    marker_x: float | None = None
    marker_line: Line | None = None
    legend_entries: tuple[LegendEntry, ...] | None = None
    legend_height: float = 0.0
