from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from .chart_models import (
    ChartSpec,
    ColumnLayout,
    Diamond,
    Gutter,
    Label,
    LegendEntry,
    Line,
    ResolvedInterval,
    Resource,
    Row,
    Scene,
    StyleRule,
    TaskBar,
)
from .colors import color_to_hex, resource_colors
from .layout import date_to_x, layout_columns, resolve_interval
from .render_rows import to_render_rows

log = logging.getLogger(__name__)

# Geometry defaults, in SVG user units (pixels for PNG).
DEFAULT_TITLE_WIDTH = 210.0
DEFAULT_MAX_MONTH_WIDTH = 80.0
BASE_ROW_HEIGHT = 20.0
CORNER_RADIUS = 3.0
DEFAULT_GUTTER = Gutter(left=10.0, top=80.0, right=10.0, bottom=10.0)
DEFAULT_ROW_GUTTER = Gutter(left=0.0, top=5.0, right=0.0, bottom=5.0)
TITLE_INDENT = 5.0
MARKER_OVERSHOOT = 5.0
LEGEND_SWATCH_GAP = 5.0
LEGEND_ENTRY_GAP = 20.0
# Rough advance of a 12pt Arial glyph; the legend has no access to real font metrics.
LEGEND_CHAR_WIDTH = 7.0

FONT_FAMILY = "Arial"
TITLE_FONT_SIZE = 18
HEADING_FONT_SIZE = 16
ITEM_FONT_SIZE = 12
OUTER_LINE_COLOR = "#aaaaaa"
INNER_LINE_COLOR = "#dddddd"
MARKER_COLOR = "#888888"


@dataclass(frozen=True)
class LayoutOptions:
    """Caller-tunable layout knobs; `seed=None` draws the hue seed from the process-wide generator."""

    title_width: float = DEFAULT_TITLE_WIDTH
    max_month_width: float = DEFAULT_MAX_MONTH_WIDTH
    add_resource_table: bool = False
    seed: int | None = None
    gutter: Gutter = field(default=DEFAULT_GUTTER)
    row_gutter: Gutter = field(default=DEFAULT_ROW_GUTTER)

    @property
    def row_height(self) -> float:
        return self.row_gutter.top + self.row_gutter.bottom + BASE_ROW_HEIGHT


def layout_chart(spec: ChartSpec, options: LayoutOptions | None = None, rng: random.Random | None = None) -> Scene:
    """
    Lay out a chart into a Scene.

    Validation happens before any element is produced. `rng` takes precedence
    over `options.seed`; with neither, the hue seed comes from the
    process-wide generator.
    """

    options = options or LayoutOptions()
    interval = resolve_interval(spec.items, len(spec.resources))
    column_layout = layout_columns(interval, options.max_month_width)
    rows = to_render_rows(spec.items, interval, column_layout, options.gutter.left, options.title_width)
    marker_x = layout_marker(spec.marked_date, interval, column_layout, options.gutter.left, options.title_width)

    if rng is None and options.seed is not None:
        rng = random.Random(options.seed)
    colors = resource_colors(spec.resources, rng)

    log.debug("laid out %d rows over %d columns", len(rows), len(column_layout.columns))
    return assemble_scene(spec.title, spec.resources, colors, column_layout, rows, marker_x, options)


def layout_marker(
    marked_date: date | None,
    interval: ResolvedInterval,
    column_layout: ColumnLayout,
    left_gutter: float,
    title_width: float,
) -> float | None:
    """X position of the marked date; out-of-range dates are kept and drawn outside the grid."""

    if marked_date is None:
        return None
    if not interval.start_date <= marked_date <= interval.end_date:
        log.warning(
            "marked date %s lies outside the chart (%s..%s)", marked_date, interval.start_date, interval.end_date
        )
    return date_to_x(marked_date, interval, column_layout, title_width + left_gutter)


def layout_legend(
    resources: Sequence[Resource],
    origin_x: float,
    origin_y: float,
    row_height: float,
    row_gutter: Gutter,
) -> list[LegendEntry]:
    """One swatch + name per resource, left to right in a single row starting at (origin_x, origin_y)."""

    entries: list[LegendEntry] = []
    swatch_size = row_height - row_gutter.vertical
    x = origin_x
    for idx, resource in enumerate(resources):
        swatch = TaskBar(
            x=x,
            y=origin_y + row_gutter.top,
            width=swatch_size,
            height=swatch_size,
            radius=CORNER_RADIUS,
            resource_index=idx,
        )
        label_x = x + swatch_size + LEGEND_SWATCH_GAP
        label = Label(x=label_x, y=origin_y + row_height / 2, text=resource.title, style="item")
        entries.append(LegendEntry(resource_index=idx, name=resource.title, swatch=swatch, label=label))
        x = label_x + len(resource.title) * LEGEND_CHAR_WIDTH + LEGEND_ENTRY_GAP
    return entries


def build_styles(colors: Sequence[int]) -> tuple[StyleRule, ...]:
    """CSS rules for the SVG back end, including closed/open variants per resource colour."""

    rules = [
        StyleRule(".outer-lines", (("stroke-width", "3"), ("stroke", OUTER_LINE_COLOR))),
        StyleRule(".inner-lines", (("stroke-width", "2"), ("stroke", INNER_LINE_COLOR))),
        StyleRule(".item", _font(ITEM_FONT_SIZE) + (("dominant-baseline", "middle"),)),
        StyleRule(".title", _font(TITLE_FONT_SIZE) + (("dominant-baseline", "middle"),)),
        StyleRule(".heading", _font(HEADING_FONT_SIZE) + (("dominant-baseline", "middle"), ("text-anchor", "middle"))),
        StyleRule(".task-heading", (("text-anchor", "start"),)),
        StyleRule(".milestone", (("fill", "black"), ("stroke-width", "1"), ("stroke", "black"))),
        StyleRule(".marker", (("stroke-width", "2"), ("stroke", MARKER_COLOR), ("stroke-dasharray", "7"))),
    ]
    for idx, color in enumerate(colors):
        hex_color = color_to_hex(color)
        rules.append(StyleRule(f".resource-{idx}-closed", (("fill", hex_color), ("stroke", hex_color))))
        rules.append(StyleRule(f".resource-{idx}-open", (("fill", "white"), ("stroke-width", "2"), ("stroke", hex_color))))
    return tuple(rules)


def _font(size: int) -> tuple[tuple[str, str], ...]:
    return (("font-family", FONT_FAMILY), ("font-size", f"{size}pt"))


def assemble_scene(
    title: str,
    resources: Sequence[Resource],
    colors: Sequence[int],
    column_layout: ColumnLayout,
    rows: Sequence[Row],
    marker_x: float | None,
    options: LayoutOptions,
) -> Scene:
    """Compose laid-out rows and columns into the primitives both back ends draw."""

    gutter = options.gutter
    row_gutter = options.row_gutter
    row_height = options.row_height
    grid_left = gutter.left
    columns_left = gutter.left + options.title_width
    grid_right = columns_left + column_layout.total_width
    rows_top = gutter.top
    rows_bottom = rows_top + len(rows) * row_height
    legend_height = row_height if options.add_resource_table else 0.0

    width = gutter.left + options.title_width + sum(c.width_units for c in column_layout.columns) + gutter.right
    height = gutter.top + len(rows) * row_height + legend_height + gutter.bottom
    header_y = rows_top - row_height / 2

    column_lines: list[Line] = []
    column_labels: list[Label] = []
    x = columns_left
    for column in column_layout.columns:
        column_lines.append(Line(x, rows_top, x, rows_bottom, "inner-lines"))
        column_labels.append(Label(x + column.width_units / 2, header_y, column.month_name, "heading"))
        x += column.width_units
    column_lines.append(Line(x, rows_top, x, rows_bottom, "inner-lines"))

    row_lines: list[Line] = []
    for idx in range(len(rows) + 1):
        y = rows_top + idx * row_height
        style = "outer-lines" if idx in (0, len(rows)) else "inner-lines"
        row_lines.append(Line(grid_left, y, grid_right, y, style))

    row_labels: list[Label] = []
    bars: list[TaskBar] = []
    milestones: list[Diamond] = []
    glyph_height = row_height - row_gutter.vertical
    for idx, row in enumerate(rows):
        y = rows_top + idx * row_height
        row_labels.append(Label(grid_left + TITLE_INDENT, y + row_height / 2, row.title, "item"))
        if row.length is None:
            milestones.append(Diamond(cx=row.x_offset, cy=y + row_height / 2, n=glyph_height / 2))
        else:
            bars.append(
                TaskBar(
                    x=row.x_offset,
                    y=y + row_gutter.top,
                    width=row.length,
                    height=glyph_height,
                    radius=CORNER_RADIUS,
                    resource_index=row.resource_index,
                    open=row.open,
                )
            )

    marker_line = None
    if marker_x is not None:
        marker_line = Line(marker_x, rows_top - MARKER_OVERSHOOT, marker_x, rows_bottom + MARKER_OVERSHOOT, "marker")

    legend_entries = None
    if options.add_resource_table:
        legend_entries = tuple(layout_legend(resources, grid_left, rows_bottom, row_height, row_gutter))
        if legend_entries:
            last = legend_entries[-1]
            legend_right = last.label.x + len(last.name) * LEGEND_CHAR_WIDTH
            if legend_right > width - gutter.right:
                log.warning(
                    "resource legend (%g wide) runs past the chart's right edge at %g; widen the chart with -t or -m",
                    legend_right - grid_left,
                    width - gutter.right,
                )

    return Scene(
        title=title,
        width=width,
        height=height,
        gutter=gutter,
        row_gutter=row_gutter,
        title_width=options.title_width,
        max_month_width=options.max_month_width,
        row_height=row_height,
        corner_radius=CORNER_RADIUS,
        styles=build_styles(colors),
        columns=column_layout.columns,
        rows=tuple(rows),
        resource_colors=tuple(colors),
        title_label=Label(gutter.left, gutter.top / 4, title, "title"),
        task_heading=Label(grid_left + TITLE_INDENT, header_y, "Tasks", "task-heading"),
        column_labels=tuple(column_labels),
        column_lines=tuple(column_lines),
        row_lines=tuple(row_lines),
        row_labels=tuple(row_labels),
        bars=tuple(bars),
        milestones=tuple(milestones),
        marker_x=marker_x,
        marker_line=marker_line,
        legend_entries=legend_entries,
        legend_height=legend_height,
    )
