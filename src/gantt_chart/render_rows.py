from __future__ import annotations

from typing import List, Sequence

from .chart_models import ColumnLayout, Item, ResolvedInterval, Row
from .layout import CarryState, date_to_x


def to_render_rows(
    items: Sequence[Item],
    interval: ResolvedInterval,
    column_layout: ColumnLayout,
    left_gutter: float,
    title_width: float,
) -> list[Row]:
    """
    Convert validated items into one positioned row each, in input order.

    Omitted start dates and resource indices are carried over from the
    previous item. Tasks get a bar length proportional to their duration;
    milestones get an offset only.
    """

    rows: List[Row] = []
    origin_x = left_gutter + title_width
    state = CarryState()

    for item in items:
        state = state.enter(item)
        if state.cursor is None or state.resource_index is None:
            raise ValueError("items must be validated with resolve_interval before laying out rows")

        x_offset = date_to_x(state.cursor, interval, column_layout, origin_x)
        length = None
        if item.duration is not None:
            length = item.duration / column_layout.total_days * column_layout.total_width
        rows.append(
            Row(
                title=item.title,
                resource_index=state.resource_index,
                x_offset=x_offset,
                length=length,
                open=item.open,
            )
        )
        state = state.leave(item)

    return rows
