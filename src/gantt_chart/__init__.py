"""Render Gantt charts from JSON5/YAML project descriptions."""

from .chart_models import ChartSpec, Item, Resource, Scene
from .layout import (
    GanttChartError,
    MalformedInput,
    MissingFirstResource,
    MissingFirstStart,
    NoItems,
    ResourceIndexOutOfRange,
)
from .parse_chart import load_chart, loads_chart
from .render_png import render_png
from .render_svg import render_svg
from .scene import LayoutOptions, layout_chart

__all__ = [
    "ChartSpec",
    "GanttChartError",
    "Item",
    "LayoutOptions",
    "MalformedInput",
    "MissingFirstResource",
    "MissingFirstStart",
    "NoItems",
    "Resource",
    "ResourceIndexOutOfRange",
    "Scene",
    "layout_chart",
    "load_chart",
    "loads_chart",
    "render_png",
    "render_svg",
]
