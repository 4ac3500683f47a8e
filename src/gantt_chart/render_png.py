from __future__ import annotations

import io
import math

import matplotlib

matplotlib.use("Agg")  # ensure headless, deterministic output
import matplotlib.pyplot as plt
from matplotlib.font_manager import FontProperties
from matplotlib.patches import FancyBboxPatch, Polygon
from matplotlib.textpath import TextPath

from .chart_models import Diamond, Label, Line, Scene, TaskBar
from .colors import color_to_hex

DPI = 100
POINTS_PER_INCH = 72.0
FONT_FAMILIES = ["Arial", "Liberation Sans", "DejaVu Sans"]
METRICS_SAMPLE = "XgbQ"

# Paint table mirroring the SVG classes: (colour, stroke width px, dashes).
LINE_PAINT = {
    "outer-lines": ("#aaaaaa", 3.0, None),
    "inner-lines": ("#dddddd", 2.0, None),
    "marker": ("#888888", 2.0, (7, 7)),
}
FONT_SIZES = {"title": 18, "heading": 16, "task-heading": 16, "item": 12}
OPEN_STROKE_WIDTH = 2.0


def render_png(scene: Scene) -> bytes:
    """
    Paint a Scene onto a white raster canvas sized to the scene in pixels.

    Coordinates map 1:1 to pixels with y growing downwards, as in SVG.
    """

    width_px = max(1, math.ceil(scene.width))
    height_px = max(1, math.ceil(scene.height))

    rc = {"font.family": "sans-serif", "font.sans-serif": FONT_FAMILIES, "lines.scale_dashes": False}
    with plt.rc_context(rc):
        fig = plt.figure(figsize=(width_px / DPI, height_px / DPI), dpi=DPI)
        try:
            fig.patch.set_facecolor("white")
            ax = fig.add_axes((0, 0, 1, 1))
            ax.set_xlim(0, width_px)
            ax.set_ylim(height_px, 0)
            ax.axis("off")

            _draw_text(ax, scene.title_label)
            for line in scene.column_lines:
                _draw_line(ax, line)
            for label in scene.column_labels:
                _draw_text(ax, label)
            _draw_text(ax, scene.task_heading)
            for line in scene.row_lines:
                _draw_line(ax, line)
            for label in scene.row_labels:
                _draw_text(ax, label)
            for bar in scene.bars:
                _draw_bar(ax, bar, scene.resource_colors)
            for diamond in scene.milestones:
                _draw_diamond(ax, diamond)
            if scene.marker_line is not None:
                _draw_line(ax, scene.marker_line)
            for entry in scene.legend_entries or ():
                _draw_bar(ax, entry.swatch, scene.resource_colors)
                _draw_text(ax, entry.label)

            buffer = io.BytesIO()
            fig.savefig(buffer, format="png", dpi=DPI, facecolor="white")
        finally:
            plt.close(fig)
    return buffer.getvalue()


def _px_to_points(px: float) -> float:
    return px * POINTS_PER_INCH / DPI


def text_metrics(font_size: float) -> tuple[float, float]:
    """
    Ascent and descent in pixels for `font_size` points.

    Estimated from the extents of the glyphs 'XgbQ'.
    """
    prop = FontProperties(family="sans-serif", size=font_size)
    extents = TextPath((0, 0), METRICS_SAMPLE, prop=prop).get_extents()
    scale = DPI / POINTS_PER_INCH
    return extents.y1 * scale, -extents.y0 * scale


def _draw_line(ax, line: Line) -> None:
    color, width_px, dashes = LINE_PAINT[line.style]
    (artist,) = ax.plot(
        [line.x1, line.x2],
        [line.y1, line.y2],
        color=color,
        linewidth=_px_to_points(width_px),
        solid_capstyle="butt",
    )
    if dashes is not None:
        artist.set_dashes([_px_to_points(d) for d in dashes])


def _draw_text(ax, label: Label) -> None:
    size = FONT_SIZES[label.style]
    ascent, descent = text_metrics(size)
    # Put the baseline so the ascent/descent box is centred on label.y.
    baseline = label.y + (ascent - descent) / 2
    ha = "center" if label.style == "heading" else "left"
    ax.text(label.x, baseline, label.text, fontsize=size, ha=ha, va="baseline", color="black")


def _draw_bar(ax, bar: TaskBar, colors: tuple[int, ...]) -> None:
    color = color_to_hex(colors[bar.resource_index])
    patch = FancyBboxPatch(
        (bar.x, bar.y),
        bar.width,
        bar.height,
        boxstyle=f"round,pad=0,rounding_size={min(bar.radius, bar.width / 2, bar.height / 2)}",
        facecolor="white" if bar.open else color,
        edgecolor=color,
        linewidth=_px_to_points(OPEN_STROKE_WIDTH if bar.open else 1.0),
    )
    ax.add_patch(patch)


def _draw_diamond(ax, diamond: Diamond) -> None:
    ax.add_patch(Polygon(diamond.points, closed=True, facecolor="black", edgecolor="black"))
