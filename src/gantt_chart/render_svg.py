from __future__ import annotations

import svgwrite

from .chart_models import Diamond, Label, Line, Scene, TaskBar


def render_svg(scene: Scene) -> bytes:
    """
    Serialise a Scene to SVG.

    Element order: style (inside the leading defs), title, column group,
    'Tasks' heading, row group, marker, legend. Output is a pure function
    of the scene.
    """

    width = _num(scene.width)
    height = _num(scene.height)
    dwg = svgwrite.Drawing(size=(width, height), profile="full", debug=False, style="background-color: white")
    dwg["viewBox"] = f"0 0 {width} {height}"
    dwg.defs.add(dwg.style(_style_block(scene)))

    dwg.add(_text(dwg, scene.title_label))

    columns = dwg.add(dwg.g(id="columns"))
    for line in scene.column_lines:
        columns.add(_line(dwg, line))
    for label in scene.column_labels:
        columns.add(_text(dwg, label))

    dwg.add(_text(dwg, scene.task_heading, extra_class="heading"))

    rows = dwg.add(dwg.g(id="rows"))
    for line in scene.row_lines:
        rows.add(_line(dwg, line))
    for label in scene.row_labels:
        rows.add(_text(dwg, label))
    for bar in scene.bars:
        rows.add(_bar(dwg, bar))
    for diamond in scene.milestones:
        rows.add(_diamond(dwg, diamond))

    if scene.marker_line is not None:
        dwg.add(_line(dwg, scene.marker_line))

    if scene.legend_entries is not None:
        legend = dwg.add(dwg.g(id="resources"))
        for entry in scene.legend_entries:
            legend.add(_bar(dwg, entry.swatch))
            legend.add(_text(dwg, entry.label))

    return (dwg.tostring() + "\n").encode("utf-8")


def _num(value: float) -> str:
    """Shortest text that parses back to exactly `value`."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _style_block(scene: Scene) -> str:
    lines = [""]
    for rule in scene.styles:
        body = " ".join(f"{prop}: {value};" for prop, value in rule.declarations)
        lines.append(f"  {rule.selector} {{ {body} }}")
    return "\n".join(lines) + "\n"


def _line(dwg: svgwrite.Drawing, line: Line):
    return dwg.line(start=(line.x1, line.y1), end=(line.x2, line.y2), class_=line.style)


def _text(dwg: svgwrite.Drawing, label: Label, extra_class: str | None = None):
    classes = f"{extra_class} {label.style}" if extra_class else label.style
    return dwg.text(label.text, insert=(label.x, label.y), class_=classes)


def _bar(dwg: svgwrite.Drawing, bar: TaskBar):
    return dwg.rect(
        insert=(bar.x, bar.y),
        size=(bar.width, bar.height),
        rx=bar.radius,
        ry=bar.radius,
        class_=bar.style,
    )


def _diamond(dwg: svgwrite.Drawing, diamond: Diamond):
    return dwg.polygon(points=diamond.points, class_="milestone")
