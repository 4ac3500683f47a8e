from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path

from .layout import GanttChartError
from .parse_chart import load_chart, loads_chart
from .render_png import render_png
from .render_svg import render_svg
from .scene import DEFAULT_MAX_MONTH_WIDTH, DEFAULT_TITLE_WIDTH, LayoutOptions, layout_chart

log = logging.getLogger("gantt_chart")

RENDERERS = {"svg": render_svg, "png": render_png}


class _LowerLevelFormatter(logging.Formatter):
    """Formats records as `warning: message`."""

    def format(self, record: logging.LogRecord) -> str:
        return f"{record.levelname.lower()}: {record.getMessage()}"


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid width '{value}'") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"width must be positive, got {value}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gantt-chart",
        description="Generate a Gantt chart from a JSON5 (or YAML) project description",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input_file", metavar="INPUT_FILE", nargs="?", help="Chart file; standard input if omitted")
    parser.add_argument(
        "output_file", metavar="OUTPUT_FILE", nargs="?", help="Output file; standard output if omitted (SVG only)"
    )
    parser.add_argument("-o", "--output", dest="output_option", metavar="OUTPUT_FILE", help="Output file")
    parser.add_argument(
        "-t", "--title-width", type=_positive_float, default=DEFAULT_TITLE_WIDTH, metavar="WIDTH",
        help="Width of the task title column",
    )
    parser.add_argument(
        "-m", "--max-month-width", type=_positive_float, default=DEFAULT_MAX_MONTH_WIDTH, metavar="WIDTH",
        help="Width of a 31-day month column",
    )
    parser.add_argument(
        "-r", "--add-resource-table", action="store_true", help="Add a resource colour legend below the chart"
    )
    parser.add_argument(
        "-f", "--format", choices=sorted(RENDERERS), help="Output format; inferred from the output suffix by default"
    )
    parser.add_argument("--seed", type=int, help="Seed for generated resource colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log layout details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_tool_version()}")
    return parser


def _tool_version() -> str:
    try:
        return metadata.version("gantt-chart")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _configure_logging(verbose: bool) -> None:
    for handler in list(log.handlers):
        log.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_LowerLevelFormatter())
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_format(explicit: str | None, output: str | None) -> str:
    if explicit:
        return explicit
    if output and Path(output).suffix.lower() == ".png":
        return "png"
    return "svg"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.output_file and args.output_option:
        parser.error("give the output file either positionally or with -o/--output, not both")
    output = args.output_option or args.output_file
    fmt = _resolve_format(args.format, output)

    try:
        if fmt == "png" and output is None:
            raise GanttChartError("PNG output requires an output file")

        if args.input_file:
            spec = load_chart(args.input_file)
        else:
            spec = loads_chart(sys.stdin.buffer.read())

        options = LayoutOptions(
            title_width=args.title_width,
            max_month_width=args.max_month_width,
            add_resource_table=args.add_resource_table,
            seed=args.seed,
        )
        scene = layout_chart(spec, options)
        data = RENDERERS[fmt](scene)

        if output is None:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        else:
            Path(output).write_bytes(data)
    except (GanttChartError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    log.debug("wrote %s chart to %s", fmt, output or "<stdout>")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
