from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import json5
import yaml

from .chart_models import ChartSpec, Item, Resource
from .colors import parse_color
from .layout import MalformedInput

YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class _Path:
    """Helper to produce readable document path strings like items[0].startDate."""

    parts: tuple[str, ...] = ()

    def child(self, segment: str) -> "_Path":
        return _Path(self.parts + (segment,))

    def __str__(self) -> str:
        return ".".join(self.parts) if self.parts else "root"


def load_chart(path: str | Path) -> ChartSpec:
    """Load a ChartSpec from a JSON5 file, or a YAML file when the suffix says so."""

    path = Path(path)
    fmt = "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json5"
    return loads_chart(path.read_bytes(), fmt=fmt)


def loads_chart(text: str | bytes, fmt: str = "json5") -> ChartSpec:
    """
    Parse a chart document held in memory; `fmt` is 'json5' or 'yaml'.

    Bytes are decoded as UTF-8.
    """

    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"input is not valid UTF-8: {exc}") from exc

    if fmt == "yaml":
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MalformedInput(f"invalid YAML: {exc}") from exc
    elif fmt == "json5":
        try:
            raw = json5.loads(text)
        except ValueError as exc:
            raise MalformedInput(f"invalid JSON: {exc}") from exc
    else:
        raise ValueError(f"unsupported chart format '{fmt}'")

    return _parse_chart(raw, _Path())


def _parse_chart(data: Any, path: _Path) -> ChartSpec:
    if not isinstance(data, dict):
        raise MalformedInput(f"{path}: expected mapping at top level")

    _assert_allowed_keys(data, {"title", "markedDate", "resources", "items"}, path)
    title = _require_str(data, "title", path)

    marked_date = None
    if data.get("markedDate") is not None:
        marked_date = _parse_date(data["markedDate"], path.child("markedDate"))

    resources_raw = _require_value(data, "resources", path)
    if not isinstance(resources_raw, list):
        raise MalformedInput(f"{path.child('resources')}: expected list")
    resources = [
        _parse_resource(resource_raw, path.child(f"resources[{idx}]")) for idx, resource_raw in enumerate(resources_raw)
    ]

    items_raw = _require_value(data, "items", path)
    if not isinstance(items_raw, list):
        raise MalformedInput(f"{path.child('items')}: expected list")
    items = [_parse_item(item_raw, path.child(f"items[{idx}]")) for idx, item_raw in enumerate(items_raw)]

    return ChartSpec(title=title, resources=tuple(resources), items=tuple(items), marked_date=marked_date)


def _parse_resource(data: Any, path: _Path) -> Resource:
    if isinstance(data, str):
        return Resource(title=data)
    if not isinstance(data, dict):
        raise MalformedInput(f"{path}: expected resource name or mapping")

    _assert_allowed_keys(data, {"title", "color"}, path)
    title = _require_str(data, "title", path)
    color = None
    if data.get("color") is not None:
        try:
            color = parse_color(data["color"])
        except ValueError as exc:
            raise MalformedInput(f"{path.child('color')}: {exc}") from exc
    return Resource(title=title, color=color)


def _parse_item(data: Any, path: _Path) -> Item:
    if not isinstance(data, dict):
        raise MalformedInput(f"{path}: expected mapping for item")

    _assert_allowed_keys(data, {"title", "startDate", "duration", "resource", "open"}, path)

    title = data.get("title", "")
    if not isinstance(title, str):
        raise MalformedInput(f"{path.child('title')}: expected string")

    start_date = None
    if data.get("startDate") is not None:
        start_date = _parse_date(data["startDate"], path.child("startDate"))

    duration = _optional_non_negative_int(data, "duration", path)
    resource_index = _optional_non_negative_int(data, "resource", path)

    is_open = data.get("open", False)
    if not isinstance(is_open, bool):
        raise MalformedInput(f"{path.child('open')}: expected boolean")

    return Item(
        title=title,
        start_date=start_date,
        duration=duration,
        resource_index=resource_index,
        open=is_open,
    )


def _assert_allowed_keys(data: dict[str, Any], allowed: set[str], path: _Path) -> None:
    extras = sorted(str(key) for key in set(data.keys()) - allowed)
    if extras:
        raise MalformedInput(f"{path}: unexpected fields {extras}")


def _require_str(data: dict[str, Any], key: str, path: _Path) -> str:
    value = _require_value(data, key, path)
    if not isinstance(value, str) or not value.strip():
        raise MalformedInput(f"{path.child(key)}: expected non-empty string")
    return value


def _require_value(data: dict[str, Any], key: str, path: _Path) -> Any:
    if key not in data:
        raise MalformedInput(f"{path}: missing required field '{key}'")
    return data[key]


def _optional_non_negative_int(data: dict[str, Any], key: str, path: _Path) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; `true` is not a duration.
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInput(f"{path.child(key)}: expected integer")
    if value < 0:
        raise MalformedInput(f"{path.child(key)}: expected non-negative integer, got {value}")
    return value


def _parse_date(value: Any, path: _Path) -> _dt.date:
    # YAML resolves unquoted dates itself.
    if isinstance(value, _dt.date) and not isinstance(value, _dt.datetime):
        return value
    if not isinstance(value, str):
        raise MalformedInput(f"{path}: expected YYYY-MM-DD string")
    try:
        parsed = _dt.date.fromisoformat(value)
    except ValueError as exc:
        raise MalformedInput(f"{path}: expected YYYY-MM-DD string, got '{value}'") from exc
    return parsed
