from __future__ import annotations

import colorsys
import random
import string
from typing import Sequence

from .chart_models import Resource

GOLDEN_RATIO_CONJUGATE = 0.618033988749895
SATURATION = 0.5
VALUE = 0.5


def hsv_to_rgb(h: float, s: float, v: float) -> int:
    """
    Convert HSV (all in [0, 1]) to a packed 0xRRGGBB integer.

    Channels are scaled by 256 rather than 255 and clamped to a byte.
    """
    r, g, b = colorsys.hsv_to_rgb(h % 1.0, s, v)
    return (_channel(r) << 16) | (_channel(g) << 8) | _channel(b)


def _channel(value: float) -> int:
    return max(0, min(255, int(value * 256)))


def generated_colors(count: int, rng: random.Random | None = None) -> list[int]:
    """
    Produce `count` well separated colours by golden-ratio hue rotation.

    The starting hue is drawn once from `rng`, or from the process-wide
    generator when no `rng` is injected.
    """
    hue = rng.random() if rng is not None else random.random()
    colors: list[int] = []
    for _ in range(count):
        colors.append(hsv_to_rgb(hue, SATURATION, VALUE))
        hue = (hue + GOLDEN_RATIO_CONJUGATE) % 1.0
    return colors


def resource_colors(resources: Sequence[Resource], rng: random.Random | None = None) -> tuple[int, ...]:
    """Explicit colours win; resources without one take the generated colour for their index."""

    if all(resource.color is not None for resource in resources):
        return tuple(resource.color for resource in resources)  # type: ignore[misc]

    generated = generated_colors(len(resources), rng)
    return tuple(
        resource.color if resource.color is not None else generated[idx] for idx, resource in enumerate(resources)
    )


def parse_color(value: str | int) -> int:
    """
    Normalise a colour to 0xRRGGBB.

    Accepts `#RRGGBB`, `RRGGBB`, `#AARRGGBB` strings and 32-bit ARGB integers;
    alpha is dropped.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid colour {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"colour {value} is not a 32-bit ARGB value")
        return value & 0xFFFFFF
    if not isinstance(value, str):
        raise ValueError(f"invalid colour {value!r}")
    text = value.strip().lstrip("#")
    if len(text) not in (6, 8) or not all(c in string.hexdigits for c in text):
        raise ValueError(f"invalid colour '{value}', expected #RRGGBB")
    return int(text, 16) & 0xFFFFFF


def color_to_hex(rgb: int) -> str:
    return f"#{rgb & 0xFFFFFF:06x}"
