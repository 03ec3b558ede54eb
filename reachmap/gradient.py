from __future__ import annotations

import math
import re
from typing import List, Optional, Sequence, Tuple

from reachmap.errors import ConfigError

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

ColorMatrix = List[List[Optional[str]]]


def parse_hex_color(color: str) -> Tuple[int, int, int]:
    """'#57BB8A' or '57bb8a' -> (87, 187, 138)."""
    match = _HEX_RE.match(str(color).strip())
    if not match:
        raise ConfigError(f"Expected a 6-digit hex color, got {color!r}")
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def format_hex_color(rgb: Sequence[int]) -> str:
    packed = 0
    for channel in rgb:
        packed = (packed << 8) + channel
    return f"{packed:06x}"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def interpolate_color(min_color: str, max_color: str, f: float) -> str:
    """
    Linear RGB interpolation between two hex colors.
    f=0 gives min_color, f=1 gives max_color (lowercase, no '#').
    """
    c0 = parse_hex_color(min_color)
    c1 = parse_hex_color(max_color)
    mixed = [
        min(max(_round_half_up(a * (1 - f) + b * f), 0), 255)
        for a, b in zip(c0, c1)
    ]
    return format_hex_color(mixed)


def fraction_between(value: float, min_value: float, max_value: float) -> float:
    """Position of value inside [min_value, max_value], clamped to [0, 1].

    A zero-width range maps everything to 0.
    """
    span = max_value - min_value
    if span == 0:
        return 0.0
    f = (value - min_value) / span
    return min(max(f, 0.0), 1.0)


def map_to_colors(matrix, min_value, max_value, min_color, max_color) -> ColorMatrix:
    # raises ConfigError before any cell is mapped
    parse_hex_color(min_color)
    parse_hex_color(max_color)

    colors = []
    for row in matrix:
        colors.append([
            None if value is None
            else interpolate_color(min_color, max_color, fraction_between(value, min_value, max_value))
            for value in row
        ])
    return colors
