"""
Color Conversion
================
Hex <-> normalized RGBA helpers for Lottie color payloads.

Lottie stores colors as floats in [0.0, 1.0]; request parameters arrive
as "#RRGGBB" strings.
"""

import re
from typing import List, Optional, Sequence

from .errors import InvalidColorFormat

HEX_COLOR_PATTERN = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")

GRADIENT_LIGHTEN_AMOUNT = 0.3


def hex_to_normalized_rgba(hex_color: str, field: Optional[str] = None) -> List[float]:
    """
    Convert a hex color to a normalized [r, g, b, a] list.

    Args:
        hex_color: "#RRGGBB" or "RRGGBB", case-insensitive
        field: Parameter name reported in the error, if any

    Returns:
        [r, g, b, 1.0] with each channel = byte / 255

    Raises:
        InvalidColorFormat: If the value is not exactly 6 hex digits
    """
    if not isinstance(hex_color, str):
        raise InvalidColorFormat(hex_color, field)

    match = HEX_COLOR_PATTERN.fullmatch(hex_color)
    if not match:
        raise InvalidColorFormat(hex_color, field)

    return [int(pair, 16) / 255.0 for pair in match.groups()] + [1.0]


def normalized_rgba_to_hex(rgba: Sequence[float]) -> str:
    """Convert normalized [r, g, b(, a)] back to "#RRGGBB". Alpha is dropped."""
    if len(rgba) < 3:
        raise ValueError(f"Expected at least 3 channels, got {len(rgba)}")

    channels = []
    for value in rgba[:3]:
        byte = int(round(float(value) * 255))
        channels.append(min(255, max(0, byte)))
    return "#{:02X}{:02X}{:02X}".format(*channels)


def lighten(rgb: Sequence[float], amount: float = GRADIENT_LIGHTEN_AMOUNT) -> List[float]:
    """Add `amount` to each of r, g, b, clamped at 1.0."""
    return [min(1.0, channel + amount) for channel in rgb[:3]]
