from __future__ import annotations

import re

NORMAL_TEXT_MINIMUM = 4.5
UI_COMPONENT_MINIMUM = 3.0

_HEX6 = re.compile(r"#?([0-9a-fA-F]{6})")


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    """Parse ``#rrggbb`` (hash optional). Anything else cannot be evaluated."""
    match = _HEX6.fullmatch(str(value or "").strip())
    if match is None:
        return None
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def relative_luminance(r: int, g: int, b: int) -> float:
    """sRGB relative luminance per WCAG 2.x."""

    def _channel(c: int) -> float:
        v = c / 255.0
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    return 0.2126 * _channel(r) + 0.7152 * _channel(g) + 0.0722 * _channel(b)


def contrast_ratio(color_a: str, color_b: str) -> float | None:
    rgb_a = hex_to_rgb(color_a)
    rgb_b = hex_to_rgb(color_b)
    if rgb_a is None or rgb_b is None:
        return None
    lum_a = relative_luminance(*rgb_a)
    lum_b = relative_luminance(*rgb_b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def meets_contrast(foreground: str, background: str, minimum: float = NORMAL_TEXT_MINIMUM) -> bool:
    ratio = contrast_ratio(foreground, background)
    if ratio is None:
        return True
    return ratio >= minimum
