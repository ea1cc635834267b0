import re
from typing import Optional, Tuple

RGB = Tuple[int, int, int]

# WCAG 2.x AA threshold for normal-size text
AA_NORMAL_TEXT_RATIO = 4.5

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+%?\s*)?\)$"
)


def _hex_to_rgb(hex_color: str) -> Optional[RGB]:
    m = _HEX_RE.match(hex_color)
    if not m:
        return None
    h = m.group(1)
    if len(h) == 3:
        h = h[0]*2 + h[1]*2 + h[2]*2
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def parse_color(value: str) -> Optional[RGB]:
    """Parse a #rgb, #rrggbb, rgb() or rgba() literal. Returns None if unparseable.
    The alpha component of rgba() is accepted and ignored."""
    if not value:
        return None
    val = value.strip().lower()
    if val.startswith("#"):
        return _hex_to_rgb(val)
    m = _RGB_RE.match(val)
    if m:
        r, g, b = int(m.group(1)), int(m.group(2)), int(m.group(3))
        if max(r, g, b) > 255:
            return None
        return r, g, b
    return None


def relative_luminance(r: int, g: int, b: int) -> float:
    """sRGB relative luminance per WCAG 2.x."""
    def _ch(c: int) -> float:
        v = c / 255.0
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4
    return 0.2126 * _ch(r) + 0.7152 * _ch(g) + 0.0722 * _ch(b)


def contrast_ratio(rgb1: RGB, rgb2: RGB) -> float:
    l1 = relative_luminance(*rgb1)
    l2 = relative_luminance(*rgb2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def calculate_contrast_ratio(color1: str, color2: str) -> Optional[float]:
    """Calculate WCAG contrast ratio between two CSS colour literals. Returns None on parse failure."""
    rgb1 = parse_color(color1)
    rgb2 = parse_color(color2)
    if rgb1 is None or rgb2 is None:
        return None
    return contrast_ratio(rgb1, rgb2)


def is_low_contrast(foreground: str, background: str,
                    threshold: float = AA_NORMAL_TEXT_RATIO) -> bool:
    ratio = calculate_contrast_ratio(foreground, background)
    if ratio is None:
        return False
    return ratio < threshold
