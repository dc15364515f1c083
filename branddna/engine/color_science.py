"""HSL color parsing, conversion and WCAG contrast math."""
import colorsys
import math
import re
from typing import NamedTuple, Optional, Union

from branddna.app.models import ContrastResult

# "<hue> <saturation>% <lightness>%", e.g. "221.2 83.2% 53.3%"
HSL_PATTERN = re.compile(
    r"^(\d{1,3}(?:\.\d+)?)\s+(\d{1,3}(?:\.\d+)?)%\s+(\d{1,3}(?:\.\d+)?)%$"
)
HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# WCAG 2.x thresholds
AA_NORMAL = 4.5
AAA_NORMAL = 7.0
AA_LARGE = 3.0
AAA_LARGE = 4.5


class HSL(NamedTuple):
    h: float
    s: float
    l: float


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class InvalidColorError(ValueError):
    """Raised when a color value does not follow the HSL or hex grammar."""

    def __init__(self, value, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"Invalid HSL color: {value}")


ColorInput = Union[str, HSL]


def parse_hsl(text: str) -> Optional[HSL]:
    """Parse a ColorValue string, returning None when malformed or out of range."""
    if not isinstance(text, str):
        return None
    match = HSL_PATTERN.match(text.strip())
    if not match:
        return None
    h, s, l = (float(part) for part in match.groups())
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= l <= 100):
        return None
    return HSL(h, s, l)


def is_valid_hsl(text: str) -> bool:
    return parse_hsl(text) is not None


def format_hsl(h: float, s: float, l: float) -> str:
    """Render an HSL triple in the canonical grammar with one decimal per component."""
    return f"{h:.1f} {s:.1f}% {l:.1f}%"


def _coerce_hsl(color: ColorInput) -> HSL:
    if isinstance(color, str):
        parsed = parse_hsl(color)
        if parsed is None:
            raise InvalidColorError(color)
        return parsed
    if isinstance(color, tuple) and len(color) == 3:
        h, s, l = (float(c) for c in color)
        if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= l <= 100):
            raise InvalidColorError(color)
        return HSL(h, s, l)
    raise InvalidColorError(color)


def _to_channel(value: float) -> int:
    # Round half up
    return int(math.floor(value * 255 + 0.5))


def hsl_to_rgb(color: ColorInput) -> RGB:
    """Convert a ColorValue (or HSL triple) to 0-255 integer channels."""
    hsl = _coerce_hsl(color)
    r, g, b = colorsys.hls_to_rgb(hsl.h / 360.0, hsl.l / 100.0, hsl.s / 100.0)
    return RGB(_to_channel(r), _to_channel(g), _to_channel(b))


def rgb_to_hsl(rgb) -> str:
    """Convert 0-255 channels to a canonical ColorValue string."""
    r, g, b = rgb
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise InvalidColorError(rgb, f"RGB channel out of range: {rgb}")
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return format_hsl(h * 360.0, s * 100.0, l * 100.0)


def parse_hex(value: str) -> RGB:
    """Parse #rrggbb, rrggbb or #rgb into channels."""
    match = HEX_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidColorError(value, f"Invalid hex color: {value}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_hex_to_hsl(value: str) -> str:
    return rgb_to_hsl(parse_hex(value))


def hsl_to_hex(color: ColorInput) -> str:
    r, g, b = hsl_to_rgb(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def relative_luminance(rgb) -> float:
    """WCAG relative luminance of 0-255 channels, in [0, 1]."""

    def linearize(channel: int) -> float:
        c = channel / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def contrast_ratio(color1: ColorInput, color2: ColorInput) -> float:
    """Contrast ratio between two colors, in [1, 21]."""
    lum1 = relative_luminance(hsl_to_rgb(color1))
    lum2 = relative_luminance(hsl_to_rgb(color2))
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def check_contrast(foreground: ColorInput, background: ColorInput) -> ContrastResult:
    """Check WCAG compliance levels for a text/background pair."""
    ratio = contrast_ratio(foreground, background)
    return ContrastResult(
        ratio=round(ratio * 100) / 100,
        aa=ratio >= AA_NORMAL,
        aaa=ratio >= AAA_NORMAL,
        aa_large=ratio >= AA_LARGE,
        aaa_large=ratio >= AAA_LARGE,
    )
