"""Brand DNA validation with field-scoped diagnostics.

Every rule runs independently and every violation is collected. Findings
carry a severity: ``"warning"`` marks advisory findings (contrast, soft
array caps, icon length) which only block in strict mode.
"""
import unicodedata
from typing import Any, Dict, List, Mapping, Optional, Union

from branddna.app.models import BrandDNA, ErrorCode, FieldError, ValidationResult
from branddna.engine.color_science import AA_NORMAL, check_contrast, is_valid_hsl

PALETTE_SLOTS = (
    "primary", "secondary", "accent", "destructive", "muted", "background",
    "foreground", "card", "border", "input", "ring",
)
CHART_LENGTH = 5

MAX_VALUES = 5
MAX_TRAITS = 7
MAX_PURPOSE = 200
MAX_VISION = 200
MAX_MISSION = 300
MAX_VALUE_NAME = 50
MAX_VALUE_DESCRIPTION = 200
MAX_TRAIT = 30

# (theme, foreground slot, background slot, label)
CONTRAST_PAIRS = (
    ("light", "primary", "background", "Primary color"),
    ("light", "foreground", "background", "Foreground color"),
    ("dark", "foreground", "background", "Dark theme foreground"),
)

FONT_ROLES = (
    ("fontHeading", "Heading"),
    ("fontBody", "Body"),
    ("fontMono", "Monospace"),
)


class _Collector:
    def __init__(self):
        self.errors: List[FieldError] = []

    def add(self, field: str, message: str, code: ErrorCode, advisory: bool = False):
        self.errors.append(FieldError(
            field=field,
            message=message,
            code=code,
            severity="warning" if advisory else "error",
        ))


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def grapheme_count(text: str) -> int:
    """Approximate extended grapheme cluster count.

    Combining marks, variation selectors, emoji modifiers, tag characters and
    ZWJ sequences attach to the preceding cluster; regional indicators pair up.
    """
    count = 0
    joined = False
    pending_flag = False
    for ch in text:
        cp = ord(ch)
        if cp == 0x200D:
            joined = True
            continue
        if (
            unicodedata.combining(ch)
            or unicodedata.category(ch) in ("Mn", "Me")
            or 0xFE00 <= cp <= 0xFE0F
            or 0x1F3FB <= cp <= 0x1F3FF
            or 0xE0020 <= cp <= 0xE007F
        ):
            continue
        if joined and count:
            joined = False
            continue
        joined = False
        if 0x1F1E6 <= cp <= 0x1F1FF:
            if pending_flag:
                pending_flag = False
                continue
            pending_flag = True
        else:
            pending_flag = False
        count += 1
    return count


def _validate_metadata(data: Mapping, out: _Collector):
    metadata = data.get("metadata")
    if metadata is not None and not isinstance(metadata, Mapping):
        out.add("metadata", "Metadata must be an object", ErrorCode.INVALID_VALUE)
        return
    name = (metadata or {}).get("name")
    if _is_blank(name):
        out.add("metadata.name", "Brand name is required", ErrorCode.REQUIRED_FIELD)


def _validate_palette(theme: str, palette: Any, out: _Collector):
    if not isinstance(palette, Mapping):
        out.add(f"colors.{theme}", f"{theme.capitalize()} palette must be an object",
                ErrorCode.INVALID_VALUE)
        return
    for key, value in palette.items():
        if value is None:
            continue
        if not is_valid_hsl(value):
            out.add(f"colors.{theme}.{key}", f"Invalid HSL color format: {value}",
                    ErrorCode.INVALID_COLOR)


def _validate_contrast(colors: Mapping, out: _Collector):
    for theme, fg_slot, bg_slot, label in CONTRAST_PAIRS:
        palette = colors.get(theme)
        if not isinstance(palette, Mapping):
            continue
        fg, bg = palette.get(fg_slot), palette.get(bg_slot)
        # Invalid colors are already reported as INVALID_COLOR
        if not (is_valid_hsl(fg) and is_valid_hsl(bg)):
            continue
        contrast = check_contrast(fg, bg)
        if not contrast.aa:
            out.add(
                f"colors.{theme}.{fg_slot}",
                f"{label} contrast ratio ({contrast.ratio}:1) does not meet "
                f"WCAG AA standards ({AA_NORMAL}:1)",
                ErrorCode.INSUFFICIENT_CONTRAST,
                advisory=True,
            )


def _validate_colors(data: Mapping, out: _Collector):
    if "colors" not in data or data["colors"] is None:
        return
    colors = data["colors"]
    if not isinstance(colors, Mapping):
        out.add("colors", "Colors must be an object", ErrorCode.INVALID_VALUE)
        return

    for theme in ("light", "dark"):
        if colors.get(theme) is not None:
            _validate_palette(theme, colors[theme], out)
    _validate_contrast(colors, out)

    chart = colors.get("chart")
    if chart is None:
        return
    if not isinstance(chart, list):
        out.add("colors.chart", "Chart colors must be a list", ErrorCode.INVALID_VALUE)
        return
    if len(chart) != CHART_LENGTH:
        out.add("colors.chart", f"Chart colors must contain exactly {CHART_LENGTH} colors",
                ErrorCode.INVALID_ARRAY_LENGTH)
    for index, color in enumerate(chart):
        if not is_valid_hsl(color):
            out.add(f"colors.chart[{index}]", f"Invalid HSL color format: {color}",
                    ErrorCode.INVALID_COLOR)


def _validate_typography(data: Mapping, out: _Collector):
    if "typography" not in data or data["typography"] is None:
        return
    typography = data["typography"]
    if not isinstance(typography, Mapping):
        out.add("typography", "Typography must be an object", ErrorCode.INVALID_VALUE)
        return
    for key, label in FONT_ROLES:
        font = typography.get(key)
        if font is not None and not isinstance(font, Mapping):
            out.add(f"typography.{key}", f"{label} font must be an object",
                    ErrorCode.INVALID_VALUE)
            continue
        if _is_blank((font or {}).get("name")):
            out.add(f"typography.{key}.name", f"{label} font name is required",
                    ErrorCode.REQUIRED_FIELD)


def _check_length(out: _Collector, field: str, value: Any, limit: int, label: str):
    if isinstance(value, str) and len(value) > limit:
        out.add(field, f"{label} should not exceed {limit} characters", ErrorCode.MAX_LENGTH)


def _validate_values(values: Any, out: _Collector):
    if not isinstance(values, list):
        out.add("strategy.values", "Values must be a list", ErrorCode.INVALID_VALUE)
        return
    if len(values) > MAX_VALUES:
        out.add("strategy.values", f"Maximum {MAX_VALUES} values recommended",
                ErrorCode.MAX_ARRAY_LENGTH, advisory=True)

    for index, value in enumerate(values):
        prefix = f"strategy.values[{index}]"
        if not isinstance(value, Mapping):
            out.add(prefix, "Value must be an object", ErrorCode.INVALID_VALUE)
            continue
        name = value.get("name")
        if _is_blank(name):
            out.add(f"{prefix}.name", "Value name is required", ErrorCode.REQUIRED_FIELD)
        _check_length(out, f"{prefix}.name", name, MAX_VALUE_NAME, "Value name")
        _check_length(out, f"{prefix}.description", value.get("description"),
                      MAX_VALUE_DESCRIPTION, "Value description")
        icon = value.get("icon")
        if isinstance(icon, str) and grapheme_count(icon) > 1:
            out.add(f"{prefix}.icon", "Icon should be a single emoji",
                    ErrorCode.INVALID_VALUE, advisory=True)


def _validate_traits(traits: Any, out: _Collector):
    field = "strategy.toneOfVoice.traits"
    if not isinstance(traits, list):
        out.add(field, "Traits must be a list", ErrorCode.INVALID_VALUE)
        return
    if len(traits) > MAX_TRAITS:
        out.add(field, f"Maximum {MAX_TRAITS} tone traits recommended",
                ErrorCode.MAX_ARRAY_LENGTH, advisory=True)
    for index, trait in enumerate(traits):
        if _is_blank(trait):
            out.add(f"{field}[{index}]", "Trait cannot be empty", ErrorCode.INVALID_VALUE)
        _check_length(out, f"{field}[{index}]", trait, MAX_TRAIT, "Trait")


def _validate_strategy(data: Mapping, out: _Collector):
    strategy = data.get("strategy")
    if strategy is None:
        return
    if not isinstance(strategy, Mapping):
        out.add("strategy", "Strategy must be an object", ErrorCode.INVALID_VALUE)
        return

    _check_length(out, "strategy.purpose", strategy.get("purpose"), MAX_PURPOSE, "Purpose")
    _check_length(out, "strategy.vision", strategy.get("vision"), MAX_VISION, "Vision")
    _check_length(out, "strategy.mission", strategy.get("mission"), MAX_MISSION, "Mission")

    if strategy.get("values") is not None:
        _validate_values(strategy["values"], out)

    tone = strategy.get("toneOfVoice")
    if tone is None:
        return
    if not isinstance(tone, Mapping):
        out.add("strategy.toneOfVoice", "Tone of voice must be an object",
                ErrorCode.INVALID_VALUE)
        return
    if tone.get("traits") is not None:
        _validate_traits(tone["traits"], out)


def validate_brand_dna(
    brand: Union[BrandDNA, Mapping[str, Any]],
    strict: bool = False,
) -> ValidationResult:
    """
    Validate a BrandDNA or a partial mapping in canonical (camelCase) shape.

    Args:
        brand: Model instance or JSON-shaped mapping
        strict: Treat advisory findings as blocking

    Returns:
        ValidationResult with every violation found
    """
    data: Dict[str, Any] = brand.to_data() if isinstance(brand, BrandDNA) else brand
    out = _Collector()
    if not isinstance(data, Mapping):
        out.add("json", "Brand DNA must be an object", ErrorCode.INVALID_STRUCTURE)
        return ValidationResult(valid=False, errors=out.errors)

    _validate_metadata(data, out)
    _validate_colors(data, out)
    _validate_typography(data, out)
    _validate_strategy(data, out)

    if strict:
        valid = not out.errors
    else:
        valid = not any(error.severity == "error" for error in out.errors)
    return ValidationResult(valid=valid, errors=out.errors)


def summarize_errors(errors: List[FieldError], limit: Optional[int] = None) -> str:
    """Join error messages into a single line for result objects and logs."""
    messages = [error.message for error in errors]
    if limit is not None and len(messages) > limit:
        messages = messages[:limit] + [f"and {len(errors) - limit} more"]
    return ", ".join(messages)
