"""Rendering of a BrandDNA into JSON, CSS, build config, typed source and share links."""
import base64
import json
import math
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

from pydantic import ValidationError

from branddna.app.config import get_settings
from branddna.app.models import (
    BrandDNA,
    ColorPalette,
    ExportSummary,
    FontFamily,
    utc_timestamp,
)

EXPORT_VERSION = "1.0.0"
EXPORT_STAMPS = ("exportedAt", "exportVersion")
EXPORT_FORMATS = ("json", "css", "tailwind", "typescript")
EXPORT_EXTENSIONS = {
    "json": "json",
    "css": "css",
    "tailwind": "js",
    "typescript": "ts",
}

# Characters encodeURIComponent leaves untouched
_URI_SAFE = "-_.!~*'()"


class InvalidShareLinkError(ValueError):
    def __init__(self, message: str = "Invalid shareable link"):
        super().__init__(message)


class UnknownExportFormatError(ValueError):
    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Unknown export format: {fmt}")


# ============================================================================
# JSON
# ============================================================================

def to_json(brand: BrandDNA, pretty: bool = True, exported_at: Optional[str] = None) -> str:
    """Canonical camelCase JSON plus export stamps."""
    data = brand.to_data()
    data["exportedAt"] = exported_at or utc_timestamp()
    data["exportVersion"] = EXPORT_VERSION
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def parse_brand_json(text: str) -> Any:
    """Parse JSON text and strip export-only stamps. Raises ValueError when malformed."""
    data = json.loads(text)
    if isinstance(data, dict):
        for stamp in EXPORT_STAMPS:
            data.pop(stamp, None)
    return data


def from_json(text: str) -> BrandDNA:
    """Inverse of to_json."""
    return BrandDNA.model_validate(parse_brand_json(text))


# ============================================================================
# CSS
# ============================================================================

def _format_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def font_stack(font: FontFamily) -> str:
    """CSS font-family value: quoted name when it has spaces, then fallbacks."""
    name = f'"{font.name}"' if re.search(r"\s", font.name) else font.name
    return ", ".join([name] + list(font.fallback))


def _palette_variables(palette: ColorPalette, prefix: str) -> Dict[str, str]:
    fg = palette.foreground
    return {
        f"{prefix}background": palette.background,
        f"{prefix}foreground": fg,
        f"{prefix}primary": palette.primary,
        f"{prefix}primary-foreground": fg,
        f"{prefix}secondary": palette.secondary,
        f"{prefix}secondary-foreground": fg,
        f"{prefix}accent": palette.accent,
        f"{prefix}accent-foreground": fg,
        f"{prefix}destructive": palette.destructive,
        f"{prefix}destructive-foreground": fg,
        f"{prefix}muted": palette.muted,
        f"{prefix}muted-foreground": fg,
        f"{prefix}card": palette.card,
        f"{prefix}card-foreground": fg,
        f"{prefix}border": palette.border,
        f"{prefix}input": palette.input,
        f"{prefix}ring": palette.ring,
    }


def _chart_variables(chart: List[str], prefix: str) -> Dict[str, str]:
    return {f"{prefix}chart-{index}": color for index, color in enumerate(chart, start=1)}


def generate_css_variables(brand: BrandDNA, prefix: Optional[str] = None) -> Dict[str, str]:
    """Light theme custom properties under the namespaced prefix."""
    prefix = prefix if prefix is not None else get_settings().css_prefix
    typography = brand.typography
    variables = _palette_variables(brand.colors.light, prefix)
    variables.update(_chart_variables(brand.colors.chart, prefix))

    variables[f"{prefix}font-heading"] = font_stack(typography.font_heading)
    variables[f"{prefix}font-body"] = font_stack(typography.font_body)
    variables[f"{prefix}font-mono"] = font_stack(typography.font_mono)

    for key, value in typography.scale.items():
        variables[f"{prefix}font-size-{key}"] = value
    for key, value in typography.line_height.model_dump().items():
        variables[f"{prefix}line-height-{key}"] = _format_number(value)
    for key, value in typography.letter_spacing.model_dump().items():
        variables[f"{prefix}letter-spacing-{key}"] = value

    for key, value in brand.spacing.radius.items():
        variables[f"{prefix}radius-{key}"] = value
    for key, value in brand.spacing.spacing.items():
        variables[f"{prefix}spacing-{key}"] = value
    return variables


def generate_dark_theme_variables(brand: BrandDNA, prefix: Optional[str] = None) -> Dict[str, str]:
    """Dark theme overrides: colors only."""
    prefix = prefix if prefix is not None else get_settings().css_prefix
    variables = _palette_variables(brand.colors.dark, prefix)
    variables.update(_chart_variables(brand.colors.chart, prefix))
    return variables


def _alias_variables(brand: BrandDNA, palette: ColorPalette, with_radius: bool) -> Dict[str, str]:
    # Unprefixed names read by the host framework's theme
    variables = _palette_variables(palette, "--")
    variables.update(_chart_variables(brand.colors.chart, "--"))
    if with_radius and "lg" in brand.spacing.radius:
        variables["--radius"] = brand.spacing.radius["lg"]
    return variables


def variables_to_css(variables: Dict[str, str], selector: str = ":root") -> str:
    declarations = "\n".join(f"  {name}: {value};" for name, value in variables.items())
    return f"{selector} {{\n{declarations}\n}}"


# Characters that end a line comment in JS and TS
_LINE_BREAKS = re.compile(r"[\r\n\u2028\u2029]+")


def _comment_safe(text: str) -> str:
    """Single-line text that cannot close a block comment or end a line comment."""
    return _LINE_BREAKS.sub(" ", text).replace("*/", "* /")


def to_css(brand: BrandDNA, selector: Optional[str] = None, prefix: Optional[str] = None) -> str:
    """
    Render the light and dark rule blocks for a scoped selector.

    The light block holds every token under the namespaced prefix followed by
    unprefixed color and radius aliases; the dark block only overrides colors.
    """
    settings = get_settings()
    selector = selector or settings.css_scope
    prefix = prefix if prefix is not None else settings.css_prefix

    light = generate_css_variables(brand, prefix)
    light.update(_alias_variables(brand, brand.colors.light, with_radius=True))
    dark = generate_dark_theme_variables(brand, prefix)
    dark.update(_alias_variables(brand, brand.colors.dark, with_radius=False))

    header = (
        "/**\n"
        f" * Brand DNA: {_comment_safe(brand.metadata.name)}\n"
        f" * Version: {_comment_safe(brand.metadata.version)}\n"
        " */\n\n"
    )
    return (
        header
        + variables_to_css(light, selector)
        + "\n\n"
        + variables_to_css(dark, f"{selector}.dark")
        + "\n"
    )


# ============================================================================
# BUILD CONFIG / TYPED MODULE
# ============================================================================

def build_config_object(brand: BrandDNA) -> Dict[str, Any]:
    """Theme extension object for a utility-CSS build pipeline."""
    light = brand.colors.light
    typography = brand.typography
    return {
        "theme": {
            "extend": {
                "colors": {
                    "brand": {
                        slot: f"hsl({getattr(light, slot)})"
                        for slot in ("primary", "secondary", "accent", "destructive", "muted")
                    },
                    "chart": {
                        str(index): f"hsl({color})"
                        for index, color in enumerate(brand.colors.chart, start=1)
                    },
                },
                "fontFamily": {
                    "heading": [typography.font_heading.name] + list(typography.font_heading.fallback),
                    "body": [typography.font_body.name] + list(typography.font_body.fallback),
                    "mono": [typography.font_mono.name] + list(typography.font_mono.fallback),
                },
                "fontSize": dict(typography.scale),
                "borderRadius": dict(brand.spacing.radius),
                "spacing": dict(brand.spacing.spacing),
            },
        },
    }


def to_build_config(brand: BrandDNA) -> str:
    config = json.dumps(build_config_object(brand), indent=2, ensure_ascii=False)
    return (
        f"// Brand DNA: {_comment_safe(brand.metadata.name)}\n\n"
        f"module.exports = {config};\n"
    )


def _literal(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def to_typed_module(brand: BrandDNA) -> str:
    """TypeScript source with four `as const` declarations."""
    data = brand.to_data()
    colors = data["colors"]
    return (
        f"// Brand DNA: {_comment_safe(brand.metadata.name)}\n\n"
        f"export const brandColors = {_literal({'light': colors['light'], 'dark': colors['dark'], 'chart': colors['chart']})} as const;\n\n"
        f"export const brandTypography = {_literal(data['typography'])} as const;\n\n"
        f"export const brandSpacing = {_literal(data['spacing'])} as const;\n\n"
        f"export const brandMetadata = {_literal(data['metadata'])} as const;\n"
    )


# ============================================================================
# SHAREABLE LINKS
# ============================================================================

def to_shareable_link(brand: BrandDNA) -> str:
    """Base64 of the URL-encoded compact canonical JSON."""
    compact = json.dumps(brand.to_data(), separators=(",", ":"), ensure_ascii=False)
    encoded = quote(compact, safe=_URI_SAFE)
    return base64.b64encode(encoded.encode("ascii")).decode("ascii")


def decode_shareable_link(token: str) -> Any:
    """Decode a share token into parsed JSON data. Raises InvalidShareLinkError."""
    try:
        raw = base64.b64decode(token.strip(), validate=True).decode("ascii")
        return parse_brand_json(unquote(raw, errors="strict"))
    except (AttributeError, ValueError) as e:
        raise InvalidShareLinkError() from e


def from_shareable_link(token: str) -> BrandDNA:
    data = decode_shareable_link(token)
    try:
        return BrandDNA.model_validate(data)
    except ValidationError as e:
        raise InvalidShareLinkError() from e


# ============================================================================
# EXPORT DISPATCH
# ============================================================================

def export_brand(brand: BrandDNA, fmt: str) -> str:
    """Render a brand in one of json, css, tailwind or typescript."""
    if fmt == "json":
        return to_json(brand)
    if fmt == "css":
        return to_css(brand)
    if fmt == "tailwind":
        return to_build_config(brand)
    if fmt == "typescript":
        return to_typed_module(brand)
    raise UnknownExportFormatError(fmt)


def export_filename(brand: BrandDNA, fmt: str) -> str:
    if fmt not in EXPORT_EXTENSIONS:
        raise UnknownExportFormatError(fmt)
    slug = re.sub(r"\s+", "-", brand.metadata.name.strip().lower()) or "brand"
    return f"{slug}-brand.{EXPORT_EXTENSIONS[fmt]}"


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 B"
    units = ["B", "KB", "MB"]
    index = min(int(math.floor(math.log(size) / math.log(1024))), len(units) - 1)
    return f"{size / 1024 ** index:.1f} {units[index]}"


def get_export_summary(brand: BrandDNA) -> Dict[str, ExportSummary]:
    """Byte size, human size and line count for every export format."""
    summary = {}
    for fmt in EXPORT_FORMATS:
        content = export_brand(brand, fmt)
        size = len(content.encode("utf-8"))
        summary[fmt] = ExportSummary(
            size=size,
            size_formatted=format_bytes(size),
            lines=len(content.split("\n")),
        )
    return summary
