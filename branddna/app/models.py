"""Data models for the Brand DNA JSON schema."""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# HSL color value, e.g. "221.2 83.2% 53.3%"
ColorValue = str

TemplateCategory = Literal["minimal", "vibrant", "professional", "creative", "default"]
ExportFormat = Literal["json", "css", "tailwind", "typescript"]


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BrandModel(BaseModel):
    """Base for canonical models: camelCase on the wire, frozen in memory."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# COLOR MODELS
# ============================================================================

class ColorPalette(BrandModel):
    """Semantic color slots for one theme."""
    primary: ColorValue = Field(description="Primary brand color")
    secondary: ColorValue = Field(description="Secondary brand color")
    accent: ColorValue = Field(description="Accent color for highlights")
    destructive: ColorValue = Field(description="Destructive/error color")
    muted: ColorValue = Field(description="Muted/subtle elements")
    background: ColorValue = Field(description="Background color")
    foreground: ColorValue = Field(description="Foreground/text color")
    card: ColorValue = Field(description="Card background")
    border: ColorValue = Field(description="Border color")
    input: ColorValue = Field(description="Input border")
    ring: ColorValue = Field(description="Ring/focus color")


class BrandColors(BrandModel):
    """Light and dark palettes plus data visualization colors."""
    light: ColorPalette
    dark: ColorPalette
    chart: List[ColorValue] = Field(default_factory=list, description="Exactly 5 chart colors")


# ============================================================================
# TYPOGRAPHY MODELS
# ============================================================================

class FontFamily(BrandModel):
    """A font family with its loadable variants."""
    name: str = Field(default="", description="Font name, e.g. Inter")
    weights: List[int] = Field(default_factory=list, description="Available weights")
    styles: List[str] = Field(default_factory=lambda: ["normal"], description="Available styles")
    url: Optional[str] = Field(default=None, description="Remote stylesheet URL")
    fallback: List[str] = Field(default_factory=list, description="Ordered fallback families")


class LineHeight(BrandModel):
    tight: float = 1.25
    normal: float = 1.5
    relaxed: float = 1.75


class LetterSpacing(BrandModel):
    tight: str = "-0.05em"
    normal: str = "0"
    wide: str = "0.05em"


class BrandTypography(BrandModel):
    """Complete typography system."""
    font_heading: FontFamily
    font_body: FontFamily
    font_mono: FontFamily
    scale: Dict[str, str] = Field(default_factory=dict, description="Font size tokens xs..9xl")
    line_height: LineHeight = Field(default_factory=lambda: LineHeight())
    letter_spacing: LetterSpacing = Field(default_factory=lambda: LetterSpacing())


# ============================================================================
# SPACING MODELS
# ============================================================================

class BrandSpacing(BrandModel):
    """Corner radius and gap tokens."""
    radius: Dict[str, str] = Field(default_factory=dict, description="Radius tokens incl. full")
    spacing: Dict[str, str] = Field(default_factory=dict, description="Spacing tokens")


# ============================================================================
# ASSET MODELS
# ============================================================================

class Logo(BrandModel):
    """Logo or other image asset."""
    id: str = Field(description="Logo ID")
    name: str = Field(default="", description="Display name")
    light_url: Optional[str] = Field(default=None, description="Light theme image (data: or https:)")
    dark_url: Optional[str] = Field(default=None, description="Dark theme image (data: or https:)")
    width: Optional[int] = None
    height: Optional[int] = None
    file_size: Optional[int] = Field(default=None, description="File size in bytes")
    uploaded_at: Optional[str] = None


class BrandAssets(BrandModel):
    primary_logo: Optional[Logo] = None
    secondary_logo: Optional[Logo] = None
    favicon: Optional[Logo] = None
    additional_assets: List[Logo] = Field(default_factory=list)


# ============================================================================
# METADATA & STRATEGY MODELS
# ============================================================================

class BrandMetadata(BrandModel):
    """Brand metadata."""
    name: str = Field(default="", description="Brand name")
    tagline: Optional[str] = Field(default=None, description="Brand tagline/slogan")
    description: Optional[str] = None
    industry: Optional[str] = None
    created_at: str = Field(default_factory=utc_timestamp, description="Creation date")
    updated_at: str = Field(default_factory=utc_timestamp, description="Last modified date")
    version: str = Field(default="1.0.0", description="Schema version")


class BrandValue(BrandModel):
    """A core company value."""
    id: str
    name: str = ""
    description: str = ""
    icon: Optional[str] = Field(default=None, description="Single emoji or icon name")


class ToneOfVoice(BrandModel):
    traits: List[str] = Field(default_factory=list, description="Personality traits")
    description: Optional[str] = None
    dos: Optional[List[str]] = None
    donts: Optional[List[str]] = None


class BrandStrategy(BrandModel):
    """Purpose, vision, mission, values and tone."""
    purpose: Optional[str] = Field(default=None, description="Why the company exists")
    vision: Optional[str] = Field(default=None, description="Where the company is heading")
    mission: Optional[str] = Field(default=None, description="What the company does daily")
    values: List[BrandValue] = Field(default_factory=list)
    tone_of_voice: ToneOfVoice = Field(default_factory=lambda: ToneOfVoice())
    positioning: Optional[str] = None
    target_audience: Optional[str] = None
    differentiators: Optional[List[str]] = None


# ============================================================================
# MAIN BRAND DNA MODEL
# ============================================================================

class BrandDNA(BrandModel):
    """Complete Brand DNA structure."""
    metadata: BrandMetadata
    strategy: Optional[BrandStrategy] = None
    colors: BrandColors
    typography: BrandTypography
    spacing: BrandSpacing
    assets: BrandAssets = Field(default_factory=lambda: BrandAssets())

    def to_data(self) -> Dict[str, Any]:
        """Canonical JSON-shaped dict (camelCase keys, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BrandTemplate(BrandModel):
    """Pre-configured brand DNA."""
    id: str
    name: str
    description: str
    category: TemplateCategory
    thumbnail: Optional[str] = None
    brand_dna: BrandDNA = Field(alias="brandDNA")


# ============================================================================
# VALIDATION MODELS
# ============================================================================

class ErrorCode(str, Enum):
    INVALID_JSON = "INVALID_JSON"
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_COLOR = "INVALID_COLOR"
    INVALID_ARRAY_LENGTH = "INVALID_ARRAY_LENGTH"
    MAX_ARRAY_LENGTH = "MAX_ARRAY_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    INVALID_VALUE = "INVALID_VALUE"
    INSUFFICIENT_CONTRAST = "INSUFFICIENT_CONTRAST"
    IMPORT_ERROR = "IMPORT_ERROR"


class FieldError(BrandModel):
    """A single validation finding scoped to a field path."""
    field: str = Field(description="Field path, e.g. colors.light.primary")
    message: str
    code: ErrorCode
    severity: Literal["error", "warning"] = "error"

    @property
    def advisory(self) -> bool:
        return self.severity == "warning"


class ValidationResult(BrandModel):
    valid: bool
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def blocking_errors(self) -> List[FieldError]:
        return [e for e in self.errors if not e.advisory]

    @property
    def warnings(self) -> List[FieldError]:
        return [e for e in self.errors if e.advisory]

    def codes(self) -> List[str]:
        return [e.code.value for e in self.errors]

    def errors_for(self, field: str) -> List[FieldError]:
        return [e for e in self.errors if e.field == field]


class ContrastResult(BrandModel):
    """WCAG contrast compliance for a color pair."""
    ratio: float = Field(description="Contrast ratio rounded to 2 decimals")
    aa: bool = Field(description="Normal text AA (4.5:1)")
    aaa: bool = Field(description="Normal text AAA (7:1)")
    aa_large: bool = Field(description="Large text AA (3:1)")
    aaa_large: bool = Field(description="Large text AAA (4.5:1)")


# ============================================================================
# IMPORT / EXPORT MODELS
# ============================================================================

class ImportResult(BrandModel):
    success: bool
    brand_dna: Optional[BrandDNA] = Field(default=None, alias="brandDNA")
    validation: Optional[ValidationResult] = None
    error: Optional[str] = None

    @property
    def errors(self) -> List[FieldError]:
        return list(self.validation.errors) if self.validation else []


class ImportSummary(BrandModel):
    brand_name: str = "Unknown"
    version: str = "Unknown"
    colors: int = 0
    fonts: int = 0
    assets: int = 0


class ImportPreview(BrandModel):
    valid: bool
    summary: ImportSummary = Field(default_factory=lambda: ImportSummary())
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class BrandDifference(BrandModel):
    field: str
    current: Any = None
    imported: Any = None


class ExportSummary(BrandModel):
    size: int = Field(description="Size in bytes (UTF-8)")
    size_formatted: str
    lines: int


# ============================================================================
# FONT CATALOG MODELS
# ============================================================================

FontCategory = Literal["sans-serif", "serif", "monospace", "display", "handwriting"]


class GoogleFont(BrandModel):
    name: str
    category: FontCategory
    weights: List[int]
    styles: List[str]
    variants: int
    popularity: int
    url: str
    fallback: List[str]


class FontPairing(BrandModel):
    name: str
    heading: str
    body: str
    description: str


# ============================================================================
# API REQUEST/RESPONSE MODELS
# ============================================================================

class ImportRequest(BaseModel):
    """Request model for brand import. Exactly one source must be set."""
    json_text: Optional[str] = Field(default=None, alias="json", description="Raw brand JSON")
    url: Optional[str] = Field(default=None, description="HTTP(S) URL to a brand JSON file")
    link: Optional[str] = Field(default=None, description="Shareable link token")
    strict: bool = Field(default=False, description="Treat advisory errors as blocking")

    model_config = {"populate_by_name": True}


class PreviewRequest(BaseModel):
    json_text: str = Field(alias="json", description="Raw brand JSON")

    model_config = {"populate_by_name": True}


class CompareRequest(BaseModel):
    current: BrandDNA
    imported: BrandDNA


class ShareLinkResponse(BaseModel):
    token: str = Field(description="Base64 shareable link token")


class TemplateInfo(BaseModel):
    id: str
    name: str
    description: str
    category: TemplateCategory
