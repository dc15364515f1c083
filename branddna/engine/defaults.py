"""Built-in default brand and the per-field merge strategy."""
import copy
from typing import Any, Dict, Mapping, Optional

from branddna.app.models import BrandDNA, utc_timestamp

CURRENT_VERSION = "1.0.0"

DEFAULT_FONTS = {
    "heading": {
        "name": "Inter",
        "weights": [400, 500, 600, 700, 800, 900],
        "styles": ["normal"],
        "url": "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800;900&display=swap",
        "fallback": ["system-ui", "sans-serif"],
    },
    "body": {
        "name": "Inter",
        "weights": [400, 500, 600],
        "styles": ["normal"],
        "url": "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap",
        "fallback": ["system-ui", "sans-serif"],
    },
    "mono": {
        "name": "Fira Code",
        "weights": [400, 500, 600],
        "styles": ["normal"],
        "url": "https://fonts.googleapis.com/css2?family=Fira+Code:wght@400;500;600&display=swap",
        "fallback": ["monospace"],
    },
}


# Canonical JSON shape; timestamps are filled in when a brand is built
DEFAULT_BRAND_DATA: Dict[str, Any] = {
    "metadata": {
        "name": "Quickfy",
        "tagline": "Marketing automation platform",
        "description": "Default Quickfy brand identity with modern, professional styling",
        "industry": "SaaS / Marketing Technology",
        "version": CURRENT_VERSION,
    },
    "colors": {
        "light": {
            "primary": "221.2 83.2% 53.3%",
            "secondary": "210 40% 96.1%",
            "accent": "210 40% 96.1%",
            "destructive": "0 84.2% 60.2%",
            "muted": "210 40% 96.1%",
            "background": "0 0% 100%",
            "foreground": "222.2 84% 4.9%",
            "card": "0 0% 100%",
            "border": "214.3 31.8% 91.4%",
            "input": "214.3 31.8% 91.4%",
            "ring": "221.2 83.2% 53.3%",
        },
        "dark": {
            "primary": "217.2 91.2% 59.8%",
            "secondary": "217.2 32.6% 17.5%",
            "accent": "217.2 32.6% 17.5%",
            "destructive": "0 62.8% 30.6%",
            "muted": "217.2 32.6% 17.5%",
            "background": "222.2 84% 4.9%",
            "foreground": "210 40% 98%",
            "card": "222.2 84% 4.9%",
            "border": "217.2 32.6% 17.5%",
            "input": "217.2 32.6% 17.5%",
            "ring": "217.2 91.2% 59.8%",
        },
        "chart": [
            "12 76% 61%",
            "173 58% 39%",
            "197 37% 24%",
            "43 74% 66%",
            "27 87% 67%",
        ],
    },
    "typography": {
        "fontHeading": DEFAULT_FONTS["heading"],
        "fontBody": DEFAULT_FONTS["body"],
        "fontMono": DEFAULT_FONTS["mono"],
        "scale": {
            "xs": "0.75rem",
            "sm": "0.875rem",
            "base": "1rem",
            "lg": "1.125rem",
            "xl": "1.25rem",
            "2xl": "1.5rem",
            "3xl": "1.875rem",
            "4xl": "2.25rem",
            "5xl": "3rem",
            "6xl": "3.75rem",
            "7xl": "4.5rem",
            "8xl": "6rem",
            "9xl": "8rem",
        },
        "lineHeight": {"tight": 1.25, "normal": 1.5, "relaxed": 1.75},
        "letterSpacing": {"tight": "-0.05em", "normal": "0", "wide": "0.05em"},
    },
    "spacing": {
        "radius": {
            "sm": "0.125rem",
            "md": "0.375rem",
            "lg": "0.5rem",
            "xl": "0.75rem",
            "2xl": "1rem",
            "full": "9999px",
        },
        "spacing": {
            "xs": "0.5rem",
            "sm": "0.75rem",
            "md": "1rem",
            "lg": "1.5rem",
            "xl": "2rem",
            "2xl": "3rem",
            "3xl": "4rem",
            "4xl": "6rem",
        },
    },
    "strategy": {
        "values": [],
        "toneOfVoice": {"traits": []},
    },
    "assets": {
        "additionalAssets": [],
    },
}


MERGE = "merge"
REPLACE = "replace"

# Section path -> how an incoming value combines with the default.
# Paths missing from the table are replaced by the incoming value.
MERGE_RULES: Dict[str, str] = {
    "": MERGE,
    "metadata": MERGE,
    "colors": MERGE,
    "colors.light": MERGE,
    "colors.dark": MERGE,
    "colors.chart": REPLACE,
    "typography": MERGE,
    "typography.fontHeading": REPLACE,
    "typography.fontBody": REPLACE,
    "typography.fontMono": REPLACE,
    "typography.scale": MERGE,
    "typography.lineHeight": MERGE,
    "typography.letterSpacing": MERGE,
    "spacing": MERGE,
    "spacing.radius": MERGE,
    "spacing.spacing": MERGE,
    "strategy": MERGE,
    "strategy.values": REPLACE,
    "strategy.toneOfVoice": MERGE,
    "assets": MERGE,
    "assets.primaryLogo": REPLACE,
    "assets.secondaryLogo": REPLACE,
    "assets.favicon": REPLACE,
    "assets.additionalAssets": REPLACE,
}


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def merge_section(base: Any, override: Any, path: str = "") -> Any:
    """
    Combine an incoming value with a base value following MERGE_RULES.

    A missing (None) override keeps the base. Merged sections recurse key by
    key; anything else is replaced by the override. Inputs are not modified.
    """
    if override is None:
        return copy.deepcopy(base)
    rule = MERGE_RULES.get(path, REPLACE)
    if rule == REPLACE or not isinstance(base, Mapping) or not isinstance(override, Mapping):
        return copy.deepcopy(override)

    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        merged[key] = merge_section(merged.get(key), value, _child_path(path, key))
    return merged


def default_brand_data(now: Optional[str] = None) -> Dict[str, Any]:
    """Deep copy of the default brand with fresh timestamps."""
    now = now or utc_timestamp()
    data = copy.deepcopy(DEFAULT_BRAND_DATA)
    data["metadata"]["createdAt"] = now
    data["metadata"]["updatedAt"] = now
    return data


def default_brand() -> BrandDNA:
    """The built-in Quickfy brand."""
    return BrandDNA.model_validate(default_brand_data())


def merge_with_defaults(partial: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Fill the gaps of partial brand data from the default brand.

    Incoming timestamps are kept so that exported files round-trip exactly;
    missing ones are set to the current time.
    """
    return merge_section(default_brand_data(), partial, "")


def is_default_brand(brand: BrandDNA) -> bool:
    """Shallow check: same light primary color and body font as the default."""
    return (
        brand.colors.light.primary == DEFAULT_BRAND_DATA["colors"]["light"]["primary"]
        and brand.typography.font_body.name == DEFAULT_FONTS["body"]["name"]
    )
