"""Curated Google Fonts catalog and recommended pairings."""
from typing import List, Optional

from branddna.app.models import FontFamily, FontPairing, GoogleFont

_CSS2 = "https://fonts.googleapis.com/css2?family="
SANS = ["system-ui", "sans-serif"]
SERIF = ["Georgia", "serif"]
MONO = ["monospace"]
DISPLAY = ["Impact", "sans-serif"]
BOTH_STYLES = ["normal", "italic"]


def _font(name, category, weights, styles, variants, popularity, fallback) -> GoogleFont:
    family = name.replace(" ", "+")
    if len(weights) > 1:
        url = f"{_CSS2}{family}:wght@{';'.join(str(w) for w in weights)}&display=swap"
    else:
        url = f"{_CSS2}{family}&display=swap"
    return GoogleFont(
        name=name,
        category=category,
        weights=weights,
        styles=styles,
        variants=variants,
        popularity=popularity,
        url=url,
        fallback=fallback,
    )


GOOGLE_FONTS: List[GoogleFont] = [
    # Sans-serif
    _font("Inter", "sans-serif", [100, 200, 300, 400, 500, 600, 700, 800, 900], BOTH_STYLES, 18, 100, SANS),
    _font("Roboto", "sans-serif", [100, 300, 400, 500, 700, 900], BOTH_STYLES, 12, 95, SANS),
    _font("Open Sans", "sans-serif", [300, 400, 500, 600, 700, 800], BOTH_STYLES, 12, 90, SANS),
    _font("Poppins", "sans-serif", [100, 200, 300, 400, 500, 600, 700, 800, 900], BOTH_STYLES, 18, 85, SANS),
    _font("Montserrat", "sans-serif", [100, 200, 300, 400, 500, 600, 700, 800, 900], BOTH_STYLES, 18, 85, SANS),
    _font("Lato", "sans-serif", [100, 300, 400, 700, 900], BOTH_STYLES, 10, 80, SANS),
    _font("Raleway", "sans-serif", [100, 200, 300, 400, 500, 600, 700, 800, 900], BOTH_STYLES, 18, 75, SANS),
    _font("Nunito", "sans-serif", [200, 300, 400, 500, 600, 700, 800, 900], BOTH_STYLES, 16, 75, SANS),
    # Serif
    _font("Playfair Display", "serif", [400, 500, 600, 700, 800, 900], BOTH_STYLES, 12, 80, SERIF),
    _font("Merriweather", "serif", [300, 400, 700, 900], BOTH_STYLES, 8, 75, SERIF),
    _font("Lora", "serif", [400, 500, 600, 700], BOTH_STYLES, 8, 75, SERIF),
    _font("PT Serif", "serif", [400, 700], BOTH_STYLES, 4, 70, SERIF),
    # Monospace
    _font("Fira Code", "monospace", [300, 400, 500, 600, 700], ["normal"], 5, 90, MONO),
    _font("JetBrains Mono", "monospace", [100, 200, 300, 400, 500, 600, 700, 800], BOTH_STYLES, 16, 85, MONO),
    _font("Source Code Pro", "monospace", [200, 300, 400, 500, 600, 700, 900], BOTH_STYLES, 14, 80, MONO),
    _font("Space Mono", "monospace", [400, 700], BOTH_STYLES, 4, 70, MONO),
    # Display
    _font("Bebas Neue", "display", [400], ["normal"], 1, 75, DISPLAY),
    _font("Oswald", "display", [200, 300, 400, 500, 600, 700], ["normal"], 6, 75, DISPLAY),
]

FONT_PAIRINGS: List[FontPairing] = [
    FontPairing(name="Modern & Clean", heading="Inter", body="Inter",
                description="Versatile system font, perfect for modern interfaces"),
    FontPairing(name="Classic & Professional", heading="Playfair Display", body="Lato",
                description="Elegant serif headings with clean sans-serif body"),
    FontPairing(name="Bold & Friendly", heading="Montserrat", body="Open Sans",
                description="Strong headings with approachable body text"),
    FontPairing(name="Minimal & Geometric", heading="Poppins", body="Poppins",
                description="Clean geometric sans-serif for minimalist designs"),
    FontPairing(name="Editorial & Refined", heading="Playfair Display", body="Merriweather",
                description="Beautiful serif combination for content-heavy sites"),
    FontPairing(name="Tech & Modern", heading="Raleway", body="Roboto",
                description="Contemporary pairing for tech and startup brands"),
]


def get_fonts_by_category(category: str) -> List[GoogleFont]:
    return [font for font in GOOGLE_FONTS if font.category == category]


def search_fonts(query: str) -> List[GoogleFont]:
    """Case-insensitive substring match on the font name."""
    needle = query.lower()
    return [font for font in GOOGLE_FONTS if needle in font.name.lower()]


def get_font_by_name(name: str) -> Optional[GoogleFont]:
    return next((font for font in GOOGLE_FONTS if font.name == name), None)


def google_font_to_font_family(font: GoogleFont) -> FontFamily:
    return FontFamily(
        name=font.name,
        weights=list(font.weights),
        styles=list(font.styles),
        url=font.url,
        fallback=list(font.fallback),
    )


def get_popular_fonts(limit: int = 10) -> List[GoogleFont]:
    """Most popular fonts first; ties keep catalog order."""
    return sorted(GOOGLE_FONTS, key=lambda font: -font.popularity)[:limit]
