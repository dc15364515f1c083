"""Scrubbing of untrusted brand data before it is stored.

This is a denylist for plain-text fields, not an HTML sanitizer. Nothing in
here raises: unsafe content is rewritten or dropped.
"""
import copy
import re
from typing import Any, Dict, Mapping, Optional

from branddna.app.logger import logger
from branddna.app.models import BrandDNA

_SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_IFRAME_BLOCK = re.compile(r"<iframe\b[^>]*>.*?</iframe\s*>", re.IGNORECASE | re.DOTALL)
_STRAY_TAG = re.compile(r"</?\s*(?:script|iframe)\b[^>]*>", re.IGNORECASE)
_JS_URI = re.compile(r"javascript\s*:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\bon\w+\s*=", re.IGNORECASE)

SAFE_ASSET_PREFIXES = ("data:image/", "https://")

METADATA_TEXT_FIELDS = ("name", "tagline", "description", "industry")
STRATEGY_TEXT_FIELDS = ("purpose", "vision", "mission", "positioning", "targetAudience")
TONE_TEXT_FIELDS = ("description",)
TONE_LIST_FIELDS = ("traits", "dos", "donts")
LOGO_SLOTS = ("primaryLogo", "secondaryLogo", "favicon")
FONT_ROLES = ("fontHeading", "fontBody", "fontMono")


def sanitize_text(value: str) -> str:
    """Remove script/iframe blocks, javascript: URIs and inline handlers."""
    if not isinstance(value, str):
        return value
    cleaned = None
    # Removing one token can join its neighbours into another; repeat until stable
    while cleaned != value:
        cleaned = value
        value = _SCRIPT_BLOCK.sub("", value)
        value = _IFRAME_BLOCK.sub("", value)
        value = _STRAY_TAG.sub("", value)
        value = _JS_URI.sub("", value)
        value = _EVENT_HANDLER.sub("", value)
    return value.strip()


def is_safe_asset_url(url: Any) -> bool:
    if not isinstance(url, str):
        return False
    return url.startswith(SAFE_ASSET_PREFIXES)


def sanitize_asset_url(url: Optional[str]) -> Optional[str]:
    """Keep data:image/ and https:// URLs; drop everything else."""
    return url if is_safe_asset_url(url) else None


def _scrub_fields(section: Any, fields, path: str):
    if not isinstance(section, dict):
        return
    for key in fields:
        value = section.get(key)
        if isinstance(value, str):
            cleaned = sanitize_text(value)
            if cleaned != value:
                logger.debug(f"Sanitized {path}.{key}")
            section[key] = cleaned


def _scrub_list(section: Any, key: str):
    if not isinstance(section, dict) or not isinstance(section.get(key), list):
        return
    section[key] = [
        sanitize_text(item) if isinstance(item, str) else item
        for item in section[key]
    ]


def _sanitize_logo(logo: Any, path: str) -> Any:
    if not isinstance(logo, dict):
        return logo
    _scrub_fields(logo, ("name",), path)
    for key in ("lightUrl", "darkUrl"):
        if key in logo and logo[key] is not None and not is_safe_asset_url(logo[key]):
            logger.warning(f"Dropped unsafe asset URL at {path}.{key}")
            del logo[key]
    return logo


def _sanitize_fonts(typography: Any):
    if not isinstance(typography, dict):
        return
    for role in FONT_ROLES:
        font = typography.get(role)
        if not isinstance(font, dict):
            continue
        _scrub_fields(font, ("name",), f"typography.{role}")
        url = font.get("url")
        if url is not None and not (isinstance(url, str) and url.startswith("https://")):
            logger.warning(f"Dropped non-https font stylesheet at typography.{role}.url")
            del font["url"]


def _sanitize_strategy(strategy: Any):
    if not isinstance(strategy, dict):
        return
    _scrub_fields(strategy, STRATEGY_TEXT_FIELDS, "strategy")
    _scrub_list(strategy, "differentiators")

    values = strategy.get("values")
    if isinstance(values, list):
        for index, value in enumerate(values):
            _scrub_fields(value, ("name", "description", "icon"), f"strategy.values[{index}]")

    tone = strategy.get("toneOfVoice")
    _scrub_fields(tone, TONE_TEXT_FIELDS, "strategy.toneOfVoice")
    for key in TONE_LIST_FIELDS:
        _scrub_list(tone, key)


def _sanitize_assets(assets: Any):
    if not isinstance(assets, dict):
        return
    for slot in LOGO_SLOTS:
        if assets.get(slot) is not None:
            assets[slot] = _sanitize_logo(assets[slot], f"assets.{slot}")
    extras = assets.get("additionalAssets")
    if isinstance(extras, list):
        assets["additionalAssets"] = [
            _sanitize_logo(logo, f"assets.additionalAssets[{index}]")
            for index, logo in enumerate(extras)
        ]


def sanitize_brand_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a scrubbed deep copy of JSON-shaped brand data.

    Free text (metadata, strategy, font and logo names) goes through
    sanitize_text; unsafe logo URLs and non-https font stylesheets are dropped.
    Sections of unexpected types are passed through untouched for the
    validator to report.
    """
    if not isinstance(data, Mapping):
        return data
    cleaned = copy.deepcopy(dict(data))
    _scrub_fields(cleaned.get("metadata"), METADATA_TEXT_FIELDS, "metadata")
    _sanitize_fonts(cleaned.get("typography"))
    _sanitize_strategy(cleaned.get("strategy"))
    _sanitize_assets(cleaned.get("assets"))
    return cleaned


def sanitize_brand_dna(brand: BrandDNA) -> BrandDNA:
    """Model-level wrapper around sanitize_brand_data."""
    return BrandDNA.model_validate(sanitize_brand_data(brand.to_data()))
