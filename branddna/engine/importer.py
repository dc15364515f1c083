"""Import pipeline: parse, shape check, migrate, sanitize, merge, validate, build.

Public entry points never raise for bad input; they all return an
ImportResult describing success or the collected errors.
"""
import os
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from branddna.app.config import get_settings
from branddna.app.logger import logger
from branddna.app.models import (
    BrandDifference,
    BrandDNA,
    ErrorCode,
    FieldError,
    ImportPreview,
    ImportResult,
    ImportSummary,
    ValidationResult,
)
from branddna.engine.defaults import CURRENT_VERSION, merge_with_defaults
from branddna.engine.sanitizer import sanitize_brand_data
from branddna.engine.serializer import (
    InvalidShareLinkError,
    decode_shareable_link,
    parse_brand_json,
)
from branddna.engine.validator import summarize_errors, validate_brand_dna

CURRENT_SCHEMA_VERSION = CURRENT_VERSION
STRUCTURE_KEYS = ("metadata", "colors", "typography")

GENERIC_IMPORT_ERROR = "Failed to import brand DNA"
INVALID_LINK_MESSAGE = "Invalid shareable link. The link may be corrupted or outdated."
INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Please upload a JSON file."

USER_AGENT = "branddna-importer/1.0"

# (label, dotted path) pairs for compare_brand_dna
DEFAULT_COMPARE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Primary Color", "colors.light.primary"),
    ("Heading Font", "typography.fontHeading.name"),
    ("Body Font", "typography.fontBody.name"),
    ("Brand Name", "metadata.name"),
)


# ============================================================================
# MIGRATIONS
# ============================================================================

Migration = Callable[[Dict[str, Any]], Dict[str, Any]]

# from_version -> (to_version, step). Empty while 1.0.0 is the only schema.
MIGRATIONS: Dict[str, Tuple[str, Migration]] = {}


def _version_of(data: Mapping[str, Any]) -> str:
    metadata = data.get("metadata")
    if isinstance(metadata, Mapping) and isinstance(metadata.get("version"), str):
        return metadata["version"]
    return CURRENT_SCHEMA_VERSION


def migrate_brand_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply registered upgrade steps until the data reaches the current schema."""
    version = _version_of(data)
    seen = set()
    while version in MIGRATIONS and version not in seen:
        seen.add(version)
        target, step = MIGRATIONS[version]
        logger.info(f"Migrating brand data from schema {version} to {target}")
        data = step(data)
        version = target
    return data


# ============================================================================
# RESULT HELPERS
# ============================================================================

def _failure(field: str, message: str, code: ErrorCode) -> ImportResult:
    validation = ValidationResult(
        valid=False,
        errors=[FieldError(field=field, message=message, code=code)],
    )
    return ImportResult(success=False, validation=validation, error=message)


def _format_loc(loc: Sequence[Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _model_errors(exc: ValidationError) -> List[FieldError]:
    return [
        FieldError(
            field=_format_loc(err.get("loc", ())),
            message=err.get("msg", "Invalid value"),
            code=ErrorCode.INVALID_VALUE,
        )
        for err in exc.errors()
    ]


def _resolve_strict(strict: Optional[bool]) -> bool:
    return get_settings().strict_validation if strict is None else strict


# ============================================================================
# PIPELINE
# ============================================================================

def _import_data(data: Any, strict: bool) -> ImportResult:
    if not isinstance(data, dict) or not any(key in data for key in STRUCTURE_KEYS):
        return _failure("json", "JSON does not contain valid brand DNA structure",
                        ErrorCode.INVALID_STRUCTURE)

    data = migrate_brand_data(data)
    data = sanitize_brand_data(data)
    merged = merge_with_defaults(data)

    validation = validate_brand_dna(merged, strict=strict)
    if not validation.valid:
        message = summarize_errors(validation.blocking_errors if not strict else validation.errors)
        logger.info(f"Import rejected with {len(validation.errors)} finding(s)")
        return ImportResult(success=False, validation=validation, error=message)

    try:
        brand = BrandDNA.model_validate(merged)
    except ValidationError as e:
        errors = _model_errors(e)
        return ImportResult(
            success=False,
            validation=ValidationResult(valid=False, errors=list(validation.errors) + errors),
            error=summarize_errors(errors),
        )

    logger.info(f"Imported brand '{brand.metadata.name}' (schema {brand.metadata.version})")
    return ImportResult(success=True, brand_dna=brand, validation=validation)


def import_from_json(text: str, strict: Optional[bool] = None) -> ImportResult:
    """Import brand DNA from a JSON string."""
    try:
        try:
            data = parse_brand_json(text)
        except (TypeError, ValueError):
            return _failure("json", "Invalid JSON format", ErrorCode.INVALID_JSON)
        return _import_data(data, _resolve_strict(strict))
    except Exception as e:
        logger.error(f"Unexpected error during import: {e}", exc_info=True)
        return _failure("json", GENERIC_IMPORT_ERROR, ErrorCode.IMPORT_ERROR)


def import_from_file(source: Any, strict: Optional[bool] = None) -> ImportResult:
    """
    Import brand DNA from a .json file.

    Args:
        source: Filesystem path or a file-like object with a ``name`` attribute
        strict: Treat advisory findings as blocking

    Returns:
        ImportResult
    """
    name = source if isinstance(source, (str, os.PathLike)) else getattr(source, "name", "")
    if not str(name).lower().endswith(".json"):
        return _failure("file", INVALID_FILE_TYPE_MESSAGE, ErrorCode.INVALID_VALUE)

    try:
        if isinstance(source, (str, os.PathLike)):
            with open(source, "r", encoding="utf-8") as f:
                text = f.read()
        else:
            text = source.read()
            if isinstance(text, bytes):
                text = text.decode("utf-8")
    except Exception as e:
        logger.error(f"Failed to read brand file {name}: {e}", exc_info=True)
        return _failure("file", "Failed to read file", ErrorCode.IMPORT_ERROR)

    logger.info(f"Importing brand DNA from file {name}")
    return import_from_json(text, strict=strict)


def import_from_url(url: str, timeout: Optional[float] = None,
                    strict: Optional[bool] = None) -> ImportResult:
    """Fetch a brand JSON file over HTTP(S) and import it."""
    scheme = urlparse(url or "").scheme.lower()
    if scheme not in ("http", "https"):
        return _failure("url", "Only HTTP(S) URLs can be imported", ErrorCode.INVALID_VALUE)

    timeout = get_settings().import_timeout if timeout is None else timeout
    logger.info(f"Fetching brand DNA from {url}")
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )
    except requests.RequestException as e:
        logger.error(f"Failed to fetch brand DNA from {url}: {e}", exc_info=True)
        return _failure("url", "Failed to fetch brand DNA", ErrorCode.IMPORT_ERROR)

    if not response.ok:
        logger.warning(f"Brand DNA fetch from {url} returned {response.status_code}")
        return _failure("url", f"HTTP error! status: {response.status_code}", ErrorCode.IMPORT_ERROR)

    return import_from_json(response.text, strict=strict)


def import_from_shareable_link(token: str, strict: Optional[bool] = None) -> ImportResult:
    """Import brand DNA from a base64 share token."""
    try:
        data = decode_shareable_link(token)
    except InvalidShareLinkError:
        return _failure("link", INVALID_LINK_MESSAGE, ErrorCode.INVALID_VALUE)
    try:
        return _import_data(data, _resolve_strict(strict))
    except Exception as e:
        logger.error(f"Unexpected error during link import: {e}", exc_info=True)
        return _failure("link", GENERIC_IMPORT_ERROR, ErrorCode.IMPORT_ERROR)


# ============================================================================
# PREVIEW / COMPARE
# ============================================================================

def preview_import(text: str) -> ImportPreview:
    """Run the import pipeline and summarize the outcome without applying it."""
    result = import_from_json(text)
    errors = [error.message for error in result.errors if not error.advisory]
    warnings: List[str] = []

    brand = result.brand_dna
    if brand is None:
        return ImportPreview(valid=False, errors=errors or [result.error or GENERIC_IMPORT_ERROR])

    assets = brand.assets
    summary = ImportSummary(
        brand_name=brand.metadata.name,
        version=brand.metadata.version,
        colors=len(type(brand.colors.light).model_fields),
        fonts=3,
        assets=sum(1 for logo in (assets.primary_logo, assets.secondary_logo, assets.favicon) if logo),
    )
    if assets.primary_logo is None:
        warnings.append("No primary logo uploaded")
    if brand.typography.font_heading.name == brand.typography.font_body.name:
        warnings.append("Heading and body fonts are the same")
    warnings.extend(error.message for error in result.errors if error.advisory)

    return ImportPreview(valid=result.success, summary=summary, warnings=warnings, errors=errors)


def _lookup(data: Any, path: str) -> Any:
    for key in path.split("."):
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def compare_brand_dna(
    current: BrandDNA,
    imported: BrandDNA,
    fields: Sequence[Tuple[str, str]] = DEFAULT_COMPARE_FIELDS,
) -> List[BrandDifference]:
    """List the differences between two brands for the given (label, path) fields."""
    current_data, imported_data = current.to_data(), imported.to_data()
    differences = []
    for label, path in fields:
        before, after = _lookup(current_data, path), _lookup(imported_data, path)
        if before != after:
            differences.append(BrandDifference(field=label, current=before, imported=after))
    return differences
