"""FastAPI host exposing the Brand DNA engine."""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
import uvicorn

from branddna.app.config import get_settings
from branddna.app.logger import logger, LOG_FILE
from branddna.app.models import (
    BrandDifference,
    BrandDNA,
    BrandTemplate,
    CompareRequest,
    ContrastResult,
    GoogleFont,
    FontPairing,
    ImportPreview,
    ImportRequest,
    ImportResult,
    PreviewRequest,
    ShareLinkResponse,
    TemplateInfo,
    ValidationResult,
)
from branddna.engine.color_science import InvalidColorError, check_contrast
from branddna.engine.fonts import FONT_PAIRINGS, GOOGLE_FONTS, get_fonts_by_category, search_fonts
from branddna.engine.importer import (
    compare_brand_dna,
    import_from_json,
    import_from_shareable_link,
    import_from_url,
    preview_import,
)
from branddna.engine.serializer import (
    UnknownExportFormatError,
    export_brand,
    export_filename,
    to_shareable_link,
)
from branddna.engine.templates import TemplateNotFoundError, TemplateRegistry, get_template_registry
from branddna.engine.validator import validate_brand_dna

VERSION = "1.0.0"

EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "css": "text/css",
    "tailwind": "application/javascript",
    "typescript": "text/plain",
}

settings = get_settings()

app = FastAPI(
    title="Brand DNA Engine API",
    description="Validate, import, export and share Brand DNA definitions",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Shared template catalog (initialized on startup)
template_registry: Optional[TemplateRegistry] = None


@app.on_event("startup")
async def startup_event():
    """Build the template catalog on startup."""
    global template_registry
    template_registry = get_template_registry()
    logger.info(f"Loaded {len(template_registry.list())} brand templates")


def _registry() -> TemplateRegistry:
    return template_registry or get_template_registry()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Brand DNA Engine API",
        "version": VERSION,
        "endpoints": [
            "/validate", "/import", "/import/preview", "/compare", "/export/{format}",
            "/share", "/contrast", "/templates", "/fonts",
        ],
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/validate", response_model=ValidationResult)
async def validate(payload: Dict[str, Any] = Body(...), strict: Optional[bool] = None):
    """Validate raw brand JSON without importing it."""
    strict = settings.strict_validation if strict is None else strict
    result = validate_brand_dna(payload, strict=strict)
    logger.info(f"Validation finished: valid={result.valid}, findings={len(result.errors)}")
    return result


# Sync handler: URL imports block on requests.get, so FastAPI runs it in the threadpool
@app.post("/import", response_model=ImportResult)
def import_brand(request: ImportRequest):
    """Import brand DNA from raw JSON, a URL or a shareable link."""
    sources = [s for s in (request.json_text, request.url, request.link) if s is not None]
    if len(sources) != 1:
        raise HTTPException(status_code=400, detail="Provide exactly one of json, url or link")

    if request.json_text is not None:
        return import_from_json(request.json_text, strict=request.strict)
    if request.url is not None:
        return import_from_url(request.url, strict=request.strict)
    return import_from_shareable_link(request.link, strict=request.strict)


@app.post("/import/preview", response_model=ImportPreview)
async def import_preview(request: PreviewRequest):
    """Summarize what an import would do without applying it."""
    return preview_import(request.json_text)


@app.post("/compare", response_model=List[BrandDifference])
async def compare(request: CompareRequest):
    """List differences between a working brand and an imported one."""
    return compare_brand_dna(request.current, request.imported)


def _content_disposition(filename: str) -> str:
    """Attachment header; names outside printable ASCII get an RFC 5987 filename* parameter."""
    fallback = "".join(c for c in filename if " " <= c <= "~" and c != '"').lstrip("-")
    header = f'attachment; filename="{fallback or "brand"}"'
    if fallback != filename:
        header += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return header


@app.post("/export/{fmt}")
async def export(fmt: str, brand: BrandDNA):
    """Render a brand as json, css, tailwind or typescript."""
    try:
        content = export_brand(brand, fmt)
        filename = export_filename(brand, fmt)
    except UnknownExportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Exported brand '{brand.metadata.name}' as {fmt}")
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.post("/share", response_model=ShareLinkResponse)
async def share(brand: BrandDNA):
    """Encode a brand as a shareable link token."""
    return ShareLinkResponse(token=to_shareable_link(brand))


@app.get("/contrast", response_model=ContrastResult)
async def contrast(foreground: str = Query(...), background: str = Query(...)):
    """WCAG contrast check for two HSL colors."""
    try:
        return check_contrast(foreground, background)
    except InvalidColorError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/templates", response_model=List[TemplateInfo])
async def list_templates(category: Optional[str] = None):
    """List templates, optionally filtered by category."""
    registry = _registry()
    templates = registry.get_by_category(category) if category else registry.list()
    return [
        TemplateInfo(id=t.id, name=t.name, description=t.description, category=t.category)
        for t in templates
    ]


@app.get("/templates/{template_id}", response_model=BrandTemplate)
async def get_template(template_id: str):
    """Full template including its brand DNA."""
    try:
        return _registry().get_by_id(template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/fonts", response_model=List[GoogleFont])
async def list_fonts(category: Optional[str] = None, q: Optional[str] = None):
    """Curated web fonts, filtered by category and/or name."""
    fonts = get_fonts_by_category(category) if category else list(GOOGLE_FONTS)
    if q:
        matches = {font.name for font in search_fonts(q)}
        fonts = [font for font in fonts if font.name in matches]
    return fonts


@app.get("/fonts/pairings", response_model=List[FontPairing])
async def font_pairings():
    """Recommended heading/body pairings."""
    return FONT_PAIRINGS


def main():
    """Main entry point for running the API server."""
    logger.info("Starting Brand DNA Engine API server...")
    if LOG_FILE is not None:
        logger.info(f"Log file: {LOG_FILE.absolute()}")
    uvicorn.run(
        "branddna.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
