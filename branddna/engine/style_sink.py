"""Destinations for generated brand stylesheets."""
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from branddna.app.logger import logger
from branddna.app.models import BrandDNA
from branddna.engine.serializer import to_css


@runtime_checkable
class StyleSink(Protocol):
    """Anything that can hold one active stylesheet."""

    def apply(self, css_text: str) -> None:
        ...

    def remove(self) -> None:
        ...


class MemoryStyleSink:
    """Keeps the active stylesheet in memory."""

    def __init__(self):
        self.css: Optional[str] = None
        self.applied_count = 0

    def apply(self, css_text: str) -> None:
        self.css = css_text
        self.applied_count += 1

    def remove(self) -> None:
        self.css = None

    @property
    def active(self) -> bool:
        return self.css is not None


class FileStyleSink:
    """Writes the active stylesheet to a file and deletes it on remove."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def apply(self, css_text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(css_text, encoding="utf-8")
        logger.info(f"Wrote brand stylesheet to {self.path}")

    def remove(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Removed brand stylesheet {self.path}")


def apply_brand_styles(brand: BrandDNA, sink: StyleSink, selector: Optional[str] = None) -> str:
    """Render the brand CSS, hand it to the sink and return it."""
    css = to_css(brand, selector=selector)
    sink.apply(css)
    return css
