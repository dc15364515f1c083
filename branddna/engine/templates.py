"""Pre-configured brand templates."""
from typing import Any, Dict, List, Optional, Sequence

from branddna.app.logger import logger
from branddna.app.models import BrandDNA, BrandTemplate, utc_timestamp
from branddna.engine.defaults import merge_with_defaults


class TemplateNotFoundError(LookupError):
    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


def _font(name: str, weights: List[int], fallback: List[str]) -> Dict[str, Any]:
    family = name.replace(" ", "+")
    return {
        "name": name,
        "weights": weights,
        "styles": ["normal"],
        "url": (
            f"https://fonts.googleapis.com/css2?family={family}:wght@"
            f"{';'.join(str(w) for w in weights)}&display=swap"
        ),
        "fallback": fallback,
    }


SANS = ["system-ui", "sans-serif"]
SERIF = ["Georgia", "serif"]


def _palette(primary, secondary, accent, destructive, muted, background,
             foreground, card, border, input_, ring) -> Dict[str, str]:
    return {
        "primary": primary,
        "secondary": secondary,
        "accent": accent,
        "destructive": destructive,
        "muted": muted,
        "background": background,
        "foreground": foreground,
        "card": card,
        "border": border,
        "input": input_,
        "ring": ring,
    }


# Each definition overrides sections of the default brand
TEMPLATE_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "id": "default",
        "name": "Quickfy Default",
        "description": "Modern and professional design with blue primary color",
        "category": "default",
        "overrides": {},
    },
    {
        "id": "minimal",
        "name": "Minimal",
        "description": "Clean and understated design with neutral colors",
        "category": "minimal",
        "overrides": {
            "metadata": {"name": "Minimal Brand", "tagline": "Less is more"},
            "colors": {
                "light": _palette("0 0% 9%", "0 0% 96%", "0 0% 45%", "0 0% 20%", "0 0% 96%",
                                  "0 0% 100%", "0 0% 9%", "0 0% 100%", "0 0% 90%", "0 0% 90%",
                                  "0 0% 9%"),
                "dark": _palette("0 0% 98%", "0 0% 14%", "0 0% 24%", "0 0% 40%", "0 0% 14%",
                                 "0 0% 9%", "0 0% 98%", "0 0% 9%", "0 0% 20%", "0 0% 20%",
                                 "0 0% 98%"),
                "chart": ["0 0% 20%", "0 0% 35%", "0 0% 50%", "0 0% 65%", "0 0% 80%"],
            },
            "typography": {
                "fontHeading": _font("Inter", [400, 600, 700], SANS),
                "fontBody": _font("Inter", [400, 500], SANS),
            },
        },
    },
    {
        "id": "vibrant",
        "name": "Vibrant",
        "description": "Bold and energetic design with bright colors",
        "category": "vibrant",
        "overrides": {
            "metadata": {"name": "Vibrant Brand", "tagline": "Bold and beautiful"},
            "colors": {
                "light": _palette("280 100% 60%", "340 100% 65%", "160 100% 50%", "15 100% 55%",
                                  "280 20% 95%", "0 0% 100%", "280 50% 15%", "0 0% 100%",
                                  "280 30% 85%", "280 30% 85%", "280 100% 60%"),
                "dark": _palette("280 90% 70%", "340 80% 65%", "160 80% 55%", "15 90% 60%",
                                 "280 20% 20%", "280 30% 10%", "280 20% 95%", "280 30% 10%",
                                 "280 20% 25%", "280 20% 25%", "280 90% 70%"),
                "chart": ["280 100% 60%", "340 100% 65%", "160 100% 50%", "50 100% 55%",
                          "15 100% 55%"],
            },
            "typography": {
                "fontHeading": _font("Poppins", [600, 700, 800], SANS),
                "fontBody": _font("Poppins", [400, 500, 600], SANS),
            },
        },
    },
    {
        "id": "professional",
        "name": "Professional",
        "description": "Elegant and trustworthy design for corporate brands",
        "category": "professional",
        "overrides": {
            "metadata": {"name": "Professional Brand", "tagline": "Excellence in every detail"},
            "colors": {
                "light": _palette("210 100% 35%", "210 15% 90%", "195 100% 40%", "355 75% 45%",
                                  "210 15% 90%", "0 0% 100%", "210 50% 10%", "0 0% 100%",
                                  "210 20% 85%", "210 20% 85%", "210 100% 35%"),
                "dark": _palette("210 100% 60%", "210 15% 20%", "195 80% 50%", "355 65% 50%",
                                 "210 15% 20%", "210 30% 8%", "210 20% 95%", "210 30% 8%",
                                 "210 20% 18%", "210 20% 18%", "210 100% 60%"),
                "chart": ["210 100% 35%", "195 100% 40%", "170 60% 45%", "200 70% 50%",
                          "220 80% 55%"],
            },
            "typography": {
                "fontHeading": _font("Playfair Display", [600, 700, 800], SERIF),
                "fontBody": _font("Lato", [400, 600, 700], SANS),
            },
        },
    },
    {
        "id": "creative",
        "name": "Creative",
        "description": "Unique and artistic design for creative agencies",
        "category": "creative",
        "overrides": {
            "metadata": {"name": "Creative Brand", "tagline": "Think different, create amazing"},
            "colors": {
                "light": _palette("330 85% 55%", "45 100% 60%", "180 70% 50%", "15 90% 50%",
                                  "250 20% 92%", "0 0% 100%", "270 40% 20%", "0 0% 100%",
                                  "250 25% 88%", "250 25% 88%", "330 85% 55%"),
                "dark": _palette("330 80% 65%", "45 95% 65%", "180 65% 55%", "15 85% 55%",
                                 "250 15% 18%", "270 30% 12%", "250 15% 93%", "270 30% 12%",
                                 "250 20% 22%", "250 20% 22%", "330 80% 65%"),
                "chart": ["330 85% 55%", "45 100% 60%", "180 70% 50%", "15 90% 50%",
                          "270 70% 55%"],
            },
            "typography": {
                "fontHeading": _font("Montserrat", [700, 800, 900], SANS),
                "fontBody": _font("Raleway", [400, 500, 600], SANS),
            },
            "spacing": {
                "radius": {
                    "sm": "0.25rem",
                    "md": "0.5rem",
                    "lg": "1rem",
                    "xl": "1.5rem",
                    "2xl": "2rem",
                    "full": "9999px",
                },
            },
        },
    },
    {
        "id": "startup",
        "name": "Tech Startup",
        "description": "Modern and innovative design for technology companies",
        "category": "professional",
        "overrides": {
            "metadata": {"name": "Tech Startup Brand", "tagline": "Innovation at scale"},
            "colors": {
                "light": _palette("217 91% 60%", "140 80% 55%", "280 85% 60%", "0 72% 51%",
                                  "210 20% 95%", "0 0% 100%", "222 47% 11%", "0 0% 100%",
                                  "214 32% 91%", "214 32% 91%", "217 91% 60%"),
                "dark": _palette("217 91% 60%", "140 80% 55%", "280 85% 65%", "0 72% 60%",
                                 "215 20% 20%", "222 47% 11%", "210 20% 98%", "222 47% 11%",
                                 "215 28% 17%", "215 28% 17%", "217 91% 60%"),
                "chart": ["217 91% 60%", "140 80% 55%", "280 85% 60%", "45 93% 55%",
                          "345 82% 55%"],
            },
            "typography": {
                "fontHeading": _font("Inter", [700, 800, 900], SANS),
                "fontBody": _font("Inter", [400, 500, 600], SANS),
            },
        },
    },
    {
        "id": "organic",
        "name": "Organic & Nature",
        "description": "Natural and earthy design for eco-friendly brands",
        "category": "minimal",
        "overrides": {
            "metadata": {"name": "Organic Brand", "tagline": "Natural and sustainable"},
            "colors": {
                "light": _palette("142 71% 45%", "35 77% 49%", "158 64% 52%", "15 75% 48%",
                                  "60 9% 90%", "40 20% 97%", "24 10% 15%", "0 0% 100%",
                                  "60 10% 85%", "60 10% 85%", "142 71% 45%"),
                "dark": _palette("142 60% 55%", "35 70% 60%", "158 50% 60%", "15 65% 60%",
                                 "40 10% 25%", "24 15% 8%", "40 20% 95%", "24 15% 8%",
                                 "40 12% 18%", "40 12% 18%", "142 60% 55%"),
                "chart": ["142 71% 45%", "35 77% 49%", "158 64% 52%", "45 62% 47%",
                          "15 75% 48%"],
            },
            "typography": {
                "fontHeading": _font("Merriweather", [700, 900], SERIF),
                "fontBody": _font("Open Sans", [400, 600, 700], SANS),
            },
        },
    },
]


class TemplateRegistry:
    """Immutable catalog of brand templates, built on first access.

    Accessors return deep copies so callers cannot alter the catalog.
    """

    def __init__(self, definitions: Optional[Sequence[Dict[str, Any]]] = None):
        self._definitions = list(definitions if definitions is not None else TEMPLATE_DEFINITIONS)
        self._templates: Optional[Dict[str, BrandTemplate]] = None

    def _build(self) -> Dict[str, BrandTemplate]:
        if self._templates is None:
            templates = {}
            for definition in self._definitions:
                brand = BrandDNA.model_validate(merge_with_defaults(definition["overrides"]))
                templates[definition["id"]] = BrandTemplate(
                    id=definition["id"],
                    name=definition["name"],
                    description=definition["description"],
                    category=definition["category"],
                    thumbnail=definition.get("thumbnail"),
                    brand_dna=brand,
                )
            logger.debug(f"Built template registry with {len(templates)} templates")
            self._templates = templates
        return self._templates

    def list(self) -> List[BrandTemplate]:
        return [t.model_copy(deep=True) for t in self._build().values()]

    def ids(self) -> List[str]:
        return list(self._build().keys())

    def get_by_id(self, template_id: str) -> BrandTemplate:
        try:
            template = self._build()[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None
        return template.model_copy(deep=True)

    def get_by_category(self, category: str) -> List[BrandTemplate]:
        return [t.model_copy(deep=True) for t in self._build().values() if t.category == category]

    def categories(self) -> List[str]:
        seen: List[str] = []
        for template in self._build().values():
            if template.category not in seen:
                seen.append(template.category)
        return seen

    def instantiate(self, template_id: str) -> BrandDNA:
        """Independent copy of a template's brand with a fresh updatedAt."""
        brand = self.get_by_id(template_id).brand_dna
        data = brand.to_data()
        data["metadata"]["updatedAt"] = utc_timestamp()
        return BrandDNA.model_validate(data)


_registry: Optional[TemplateRegistry] = None


def get_template_registry() -> TemplateRegistry:
    """Shared registry instance."""
    global _registry
    if _registry is None:
        _registry = TemplateRegistry()
    return _registry
