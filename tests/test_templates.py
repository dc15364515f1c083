from unittest.mock import patch

import pytest

from branddna.engine.defaults import default_brand
from branddna.engine.templates import (
    TemplateNotFoundError,
    TemplateRegistry,
    get_template_registry,
)
from branddna.engine.validator import validate_brand_dna

STAMP = "2025-03-03T03:03:03.000Z"


@pytest.fixture
def registry():
    return TemplateRegistry()


def test_builtin_ids(registry):
    assert registry.ids() == [
        "default", "minimal", "vibrant", "professional", "creative", "startup", "organic",
    ]


def test_categories_in_first_seen_order(registry):
    assert registry.categories() == ["default", "minimal", "vibrant", "professional", "creative"]


@pytest.mark.parametrize("category, expected", [
    ("professional", ["professional", "startup"]),
    ("minimal", ["minimal", "organic"]),
    ("vibrant", ["vibrant"]),
    ("unknown", []),
])
def test_get_by_category(registry, category, expected):
    assert [t.id for t in registry.get_by_category(category)] == expected


def test_unknown_template_raises(registry):
    with pytest.raises(TemplateNotFoundError) as excinfo:
        registry.get_by_id("missing")
    assert excinfo.value.template_id == "missing"
    assert isinstance(excinfo.value, LookupError)


def test_every_template_is_valid(registry):
    for template in registry.list():
        result = validate_brand_dna(template.brand_dna)
        assert result.valid, (template.id, result.blocking_errors)


def test_default_template_matches_default_brand(registry):
    template = registry.get_by_id("default").brand_dna
    reference = default_brand()
    assert template.colors == reference.colors
    assert template.typography == reference.typography
    assert template.metadata.name == "Quickfy"


def test_overrides_keep_unlisted_defaults(registry):
    creative = registry.get_by_id("creative").brand_dna
    assert creative.spacing.radius["lg"] == "1rem"
    assert creative.spacing.spacing["md"] == "1rem"
    assert creative.typography.font_heading.name == "Montserrat"
    assert creative.typography.font_mono.name == "Fira Code"


def test_returned_templates_do_not_alias_the_catalog(registry):
    registry.get_by_id("creative").brand_dna.spacing.radius["lg"] = "9rem"
    registry.list()[0].brand_dna.colors.chart.append("0 0% 0%")
    registry.get_by_category("minimal")[0].brand_dna.typography.font_body.fallback.clear()

    assert registry.get_by_id("creative").brand_dna.spacing.radius["lg"] == "1rem"
    assert len(registry.get_by_id("default").brand_dna.colors.chart) == 5
    assert registry.get_by_id("minimal").brand_dna.typography.font_body.fallback


def test_serif_template_fallbacks(registry):
    professional = registry.get_by_id("professional").brand_dna
    assert professional.typography.font_heading.fallback == ["Georgia", "serif"]
    assert professional.typography.font_heading.url.startswith(
        "https://fonts.googleapis.com/css2?family=Playfair+Display:wght@600;700;800"
    )


def test_instantiate_restamps_updated_at_only(registry):
    template = registry.get_by_id("vibrant").brand_dna
    with patch("branddna.engine.templates.utc_timestamp", return_value=STAMP):
        brand = registry.instantiate("vibrant")
    assert brand.metadata.updated_at == STAMP
    assert brand.metadata.created_at == template.metadata.created_at
    assert brand.colors == template.colors
    assert brand is not template


def test_instantiate_unknown_raises(registry):
    with pytest.raises(TemplateNotFoundError):
        registry.instantiate("missing")


def test_registry_is_built_lazily():
    registry = TemplateRegistry()
    assert registry._templates is None
    registry.ids()
    assert registry._templates is not None


def test_custom_definitions():
    registry = TemplateRegistry([{
        "id": "acme",
        "name": "Acme",
        "description": "Rocket orange",
        "category": "vibrant",
        "overrides": {"metadata": {"name": "Acme Co"}},
    }])
    assert registry.ids() == ["acme"]
    assert registry.get_by_id("acme").brand_dna.metadata.name == "Acme Co"


def test_shared_registry():
    assert get_template_registry() is get_template_registry()
