import os

# Keep test runs from writing log files
os.environ.setdefault("BRANDDNA_LOG_TO_FILE", "false")

import pytest

from branddna.app.models import BrandDNA
from branddna.engine.defaults import default_brand_data, merge_section

FIXED_TIMESTAMP = "2024-01-01T00:00:00.000Z"


@pytest.fixture
def default_data():
    """Default brand as canonical JSON data with fixed timestamps."""
    return default_brand_data(FIXED_TIMESTAMP)


@pytest.fixture
def brand(default_data):
    return BrandDNA.model_validate(default_data)


@pytest.fixture
def make_data(default_data):
    """Default data with a partial override applied section by section."""

    def _make(overrides):
        return merge_section(default_data, overrides, "")

    return _make


@pytest.fixture
def make_brand(make_data):
    def _make(overrides):
        return BrandDNA.model_validate(make_data(overrides))

    return _make


@pytest.fixture
def rich_brand(make_brand):
    """A brand exercising optional fields: strategy values, tone and logos."""
    return make_brand({
        "metadata": {"name": "Acme Rockets", "tagline": "Up we go"},
        "strategy": {
            "purpose": "Make space travel boring",
            "mission": "Ship reliable rockets every week",
            "values": [
                {"id": "v1", "name": "Safety", "description": "Always first", "icon": "🛡️"},
                {"id": "v2", "name": "Speed", "description": "Iterate quickly"},
            ],
            "toneOfVoice": {"traits": ["bold", "friendly"], "dos": ["Be clear"]},
            "differentiators": ["Reusable boosters"],
        },
        "assets": {
            "primaryLogo": {
                "id": "logo-1",
                "name": "Main logo",
                "lightUrl": "https://cdn.example.com/logo.svg",
                "darkUrl": "data:image/png;base64,iVBORw0KGgo=",
                "width": 120,
                "height": 40,
            },
        },
    })
