import pytest

from branddna.engine.sanitizer import (
    is_safe_asset_url,
    sanitize_asset_url,
    sanitize_brand_data,
    sanitize_brand_dna,
    sanitize_text,
)


@pytest.mark.parametrize("value, expected", [
    ("Acme <script>alert('x')</script>Rockets", "Acme Rockets"),
    ("<SCRIPT type='text/javascript'>\nsteal()\n</SCRIPT>Safe", "Safe"),
    ("before<iframe src='https://evil'></iframe>after", "beforeafter"),
    ("dangling <script src=x> tag", "dangling  tag"),
    ("click javascript:alert(1)", "click alert(1)"),
    ("JavaScript :void(0)", "void(0)"),
    ('<img onerror="x()">', '<img "x()">'),
    ("  padded  ", "padded"),
    ("Plain text stays", "Plain text stays"),
    ("<scr<script>ipt>alert(1)", "alert(1)"),
    ("javajavascript:script:alert(1)", "alert(1)"),
    ("<ifr<iframe></iframe>ame src=x>x", "x"),
])
def test_sanitize_text(value, expected):
    assert sanitize_text(value) == expected


def test_sanitize_text_passes_non_strings_through():
    assert sanitize_text(None) is None
    assert sanitize_text(3) == 3


def test_sanitize_text_keeps_ordinary_words_starting_with_on():
    assert sanitize_text("Online tools") == "Online tools"


@pytest.mark.parametrize("url, safe", [
    ("https://cdn.example.com/logo.png", True),
    ("data:image/svg+xml;base64,PHN2Zz4=", True),
    ("http://cdn.example.com/logo.png", False),
    ("javascript:alert(1)", False),
    ("data:text/html,<script>", False),
    ("", False),
    (None, False),
])
def test_asset_url_safety(url, safe):
    assert is_safe_asset_url(url) is safe
    assert sanitize_asset_url(url) == (url if safe else None)


def test_sanitize_brand_data_scrubs_free_text(default_data):
    data = dict(default_data)
    data["metadata"] = {**default_data["metadata"], "name": "Acme<script>x()</script>"}
    data["strategy"] = {
        "purpose": "javascript:go()",
        "values": [{"id": "v1", "name": "<iframe></iframe>Trust", "description": "onload=bad()"}],
        "toneOfVoice": {"traits": ["bold<script>1</script>"], "dos": ["Be javascript:kind"]},
        "differentiators": ["<script>x</script>Fast"],
    }
    cleaned = sanitize_brand_data(data)

    assert cleaned["metadata"]["name"] == "Acme"
    strategy = cleaned["strategy"]
    assert strategy["purpose"] == "go()"
    assert strategy["values"][0]["name"] == "Trust"
    assert strategy["values"][0]["description"] == "bad()"
    assert strategy["toneOfVoice"]["traits"] == ["bold"]
    assert strategy["toneOfVoice"]["dos"] == ["Be kind"]
    assert strategy["differentiators"] == ["Fast"]


def test_sanitize_brand_data_does_not_mutate_input(default_data):
    default_data["metadata"]["name"] = "<script>x</script>Brand"
    sanitize_brand_data(default_data)
    assert default_data["metadata"]["name"] == "<script>x</script>Brand"


def test_unsafe_logo_urls_are_dropped(default_data):
    default_data["assets"] = {
        "primaryLogo": {
            "id": "logo",
            "name": "Logo",
            "lightUrl": "javascript:alert(1)",
            "darkUrl": "https://cdn.example.com/dark.svg",
        },
        "additionalAssets": [{"id": "extra", "lightUrl": "http://insecure/img.png"}],
    }
    assets = sanitize_brand_data(default_data)["assets"]
    assert "lightUrl" not in assets["primaryLogo"]
    assert assets["primaryLogo"]["darkUrl"] == "https://cdn.example.com/dark.svg"
    assert "lightUrl" not in assets["additionalAssets"][0]


def test_non_https_font_stylesheet_is_dropped(default_data):
    default_data["typography"]["fontBody"] = {
        "name": "Inter",
        "url": "http://fonts.example.com/inter.css",
        "fallback": ["sans-serif"],
    }
    typography = sanitize_brand_data(default_data)["typography"]
    assert "url" not in typography["fontBody"]
    assert typography["fontHeading"]["url"].startswith("https://")


def test_unexpected_section_types_pass_through(default_data):
    default_data["strategy"] = "not an object"
    default_data["assets"] = ["nope"]
    cleaned = sanitize_brand_data(default_data)
    assert cleaned["strategy"] == "not an object"
    assert cleaned["assets"] == ["nope"]


def test_sanitize_brand_dna_returns_model(rich_brand):
    cleaned = sanitize_brand_dna(rich_brand)
    assert cleaned == rich_brand
