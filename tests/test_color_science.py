import pytest

from branddna.engine.color_science import (
    HSL,
    RGB,
    InvalidColorError,
    check_contrast,
    contrast_ratio,
    format_hsl,
    hsl_to_hex,
    hsl_to_rgb,
    is_valid_hsl,
    parse_hsl,
    relative_luminance,
    rgb_hex_to_hsl,
    rgb_to_hsl,
)


def test_parse_hsl_accepts_canonical_values():
    assert parse_hsl("221.2 83.2% 53.3%") == HSL(221.2, 83.2, 53.3)
    assert parse_hsl("0 0% 100%") == HSL(0.0, 0.0, 100.0)
    assert parse_hsl("360   100%   0%") == HSL(360.0, 100.0, 0.0)


@pytest.mark.parametrize("value", [
    "361 50% 50%",
    "120 101% 50%",
    "120 50% 100.5%",
    "120 50 50",
    "hsl(120, 50%, 50%)",
    "-10 50% 50%",
    "#ff0000",
    "",
])
def test_parse_hsl_rejects_malformed_or_out_of_range(value):
    assert parse_hsl(value) is None
    assert not is_valid_hsl(value)


def test_is_valid_hsl_rejects_non_strings():
    assert not is_valid_hsl(None)
    assert not is_valid_hsl(42)


def test_format_hsl_uses_one_decimal_place():
    assert format_hsl(0, 0, 100) == "0.0 0.0% 100.0%"
    assert format_hsl(221.24, 83.16, 53.3) == "221.2 83.2% 53.3%"


@pytest.mark.parametrize("h", [0, 47.5, 180, 221.2, 359.9, 360])
@pytest.mark.parametrize("s", [0, 12.34, 50, 100])
@pytest.mark.parametrize("l", [0, 33.33, 66.6, 100])
def test_format_then_parse_recovers_triple(h, s, l):
    parsed = parse_hsl(format_hsl(h, s, l))
    assert parsed is not None
    assert parsed.h == pytest.approx(h, abs=0.05)
    assert parsed.s == pytest.approx(s, abs=0.05)
    assert parsed.l == pytest.approx(l, abs=0.05)


@pytest.mark.parametrize("color, expected", [
    ("0 0% 100%", RGB(255, 255, 255)),
    ("0 0% 0%", RGB(0, 0, 0)),
    ("0 100% 50%", RGB(255, 0, 0)),
    ("120 100% 50%", RGB(0, 255, 0)),
    ("240 100% 50%", RGB(0, 0, 255)),
    ("360 100% 50%", RGB(255, 0, 0)),
    ("221.2 83.2% 53.3%", RGB(37, 99, 235)),
])
def test_hsl_to_rgb(color, expected):
    assert hsl_to_rgb(color) == expected


def test_hsl_to_rgb_accepts_triples():
    assert hsl_to_rgb(HSL(0, 100, 50)) == RGB(255, 0, 0)
    assert hsl_to_rgb((240, 100, 50)) == RGB(0, 0, 255)


@pytest.mark.parametrize("value", ["nope", "400 50% 50%", None, (500, 0, 0)])
def test_hsl_to_rgb_raises_invalid_color(value):
    with pytest.raises(InvalidColorError):
        hsl_to_rgb(value)


def test_invalid_color_error_is_value_error():
    assert issubclass(InvalidColorError, ValueError)


def test_hex_conversions():
    assert hsl_to_hex("0 100% 50%") == "#ff0000"
    assert hsl_to_hex("221.2 83.2% 53.3%") == "#2563eb"
    assert rgb_hex_to_hsl("#ff0000") == "0.0 100.0% 50.0%"
    assert rgb_hex_to_hsl("ff0000") == "0.0 100.0% 50.0%"
    assert rgb_hex_to_hsl("#f00") == "0.0 100.0% 50.0%"
    assert rgb_hex_to_hsl("#FFFFFF") == "0.0 0.0% 100.0%"


def test_invalid_hex_raises():
    with pytest.raises(InvalidColorError):
        rgb_hex_to_hsl("#12345")
    with pytest.raises(InvalidColorError):
        rgb_hex_to_hsl("zzzzzz")


@pytest.mark.parametrize("color", [
    "221.2 83.2% 53.3%",
    "173 58% 39%",
    "12 76% 61%",
    "43 74% 66%",
    "0 0% 50%",
])
def test_hex_round_trip_is_close(color):
    original = parse_hsl(color)
    recovered = parse_hsl(rgb_hex_to_hsl(hsl_to_hex(color)))
    assert recovered.h == pytest.approx(original.h, abs=1.0)
    assert recovered.s == pytest.approx(original.s, abs=1.0)
    assert recovered.l == pytest.approx(original.l, abs=1.0)


def test_rgb_to_hsl_rejects_out_of_range_channels():
    with pytest.raises(InvalidColorError):
        rgb_to_hsl((256, 0, 0))


def test_relative_luminance_bounds():
    assert relative_luminance((255, 255, 255)) == pytest.approx(1.0)
    assert relative_luminance((0, 0, 0)) == 0.0


def test_contrast_ratio_extremes():
    assert contrast_ratio("0 0% 100%", "0 0% 0%") == pytest.approx(21.0)
    assert contrast_ratio("0 0% 0%", "0 0% 100%") == pytest.approx(21.0)
    assert contrast_ratio("221.2 83.2% 53.3%", "221.2 83.2% 53.3%") == pytest.approx(1.0)


def test_check_contrast_black_on_white():
    result = check_contrast("0 0% 0%", "0 0% 100%")
    assert result.ratio == 21.0
    assert result.aa and result.aaa and result.aa_large and result.aaa_large


def test_check_contrast_near_black_fails_every_level():
    result = check_contrast("0 0% 0%", "0 0% 5%")
    assert result.ratio < 3
    assert not result.aa
    assert not result.aaa
    assert not result.aa_large
    assert not result.aaa_large


def test_check_contrast_rounds_ratio_to_two_decimals():
    result = check_contrast("221.2 83.2% 53.3%", "0 0% 100%")
    assert result.ratio == round(result.ratio, 2)
    assert 5.0 < result.ratio < 5.5
    assert result.aa
    assert not result.aaa
