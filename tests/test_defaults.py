from branddna.engine.defaults import (
    DEFAULT_BRAND_DATA,
    is_default_brand,
    merge_section,
    merge_with_defaults,
)


class TestIsDefaultBrand:
    def test_default_brand(self, brand):
        assert is_default_brand(brand)

    def test_changed_primary(self, make_brand):
        assert not is_default_brand(make_brand({"colors": {"light": {"primary": "0 100% 50%"}}}))

    def test_changed_body_font(self, make_brand):
        font = {"name": "Lora", "weights": [400], "styles": ["normal"], "fallback": ["serif"]}
        assert not is_default_brand(make_brand({"typography": {"fontBody": font}}))

    def test_other_edits_still_count_as_default(self, make_brand):
        assert is_default_brand(make_brand({"metadata": {"name": "Renamed"}}))


class TestMergeSection:
    def test_missing_override_keeps_base(self, default_data):
        assert merge_section(default_data, None, "") == default_data

    def test_merged_sections_keep_unset_keys(self, default_data):
        merged = merge_section(default_data, {"colors": {"light": {"primary": "0 100% 50%"}}}, "")
        assert merged["colors"]["light"]["primary"] == "0 100% 50%"
        assert merged["colors"]["light"]["secondary"] == default_data["colors"]["light"]["secondary"]
        assert merged["colors"]["dark"] == default_data["colors"]["dark"]

    def test_replaced_sections_are_taken_whole(self, default_data):
        merged = merge_section(default_data, {"colors": {"chart": ["1 1% 1%"]}}, "")
        assert merged["colors"]["chart"] == ["1 1% 1%"]

    def test_inputs_are_not_modified(self, default_data):
        override = {"metadata": {"name": "New"}}
        merge_section(default_data, override, "")
        assert default_data["metadata"]["name"] == "Quickfy"
        assert override == {"metadata": {"name": "New"}}


def test_merge_with_defaults_stamps_missing_timestamps():
    data = merge_with_defaults({"metadata": {"name": "Fresh"}})
    assert data["metadata"]["name"] == "Fresh"
    assert data["metadata"]["createdAt"].endswith("Z")
    assert data["colors"] == DEFAULT_BRAND_DATA["colors"]
