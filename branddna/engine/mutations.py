"""Field-level edits of a working BrandDNA.

Every function returns a new BrandDNA with ``metadata.updatedAt`` re-stamped;
the input is never modified. Section updates are JSON-shaped (camelCase)
mappings combined with the current values using the same rules as imports.
"""
import copy
import uuid
from typing import Any, Dict, Mapping, Optional, Union

from branddna.app.models import BrandDNA, BrandValue, utc_timestamp
from branddna.engine.defaults import DEFAULT_BRAND_DATA, default_brand, merge_section
from branddna.engine.templates import TemplateRegistry, get_template_registry

ValueInput = Union[BrandValue, Mapping[str, Any]]


def _restamp(data: Dict[str, Any]) -> BrandDNA:
    data["metadata"]["updatedAt"] = utc_timestamp()
    return BrandDNA.model_validate(data)


def _update_section(brand: BrandDNA, section: str, updates: Mapping[str, Any]) -> BrandDNA:
    data = brand.to_data()
    data[section] = merge_section(data.get(section), dict(updates), section)
    return _restamp(data)


def update_metadata(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    return _update_section(brand, "metadata", updates)


def update_colors(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    """Merge palette slots; a new chart list replaces the old one."""
    return _update_section(brand, "colors", updates)


def update_typography(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    return _update_section(brand, "typography", updates)


def update_spacing(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    return _update_section(brand, "spacing", updates)


def update_assets(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    """Logos in the update replace the current ones; None clears a slot."""
    data = brand.to_data()
    assets = data.get("assets", {})
    for key, value in updates.items():
        if value is None:
            assets.pop(key, None)
        else:
            assets[key] = merge_section(assets.get(key), value, f"assets.{key}")
    data["assets"] = assets
    return _restamp(data)


def _strategy_data(data: Dict[str, Any]) -> Dict[str, Any]:
    strategy = data.get("strategy")
    if strategy is None:
        strategy = copy.deepcopy(DEFAULT_BRAND_DATA["strategy"])
    return strategy


def update_strategy(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    data = brand.to_data()
    data["strategy"] = merge_section(_strategy_data(data), dict(updates), "strategy")
    return _restamp(data)


def update_tone_of_voice(brand: BrandDNA, updates: Mapping[str, Any]) -> BrandDNA:
    data = brand.to_data()
    strategy = _strategy_data(data)
    strategy["toneOfVoice"] = merge_section(
        strategy.get("toneOfVoice", {"traits": []}), dict(updates), "strategy.toneOfVoice"
    )
    data["strategy"] = strategy
    return _restamp(data)


def _value_data(value: ValueInput) -> Dict[str, Any]:
    if isinstance(value, BrandValue):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    data = dict(value)
    data.setdefault("id", f"value-{uuid.uuid4().hex[:12]}")
    return data


def add_value(brand: BrandDNA, value: ValueInput) -> BrandDNA:
    """Append a core value; mappings without an id get a generated one."""
    data = brand.to_data()
    strategy = _strategy_data(data)
    strategy["values"] = list(strategy.get("values", [])) + [_value_data(value)]
    data["strategy"] = strategy
    return _restamp(data)


def _find_value(data: Dict[str, Any], value_id: str) -> Optional[int]:
    strategy = data.get("strategy") or {}
    for index, value in enumerate(strategy.get("values", [])):
        if value.get("id") == value_id:
            return index
    return None


def remove_value(brand: BrandDNA, value_id: str) -> BrandDNA:
    data = brand.to_data()
    index = _find_value(data, value_id)
    if index is None:
        return brand.model_copy(deep=True)
    del data["strategy"]["values"][index]
    return _restamp(data)


def update_value(brand: BrandDNA, value_id: str, updates: Mapping[str, Any]) -> BrandDNA:
    data = brand.to_data()
    index = _find_value(data, value_id)
    if index is None:
        return brand.model_copy(deep=True)
    values = data["strategy"]["values"]
    changed = {**values[index], **dict(updates)}
    changed["id"] = value_id
    values[index] = changed
    return _restamp(data)


def reset_brand() -> BrandDNA:
    """Replace the working brand with the built-in default."""
    return default_brand()


def apply_template(template_id: str, registry: Optional[TemplateRegistry] = None) -> BrandDNA:
    """Replace the working brand with a fresh copy of a template."""
    registry = registry or get_template_registry()
    return registry.instantiate(template_id)
