import pytest

from typology.core.config import get_settings
from typology.core.errors import NotFoundError, PresetNotFoundError
from typology.engine.presets import PRESETS, create_calculator, get_preset, list_presets


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("default", ("Enhanced", "TheoryBased", "FlexibleMatch")),
        ("accurate", ("StackAware", "TheoryBased", "ExactMatch")),
        ("type-first", ("StackAware", "TypeFirst", "ExactMatch")),
    ],
)
def test_presets_wire_the_documented_strategies(name, expected):
    names = create_calculator(name).strategy_names()
    assert names["calculation"] == name
    assert (names["scoring"], names["stack_building"], names["type_matching"]) == expected


def test_preset_names_are_case_insensitive():
    assert get_preset(" Accurate ") is PRESETS["accurate"]


def test_unknown_preset_raises_not_found():
    with pytest.raises(PresetNotFoundError) as excinfo:
        create_calculator("fastest")
    assert isinstance(excinfo.value, NotFoundError)
    assert "fastest" in str(excinfo.value)
    assert excinfo.value.detail["available"] == list(PRESETS)


def test_omitted_name_uses_configured_default(monkeypatch):
    monkeypatch.setenv("DEFAULT_PRESET", "type-first")
    get_settings.cache_clear()
    assert create_calculator().preset == "type-first"


def test_each_calculator_gets_fresh_strategies():
    first, second = create_calculator("accurate"), create_calculator("accurate")
    assert first.scoring is not second.scoring


def test_list_presets_as_dict():
    assert [preset.as_dict()["name"] for preset in list_presets()] == ["default", "accurate", "type-first"]
