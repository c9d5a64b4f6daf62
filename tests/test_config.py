"""Tests for scoring settings."""

from car_efficiency.config import (
    SETTINGS_ENV_VAR,
    get_default_settings,
    load_settings,
    merge_settings,
)


def test_default_settings():
    settings = get_default_settings()
    assert settings.weights == {
        "efficiency": 35,
        "safety": 30,
        "value_for_money": 25,
        "performance_per_efficiency": 10,
    }
    assert settings.fuel_prices == {"petrol": 110, "diesel": 95, "cng": 80, "electricity": 9}


def test_default_weights_sum_to_100():
    assert sum(get_default_settings().weights.values()) == 100


def test_defaults_are_fresh_copies():
    settings = get_default_settings()
    settings.weights["safety"] = 0
    assert get_default_settings().weights["safety"] == 30


def test_merge_is_shallow_per_section():
    merged = merge_settings({"weights": {"safety": 40}, "fuelPrices": {"petrol": 105}})
    assert merged.weights["safety"] == 40
    assert merged.weights["efficiency"] == 35
    assert merged.fuel_prices["petrol"] == 105
    assert merged.fuel_prices["diesel"] == 95


def test_merge_accepts_camel_case_weight_keys():
    merged = merge_settings({"weights": {"valueForMoney": 15, "performancePerEfficiency": 20}})
    assert merged.weights["value_for_money"] == 15
    assert merged.weights["performance_per_efficiency"] == 20


def test_merge_ignores_malformed_sections():
    merged = merge_settings({"weights": [1, 2, 3]})
    assert merged.weights == get_default_settings().weights


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("weights:\n  efficiency: 50\nfuel_prices:\n  electricity: 12\n", encoding="utf-8")

    settings = load_settings(str(path))

    assert settings.weights["efficiency"] == 50
    assert settings.fuel_prices["electricity"] == 12
    assert settings.fuel_prices["petrol"] == 110


def test_load_settings_from_env(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text("fuel_prices:\n  cng: 90\n", encoding="utf-8")
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))

    assert load_settings().fuel_prices["cng"] == 90


def test_load_settings_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
    defaults = get_default_settings()

    assert load_settings() == defaults
    assert load_settings(str(tmp_path / "missing.yaml")) == defaults

    broken = tmp_path / "broken.yaml"
    broken.write_text("weights: [unclosed\n", encoding="utf-8")
    assert load_settings(str(broken)) == defaults

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just a string\n", encoding="utf-8")
    assert load_settings(str(scalar)) == defaults


def test_merge_coerces_setting_values():
    merged = merge_settings(
        {"weights": {"efficiency": "40", "safety": None}, "fuel_prices": {"petrol": "Rs 105", "cng": "n/a"}}
    )
    assert merged.weights["efficiency"] == 40.0
    assert merged.weights["safety"] == 30
    assert merged.fuel_prices["petrol"] == 105.0
    assert merged.fuel_prices["cng"] == 80


def test_load_settings_with_quoted_and_null_values(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        'weights:\n  efficiency: "40"\n  safety: null\nfuel_prices:\n  petrol: "110"\n',
        encoding="utf-8",
    )

    settings = load_settings(str(path))

    assert settings.weights["efficiency"] == 40.0
    assert settings.weights["safety"] == 30
    assert settings.fuel_prices["petrol"] == 110.0
