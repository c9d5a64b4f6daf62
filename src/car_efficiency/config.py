# src/car_efficiency/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from dotenv import load_dotenv
import yaml
import logging
import os

from car_efficiency.utils.numeric_parser import parse_number

# Load .env as early as possible
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
SCHEMA_DIR = BASE_DIR / "schemas"

SETTINGS_ENV_VAR = "CAR_EFFICIENCY_SETTINGS"

logger = logging.getLogger(__name__)

# Stored settings from the browser extension use camelCase keys
KEY_ALIASES = {
    "valueForMoney": "value_for_money",
    "performancePerEfficiency": "performance_per_efficiency",
    "fuelPrices": "fuel_prices",
}


def load_yaml(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def canonical_keys(section: Mapping[str, Any]) -> Dict[str, Any]:
    return {KEY_ALIASES.get(k, k): v for k, v in section.items()}


def numeric_section(section: Mapping[str, Any]) -> Dict[str, float]:
    """
    Canonical keys with every value parsed as a number.
    Entries that don't parse ("forty", null) are dropped with a warning.
    """
    out: Dict[str, float] = {}
    for key, value in canonical_keys(section).items():
        num = parse_number(value)
        if num is None:
            logger.warning("Ignoring non-numeric setting %s=%r", key, value)
            continue
        out[key] = num
    return out


@dataclass
class ScoringSettings:
    """
    Weight configuration and fuel price table consumed by the scoring engine.

    Weights are meant to sum to 100; nothing here enforces that.
    """
    weights: Dict[str, float] = field(default_factory=dict)
    fuel_prices: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": dict(self.weights),
            "fuel_prices": dict(self.fuel_prices),
        }


@lru_cache(maxsize=1)
def _packaged_defaults() -> Dict[str, Any]:
    return load_yaml(SCHEMA_DIR / "default_settings.yaml") or {}


def get_default_settings() -> ScoringSettings:
    raw = _packaged_defaults()
    return ScoringSettings(
        weights=dict(raw.get("weights", {})),
        fuel_prices=dict(raw.get("fuel_prices", {})),
    )


def merge_settings(overrides: Optional[Mapping[str, Any]]) -> ScoringSettings:
    """
    Shallow-merge stored overrides over the built-in defaults, section by section.
    """
    defaults = get_default_settings()
    if not overrides:
        return defaults

    overrides = canonical_keys(overrides)
    weights = overrides.get("weights")
    fuel_prices = overrides.get("fuel_prices")
    if not isinstance(weights, Mapping):
        weights = {}
    if not isinstance(fuel_prices, Mapping):
        fuel_prices = {}

    return ScoringSettings(
        weights={**defaults.weights, **numeric_section(weights)},
        fuel_prices={**defaults.fuel_prices, **numeric_section(fuel_prices)},
    )


def load_settings(path: Optional[str] = None) -> ScoringSettings:
    """
    Load settings from a YAML override file (argument or CAR_EFFICIENCY_SETTINGS).
    Falls back to the defaults if the file is missing or malformed.
    """
    path = path or os.getenv(SETTINGS_ENV_VAR)
    if not path:
        return get_default_settings()

    try:
        stored = load_yaml(Path(path))
    except (OSError, yaml.YAMLError) as e:
        logger.error("Error loading settings from %s: %s", path, e)
        return get_default_settings()

    if stored is not None and not isinstance(stored, Mapping):
        logger.error("Settings file %s must contain a mapping, got %s", path, type(stored).__name__)
        return get_default_settings()

    return merge_settings(stored)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logger. Safe to call multiple times.
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


# Run once automatically
setup_logging()
