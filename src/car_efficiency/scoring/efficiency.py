# src/car_efficiency/scoring/efficiency.py
from __future__ import annotations

import logging
from typing import Mapping, Optional

from car_efficiency.core.types import SpecificationRecord
from car_efficiency.scoring.constants import (
    BASE_EFFICIENCY,
    EFFICIENCY_THRESHOLDS,
    FUEL_PRICE_KEYS,
    REAL_WORLD_FACTORS,
)
from car_efficiency.scoring.penalty import calculate_efficiency_penalty
from car_efficiency.utils.numeric_parser import clamp

logger = logging.getLogger(__name__)


def correction_factor(fuel_type: Optional[str]) -> float:
    """Claimed-to-real-world factor; ICE figures apply to anything unrecognised."""
    if fuel_type == "hybrid":
        return REAL_WORLD_FACTORS["hybrid"]
    if fuel_type == "cng":
        return REAL_WORLD_FACTORS["cng"]
    return REAL_WORLD_FACTORS["ice"]


def calculate_real_world_efficiency(spec: SpecificationRecord) -> Optional[float]:
    """
    Best-effort real-world efficiency (km/l, km/kg or km/kWh).

    Priority:
      1. claimed mileage x fuel correction factor
      2. EV: (range x 0.75) / battery capacity
      3. fuel baseline scaled down by the design penalty, then corrected
    """
    fuel_type = spec.fuel_type

    if spec.mileage:
        return spec.mileage * correction_factor(fuel_type)

    if fuel_type == "electric" and spec.range and spec.battery_capacity:
        real_world_range = spec.range * REAL_WORLD_FACTORS["ev"]
        return real_world_range / spec.battery_capacity

    penalty = calculate_efficiency_penalty(spec)
    baseline = BASE_EFFICIENCY.get(fuel_type or "petrol", BASE_EFFICIENCY["petrol"])

    # Each penalty point costs ~1.5%, never below 40% of baseline
    penalty_factor = max(0.4, 1 - penalty * 0.015)
    estimate = baseline * penalty_factor

    return estimate * correction_factor(fuel_type)


def calculate_cost_per_km(
    spec: SpecificationRecord,
    fuel_prices: Mapping[str, float],
) -> Optional[float]:
    real_world = calculate_real_world_efficiency(spec)
    if not real_world:
        return None

    price_key = FUEL_PRICE_KEYS.get(spec.fuel_type or "")
    if price_key is None:
        return None

    price = fuel_prices.get(price_key)
    if not price or price <= 0:
        logger.debug("cost_per_km: no price configured for %s", price_key)
        return None

    return price / real_world


def _threshold_score(efficiency: float, thresholds) -> float:
    excellent, good, average, poor = thresholds

    if efficiency >= excellent:
        # Needs 30% over the excellent mark to reach the 0.90 cap
        excess = efficiency - excellent
        return 0.75 + min(excess / (excellent * 0.3), 1.0) * 0.15
    if efficiency >= good:
        return 0.55 + (efficiency - good) / (excellent - good) * 0.20
    if efficiency >= average:
        return 0.35 + (efficiency - average) / (good - average) * 0.20
    if efficiency >= poor:
        return 0.20 + (efficiency - poor) / (average - poor) * 0.15
    return max(0.05, 0.20 * (efficiency / poor))


def score_efficiency_value(
    efficiency: Optional[float],
    fuel_type: Optional[str],
    penalty: float,
) -> float:
    """
    Efficiency sub-score (0-1) for an explicit real-world figure.

    With no usable figure the score falls back to a penalty-only estimate
    between 0.15 and 0.60.
    """
    if not efficiency:
        return max(0.15, 0.60 - min(penalty * 0.02, 0.45))

    thresholds = EFFICIENCY_THRESHOLDS.get(fuel_type or "", EFFICIENCY_THRESHOLDS["petrol"])
    score = _threshold_score(efficiency, thresholds)

    # Design choices count again on top of the measured figure
    score -= min(penalty * 0.012, 0.25)

    return clamp(score, 0.05, 1.0)


def calculate_efficiency_score(spec: SpecificationRecord) -> float:
    return score_efficiency_value(
        calculate_real_world_efficiency(spec),
        spec.fuel_type,
        calculate_efficiency_penalty(spec),
    )
