from __future__ import annotations

from car_efficiency.core.types import SpecificationRecord
from car_efficiency.scoring.constants import NORMALIZATION_RANGES
from car_efficiency.utils.numeric_parser import normalize


def calculate_safety_score(spec: SpecificationRecord) -> float:
    """
    NCAP stars when rated; otherwise inferred from features, capped at 0.6.
    """
    if spec.ncap_stars and spec.ncap_stars > 0:
        return min(spec.ncap_stars / 5, 1.0)

    score = 0.0

    if spec.airbags and spec.airbags >= 6:
        score += 0.4
    elif spec.airbags and spec.airbags >= 2:
        score += 0.2

    if spec.esc:
        score += 0.2

    if spec.isofix:
        score += 0.2

    return min(score, 0.6)


def calculate_value_score(
    spec: SpecificationRecord,
    efficiency_score: float,
    safety_score: float,
) -> float:
    if not spec.price:
        return 0.0

    # Cheaper is better
    lo, hi = NORMALIZATION_RANGES["price_lakh"]
    price_score = 1 - normalize(spec.price, lo, hi)

    features_score = (efficiency_score + safety_score) / 2

    return features_score * 0.6 + price_score * 0.4


def calculate_performance_per_efficiency_score(
    spec: SpecificationRecord,
    efficiency_score: float,
) -> float:
    if not spec.power or not spec.kerb_weight:
        return efficiency_score

    power_to_weight = spec.power / (spec.kerb_weight / 1000)  # kW/tonne

    lo, hi = NORMALIZATION_RANGES["power_to_weight"]
    power_score = normalize(power_to_weight, lo, hi)

    return power_score * 0.7 + efficiency_score * 0.3
