# src/car_efficiency/scoring/composite.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from car_efficiency.config import get_default_settings, numeric_section
from car_efficiency.core.types import (
    ScoreBreakdown,
    ScoreMetrics,
    ScoreResult,
    SpecificationRecord,
)
from car_efficiency.normalization.spec_normalizer import normalize_spec
from car_efficiency.scoring.efficiency import (
    calculate_cost_per_km,
    calculate_efficiency_score,
    calculate_real_world_efficiency,
)
from car_efficiency.scoring.subscores import (
    calculate_performance_per_efficiency_score,
    calculate_safety_score,
    calculate_value_score,
)
from car_efficiency.utils.numeric_parser import round_half_up

logger = logging.getLogger(__name__)

DIMENSIONS = ("efficiency", "safety", "value_for_money", "performance_per_efficiency")


def _percent(score: float) -> int:
    return int(round_half_up(score * 100))


def _resolve_weights(weights: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    resolved = dict(get_default_settings().weights)
    if weights:
        resolved.update(numeric_section(weights))
    return resolved


def combine_subscores(
    subscores: Mapping[str, float],
    weights: Mapping[str, float],
) -> float:
    """
    Weighted composite in [0, 1] when the weights sum to 100.

    The sum is not validated; callers own the weight configuration.
    """
    total = sum(subscores[dim] * weights.get(dim, 0) for dim in DIMENSIONS)
    return total / 100


def calculate_composite_score(
    spec: Union[SpecificationRecord, Mapping[str, Any]],
    weights: Optional[Mapping[str, Any]] = None,
    fuel_prices: Optional[Mapping[str, float]] = None,
) -> ScoreResult:
    """
    Score one specification record.

    Defined for every input: missing fields degrade to documented defaults
    or None metrics, never to an exception.
    """
    if not isinstance(spec, SpecificationRecord):
        spec = normalize_spec(spec)

    weights = _resolve_weights(weights)
    if fuel_prices is None:
        fuel_prices = get_default_settings().fuel_prices
    else:
        fuel_prices = numeric_section(fuel_prices)

    efficiency = calculate_efficiency_score(spec)
    safety = calculate_safety_score(spec)
    value = calculate_value_score(spec, efficiency, safety)
    perf_eff = calculate_performance_per_efficiency_score(spec, efficiency)

    composite = combine_subscores(
        {
            "efficiency": efficiency,
            "safety": safety,
            "value_for_money": value,
            "performance_per_efficiency": perf_eff,
        },
        weights,
    )

    cost_per_km = calculate_cost_per_km(spec, fuel_prices)
    power_to_weight = None
    if spec.power and spec.kerb_weight:
        power_to_weight = spec.power / (spec.kerb_weight / 1000)

    result = ScoreResult(
        composite=_percent(composite),
        breakdown=ScoreBreakdown(
            efficiency=_percent(efficiency),
            safety=_percent(safety),
            value_for_money=_percent(value),
            performance_per_efficiency=_percent(perf_eff),
        ),
        metrics=ScoreMetrics(
            cost_per_km=round_half_up(cost_per_km, 2) if cost_per_km else None,
            power_to_weight=round_half_up(power_to_weight, 1) if power_to_weight else None,
            real_world_efficiency=calculate_real_world_efficiency(spec),
        ),
    )

    logger.debug("composite score for %s: %s", spec.name or "<unnamed>", result)
    return result
