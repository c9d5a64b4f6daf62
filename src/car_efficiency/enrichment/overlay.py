from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional

from car_efficiency.core.types import Insight, InsightsResponse, SpecificationRecord
from car_efficiency.utils.numeric_parser import parse_positive

logger = logging.getLogger(__name__)


def enhance_spec_with_insights(
    spec: SpecificationRecord,
    insights: Optional[InsightsResponse],
) -> SpecificationRecord:
    """
    Apply the AI overlay to a locally extracted spec.

    The overlay is lower-confidence: it only fills gaps and never
    overwrites a locally extracted value. Returns a new record.
    """
    if insights is None:
        return spec

    updates = {}
    extras = dict(spec.extras)

    if not spec.fuel_type and insights.fuel_type:
        updates["fuel_type"] = insights.fuel_type.lower()

    # Same rule as the normalizer: non-positive or non-finite figures are absent
    kmpl = parse_positive(insights.kmpl)
    kmkg = parse_positive(insights.kmkg)
    km_per_kwh = parse_positive(insights.km_per_kwh)
    kw_per_tonne = parse_positive(insights.kw_per_tonne)

    if not spec.mileage:
        if kmpl:
            updates["mileage"] = kmpl
        elif kmkg:
            updates["mileage"] = kmkg
        elif km_per_kwh and spec.battery_capacity and not spec.range:
            ev_range = parse_positive(km_per_kwh * spec.battery_capacity)
            if ev_range:
                updates["range"] = ev_range

    # Can't split kW/tonne back into power and weight; keep it as metadata
    if not spec.power and not spec.kerb_weight and kw_per_tonne:
        extras["ai_power_to_weight"] = kw_per_tonne

    if insights.segment:
        extras["segment"] = insights.segment

    if insights.missing:
        extras["missing_fields"] = list(insights.missing)

    if updates:
        logger.info("overlay: filled %s from AI insights", ", ".join(sorted(updates)))

    return dataclasses.replace(spec, extras=extras, **updates)


def format_insights(insights: Optional[Iterable[Insight]]) -> List[Insight]:
    if not insights:
        return []
    return [
        Insight(
            title=i.title or "Insight",
            detail=i.detail or "No details available",
        )
        for i in insights
    ]
