from __future__ import annotations

import logging

from car_efficiency.core.types import SpecificationRecord
from car_efficiency.scoring.constants import (
    BODY_TYPE_PENALTIES,
    DEFAULT_BODY_TYPE,
    DEFAULT_TRANSMISSION,
    HP_TO_KW,
    TRANSMISSION_PENALTIES,
    UNKNOWN_BODY_TYPE_PENALTY,
    UNKNOWN_TRANSMISSION_PENALTY,
)

logger = logging.getLogger(__name__)


def _displacement_penalty(cc: float) -> float:
    if cc > 1500:
        return min((cc - 1500) / 100 * 2.5, 25)
    if cc > 1200:
        return (cc - 1200) / 100 * 1.5
    if cc < 1000:
        return -min((1000 - cc) / 100 * 2, 10)
    return 0.0


def _weight_penalty(kg: float) -> float:
    if kg > 1200:
        return min((kg - 1200) / 100 * 4, 30)
    if kg > 1000:
        return (kg - 1000) / 100 * 2
    if kg < 900:
        return -min((900 - kg) / 100 * 3, 12)
    return 0.0


def _body_type_penalty(body_type) -> float:
    key = (body_type or DEFAULT_BODY_TYPE).lower()
    if key not in BODY_TYPE_PENALTIES:
        logger.debug("penalty: unknown body type %r", body_type)
        return UNKNOWN_BODY_TYPE_PENALTY
    return BODY_TYPE_PENALTIES[key]


def _transmission_penalty(transmission_type) -> float:
    key = (transmission_type or DEFAULT_TRANSMISSION).lower()
    if key not in TRANSMISSION_PENALTIES:
        logger.debug("penalty: unknown transmission %r", transmission_type)
        return UNKNOWN_TRANSMISSION_PENALTY
    return TRANSMISSION_PENALTIES[key]


def calculate_efficiency_penalty(spec: SpecificationRecord) -> float:
    """
    Unitless penalty (>= 0) derived from design parameters only.

    Each factor is independent and additive; small engines, light cars,
    CVT/hybrid gearboxes and 6+ gears earn bonuses, but the total never
    goes below zero. Absent (or zero) inputs contribute nothing.
    """
    total = 0.0

    if spec.displacement:
        total += _displacement_penalty(spec.displacement)

    if spec.kerb_weight:
        total += _weight_penalty(spec.kerb_weight)

    if spec.cylinders and spec.cylinders > 4:
        total += (spec.cylinders - 4) * 3

    total += _body_type_penalty(spec.body_type)
    total += _transmission_penalty(spec.transmission_type)

    # Overpowered cars
    if spec.power and spec.kerb_weight:
        power_to_weight = spec.power * HP_TO_KW / (spec.kerb_weight / 1000)
        if power_to_weight > 80:
            total += min((power_to_weight - 80) / 10 * 2, 12)

    # High ride height hurts aerodynamics
    if spec.ground_clearance and spec.ground_clearance > 180:
        total += min((spec.ground_clearance - 180) / 10, 8)

    if spec.gears and spec.gears >= 6:
        total -= min(spec.gears - 5, 3)

    return max(0.0, total)
