# src/car_efficiency/core/types.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


# Field name -> camelCase name used by the extraction layer
WIRE_NAMES: Dict[str, str] = {
    "name": "carName",
    "fuel_type": "fuelType",
    "mileage": "mileage",
    "range": "range",
    "battery_capacity": "batteryCapacity",
    "displacement": "displacement",
    "cylinders": "cylinders",
    "power": "power",
    "torque": "torque",
    "transmission_type": "transmissionType",
    "gears": "gears",
    "kerb_weight": "kerbWeight",
    "length": "length",
    "width": "width",
    "height": "height",
    "ground_clearance": "groundClearance",
    "body_type": "bodyType",
    "ncap_stars": "ncapStars",
    "airbags": "airbags",
    "esc": "esc",
    "isofix": "isofix",
    "price": "price",
}

NUMERIC_FIELDS = (
    "mileage",
    "range",
    "battery_capacity",
    "displacement",
    "cylinders",
    "power",
    "torque",
    "gears",
    "kerb_weight",
    "length",
    "width",
    "height",
    "ground_clearance",
    "ncap_stars",
    "airbags",
    "price",
)

BOOLEAN_FIELDS = ("esc", "isofix")

ENUM_FIELDS = ("fuel_type", "transmission_type", "body_type")

FUEL_TYPES = ("petrol", "diesel", "hybrid", "cng", "electric")
TRANSMISSION_TYPES = ("manual", "amt", "cvt", "dct", "automatic", "hybrid")
BODY_TYPES = ("hatchback", "sedan", "suv", "mpv", "crossover", "coupe", "convertible")


@dataclass
class SpecificationRecord:
    """
    One vehicle trim as seen by the scoring engine.

    Every field is optional. Numeric fields are finite and non-negative
    when set; enum fields are lowercase strings that are validated lazily
    by the scoring functions. Anything the normalizer does not recognise
    is kept in `extras`.
    """
    name: Optional[str] = None

    # Fuel / efficiency
    fuel_type: Optional[str] = None
    mileage: Optional[float] = None           # km/l or km/kg
    range: Optional[float] = None             # km (EV)
    battery_capacity: Optional[float] = None  # kWh

    # Engine
    displacement: Optional[float] = None  # cc
    cylinders: Optional[float] = None
    power: Optional[float] = None         # kW
    torque: Optional[float] = None        # Nm

    # Transmission
    transmission_type: Optional[str] = None
    gears: Optional[float] = None

    # Physical
    kerb_weight: Optional[float] = None       # kg
    length: Optional[float] = None            # mm
    width: Optional[float] = None             # mm
    height: Optional[float] = None            # mm
    ground_clearance: Optional[float] = None  # mm
    body_type: Optional[str] = None

    # Safety
    ncap_stars: Optional[float] = None
    airbags: Optional[float] = None
    esc: Optional[bool] = None
    isofix: Optional[bool] = None

    # Commercial
    price: Optional[float] = None  # lakh

    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extras":
                continue
            out[WIRE_NAMES[f.name]] = getattr(self, f.name)
        out.update(self.extras)
        return out


@dataclass
class ScoreBreakdown:
    efficiency: int
    safety: int
    value_for_money: int
    performance_per_efficiency: int


@dataclass
class ScoreMetrics:
    cost_per_km: Optional[float] = None
    power_to_weight: Optional[float] = None      # kW/tonne
    real_world_efficiency: Optional[float] = None


@dataclass
class ScoreResult:
    """
    Composite score (0-100), per-dimension breakdown and display metrics.
    """
    composite: int
    breakdown: ScoreBreakdown
    metrics: ScoreMetrics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "composite": self.composite,
            "breakdown": {
                "efficiency": self.breakdown.efficiency,
                "safety": self.breakdown.safety,
                "value_for_money": self.breakdown.value_for_money,
                "performance_per_efficiency": self.breakdown.performance_per_efficiency,
            },
            "metrics": {
                "cost_per_km": self.metrics.cost_per_km,
                "power_to_weight": self.metrics.power_to_weight,
                "real_world_efficiency": self.metrics.real_world_efficiency,
            },
        }


@dataclass
class Insight:
    title: str
    detail: str


@dataclass
class InsightsResponse:
    """
    Partial, lower-confidence overlay returned by the AI collaborator.
    """
    fuel_type: Optional[str] = None
    kmpl: Optional[float] = None
    kmkg: Optional[float] = None
    km_per_kwh: Optional[float] = None
    kw_per_tonne: Optional[float] = None
    segment: Optional[str] = None
    missing: List[str] = field(default_factory=list)
    insights: List[Insight] = field(default_factory=list)
