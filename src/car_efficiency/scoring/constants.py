# src/car_efficiency/scoring/constants.py
from __future__ import annotations

from typing import Dict, Tuple

# -----------------------------------------------------------------------------
# Normalization ranges (lo, hi)
# -----------------------------------------------------------------------------

NORMALIZATION_RANGES: Dict[str, Tuple[float, float]] = {
    "price_lakh": (6, 50),
    "power_to_weight": (50, 120),  # kW/tonne
}

# -----------------------------------------------------------------------------
# Real-world corrections applied to claimed figures
# -----------------------------------------------------------------------------

REAL_WORLD_FACTORS: Dict[str, float] = {
    "ice": 0.8,
    "hybrid": 0.85,
    "cng": 0.8,
    "ev": 0.75,  # applied to range, then divided by battery capacity
}

# Well-optimised baseline per fuel type (km/l, km/kg or km/kWh)
BASE_EFFICIENCY: Dict[str, float] = {
    "petrol": 16,
    "diesel": 20,
    "hybrid": 23,
    "cng": 25,
    "electric": 6.0,
}

# (excellent, good, average, poor)
EFFICIENCY_THRESHOLDS: Dict[str, Tuple[float, float, float, float]] = {
    "petrol": (20, 17, 14, 11),
    "diesel": (25, 22, 19, 16),
    "hybrid": (28, 24, 20, 17),
    "cng": (30, 26, 22, 18),
    "electric": (8.0, 6.5, 5.0, 3.5),
}

# -----------------------------------------------------------------------------
# Design-parameter penalty lookups
# -----------------------------------------------------------------------------

BODY_TYPE_PENALTIES: Dict[str, float] = {
    "hatchback": 2,
    "sedan": 5,
    "coupe": 7,
    "crossover": 10,
    "convertible": 12,
    "mpv": 15,
    "suv": 20,
}
DEFAULT_BODY_TYPE = "sedan"
UNKNOWN_BODY_TYPE_PENALTY = 7

TRANSMISSION_PENALTIES: Dict[str, float] = {
    "manual": 0,
    "cvt": -1,
    "amt": 2,
    "dct": 3,
    "automatic": 5,
    "hybrid": -3,
}
DEFAULT_TRANSMISSION = "manual"
UNKNOWN_TRANSMISSION_PENALTY = 2

# hp -> kW, used by the overpowered-car penalty
HP_TO_KW = 0.746

# -----------------------------------------------------------------------------
# Fuel type -> key in the fuel price table
# -----------------------------------------------------------------------------

FUEL_PRICE_KEYS: Dict[str, str] = {
    "petrol": "petrol",
    "diesel": "diesel",
    "cng": "cng",
    "hybrid": "petrol",  # petrol hybrids
    "electric": "electricity",
}
