from __future__ import annotations

import re
from typing import Optional

from car_efficiency.utils.numeric_parser import round_half_up


# Checked in order; first hit wins
FUEL_KEYWORDS = [
    ("electric", re.compile(r"electric|\bev\b|battery")),
    ("hybrid", re.compile(r"hybrid")),
    ("cng", re.compile(r"\bcng\b|compressed natural gas")),
    ("diesel", re.compile(r"diesel")),
]


def guess_fuel_type(text: Optional[str]) -> str:
    """Guess the fuel type from free page text. Defaults to petrol."""
    if not text:
        return "petrol"

    lower = text.lower()
    for fuel, pattern in FUEL_KEYWORDS:
        if pattern.search(lower):
            return fuel

    return "petrol"


def truncate_text(text: Optional[str], max_length: int = 10000) -> Optional[str]:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_currency(amount: Optional[float]) -> str:
    if amount is None:
        return "N/A"
    return f"₹{amount:.2f}"


def format_percentage(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{int(round_half_up(value))}%"
