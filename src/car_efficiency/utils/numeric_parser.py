from __future__ import annotations

import math
import re
from typing import Any, Optional


# Everything except digits, '.' and '-' is noise (units, currency, separators)
_NOISE_RE = re.compile(r"[^\d.\-]")

# Longest leading float literal, the way a permissive float parser reads it
_LEADING_FLOAT_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_number(value: Any) -> Optional[float]:
    """
    Permissive numeric parser for scraped specification values.

    Handles:
      - 1197            -> 1197.0
      - "1,197 cc"      -> 1197.0
      - "Rs 6.49 Lakh"  -> 6.49
      - "18.5-20 kmpl"  -> 18.5
      - "N/A", "", None -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            # ints beyond float range (json.loads keeps arbitrary precision)
            return None
        return num if math.isfinite(num) else None

    s = str(value).strip()
    if not s:
        return None

    cleaned = _NOISE_RE.sub("", s)
    m = _LEADING_FLOAT_RE.match(cleaned)
    if not m:
        return None

    num = float(m.group(0))
    return num if math.isfinite(num) else None


def parse_positive(value: Any) -> Optional[float]:
    """parse_number, but only finite values > 0 survive."""
    num = parse_number(value)
    if num is None or num <= 0:
        return None
    return num


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def normalize(value: float, lo: float, hi: float) -> float:
    """Map value from [lo, hi] onto [0, 1], clamped."""
    if hi == lo:
        return 0.0
    return clamp((value - lo) / (hi - lo), 0.0, 1.0)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (0.5 -> 1, 2.5 -> 3), unlike round()."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale
