# tests/test_subscores.py
import pytest

from car_efficiency.core.types import SpecificationRecord
from car_efficiency.scoring.subscores import (
    calculate_performance_per_efficiency_score,
    calculate_safety_score,
    calculate_value_score,
)


def test_safety_from_ncap_stars():
    assert calculate_safety_score(SpecificationRecord(ncap_stars=4)) == pytest.approx(0.8)
    assert calculate_safety_score(SpecificationRecord(ncap_stars=5)) == 1.0
    assert calculate_safety_score(SpecificationRecord(ncap_stars=7)) == 1.0


def test_safety_monotonic_in_stars():
    scores = [calculate_safety_score(SpecificationRecord(ncap_stars=s)) for s in range(1, 6)]
    assert scores == sorted(scores)


def test_safety_from_features_capped():
    assert calculate_safety_score(SpecificationRecord()) == 0.0
    assert calculate_safety_score(SpecificationRecord(airbags=1)) == 0.0
    assert calculate_safety_score(SpecificationRecord(airbags=2)) == pytest.approx(0.2)
    assert calculate_safety_score(SpecificationRecord(airbags=6, esc=True)) == pytest.approx(0.6)
    assert calculate_safety_score(
        SpecificationRecord(airbags=6, esc=True, isofix=True)
    ) == pytest.approx(0.6)


def test_zero_stars_falls_back_to_features():
    spec = SpecificationRecord(ncap_stars=0, airbags=2, isofix=True)
    assert calculate_safety_score(spec) == pytest.approx(0.4)


def test_value_requires_price():
    assert calculate_value_score(SpecificationRecord(), 1.0, 1.0) == 0.0


def test_value_at_cheapest_price():
    assert calculate_value_score(SpecificationRecord(price=6), 1.0, 1.0) == pytest.approx(1.0)


def test_value_mid_and_expensive():
    assert calculate_value_score(SpecificationRecord(price=28), 0.5, 0.5) == pytest.approx(0.5)
    assert calculate_value_score(SpecificationRecord(price=80), 0.6, 0.4) == pytest.approx(0.3)


def test_perf_per_efficiency_falls_back_to_efficiency():
    assert calculate_performance_per_efficiency_score(SpecificationRecord(power=80), 0.42) == 0.42
    assert calculate_performance_per_efficiency_score(SpecificationRecord(kerb_weight=1000), 0.42) == 0.42


def test_perf_per_efficiency_blend():
    spec = SpecificationRecord(power=85, kerb_weight=1000)
    assert calculate_performance_per_efficiency_score(spec, 0.5) == pytest.approx(0.5)

    spec = SpecificationRecord(power=200, kerb_weight=1000)
    assert calculate_performance_per_efficiency_score(spec, 0.0) == pytest.approx(0.7)
