"""Tests for the simulated assessment generator."""

import math
import random

import pytest

from damage_detector.domain.damage import DAMAGE_CATALOG, Severity
from damage_detector.services.assessment import (
    AssessmentGenerator,
    apply_severity,
    format_inr,
    generate,
)
from tests.conftest import ScriptedRandom


def test_catalog_has_fixed_entries() -> None:
    names = [category.name for category in DAMAGE_CATALOG]

    assert len(DAMAGE_CATALOG) == 10
    assert names[0] == "Front Bumper"
    assert names[-1] == "Side Mirror"
    assert all(0 < c.min_cost <= c.max_cost for c in DAMAGE_CATALOG)


def test_severe_headlight_example() -> None:
    rng = ScriptedRandom("Headlight", Severity.SEVERE, 10000)

    result = generate(DAMAGE_CATALOG, rng)

    assert result.category.name == "Headlight"
    assert rng.ranges == [(5000, 12000)]
    assert result.final_cost == 15000
    assert result.estimated_cost == "₹15,000"


@pytest.mark.parametrize(
    ("severity", "base", "expected"),
    [
        (Severity.MINOR, 10001, 7000),
        (Severity.MINOR, 3001, 2100),
        (Severity.MODERATE, 12345, 12345),
        (Severity.SEVERE, 10001, 15001),
        (Severity.SEVERE, 3001, 4501),
    ],
)
def test_multiplier_floors_the_product(
    severity: Severity, base: int, expected: int
) -> None:
    assert apply_severity(base, severity) == expected


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (0, "₹0"),
        (950, "₹950"),
        (2100, "₹2,100"),
        (23140, "₹23,140"),
        (123456, "₹1,23,456"),
        (1234567, "₹12,34,567"),
        (123456789, "₹12,34,56,789"),
    ],
)
def test_format_inr_uses_indian_grouping(amount: int, expected: str) -> None:
    assert format_inr(amount) == expected


def test_random_draws_stay_within_bounds() -> None:
    rng = random.Random(42)
    severities = set()
    for _ in range(500):
        result = generate(DAMAGE_CATALOG, rng)
        category = result.category
        severities.add(result.severity)
        assert category.min_cost <= result.base_cost <= category.max_cost
        assert (
            math.floor(category.min_cost * 0.7)
            <= result.final_cost
            <= category.max_cost * 1.5
        )
        assert result.final_cost == apply_severity(result.base_cost, result.severity)
        assert result.estimated_cost == format_inr(result.final_cost)
    assert severities == set(Severity)


def test_generator_rejects_empty_catalog() -> None:
    with pytest.raises(ValueError, match="empty"):
        AssessmentGenerator(catalog=())


def test_generator_uses_injected_source() -> None:
    generator = AssessmentGenerator(rng=ScriptedRandom("Hood", Severity.MINOR, 20001))

    result = generator.generate()

    assert result.category.name == "Hood"
    assert result.severity is Severity.MINOR
    assert result.estimated_cost == "₹14,000"

