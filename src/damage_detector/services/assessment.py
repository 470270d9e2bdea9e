"""Simulated damage assessment generator."""

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from damage_detector.domain.damage import (
    DAMAGE_CATALOG,
    AssessmentResult,
    DamageCategory,
    Severity,
)

_T = TypeVar("_T")

CURRENCY_SYMBOL = "₹"


class RandomSource(Protocol):
    """Subset of random.Random used by the generator."""

    def choice(self, seq: Sequence[_T]) -> _T:
        """Return a uniformly drawn element."""

    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer in [a, b]."""


def format_inr(amount: int) -> str:
    """Format an integer amount with Indian digit grouping and a rupee sign.

    The last three digits form one group and the rest are grouped in pairs,
    so 1234567 becomes "₹12,34,567".
    """
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) <= 3:
        return f"{sign}{CURRENCY_SYMBOL}{digits}"
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{CURRENCY_SYMBOL}{','.join(groups)},{tail}"


def apply_severity(base_cost: int, severity: Severity) -> int:
    """Scale a base cost by the severity multiplier, flooring the product."""
    return math.floor(base_cost * severity.multiplier)


def generate(
    catalog: Sequence[DamageCategory], rng: RandomSource
) -> AssessmentResult:
    """Draw a category, a severity and a base cost, then price the damage."""
    if not catalog:
        raise ValueError("Damage catalog is empty")
    category = rng.choice(catalog)
    severity = rng.choice(list(Severity))
    base_cost = rng.randint(category.min_cost, category.max_cost)
    final_cost = apply_severity(base_cost, severity)
    return AssessmentResult(
        category=category,
        severity=severity,
        base_cost=base_cost,
        final_cost=final_cost,
        estimated_cost=format_inr(final_cost),
    )


@dataclass
class AssessmentGenerator:
    """Binds the catalog and a random source for request handlers."""

    catalog: Sequence[DamageCategory] = DAMAGE_CATALOG
    rng: RandomSource = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        if not self.catalog:
            raise ValueError("Damage catalog is empty")

    def generate(self) -> AssessmentResult:
        """Produce one assessment."""
        return generate(self.catalog, self.rng)
