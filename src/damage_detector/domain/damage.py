"""Damage catalog and assessment models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Severity(Enum):
    """Severity levels with their repair cost multipliers."""

    MINOR = ("Minor", 0.7)
    MODERATE = ("Moderate", 1.0)
    SEVERE = ("Severe", 1.5)

    def __init__(self, label: str, multiplier: float) -> None:
        self.label = label
        self.multiplier = multiplier


@dataclass(frozen=True)
class DamageCategory:
    """Reference entry describing a damageable part and its cost range."""

    name: str
    min_cost: int
    max_cost: int
    description: str
    location: str


DAMAGE_CATALOG: tuple[DamageCategory, ...] = (
    DamageCategory(
        "Front Bumper",
        10000,
        20000,
        "Located at the front of the vehicle, protects against minor collisions",
        "Front of vehicle",
    ),
    DamageCategory(
        "Rear Bumper",
        10000,
        20000,
        "Located at the rear of the vehicle, protects against rear-end collisions",
        "Rear of vehicle",
    ),
    DamageCategory(
        "Left Door",
        15000,
        30000,
        "Side door on the driver's side, includes window and lock mechanisms",
        "Left side of vehicle",
    ),
    DamageCategory(
        "Right Door",
        15000,
        30000,
        "Side door on the passenger's side, includes window and lock mechanisms",
        "Right side of vehicle",
    ),
    DamageCategory(
        "Hood",
        20000,
        40000,
        "Engine compartment cover, may include dents and scratches",
        "Top front of vehicle",
    ),
    DamageCategory(
        "Trunk",
        18000,
        35000,
        "Rear storage compartment lid, may include dents and alignment issues",
        "Rear top of vehicle",
    ),
    DamageCategory(
        "Headlight",
        5000,
        12000,
        "Front lighting assembly, may include cracks or shattered lens",
        "Front corners of vehicle",
    ),
    DamageCategory(
        "Taillight",
        5000,
        12000,
        "Rear lighting assembly, may include cracks or shattered lens",
        "Rear corners of vehicle",
    ),
    DamageCategory(
        "Windshield",
        8000,
        25000,
        "Front glass panel, may include chips, cracks, or star breaks",
        "Front of cabin",
    ),
    DamageCategory(
        "Side Mirror",
        3000,
        8000,
        "Exterior mirrors on doors, may include broken glass or housing damage",
        "Driver and passenger doors",
    ),
)


@dataclass(frozen=True)
class AssessmentResult:
    """Outcome of one simulated damage assessment."""

    category: DamageCategory
    severity: Severity
    base_cost: int
    final_cost: int
    estimated_cost: str


@dataclass(frozen=True)
class AssessmentRecord:
    """Assessment persisted in a user's history."""

    id: int
    owner_id: int
    damaged_part: str
    severity: str
    estimated_cost: str
    damage_description: str
    damage_location: str
    source_file_ref: str
    timestamp: datetime
