# src/app/domain/models.py
"""
Domain models for the food safety lookup service.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


SEED_SOURCE = "initial_seed"


class SafetyStatus(str, Enum):
    """Classification of a food for a given pet."""
    SAFE = "safe"
    UNSAFE = "unsafe"
    CAUTION = "caution"
    UNKNOWN = "unknown"


class RecordOrigin(str, Enum):
    """Where the answer returned to the caller came from."""
    STORE = "store"
    AI = "ai"


@dataclass
class Verdict:
    """Result of classifying a (pet, food) pair."""
    status: SafetyStatus
    reason: str


@dataclass
class FoodSafetyRecord:
    """
    A stored answer for a (pet, food) pair.
    The pair is a lookup key but is not unique in the store.
    """
    pet: str
    food: str
    status: SafetyStatus
    reason: str

    # Assigned by the store
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    # "initial_seed" for bulk-loaded rows, None for runtime rows
    source: Optional[str] = None

    def __post_init__(self) -> None:
        self.pet = self.pet.lower()
        self.food = self.food.lower()

    @classmethod
    def from_verdict(cls, pet: str, food: str, verdict: Verdict) -> "FoodSafetyRecord":
        return cls(pet=pet, food=food, status=verdict.status, reason=verdict.reason)

    @property
    def is_safe(self) -> bool:
        return self.status == SafetyStatus.SAFE


@dataclass
class LookupResult:
    """Record returned by the lookup pipeline together with its origin."""
    record: FoodSafetyRecord
    origin: RecordOrigin
