# src/app/services/food_safety_service.py
"""
Food safety lookup service.
Answers from the store when possible, otherwise classifies and persists.
"""
from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from src.app.domain.models import FoodSafetyRecord, LookupResult, RecordOrigin
from src.app.infra.db.base import FoodSafetyRepository
from src.services.classifier import SafetyClassifier

logger = logging.getLogger(__name__)


class FoodSafetyService:
    """
    Lookup-with-fallback pipeline.

    Responsibilities:
    - Return a stored answer for a (pet, food) pair if one exists
    - Otherwise classify the pair and append the result to the store

    Concurrent misses for the same pair are not coalesced, so both
    requests classify and both persist.
    """

    def __init__(
        self,
        repository: FoodSafetyRepository,
        classifier: SafetyClassifier,
    ):
        self._repo = repository
        self._classifier = classifier

    @property
    def classifier(self) -> SafetyClassifier:
        return self._classifier

    async def check(self, pet: str, food: str) -> LookupResult:
        """
        Answer whether a food is safe for a pet.

        Args:
            pet: Non-empty species name
            food: Non-empty food name

        Returns:
            LookupResult with the record and where it came from

        Raises:
            StoreReadError: If the lookup fails
            StoreWriteError: If the new record cannot be persisted
        """
        pet_key = pet.lower()
        food_key = food.lower()

        existing = await run_in_threadpool(self._repo.query, pet_key, food_key)
        if existing is not None:
            logger.info("Store hit: pet=%s, food=%s, status=%s", pet_key, food_key, existing.status.value)
            return LookupResult(record=existing, origin=RecordOrigin.STORE)

        logger.info("Store miss: pet=%s, food=%s, classifying", pet_key, food_key)
        verdict = await self._classifier.classify(pet, food)

        record = FoodSafetyRecord.from_verdict(pet_key, food_key, verdict)
        stored = await run_in_threadpool(self._repo.persist, record)
        return LookupResult(record=stored, origin=RecordOrigin.AI)
