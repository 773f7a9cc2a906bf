from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from src.app.domain.errors import StoreReadError, StoreWriteError
from src.app.domain.models import FoodSafetyRecord, RecordOrigin, SafetyStatus, Verdict
from src.app.services.food_safety_service import FoodSafetyService
from src.services.classifier import MISSING_KEY_REASON, SafetyClassifier


class FoodSafetyRepositoryStub:
    def __init__(self) -> None:
        self.records: list[FoodSafetyRecord] = []
        self.queries: list[tuple[str, str]] = []
        self.should_fail_query = False
        self.should_fail_persist = False
        self.always_miss = False

    def query(self, pet: str, food: str) -> FoodSafetyRecord | None:
        self.queries.append((pet, food))
        if self.should_fail_query:
            raise StoreReadError("query", "Simulated store outage")
        if self.always_miss:
            return None
        for record in self.records:
            if record.pet == pet.lower() and record.food == food.lower():
                return record
        return None

    def persist(self, record: FoodSafetyRecord) -> FoodSafetyRecord:
        if self.should_fail_persist:
            raise StoreWriteError("persist", "Simulated write rejection")
        record.id = str(len(self.records) + 1)
        record.created_at = datetime.now(timezone.utc)
        self.records.append(record)
        return record


class ClassifierStub:
    def __init__(self, verdict: Verdict | None = None) -> None:
        self.verdict = verdict or Verdict(status=SafetyStatus.UNSAFE, reason="Unsafe - toxic.")
        self.calls: list[tuple[str, str]] = []

    async def classify(self, pet: str, food: str) -> Verdict:
        self.calls.append((pet, food))
        return self.verdict


class TestFoodSafetyServiceStoreHit:
    @pytest.mark.asyncio
    async def test_hit_skips_classifier(self) -> None:
        repo = FoodSafetyRepositoryStub()
        repo.records.append(FoodSafetyRecord(pet="dog", food="grapes", status=SafetyStatus.UNSAFE, reason="Kidney failure."))
        classifier = ClassifierStub()
        service = FoodSafetyService(repository=repo, classifier=classifier)

        result = await service.check("Dog", "GRAPES")

        assert result.origin == RecordOrigin.STORE
        assert result.record.reason == "Kidney failure."
        assert classifier.calls == []
        assert repo.queries == [("dog", "grapes")]
        assert len(repo.records) == 1


class TestFoodSafetyServiceStoreMiss:
    @pytest.mark.asyncio
    async def test_miss_classifies_once_and_persists(self) -> None:
        repo = FoodSafetyRepositoryStub()
        reply = "Unsafe - chocolate contains theobromine toxic to dogs."
        classifier = ClassifierStub(Verdict(status=SafetyStatus.UNSAFE, reason=reply))
        service = FoodSafetyService(repository=repo, classifier=classifier)

        result = await service.check("dog", "chocolate")

        assert result.origin == RecordOrigin.AI
        assert classifier.calls == [("dog", "chocolate")]
        assert len(repo.records) == 1
        stored = repo.records[0]
        assert stored.pet == "dog"
        assert stored.food == "chocolate"
        assert stored.status == SafetyStatus.UNSAFE
        assert stored.reason == reply
        assert result.record is stored

    @pytest.mark.asyncio
    async def test_persisted_key_is_lowercase(self) -> None:
        repo = FoodSafetyRepositoryStub()
        service = FoodSafetyService(repository=repo, classifier=ClassifierStub())

        await service.check("Cat", "Onions")

        assert (repo.records[0].pet, repo.records[0].food) == ("cat", "onions")

    @pytest.mark.asyncio
    async def test_missing_key_fallback_is_still_persisted(self) -> None:
        repo = FoodSafetyRepositoryStub()
        service = FoodSafetyService(repository=repo, classifier=SafetyClassifier(client=None))

        result = await service.check("dog", "kiwi")

        assert result.record.status == SafetyStatus.UNKNOWN
        assert result.record.reason == MISSING_KEY_REASON
        assert len(repo.records) == 1

    @pytest.mark.asyncio
    async def test_second_request_is_served_from_store(self) -> None:
        repo = FoodSafetyRepositoryStub()
        classifier = ClassifierStub()
        service = FoodSafetyService(repository=repo, classifier=classifier)

        await service.check("dog", "chocolate")
        second = await service.check("dog", "chocolate")

        assert second.origin == RecordOrigin.STORE
        assert len(classifier.calls) == 1


class TestFoodSafetyServiceDuplicates:
    @pytest.mark.asyncio
    async def test_concurrent_misses_are_not_deduplicated(self) -> None:
        repo = FoodSafetyRepositoryStub()
        repo.always_miss = True
        classifier = ClassifierStub()
        service = FoodSafetyService(repository=repo, classifier=classifier)

        await asyncio.gather(service.check("dog", "grapes"), service.check("dog", "grapes"))

        assert len(classifier.calls) == 2
        assert len(repo.records) == 2


class TestFoodSafetyServiceStoreErrors:
    @pytest.mark.asyncio
    async def test_read_error_propagates(self) -> None:
        repo = FoodSafetyRepositoryStub()
        repo.should_fail_query = True
        classifier = ClassifierStub()
        service = FoodSafetyService(repository=repo, classifier=classifier)

        with pytest.raises(StoreReadError):
            await service.check("dog", "grapes")

        assert classifier.calls == []

    @pytest.mark.asyncio
    async def test_write_error_propagates(self) -> None:
        repo = FoodSafetyRepositoryStub()
        repo.should_fail_persist = True
        service = FoodSafetyService(repository=repo, classifier=ClassifierStub())

        with pytest.raises(StoreWriteError):
            await service.check("dog", "grapes")
