from __future__ import annotations

import logging
from datetime import datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from src.app.domain.errors import StoreConfigurationError, StoreReadError, StoreWriteError
from src.app.domain.models import FoodSafetyRecord, SafetyStatus
from src.app.infra.db.base import FoodSafetyRepository, ReasonPredicate

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "foods"

_STORE_ERRORS = (APIError, httpx.HTTPError, ConnectionError, TimeoutError)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def _row_to_record(row: dict[str, str | int | None]) -> FoodSafetyRecord:
    return FoodSafetyRecord(
        id=_safe_str(row.get("id")),
        pet=str(row["pet"]),
        food=str(row["food"]),
        status=SafetyStatus(str(row["status"])),
        reason=str(row["reason"]),
        created_at=_parse_datetime(row.get("created_at")),
        source=_safe_str(row.get("source")),
    )


def _record_to_row(record: FoodSafetyRecord) -> dict[str, str]:
    data = {
        "pet": record.pet.lower(),
        "food": record.food.lower(),
        "status": record.status.value,
        "reason": record.reason,
    }

    if record.source:
        data["source"] = record.source

    return data


def create_supabase_client(url: str | None, key: str | None) -> Client:
    errors: list[str] = []
    if not url:
        errors.append("SUPABASE_URL is required")
    if not key:
        errors.append("SUPABASE_SERVICE_ROLE_KEY is required")
    if errors:
        raise StoreConfigurationError(errors)
    return create_client(url, key)


class SupabaseFoodSafetyRepository(FoodSafetyRepository):
    def __init__(self, client: Client, table_name: str = DEFAULT_TABLE_NAME):
        self._client = client
        self.table_name = table_name
        logger.info("SupabaseFoodSafetyRepository initialized: table=%s", table_name)

    def query(self, pet: str, food: str) -> FoodSafetyRecord | None:
        pet_key = pet.lower()
        food_key = food.lower()

        try:
            result = (
                self._client.table(self.table_name)
                .select("*")
                .eq("pet", pet_key)
                .eq("food", food_key)
                .order("created_at")
                .order("id")
                .limit(1)
                .execute()
            )
        except _STORE_ERRORS as error:
            logger.error("Store error querying %s/%s: %s", pet_key, food_key, error)
            raise StoreReadError("query", str(error)) from error

        if not result.data:
            logger.debug("No stored record for pet=%s, food=%s", pet_key, food_key)
            return None

        return _row_to_record(result.data[0])

    def persist(self, record: FoodSafetyRecord) -> FoodSafetyRecord:
        row = _record_to_row(record)

        try:
            result = self._client.table(self.table_name).insert(row).execute()
        except _STORE_ERRORS as error:
            logger.error("Store error persisting %s/%s: %s", row["pet"], row["food"], error)
            raise StoreWriteError("persist", str(error)) from error

        if not result.data:
            raise StoreWriteError("persist", "insert returned no rows")

        stored = _row_to_record(result.data[0])
        logger.info(
            "Persisted record: id=%s, pet=%s, food=%s, status=%s",
            stored.id,
            stored.pet,
            stored.food,
            stored.status.value,
        )
        return stored

    def list_all(self) -> list[FoodSafetyRecord]:
        try:
            result = (
                self._client.table(self.table_name)
                .select("*")
                .order("created_at")
                .order("id")
                .execute()
            )
        except _STORE_ERRORS as error:
            logger.error("Store error listing records: %s", error)
            raise StoreReadError("list_all", str(error)) from error

        return [_row_to_record(row) for row in result.data or []]

    def delete_where(self, predicate: ReasonPredicate) -> int:
        try:
            result = (
                self._client.table(self.table_name)
                .select("id, pet, food, reason")
                .eq("status", SafetyStatus.UNKNOWN.value)
                .execute()
            )
        except _STORE_ERRORS as error:
            logger.error("Store error scanning unknown records: %s", error)
            raise StoreReadError("delete_where", str(error)) from error

        candidates = result.data or []
        logger.info("Found %d records with unknown status", len(candidates))

        deleted_count = 0
        for row in candidates:
            reason = row.get("reason") or ""
            if not predicate(reason):
                continue

            try:
                self._client.table(self.table_name).delete().eq("id", row["id"]).execute()
            except _STORE_ERRORS as error:
                logger.error("Store error deleting record %s: %s", row["id"], error)
                raise StoreWriteError("delete_where", str(error)) from error

            logger.info("Deleted record: id=%s, pet=%s, food=%s", row["id"], row.get("pet"), row.get("food"))
            deleted_count += 1

        return deleted_count
