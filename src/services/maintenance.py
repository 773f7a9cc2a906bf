from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from src.app.domain.models import SEED_SOURCE, FoodSafetyRecord, SafetyStatus
from src.app.infra.db.base import FoodSafetyRepository

logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path("data/foods.json")
BAD_ENTRY_MARKER = "Unable to get AI response"

_REQUIRED_FIELDS = ("pet", "food", "status", "reason")


def load_seed_file(path: Path = DEFAULT_SEED_FILE) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Seed file must contain a JSON list: {path}")
    return data


def _seed_item_to_record(item: Mapping[str, Any]) -> FoodSafetyRecord:
    missing = [name for name in _REQUIRED_FIELDS if not item.get(name)]
    if missing:
        raise ValueError(f"Seed item missing fields {missing}: {dict(item)}")

    try:
        status = SafetyStatus(str(item["status"]).lower())
    except ValueError as error:
        raise ValueError(f"Invalid status {item['status']!r} for {item['pet']}/{item['food']}") from error

    return FoodSafetyRecord(
        pet=str(item["pet"]),
        food=str(item["food"]),
        status=status,
        reason=str(item["reason"]),
        source=SEED_SOURCE,
    )


def seed_records(repo: FoodSafetyRepository, items: Iterable[Mapping[str, Any]]) -> int:
    """
    Append every seed item to the store, tagged as initial seed data.
    All items are validated before the first write.
    """
    records = [_seed_item_to_record(item) for item in items]

    for record in records:
        repo.persist(record)
        logger.info("Seeded: %s + %s (%s)", record.pet, record.food, record.status.value)

    return len(records)


def cleanup_bad_entries(repo: FoodSafetyRepository, marker: str = BAD_ENTRY_MARKER) -> int:
    """Delete unknown-status records produced by failed AI calls."""
    deleted = repo.delete_where(lambda reason: marker in reason)
    logger.info("Cleanup removed %d entries matching %r", deleted, marker)
    return deleted
