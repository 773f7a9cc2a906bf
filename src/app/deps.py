# src/app/deps.py (builds the store client and services once, exposes them as dependencies)

from __future__ import annotations

import logging

from fastapi import Request
from pydantic import ValidationError
from supabase import Client

from src.app.config import Settings, get_settings
from src.app.domain.errors import StoreConfigurationError
from src.app.infra.db.base import FoodSafetyRepository
from src.app.infra.db.supabase_foods_repo import SupabaseFoodSafetyRepository, create_supabase_client
from src.app.services.food_safety_service import FoodSafetyService
from src.services.classifier import SafetyClassifier
from src.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Read settings, turning missing store credentials into a startup error."""
    try:
        return get_settings()
    except ValidationError as error:
        problems = [
            f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
            for item in error.errors()
        ]
        raise StoreConfigurationError(problems) from error


def build_supabase_client(settings: Settings) -> Client:
    return create_supabase_client(str(settings.SUPABASE_URL), settings.SUPABASE_SERVICE_ROLE_KEY)


def build_repository(settings: Settings, client: Client | None = None) -> FoodSafetyRepository:
    return SupabaseFoodSafetyRepository(
        client or build_supabase_client(settings),
        table_name=settings.FOODS_TABLE,
    )


def build_classifier(settings: Settings) -> SafetyClassifier:
    api_key = settings.gemini_api_key
    if not api_key:
        logger.warning("GEMINI_API_KEY missing, classifier runs in local fallback mode")
        return SafetyClassifier(client=None)

    client = GeminiClient(
        api_key=api_key,
        model_name=settings.GEMINI_MODEL,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
    )
    return SafetyClassifier(client=client)


def build_food_safety_service(
    settings: Settings,
    repository: FoodSafetyRepository | None = None,
) -> FoodSafetyService:
    return FoodSafetyService(
        repository=repository or build_repository(settings),
        classifier=build_classifier(settings),
    )


def get_food_safety_service(request: Request) -> FoodSafetyService:
    service = getattr(request.app.state, "food_safety_service", None)
    if service is None:
        raise RuntimeError("Food safety service not initialized.")
    return service
