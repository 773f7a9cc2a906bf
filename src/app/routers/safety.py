from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.app.deps import get_food_safety_service
from src.app.domain.errors import MissingParameterError
from src.app.schemas.safety import (
    CheckResponse,
    ErrorResponse,
    IsSafeResponse,
    to_check_response,
    to_is_safe_response,
)
from src.app.services.food_safety_service import FoodSafetyService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["safety"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/is-safe", response_model=IsSafeResponse, responses=_ERROR_RESPONSES)
async def is_safe(
    pet: Optional[str] = Query(default=None),
    food: Optional[str] = Query(default=None),
    service: FoodSafetyService = Depends(get_food_safety_service),
) -> IsSafeResponse:
    if not pet or not food:
        raise MissingParameterError("Please provide both 'pet' and 'food' parameters.")

    logger.info("Query: %s + %s", pet, food)
    result = await service.check(pet, food)
    return to_is_safe_response(result)


@router.get("/api/check", response_model=CheckResponse, responses=_ERROR_RESPONSES)
async def check(
    pet: Optional[str] = Query(default=None),
    animal: Optional[str] = Query(default=None),
    food: Optional[str] = Query(default=None),
    service: FoodSafetyService = Depends(get_food_safety_service),
) -> CheckResponse:
    pet_type = pet or animal
    if not pet_type or not food:
        raise MissingParameterError(
            "Please provide both 'pet' (or 'animal') and 'food' parameters.",
            example="/api/check?pet=dog&food=grapes",
        )

    logger.info("API query: %s + %s", pet_type, food)
    result = await service.check(pet_type, food)
    return to_check_response(result)
