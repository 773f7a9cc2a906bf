from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.app.domain.models import LookupResult

StatusLiteral = Literal["safe", "unsafe", "caution", "unknown"]
SourceLiteral = Literal["store", "ai"]


class IsSafeResponse(BaseModel):
    source: SourceLiteral
    pet: str
    food: str
    status: StatusLiteral
    reason: str


class CheckResponse(BaseModel):
    """Shape expected by clients of the /api/check contract."""
    source: SourceLiteral
    animal: str
    pet: str
    food: str
    safe: bool
    status: StatusLiteral
    reason: str
    notes: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
    example: Optional[str] = Field(None, description="Example of a valid request")


def to_is_safe_response(result: LookupResult) -> IsSafeResponse:
    record = result.record
    return IsSafeResponse(
        source=result.origin.value,
        pet=record.pet,
        food=record.food,
        status=record.status.value,
        reason=record.reason,
    )


def to_check_response(result: LookupResult) -> CheckResponse:
    record = result.record
    return CheckResponse(
        source=result.origin.value,
        animal=record.pet,
        pet=record.pet,
        food=record.food,
        safe=record.is_safe,
        status=record.status.value,
        reason=record.reason,
        notes=record.reason,
    )
