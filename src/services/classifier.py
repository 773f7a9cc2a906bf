from __future__ import annotations

import logging
from typing import Optional

from src.app.domain.models import SafetyStatus, Verdict
from src.services.errors import ClassificationUnavailableError
from src.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

MISSING_KEY_REASON = "Gemini API key not configured. Please consult a vet."
UNAVAILABLE_REASON = "Unable to get AI response. Please consult a vet."
NO_INFORMATION_TEXT = "No information available"

_PROMPT_TEMPLATE = (
    'Is it safe for a {pet} to eat {food}? Respond with just "safe", "unsafe", '
    'or "caution" followed by a brief reason in one sentence.'
)

# "unsafe" must be checked before "safe" since it contains it
_KEYWORD_ORDER = (
    ("unsafe", SafetyStatus.UNSAFE),
    ("safe", SafetyStatus.SAFE),
    ("caution", SafetyStatus.CAUTION),
)


def build_prompt(pet: str, food: str) -> str:
    return _PROMPT_TEMPLATE.format(pet=pet, food=food)


def classify_text(text: str) -> SafetyStatus:
    """Map free model output to a status by ordered substring matching."""
    folded = text.casefold()
    for keyword, status in _KEYWORD_ORDER:
        if keyword in folded:
            return status
    return SafetyStatus.UNKNOWN


class SafetyClassifier:
    """
    Asks the model whether a food is safe for a pet.

    Never raises for provider problems: a missing key or a failed call both
    produce an unknown verdict with a fixed reason.
    """

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def classify(self, pet: str, food: str) -> Verdict:
        if self._client is None:
            logger.warning("No Gemini API key configured, returning local fallback")
            return Verdict(status=SafetyStatus.UNKNOWN, reason=MISSING_KEY_REASON)

        prompt = build_prompt(pet, food)
        try:
            text = await self._client.generate_text(prompt)
        except ClassificationUnavailableError as error:
            logger.warning("Gemini unavailable for pet=%s, food=%s: %s", pet, food, error)
            return Verdict(status=SafetyStatus.UNKNOWN, reason=UNAVAILABLE_REASON)

        reply = text or NO_INFORMATION_TEXT
        status = classify_text(reply)
        logger.info("Gemini classified pet=%s, food=%s as %s", pet, food, status.value)
        return Verdict(status=status, reason=reply)
