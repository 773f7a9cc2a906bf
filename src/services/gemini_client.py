from __future__ import annotations

import asyncio
import logging

import google.generativeai as genai

from src.services.errors import ClassificationUnavailableError, NetworkTimeoutError, ServiceError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-1.5-flash"
DEFAULT_TIMEOUT_SECONDS = 10.0


class GeminiConfigurationError(ServiceError):
    pass


def first_candidate_text(response: object) -> str | None:
    """
    Return the first candidate's first text part, or None if it is missing.

    A blocked prompt comes back with no candidates; that is read as a missing
    answer ("No information available") rather than as a failed call.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None

    text = getattr(parts[0], "text", None)
    return text if isinstance(text, str) and text else None


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._configure_api()
        self._model = genai.GenerativeModel(model_name=self.model_name)

    def _configure_api(self) -> None:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Google API key.")
        genai.configure(api_key=self.api_key)

    async def generate_text(self, prompt: str) -> str | None:
        """
        Send a single prompt and return the first text part of the reply.

        Raises ClassificationUnavailableError for any failure of the call,
        timeouts included. Cancellation is not caught. No retries are made.
        """
        try:
            response = await asyncio.wait_for(
                self._model.generate_content_async(
                    prompt,
                    request_options={"timeout": self.timeout_seconds},
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as timeout_error:
            raise NetworkTimeoutError(self.model_name, self.timeout_seconds) from timeout_error
        except Exception as provider_error:
            raise ClassificationUnavailableError(f"Gemini request failed: {provider_error}") from provider_error

        try:
            return first_candidate_text(response)
        except (TypeError, IndexError, KeyError) as payload_error:
            raise ClassificationUnavailableError(f"Malformed Gemini reply: {payload_error}") from payload_error
