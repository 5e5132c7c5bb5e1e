"""
Gemini-backed passport recognizer.
"""

from __future__ import annotations

from typing import Any

from paxmanifest.core.errors import ConfigError, RecognitionError
from paxmanifest.core.logging import get_logger
from paxmanifest.core.schema import ExtractedFields
from paxmanifest.recognition.base import DocumentFile
from paxmanifest.recognition.postprocess import (
    missing_required_fields,
    parse_extracted_fields,
)
from paxmanifest.recognition.prompt import PASSPORT_SCHEMA, build_extraction_prompt

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"
UNREADABLE_MESSAGE = "Unable to read passport. Improve image quality and re-upload."
REQUIRED_FIELDS = ["first_name", "last_name", "passport_number"]


class GeminiRecognizer:
    """
    Extracts passport fields with a Gemini multimodal model.

    The image is sent inline with an extraction prompt and the model is
    asked for a JSON object. Every failure is reported with the same
    user-facing message; the underlying exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model_name: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        prompt: str | None = None,
    ):
        """
        Initialize the recognizer.

        Args:
            api_key: Gemini API key.
            model_name: Gemini model to call.
            temperature: Sampling temperature.
            prompt: Optional prompt override.

        Raises:
            ConfigError: If no API key is provided.
        """
        if not api_key:
            raise ConfigError("A Gemini API key is required (set GEMINI_API_KEY)")

        import google.generativeai as genai

        genai.configure(api_key=api_key)

        self.model_name = model_name
        self.temperature = temperature
        self.prompt = prompt or build_extraction_prompt(PASSPORT_SCHEMA)
        self._model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={
                "temperature": temperature,
                "response_mime_type": "application/json",
            },
        )

    def build_contents(self, document: DocumentFile) -> list[Any]:
        """Request contents: prompt text followed by the inline document."""
        return [
            self.prompt,
            {"mime_type": document.mime_type, "data": document.data},
        ]

    async def extract(self, document: DocumentFile) -> ExtractedFields:
        """
        Extract fields from one document.

        Raises:
            RecognitionError: If the call fails or the response is unusable.
        """
        try:
            response = await self._model.generate_content_async(self.build_contents(document))
            fields = parse_extracted_fields(response.text)
        except Exception as e:
            logger.error("Gemini extraction failed for %s: %s", document.name, e)
            raise RecognitionError(
                UNREADABLE_MESSAGE,
                details={"file": document.name, "cause": type(e).__name__},
            ) from e

        missing = missing_required_fields(fields, REQUIRED_FIELDS)
        if missing:
            logger.warning("%s: recognizer left required fields empty: %s", document.name, missing)

        return fields
