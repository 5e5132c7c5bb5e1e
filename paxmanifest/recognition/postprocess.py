"""
Parsing of recognition service responses.

Converts raw model output into validated ExtractedFields.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from paxmanifest.core.errors import RecognitionError
from paxmanifest.core.schema import ExtractedFields


@dataclass
class ParseResult:
    """Result of parsing model output."""

    success: bool
    data: Any
    error: str | None = None
    raw_text: str = ""


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_output(
    text: str,
    schema: type[BaseModel] | None = None,
) -> ParseResult:
    """
    Parse JSON from model output text.

    Args:
        text: Raw model output text.
        schema: Optional Pydantic model to validate against.

    Returns:
        ParseResult holding the parsed (and validated) data or the error.

    Example:
        >>> result = parse_json_output('```json\\n{"firstName": "ANA"}\\n```')
        >>> result.data
        {'firstName': 'ANA'}
    """
    text = strip_code_fences(text or "")

    try:
        data = json.loads(text) if text else {}
    except json.JSONDecodeError as e:
        return ParseResult(success=False, data=None, error=f"JSON parse error: {e}", raw_text=text)

    if not isinstance(data, dict):
        return ParseResult(
            success=False,
            data=data,
            error=f"Expected a JSON object, got {type(data).__name__}",
            raw_text=text,
        )

    if schema is not None:
        try:
            data = schema.model_validate(data)
        except ValidationError as e:
            return ParseResult(
                success=False, data=data, error=f"Schema validation error: {e}", raw_text=text
            )

    return ParseResult(success=True, data=data, raw_text=text)


def parse_extracted_fields(text: str) -> ExtractedFields:
    """
    Parse a recognition response into ExtractedFields.

    Raises:
        RecognitionError: If the response is not a valid field object.
    """
    result = parse_json_output(text, schema=ExtractedFields)
    if not result.success:
        raise RecognitionError(
            result.error or "Unparseable recognition response",
            details={"raw_text": result.raw_text},
        )
    return result.data


def missing_required_fields(fields: ExtractedFields, required: list[str]) -> list[str]:
    """Required fields the service returned empty."""
    present = fields.present_fields()
    return [name for name in required if name not in present]
