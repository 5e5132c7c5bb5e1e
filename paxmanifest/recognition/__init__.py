"""Recognition service collaborators: interface, prompt, response parsing."""

from paxmanifest.recognition.base import DEFAULT_MIME_TYPE, DocumentFile, Recognizer
from paxmanifest.recognition.postprocess import (
    ParseResult,
    parse_extracted_fields,
    parse_json_output,
)
from paxmanifest.recognition.prompt import PASSPORT_SCHEMA, build_extraction_prompt

__all__ = [
    "DEFAULT_MIME_TYPE",
    "DocumentFile",
    "Recognizer",
    "ParseResult",
    "parse_extracted_fields",
    "parse_json_output",
    "PASSPORT_SCHEMA",
    "build_extraction_prompt",
]
