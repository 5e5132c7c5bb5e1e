"""Shared fixtures for paxmanifest tests."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

import orjson
import pytest

from paxmanifest.core.errors import RecognitionError
from paxmanifest.core.schema import ExtractedFields, PassengerRecord, RecordStatus
from paxmanifest.recognition.base import DocumentFile

TODAY = date(2025, 6, 15)


class FakeRecognizer:
    """Recognizer returning canned results keyed by document name."""

    def __init__(self, results: dict[str, Any], delay: float = 0.0):
        self.results = results
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def extract(self, document: DocumentFile) -> ExtractedFields:
        self.calls.append(document.name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            result = self.results[document.name]
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.in_flight -= 1


class GatedRecognizer(FakeRecognizer):
    """FakeRecognizer that holds every call until ``release`` is set."""

    def __init__(self, results: dict[str, Any]):
        super().__init__(results)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def extract(self, document: DocumentFile) -> ExtractedFields:
        self.started.set()
        await self.release.wait()
        return await super().extract(document)


def make_record(
    record_id: str = "px_000000000001",
    *,
    first_name: str = "",
    last_name: str = "",
    passport_number: str = "",
    status: RecordStatus = RecordStatus.COMPLETED,
    **kwargs: Any,
) -> PassengerRecord:
    """Build a record with sensible defaults."""
    return PassengerRecord(
        id=record_id,
        first_name=first_name,
        last_name=last_name,
        passport_number=passport_number,
        status=status,
        **kwargs,
    )


def doc(name: str) -> DocumentFile:
    return DocumentFile(name=name, data=b"\xff\xd8fake", mime_type="image/jpeg")


def read_jsonl(content: str) -> list[Any]:
    return [orjson.loads(line) for line in content.splitlines() if line.strip()]


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def three_file_recognizer() -> FakeRecognizer:
    """Batch where the second document is unreadable."""
    return FakeRecognizer(
        {
            "one.jpg": ExtractedFields(
                first_name="ana",
                last_name="lopez",
                passport_number="p111",
                gender="FEMALE",
                date_of_birth="10/02/1990",
            ),
            "two.jpg": RecognitionError("Unable to read passport. Improve image quality and re-upload."),
            "three.jpg": ExtractedFields(
                first_name="ben",
                last_name="ortiz",
                passport_number="p333",
                gender="MALE",
                date_of_birth="01/01/2024",
            ),
        }
    )
