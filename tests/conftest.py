"""Pytest configuration and shared fixtures."""

from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from workload_import.schemas.entities import EntitySchema


class FakeWriter:
    """In-memory bulk writer that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[EntitySchema, list[dict[str, Any]]]] = []
        self.fail_with: Exception | None = None
        self.on_write: Callable[[], Awaitable[None]] | None = None

    async def bulk_import(self, schema: EntitySchema, records: Sequence[dict[str, Any]]) -> Any:
        self.calls.append((schema, list(records)))
        if self.on_write is not None:
            await self.on_write()
        if self.fail_with is not None:
            raise self.fail_with
        return {"inserted": len(records)}


class RecordingNotifier:
    """Notifier that keeps every message for inspection."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def fake_writer() -> FakeWriter:
    """Create a bulk writer that accepts every batch."""
    return FakeWriter()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Create a notifier that records messages."""
    return RecordingNotifier()


@pytest.fixture
def modules_csv() -> str:
    """Two fully valid module records."""
    return (
        "code,title,credits,level,moduleLeader,defaultTeachingHours,defaultMarkingHours\n"
        "CS101,Introduction to Computer Science,20,4,Dr. Smith,40,10\n"
        "CS102,Programming Fundamentals,20,4,Dr. Johnson,45,15\n"
    )


@pytest.fixture
def partial_modules_csv() -> str:
    """Module file that is missing four required columns."""
    return "code,title,credits\nCS101,Test Module,20"


@pytest.fixture
def invalid_lecturers_csv() -> str:
    """Lecturer file with a malformed email and no capacity columns."""
    return (
        "fullName,email,team,specialism,contract,role,fte\n"
        "Dr. John Doe,invalid-email,Mental Health,Psychiatry,1AP,Lecturer,1"
    )


@pytest.fixture
def iterations_csv() -> str:
    """Valid module iterations, with one blank optional note."""
    return (
        "moduleCode,title,semester,cohortId,teachingStartDate,teachingHours,"
        "markingHours,assignedStatus,notes\n"
        "CS101,Introduction to Computer Science,1,2024-25,2024-09-23,40,10,unassigned,\n"
        "CS102,Programming Fundamentals,2,2024-25,2025-01-27,45,15,assigned,Core module\n"
    )


@pytest.fixture
def modules_file(tmp_path: Path, modules_csv: str) -> Path:
    """Write the valid module records to a CSV file."""
    path = tmp_path / "modules.csv"
    path.write_text(modules_csv, encoding="utf-8")
    return path
