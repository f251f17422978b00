"""
Upload sources and the content-type precondition.

An upload exposes its name, its declared content type and an awaitable
text read. Reading is the first of the pipeline's two suspension points.
"""

import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from workload_import.errors import InvalidFileError
from workload_import.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class Upload(Protocol):
    """A user-selected file."""

    @property
    def name(self) -> str: ...

    @property
    def content_type(self) -> str | None: ...

    async def read_text(self) -> str: ...


@dataclass
class LocalUpload:
    """A file on local disk; content type is guessed from its extension."""

    path: Path
    encoding: str = "utf-8"
    declared_type: str | None = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def content_type(self) -> str | None:
        if self.declared_type is not None:
            return self.declared_type
        guessed, _ = mimetypes.guess_type(self.path.name)
        return guessed

    async def read_text(self) -> str:
        """Read the file in a worker thread."""
        return await asyncio.to_thread(self.path.read_text, encoding=self.encoding)


@dataclass
class InMemoryUpload:
    """An upload whose contents are already in memory (e.g. an HTTP form)."""

    name: str
    text: str = field(repr=False)
    content_type: str | None = "text/csv"

    async def read_text(self) -> str:
        return self.text


def check_content_type(upload: Upload, accepted: frozenset[str] | set[str]) -> None:
    """
    Reject uploads whose declared type is not an accepted tabular type.

    Args:
        upload: Selected file.
        accepted: Accepted content types (lower case).

    Raises:
        InvalidFileError: If the declared type is missing or not accepted.
    """
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if content_type not in accepted:
        log.warning(
            "Rejected upload",
            file=upload.name,
            content_type=upload.content_type,
            accepted=sorted(accepted),
        )
        raise InvalidFileError(upload.name, upload.content_type)
