"""
JSON document store for imported batches.

Used by the command-line importer as its bulk-write collaborator. Every
batch is appended under the entity's payload key, and the document is
rewritten atomically so a failed write never leaves a partial file.
"""

import asyncio
import json
import os
import tempfile
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from workload_import.importer.collaborators import IdentityProvider
from workload_import.schemas.entities import EntityKind, EntitySchema
from workload_import.transform.records import TypedRecord
from workload_import.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_FTE = 1.0


def stamp_record(
    schema: EntitySchema,
    record: TypedRecord,
    now: datetime,
    imported_by: str | None = None,
) -> dict[str, Any]:
    """
    Copy a typed record and add the bookkeeping fields the store keeps.

    Every record is active on insert and carries ``createdAt`` and
    ``updatedAt`` in epoch milliseconds. Lecturers without an FTE get the
    full-time default.
    """
    stored = dict(record)
    if schema.kind is EntityKind.LECTURERS and not stored.get("fte"):
        stored["fte"] = DEFAULT_FTE
    stored.setdefault("isActive", True)
    millis = int(now.timestamp() * 1000)
    stored["createdAt"] = millis
    stored["updatedAt"] = millis
    if imported_by is not None:
        stored["importedBy"] = imported_by
    return stored


class JsonBatchStore:
    """
    Bulk writer that persists batches to a JSON document.

    Document layout::

        {
          "modules": [{"code": "CS101", ...}, ...],
          "batches": [{"entity": "modules", "count": 2, "importedAt": ..., ...}]
        }

    Args:
        path: JSON file to write. Created on first import.
        identity: Optional identity provider. When given, every batch
            requires a caller and is stamped with ``importedBy``.
    """

    def __init__(self, path: Path, identity: IdentityProvider | None = None) -> None:
        self.path = Path(path)
        self.identity = identity

    def load(self) -> dict[str, Any]:
        """Read the current document, or an empty one if none exists."""
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as f:
            return json.load(f)

    async def bulk_import(
        self, schema: EntitySchema, records: Sequence[TypedRecord]
    ) -> dict[str, int]:
        """
        Append a batch to the document.

        Returns:
            ``{"inserted": n}``.

        Raises:
            NotAuthenticatedError: If an identity provider is configured
                and has no caller.
        """
        imported_by = self.identity.current_identity() if self.identity else None
        await asyncio.to_thread(self._append, schema, list(records), imported_by)
        return {"inserted": len(records)}

    def _append(
        self,
        schema: EntitySchema,
        records: list[TypedRecord],
        imported_by: str | None,
    ) -> None:
        document = self.load()

        now = datetime.now(UTC)
        stored = [stamp_record(schema, record, now, imported_by) for record in records]
        document.setdefault(schema.payload_key, []).extend(stored)

        batch: dict[str, Any] = {
            "entity": schema.kind.value,
            "count": len(stored),
            "importedAt": now.isoformat(),
        }
        if imported_by is not None:
            batch["importedBy"] = imported_by
        document.setdefault("batches", []).append(batch)

        self._write(document)
        log.info(
            "Stored batch",
            path=str(self.path),
            entity=schema.kind.value,
            records=len(stored),
        )

    def _write(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
