"""
Bulk import orchestration.

An ImportSession owns everything one import needs: the parsed upload, the
current column mapping and the violation list. Presentation layers hold a
reference to the session and render its state; they never keep their own
copy of it.

State machine::

    IDLE -> FILE_SELECTED -> PARSED -> VALIDATING -> READY_TO_IMPORT
                                                  -> HAS_VIOLATIONS
    READY_TO_IMPORT -> IMPORTING -> SUCCEEDED -> IDLE
                                 -> FAILED

A mapping edit re-enters VALIDATING. A failed import keeps the upload and
mapping so it can be retried without selecting the file again. Selecting
another file while one is still being read makes the newer file win.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd

from workload_import.config.settings import ImportConfig
from workload_import.errors import ImportFailedError, InvalidFileError, InvalidTransitionError
from workload_import.importer.collaborators import BulkWriter, LogNotifier, Notifier
from workload_import.ingestion.parser import ParsedTable, RawRecord, parse_table
from workload_import.ingestion.upload import Upload, check_content_type
from workload_import.mapping.columns import FieldMapping, infer_mapping, remap, unmapped_fields
from workload_import.schemas.entities import EntityKind, EntitySchema
from workload_import.schemas.registry import EntityRegistry
from workload_import.transform.records import records_frame, transform_for
from workload_import.utils.logging import get_logger, import_scope
from workload_import.validation.core import (
    ValidationReport,
    ValidationViolation,
    validate_records,
)

log = get_logger(__name__)


class ImportState(str, Enum):
    """Lifecycle of one import session."""

    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    PARSED = "parsed"
    VALIDATING = "validating"
    READY_TO_IMPORT = "ready_to_import"
    HAS_VIOLATIONS = "has_violations"
    IMPORTING = "importing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_LOADED = {
    ImportState.READY_TO_IMPORT,
    ImportState.HAS_VIOLATIONS,
    ImportState.FAILED,
}

_TRANSITIONS: dict[ImportState, set[ImportState]] = {
    ImportState.IDLE: {ImportState.FILE_SELECTED},
    ImportState.FILE_SELECTED: {
        ImportState.FILE_SELECTED,
        ImportState.PARSED,
        ImportState.IDLE,
    },
    ImportState.PARSED: {ImportState.VALIDATING, ImportState.IDLE},
    ImportState.VALIDATING: {ImportState.READY_TO_IMPORT, ImportState.HAS_VIOLATIONS},
    ImportState.READY_TO_IMPORT: {
        ImportState.IMPORTING,
        ImportState.VALIDATING,
        ImportState.FILE_SELECTED,
        ImportState.IDLE,
    },
    ImportState.HAS_VIOLATIONS: {
        ImportState.VALIDATING,
        ImportState.FILE_SELECTED,
        ImportState.IDLE,
    },
    ImportState.IMPORTING: {ImportState.SUCCEEDED, ImportState.FAILED},
    ImportState.SUCCEEDED: {ImportState.IDLE},
    ImportState.FAILED: {
        ImportState.IMPORTING,
        ImportState.VALIDATING,
        ImportState.FILE_SELECTED,
        ImportState.IDLE,
    },
}

FAILURE_MESSAGE = "Failed to import data. Please check your CSV format and try again."


@dataclass(frozen=True)
class ImportOutcome:
    """Successful bulk import."""

    entity: EntityKind
    imported_count: int
    payload: Any = None


class ImportSession:
    """
    One import of one file for one entity kind.

    Args:
        entity: Entity kind being imported.
        writer: Bulk-write collaborator.
        notifier: User message surface (defaults to the structured log).
        config: Import configuration (defaults apply when omitted).
    """

    def __init__(
        self,
        entity: EntityKind | str,
        writer: BulkWriter,
        notifier: Notifier | None = None,
        config: ImportConfig | None = None,
    ) -> None:
        self.schema: EntitySchema = EntityRegistry.get(entity)
        self.writer = writer
        self.notifier = notifier or LogNotifier()
        self.config = config or ImportConfig()

        self.state = ImportState.IDLE
        self.file_name: str | None = None
        self.table = ParsedTable()
        self.mapping: FieldMapping = {}
        self.violations: list[ValidationViolation] = []
        self.mapping_confirmed = False
        self._selection = 0

    @property
    def entity(self) -> EntityKind:
        return self.schema.kind

    @property
    def headers(self) -> list[str]:
        return self.table.headers

    @property
    def records(self) -> list[RawRecord]:
        return self.table.records

    @property
    def can_import(self) -> bool:
        """Whether run_import would issue a bulk write right now."""
        return (
            self.state in (ImportState.READY_TO_IMPORT, ImportState.FAILED)
            and not self.violations
            and bool(self.records)
            and self.mapping_confirmed
        )

    def _transition(self, new_state: ImportState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            msg = f"Cannot move import session from {self.state.value} to {new_state.value}"
            raise InvalidTransitionError(msg)
        log.debug(
            "Import state changed",
            entity=self.entity.value,
            old=self.state.value,
            new=new_state.value,
        )
        self.state = new_state

    def _clear(self) -> None:
        self._selection += 1
        self.file_name = None
        self.table = ParsedTable()
        self.mapping = {}
        self.violations = []
        self.mapping_confirmed = False

    async def select_file(self, upload: Upload) -> bool:
        """
        Accept a user-selected file, read it and run parse and validation.

        A file of the wrong content type is rejected with a user message and
        the session keeps its current state. Selecting again while a read is
        pending supersedes it, and a reset or close drops the pending read.

        Returns:
            True if the file was accepted and parsed, False if it was
            rejected or superseded before its text arrived.
        """
        if self.state is ImportState.IMPORTING:
            self.notifier.error("An import is already in progress")
            return False

        try:
            check_content_type(upload, self.config.accepted_content_types)
        except InvalidFileError as e:
            self.notifier.error(str(e))
            return False

        self._transition(ImportState.FILE_SELECTED)
        self._clear()
        self.file_name = upload.name
        selection = self._selection

        try:
            text = await upload.read_text()
        except (OSError, UnicodeDecodeError) as e:
            log.error("Could not read upload", file=upload.name, error=str(e))
            if selection != self._selection:
                return False
            self._clear()
            self._transition(ImportState.IDLE)
            self.notifier.error(f"Could not read {upload.name}")
            raise

        if selection != self._selection:
            log.info("Discarded superseded upload", entity=self.entity.value, file=upload.name)
            return False

        self.load_text(text, name=upload.name)
        return True

    def load_text(self, text: str, name: str | None = None) -> None:
        """Parse upload text, infer the mapping and validate."""
        if self.state is not ImportState.FILE_SELECTED:
            self._transition(ImportState.FILE_SELECTED)
            self._clear()
        self.file_name = name or self.file_name

        with import_scope(self.entity, self.file_name):
            self.table = parse_table(text)
            self.mapping = infer_mapping(self.table.headers, self.schema.field_names)
            self.mapping_confirmed = False
            self._transition(ImportState.PARSED)
            log.info(
                "Upload parsed",
                rows=self.table.row_count,
                mapped=len(self.mapping),
                columns=len(self.table.headers),
            )
            self.revalidate()

    def revalidate(self) -> list[ValidationViolation]:
        """Validate the records against the current mapping."""
        self._transition(ImportState.VALIDATING)
        self.violations = validate_records(self.table.records, self.mapping, self.schema)
        self._transition(
            ImportState.HAS_VIOLATIONS if self.violations else ImportState.READY_TO_IMPORT
        )
        return self.violations

    def update_mapping(self, column: str, field: str | None) -> list[ValidationViolation]:
        """
        Reassign one upload column and revalidate.

        Args:
            column: Upload column to change.
            field: Target field, or None to leave the column unmapped.

        Returns:
            Violations under the new mapping.

        Raises:
            ValueError: If the column or field is unknown.
            InvalidTransitionError: If no file is loaded or an import is running.
        """
        if self.state not in _LOADED:
            msg = f"Cannot change the mapping while {self.state.value}"
            raise InvalidTransitionError(msg)

        self.mapping = remap(
            self.mapping,
            column,
            field,
            headers=self.table.headers,
            target_fields=self.schema.field_names,
        )
        self.mapping_confirmed = False
        log.info("Mapping updated", column=column, field=field)
        return self.revalidate()

    def confirm_mapping(self) -> None:
        """Record that the user has reviewed the current mapping."""
        if self.state not in _LOADED:
            msg = f"Cannot confirm the mapping while {self.state.value}"
            raise InvalidTransitionError(msg)
        self.mapping_confirmed = True

    def report(self) -> ValidationReport:
        """Summarize the current validation state for display."""
        return ValidationReport(
            entity=self.entity.value,
            row_count=self.table.row_count,
            violations=list(self.violations),
            unmapped_required=unmapped_fields(self.mapping, self.schema.required_fields),
        )

    def preview(self, limit: int | None = None) -> pd.DataFrame:
        """Leading records as a DataFrame, sized by configuration by default."""
        rows = self.config.upload.preview_rows if limit is None else limit
        return self.table.to_frame(limit=rows)

    async def run_import(self) -> ImportOutcome | None:
        """
        Transform the records and hand the full batch to the writer.

        Requests that cannot proceed (an import already running, open
        violations, nothing loaded, unconfirmed mapping) are reported to the
        user and return None without calling the writer.

        Returns:
            ImportOutcome on success, None if the request was refused.

        Raises:
            ImportFailedError: If the batch could not be transformed or the
                writer rejected it. Session data is kept for a retry.
        """
        if self.state is ImportState.IMPORTING:
            self.notifier.error("An import is already in progress")
            return None
        if self.violations:
            self.notifier.error("Please fix validation errors before importing")
            return None
        if self.state not in (ImportState.READY_TO_IMPORT, ImportState.FAILED) or not self.records:
            self.notifier.error("Please select a CSV file with at least one record")
            return None
        if not self.mapping_confirmed:
            self.notifier.error("Please confirm the field mapping before importing")
            return None

        self._transition(ImportState.IMPORTING)

        with import_scope(self.entity, self.file_name):
            try:
                records = transform_for(self.schema, self.table.records, self.mapping)
                EntityRegistry.validate_batch(records_frame(records, self.schema), self.entity)
                log.info("Writing batch", records=len(records))
                payload = await self.writer.bulk_import(self.schema, records)
            except Exception as e:
                self._transition(ImportState.FAILED)
                log.error("Import failed", error=f"{type(e).__name__}: {e}")
                self.notifier.error(FAILURE_MESSAGE)
                raise ImportFailedError(self.entity.value, str(e)) from e

            self._transition(ImportState.SUCCEEDED)
            log.info("Import succeeded", records=len(records))

        outcome = ImportOutcome(self.entity, len(records), payload)
        self.notifier.success(f"Successfully imported {outcome.imported_count} {self.schema.label}")
        self._clear()
        self._transition(ImportState.IDLE)
        return outcome

    def reset(self) -> None:
        """Discard the upload, mapping and violations."""
        if self.state is ImportState.IMPORTING:
            msg = "Cannot reset while an import is in progress"
            raise InvalidTransitionError(msg)
        self._clear()
        if self.state is not ImportState.IDLE:
            self._transition(ImportState.IDLE)

    def close(self) -> None:
        """Release session data when the import surface is closed."""
        self.reset()
