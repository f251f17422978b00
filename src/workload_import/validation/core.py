"""
Record validation against an entity's field rules.

Validation never raises and never stops early: every row is checked
against every field so that all problems can be fixed in one pass.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from workload_import.ingestion.parser import ParsedTable, RawRecord
from workload_import.mapping.columns import FieldMapping, resolve_column, unmapped_fields
from workload_import.schemas.entities import EntitySchema, FieldSpec
from workload_import.utils.logging import get_logger
from workload_import.validation.rules import check_rule, is_blank

log = get_logger(__name__)


@dataclass(frozen=True)
class ValidationViolation:
    """One rule failure, keyed by 1-based data row and target field."""

    row: int
    field: str
    message: str


@dataclass
class ValidationReport:
    """Outcome of validating one parsed upload."""

    entity: str
    row_count: int
    violations: list[ValidationViolation] = field(default_factory=list)
    unmapped_required: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Whether the upload can be imported."""
        return not self.violations

    @property
    def invalid_rows(self) -> list[int]:
        """Rows with at least one violation, ascending."""
        return sorted({v.row for v in self.violations})

    def by_field(self) -> dict[str, int]:
        """Violation counts per field, in first-seen order."""
        counts: dict[str, int] = {}
        for violation in self.violations:
            counts[violation.field] = counts.get(violation.field, 0) + 1
        return counts


def validate_value(row: int, spec: FieldSpec, value: str | None) -> list[ValidationViolation]:
    """
    Check a single cell: presence first, then the field's type rules.

    A blank required value yields only the "is required" violation; a blank
    optional value yields nothing.
    """
    if is_blank(value):
        if spec.required:
            return [ValidationViolation(row, spec.name, f"{spec.name} is required")]
        return []

    violations = []
    for rule in spec.type_rules:
        message = check_rule(rule, spec.name, value)
        if message is not None:
            violations.append(ValidationViolation(row, spec.name, message))
    return violations


def validate_records(
    records: Sequence[RawRecord],
    mapping: FieldMapping,
    schema: EntitySchema,
) -> list[ValidationViolation]:
    """
    Validate every record against the entity's rules under a mapping.

    Args:
        records: Parsed records in file order.
        mapping: Current column -> field mapping.
        schema: Entity definition supplying fields and rules.

    Returns:
        All violations, ordered by row, then by field declaration order.
        An empty list means the records are importable.
    """
    columns = {spec.name: resolve_column(mapping, spec.name) for spec in schema.fields}
    violations: list[ValidationViolation] = []

    for row, record in enumerate(records, start=1):
        for spec in schema.fields:
            column = columns[spec.name]
            value = record.get(column) if column is not None else None
            violations.extend(validate_value(row, spec, value))

    log.info(
        "Validated records",
        entity=schema.kind.value,
        rows=len(records),
        violations=len(violations),
    )
    return violations


def validate_table(
    table: ParsedTable,
    mapping: FieldMapping,
    schema: EntitySchema,
) -> ValidationReport:
    """Validate a parsed upload and summarize the result."""
    return ValidationReport(
        entity=schema.kind.value,
        row_count=table.row_count,
        violations=validate_records(table.records, mapping, schema),
        unmapped_required=unmapped_fields(mapping, schema.required_fields),
    )
