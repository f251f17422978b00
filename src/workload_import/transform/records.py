"""
Record transformer.

Turns validated raw records into target-field-keyed records with numeric
fields coerced to numbers, ready for the bulk-write collaborator.
"""

from collections.abc import Iterable, Sequence

import pandas as pd

from workload_import.errors import ConversionError
from workload_import.ingestion.parser import RawRecord
from workload_import.mapping.columns import FieldMapping, resolve_column
from workload_import.schemas.entities import EntitySchema
from workload_import.validation.rules import is_blank, parse_number

TypedRecord = dict[str, str | int | float]


def transform_records(
    records: Sequence[RawRecord],
    mapping: FieldMapping,
    numeric_fields: Iterable[str],
    *,
    optional_fields: Iterable[str] = (),
) -> list[TypedRecord]:
    """
    Convert raw records into typed records keyed by target field.

    Unmapped upload columns are dropped. Numeric fields are parsed with the
    same parser the validator uses; a value that does not parse raises
    instead of turning into NaN or None. A blank optional numeric field is
    left out of the record.

    Args:
        records: Raw records in file order.
        mapping: Confirmed column -> field mapping.
        numeric_fields: Fields to coerce to numbers.
        optional_fields: Fields that may be blank.

    Returns:
        One typed record per input record.

    Raises:
        ConversionError: If a numeric value cannot be parsed.
    """
    numeric = frozenset(numeric_fields)
    optional = frozenset(optional_fields)
    # One column per field, the same column the validator read
    pairs = [
        (column, field)
        for field in dict.fromkeys(mapping.values())
        if (column := resolve_column(mapping, field)) is not None
    ]

    typed: list[TypedRecord] = []
    for row, record in enumerate(records, start=1):
        result: TypedRecord = {}
        for column, field in pairs:
            value = record.get(column, "")
            if field in numeric:
                if field in optional and is_blank(value):
                    continue
                try:
                    result[field] = parse_number(value)
                except ValueError as e:
                    raise ConversionError(row, field, value) from e
            else:
                result[field] = value
        typed.append(result)

    return typed


def transform_for(
    schema: EntitySchema,
    records: Sequence[RawRecord],
    mapping: FieldMapping,
) -> list[TypedRecord]:
    """Transform records using an entity's numeric and optional field sets."""
    return transform_records(
        records,
        mapping,
        schema.numeric_fields,
        optional_fields=schema.optional_fields,
    )


def records_frame(records: Sequence[TypedRecord], schema: EntitySchema) -> pd.DataFrame:
    """
    Build a DataFrame of typed records with columns in field order.

    Only fields present in at least one record become columns.
    """
    present = {key for record in records for key in record}
    columns = [name for name in schema.field_names if name in present]
    return pd.DataFrame.from_records(list(records), columns=columns)
