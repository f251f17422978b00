"""
Column name matching.

Maps upload headers onto an entity's target fields using normalized string
matching, and resolves the current mapping for downstream stages.
"""

import re
from collections.abc import Sequence

from workload_import.utils.logging import get_logger

log = get_logger(__name__)

# Upload column name -> target field name
FieldMapping = dict[str, str]

_WHITESPACE = re.compile(r"\s+")


def normalize_header(text: str) -> str:
    """Lower-case a header and remove all whitespace."""
    return _WHITESPACE.sub("", text).lower()


def _matches(header: str, field: str) -> bool:
    return header == field or header in field or field in header


def infer_mapping(headers: Sequence[str], target_fields: Sequence[str]) -> FieldMapping:
    """
    Propose a header -> field mapping.

    A header matches a field when their normalized forms are equal or one
    contains the other. Containment is permissive on purpose so that
    headers like ``Module Code`` or ``credit`` still land on a field, but
    it can pick an unexpected field when field names contain each other.
    Ties are broken by field declaration order: the first declared field
    that matches wins. Headers that are blank or match nothing stay
    unmapped.

    Args:
        headers: Upload headers in file order.
        target_fields: Entity field names in declaration order.

    Returns:
        Mapping in header order.
    """
    normalized_fields = [(field, normalize_header(field)) for field in target_fields]
    mapping: FieldMapping = {}

    for header in headers:
        normalized = normalize_header(header)
        if not normalized or header in mapping:
            continue
        for field, normalized_field in normalized_fields:
            if _matches(normalized, normalized_field):
                mapping[header] = field
                break

    unmatched = [h for h in headers if h not in mapping]
    log.debug("Inferred column mapping", mapped=mapping, unmatched=unmatched)
    return mapping


def resolve_column(mapping: FieldMapping, field: str) -> str | None:
    """
    Find the upload column that feeds a field.

    When several columns point at the same field the first one in mapping
    order is used, both for validation and for transformation.
    """
    for column, target in mapping.items():
        if target == field:
            return column
    return None


def unmapped_fields(mapping: FieldMapping, fields: Sequence[str]) -> list[str]:
    """
    List target fields that no column is mapped to.

    Args:
        mapping: Current mapping.
        fields: Field names to check, in declaration order.

    Returns:
        Unmapped field names in declaration order.
    """
    mapped = set(mapping.values())
    missing = [field for field in fields if field not in mapped]

    if missing:
        log.warning("Fields without a mapped column", missing=missing)

    return missing


def remap(
    mapping: FieldMapping,
    column: str,
    field: str | None,
    *,
    headers: Sequence[str],
    target_fields: Sequence[str],
) -> FieldMapping:
    """
    Return a copy of the mapping with one column reassigned.

    Args:
        mapping: Current mapping.
        column: Upload column to change.
        field: New target field, or None to leave the column unmapped.
        headers: Upload headers, used to keep the result in header order.
        target_fields: Valid field names for the entity.

    Returns:
        New mapping in header order.

    Raises:
        ValueError: If the column is not an upload header or the field is
            not a target field.
    """
    if column not in headers:
        msg = f"Unknown column '{column}'. Available: {', '.join(headers)}"
        raise ValueError(msg)
    if field is not None and field not in target_fields:
        msg = f"Unknown field '{field}'. Available: {', '.join(target_fields)}"
        raise ValueError(msg)

    updated = dict(mapping)
    if field is None:
        updated.pop(column, None)
    else:
        updated[column] = field

    return {header: updated[header] for header in dict.fromkeys(headers) if header in updated}
