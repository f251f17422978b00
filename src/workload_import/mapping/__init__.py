"""
Column mapping layer.

Infers which upload column feeds which target field and resolves the
current mapping for validation and transformation.
"""

from workload_import.mapping.columns import (
    FieldMapping,
    infer_mapping,
    normalize_header,
    remap,
    resolve_column,
    unmapped_fields,
)

__all__ = [
    "FieldMapping",
    "infer_mapping",
    "normalize_header",
    "remap",
    "resolve_column",
    "unmapped_fields",
]
