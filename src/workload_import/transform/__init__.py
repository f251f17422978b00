"""Record transformation from raw strings to typed field values."""

from workload_import.transform.records import (
    TypedRecord,
    records_frame,
    transform_for,
    transform_records,
)

__all__ = ["TypedRecord", "records_frame", "transform_for", "transform_records"]
