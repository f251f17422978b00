"""
Upload ingestion layer.

All file reading and tabular parsing happens through this module so the
rest of the pipeline only ever sees header-keyed string records.
"""

from workload_import.ingestion.parser import ParsedTable, RawRecord, parse_table
from workload_import.ingestion.upload import (
    InMemoryUpload,
    LocalUpload,
    Upload,
    check_content_type,
)

__all__ = [
    "InMemoryUpload",
    "LocalUpload",
    "ParsedTable",
    "RawRecord",
    "Upload",
    "check_content_type",
    "parse_table",
]
