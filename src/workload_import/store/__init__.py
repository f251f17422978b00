"""Reference persistence for imported batches."""

from workload_import.store.json_store import JsonBatchStore, stamp_record

__all__ = ["JsonBatchStore", "stamp_record"]
