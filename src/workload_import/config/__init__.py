"""
Configuration management with typed Pydantic models.

Provides environment-aware configuration loading for uploads, logging
and the reference store.
"""

from workload_import.config.loader import load_config
from workload_import.config.settings import (
    ImportConfig,
    LoggingConfig,
    StoreConfig,
    UploadConfig,
)

__all__ = [
    "ImportConfig",
    "LoggingConfig",
    "StoreConfig",
    "UploadConfig",
    "load_config",
]
