"""
Entity definitions and batch schemas.

Field lists, rules and sample documents are declared here once per
entity kind; the rest of the pipeline dispatches on them.
"""

from workload_import.schemas.entities import (
    AVAILABLE_TEAMS,
    EntityKind,
    EntitySchema,
    FieldSpec,
    RuleKind,
    ValidationRule,
)
from workload_import.schemas.records import (
    LecturerRecordSchema,
    ModuleIterationRecordSchema,
    ModuleRecordSchema,
)
from workload_import.schemas.registry import EntityInfo, EntityRegistry

__all__ = [
    "AVAILABLE_TEAMS",
    "EntityInfo",
    "EntityKind",
    "EntityRegistry",
    "EntitySchema",
    "FieldSpec",
    "LecturerRecordSchema",
    "ModuleIterationRecordSchema",
    "ModuleRecordSchema",
    "RuleKind",
    "ValidationRule",
]
