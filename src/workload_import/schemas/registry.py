"""
Entity registry.

Provides centralized access to every importable entity definition and the
batch schema that guards its store boundary.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from workload_import.schemas.entities import (
    LECTURERS,
    MODULE_ITERATIONS,
    MODULES,
    EntityKind,
    EntitySchema,
)
from workload_import.schemas.records import (
    LecturerRecordSchema,
    ModuleIterationRecordSchema,
    ModuleRecordSchema,
)
from workload_import.schemas.samples import SAMPLE_CSV

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class EntityInfo:
    """Everything registered for one entity kind."""

    schema: EntitySchema
    record_schema: type[pa.DataFrameModel]
    sample: str
    description: str


class EntityRegistry:
    """Registry of importable entities, keyed by kind."""

    _entities: ClassVar[dict[EntityKind, EntityInfo]] = {
        EntityKind.MODULES: EntityInfo(
            schema=MODULES,
            record_schema=ModuleRecordSchema,
            sample=SAMPLE_CSV[EntityKind.MODULES],
            description="Taught modules with credit value and default hours",
        ),
        EntityKind.MODULE_ITERATIONS: EntityInfo(
            schema=MODULE_ITERATIONS,
            record_schema=ModuleIterationRecordSchema,
            sample=SAMPLE_CSV[EntityKind.MODULE_ITERATIONS],
            description="Per-cohort deliveries of a module",
        ),
        EntityKind.LECTURERS: EntityInfo(
            schema=LECTURERS,
            record_schema=LecturerRecordSchema,
            sample=SAMPLE_CSV[EntityKind.LECTURERS],
            description="Academic staff with team, contract and capacity",
        ),
    }

    @classmethod
    def resolve_kind(cls, kind: EntityKind | str) -> EntityKind:
        """
        Turn an entity name into an EntityKind.

        Raises:
            KeyError: If the name is not a known entity.
        """
        if isinstance(kind, EntityKind):
            return kind
        try:
            return EntityKind(kind)
        except ValueError:
            available = ", ".join(cls.list_entities())
            msg = f"Unknown entity '{kind}'. Available: {available}"
            raise KeyError(msg) from None

    @classmethod
    def get(cls, kind: EntityKind | str) -> EntitySchema:
        """Get the entity schema for a kind."""
        return cls._entities[cls.resolve_kind(kind)].schema

    @classmethod
    def get_info(cls, kind: EntityKind | str) -> EntityInfo:
        """Get the full registry entry for a kind."""
        return cls._entities[cls.resolve_kind(kind)]

    @classmethod
    def list_entities(cls) -> list[str]:
        """List all registered entity names."""
        return [kind.value for kind in cls._entities]

    @classmethod
    def validate_batch(cls, df: "pd.DataFrame", kind: EntityKind | str) -> "pd.DataFrame":
        """
        Validate a typed batch against the entity's record schema.

        Raises:
            pandera.errors.SchemaError: If validation fails.
        """
        return cls.get_info(kind).record_schema.validate(df)
