"""
Pandera schemas for transformed (typed) import batches.

These check a batch at the store boundary, after the record transformer
has coerced numeric fields. Row-level validation with user-facing messages
happens earlier in ``workload_import.validation``.
"""

import pandera.pandas as pa
from pandera.typing import Series


class ModuleRecordSchema(pa.DataFrameModel):
    """Schema for a batch of typed module records."""

    code: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Module code, e.g. 'CS101'",
    )
    title: Series[str] = pa.Field(str_length={"min_value": 1})
    credits: Series[float] = pa.Field(gt=0, description="Credit value")
    level: Series[float] = pa.Field(gt=0, description="Academic level")
    moduleLeader: Series[str] = pa.Field(str_length={"min_value": 1})
    defaultTeachingHours: Series[float] = pa.Field(gt=0)
    defaultMarkingHours: Series[float] = pa.Field(gt=0)

    class Config:
        """Schema configuration."""

        name = "ModuleRecordSchema"
        strict = False
        coerce = True


class ModuleIterationRecordSchema(pa.DataFrameModel):
    """Schema for a batch of typed module iteration records."""

    moduleCode: Series[str] = pa.Field(str_length={"min_value": 1})
    title: Series[str] = pa.Field(str_length={"min_value": 1})
    semester: Series[float] = pa.Field(gt=0)
    cohortId: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Cohort identifier, e.g. '2024-25'",
    )
    teachingStartDate: Series[str] = pa.Field(str_length={"min_value": 1})
    teachingHours: Series[float] = pa.Field(gt=0)
    markingHours: Series[float] = pa.Field(gt=0)
    assignedStatus: Series[str] | None = pa.Field(nullable=True)
    notes: Series[str] | None = pa.Field(nullable=True)

    class Config:
        """Schema configuration."""

        name = "ModuleIterationRecordSchema"
        strict = False
        coerce = True


class LecturerRecordSchema(pa.DataFrameModel):
    """Schema for a batch of typed lecturer records."""

    fullName: Series[str] = pa.Field(str_length={"min_value": 1})
    team: Series[str] = pa.Field(str_length={"min_value": 1})
    specialism: Series[str] = pa.Field(str_length={"min_value": 1})
    contract: Series[str] = pa.Field(str_length={"min_value": 1})
    email: Series[str] = pa.Field(str_matches=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    capacity: Series[float] = pa.Field(gt=0)
    maxTeachingHours: Series[float] = pa.Field(gt=0)
    role: Series[str] = pa.Field(str_length={"min_value": 1})
    status: Series[str] | None = pa.Field(nullable=True)
    fte: Series[float] | None = pa.Field(gt=0, nullable=True)

    class Config:
        """Schema configuration."""

        name = "LecturerRecordSchema"
        strict = False
        coerce = True
