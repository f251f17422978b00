"""
Typed configuration models using Pydantic.

All tunable import behavior is defined here with explicit typing and
validation. Entity field lists and rules are fixed in code and are not
configurable.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadConfig(BaseModel):
    """Accepted upload formats and decoding."""

    model_config = ConfigDict(frozen=True)

    accepted_content_types: list[str] = Field(
        default_factory=lambda: ["text/csv"],
        description="Declared content types accepted for an upload",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of uploads")
    preview_rows: int = Field(
        default=3, ge=0, le=50, description="Rows shown in the import preview"
    )

    @field_validator("accepted_content_types")
    @classmethod
    def validate_content_types(cls, v: list[str]) -> list[str]:
        """Ensure at least one content type is accepted."""
        if not v:
            msg = "At least one accepted content type is required"
            raise ValueError(msg)
        return [item.strip().lower() for item in v]


class LoggingConfig(BaseModel):
    """Logging output configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO", description="Log level name")
    json_output: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class StoreConfig(BaseModel):
    """Reference JSON store used by the command-line importer."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        default=Path("./output/imports.json"),
        description="JSON document that receives imported batches",
    )
    imported_by: str | None = Field(
        default=None,
        description="Caller identity stamped on stored batches",
    )


class ImportConfig(BaseModel):
    """Complete import configuration."""

    model_config = ConfigDict(frozen=True)

    upload: UploadConfig = Field(default_factory=UploadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @property
    def accepted_content_types(self) -> frozenset[str]:
        """Convenience accessor for accepted upload content types."""
        return frozenset(self.upload.accepted_content_types)
