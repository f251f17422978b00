"""
Entity definitions for bulk imports.

Each importable entity kind carries a statically declared, ordered field
list and the validation rules attached to every field. Field order matters:
it is the tie-break order for header inference and the order in which
violations are reported for a row.
"""

from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    """Importable entity types."""

    MODULES = "modules"
    MODULE_ITERATIONS = "module-iterations"
    LECTURERS = "lecturers"


class RuleKind(str, Enum):
    """Validation rule types that can be attached to a field."""

    REQUIRED = "required"
    POSITIVE_NUMBER = "positiveNumber"
    EMAIL_SHAPE = "emailShape"
    ENUMERATED = "enumerated"


@dataclass(frozen=True)
class ValidationRule:
    """A single rule applied to a field value."""

    kind: RuleKind
    allowed_values: tuple[str, ...] = ()

    def describe(self) -> str:
        """Short human-readable form, e.g. ``enumerated(Adult, Children)``."""
        if self.kind is RuleKind.ENUMERATED:
            return f"{self.kind.value}({', '.join(self.allowed_values)})"
        return self.kind.value


REQUIRED = ValidationRule(RuleKind.REQUIRED)
POSITIVE_NUMBER = ValidationRule(RuleKind.POSITIVE_NUMBER)
EMAIL_SHAPE = ValidationRule(RuleKind.EMAIL_SHAPE)

# Organisational teams a lecturer can belong to, alphabetical
AVAILABLE_TEAMS: tuple[str, ...] = tuple(
    sorted(
        [
            "Adult",
            "Children",
            "Learning Disability",
            "Mental Health",
            "Post-Registration",
            "Simulation",
        ]
    )
)

TEAM = ValidationRule(RuleKind.ENUMERATED, AVAILABLE_TEAMS)


@dataclass(frozen=True)
class FieldSpec:
    """A target field and its rules."""

    name: str
    rules: tuple[ValidationRule, ...] = ()

    @property
    def required(self) -> bool:
        """Whether a value must be present."""
        return any(rule.kind is RuleKind.REQUIRED for rule in self.rules)

    @property
    def numeric(self) -> bool:
        """Whether the value is coerced to a number on transform."""
        return any(rule.kind is RuleKind.POSITIVE_NUMBER for rule in self.rules)

    @property
    def type_rules(self) -> tuple[ValidationRule, ...]:
        """Rules applied after the presence check."""
        return tuple(rule for rule in self.rules if rule.kind is not RuleKind.REQUIRED)


def required(name: str, *rules: ValidationRule) -> FieldSpec:
    """Declare a required field with optional type rules."""
    return FieldSpec(name, (REQUIRED, *rules))


def optional(name: str, *rules: ValidationRule) -> FieldSpec:
    """Declare an optional field; type rules apply only when a value is given."""
    return FieldSpec(name, rules)


@dataclass(frozen=True)
class EntitySchema:
    """
    Static import definition for one entity kind.

    Attributes:
        kind: Entity kind.
        label: Lower-case plural used in user messages.
        title: Title-case plural used in headings.
        payload_key: Argument name the bulk-write collaborator expects.
        fields: Ordered target fields, required fields first.
    """

    kind: EntityKind
    label: str
    title: str
    payload_key: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> list[str]:
        """All target field names in declaration order."""
        return [spec.name for spec in self.fields]

    @property
    def required_fields(self) -> list[str]:
        """Required target field names in declaration order."""
        return [spec.name for spec in self.fields if spec.required]

    @property
    def optional_fields(self) -> frozenset[str]:
        """Target fields that may be left blank."""
        return frozenset(spec.name for spec in self.fields if not spec.required)

    @property
    def numeric_fields(self) -> frozenset[str]:
        """Target fields coerced to numbers."""
        return frozenset(spec.name for spec in self.fields if spec.numeric)

    def get_field(self, name: str) -> FieldSpec:
        """
        Look up a field by name.

        Raises:
            KeyError: If the entity has no such field.
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        available = ", ".join(self.field_names)
        msg = f"Unknown field '{name}' for {self.kind.value}. Available: {available}"
        raise KeyError(msg)


MODULES = EntitySchema(
    kind=EntityKind.MODULES,
    label="modules",
    title="Modules",
    payload_key="modules",
    fields=(
        required("code"),
        required("title"),
        required("credits", POSITIVE_NUMBER),
        required("level", POSITIVE_NUMBER),
        required("moduleLeader"),
        required("defaultTeachingHours", POSITIVE_NUMBER),
        required("defaultMarkingHours", POSITIVE_NUMBER),
    ),
)

MODULE_ITERATIONS = EntitySchema(
    kind=EntityKind.MODULE_ITERATIONS,
    label="module iterations",
    title="Module Iterations",
    payload_key="iterations",
    fields=(
        required("moduleCode"),
        required("title"),
        required("semester", POSITIVE_NUMBER),
        required("cohortId"),
        required("teachingStartDate"),
        required("teachingHours", POSITIVE_NUMBER),
        required("markingHours", POSITIVE_NUMBER),
        optional("assignedStatus"),
        optional("notes"),
    ),
)

LECTURERS = EntitySchema(
    kind=EntityKind.LECTURERS,
    label="lecturers",
    title="Lecturers",
    payload_key="lecturers",
    fields=(
        required("fullName"),
        required("team", TEAM),
        required("specialism"),
        required("contract"),
        required("email", EMAIL_SHAPE),
        required("capacity", POSITIVE_NUMBER),
        required("maxTeachingHours", POSITIVE_NUMBER),
        required("role"),
        optional("status"),
        optional("fte", POSITIVE_NUMBER),
    ),
)
