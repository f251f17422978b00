"""Tests for column mapping inference and edits."""

import pytest

from workload_import.mapping import (
    infer_mapping,
    normalize_header,
    remap,
    resolve_column,
    unmapped_fields,
)
from workload_import.schemas.entities import LECTURERS, MODULE_ITERATIONS, MODULES


class TestNormalizeHeader:
    """Tests for header normalization."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Module Code", "modulecode"),
            ("  credits ", "credits"),
            ("MAX\tTeaching Hours", "maxteachinghours"),
            ("", ""),
        ],
    )
    def test_normalize(self, header: str, expected: str) -> None:
        """Test lower-casing and whitespace removal."""
        assert normalize_header(header) == expected


class TestInferMapping:
    """Tests for infer_mapping."""

    def test_exact_headers(self) -> None:
        """Test that headers equal to field names map to themselves."""
        mapping = infer_mapping(MODULES.field_names, MODULES.field_names)

        assert mapping == {name: name for name in MODULES.field_names}

    def test_case_and_whitespace_insensitive(self) -> None:
        """Test that display-style headers still find their field."""
        mapping = infer_mapping(
            ["Module Code", "Title", "Teaching Hours"], MODULE_ITERATIONS.field_names
        )

        assert mapping == {
            "Module Code": "moduleCode",
            "Title": "title",
            "Teaching Hours": "teachingHours",
        }

    def test_containment_matches(self) -> None:
        """Test that a header contained in a field name maps to it."""
        mapping = infer_mapping(["credit", "leader"], MODULES.field_names)

        assert mapping == {"credit": "credits", "leader": "moduleLeader"}

    def test_first_declared_field_wins(self) -> None:
        """Test that ties resolve to the earliest declared field."""
        # "hours" is contained in both hour fields; teaching is declared first
        mapping = infer_mapping(["hours"], MODULES.field_names)

        assert mapping == {"hours": "defaultTeachingHours"}

    def test_unmatched_headers_left_out(self) -> None:
        """Test that headers matching no field are not mapped."""
        mapping = infer_mapping(["code", "Campus"], MODULES.field_names)

        assert mapping == {"code": "code"}

    def test_blank_header_never_mapped(self) -> None:
        """Test that an empty header does not match by containment."""
        mapping = infer_mapping(["", "code"], MODULES.field_names)

        assert "" not in mapping
        assert mapping == {"code": "code"}

    def test_same_field_from_two_headers(self) -> None:
        """Test that two headers may map to the same field."""
        mapping = infer_mapping(["code", "Code"], MODULES.field_names)

        assert mapping == {"code": "code", "Code": "code"}

    def test_mapping_in_header_order(self) -> None:
        """Test that the result follows upload column order."""
        headers = ["fullName", "email", "team", "specialism", "contract", "role", "fte"]
        mapping = infer_mapping(headers, LECTURERS.field_names)

        assert list(mapping) == headers
        assert mapping["fte"] == "fte"

    def test_no_headers(self) -> None:
        """Test that an empty header row gives an empty mapping."""
        assert infer_mapping([], MODULES.field_names) == {}


class TestResolveColumn:
    """Tests for resolve_column and unmapped_fields."""

    def test_first_column_wins(self) -> None:
        """Test that the first column in mapping order feeds the field."""
        mapping = {"code": "code", "Code": "code"}

        assert resolve_column(mapping, "code") == "code"

    def test_unmapped_field(self) -> None:
        """Test that an unmapped field resolves to None."""
        assert resolve_column({"code": "code"}, "title") is None

    def test_unmapped_fields_in_declaration_order(self) -> None:
        """Test listing required fields without a column."""
        mapping = {"code": "code", "title": "title", "credits": "credits"}

        assert unmapped_fields(mapping, MODULES.required_fields) == [
            "level",
            "moduleLeader",
            "defaultTeachingHours",
            "defaultMarkingHours",
        ]


class TestRemap:
    """Tests for manual mapping edits."""

    def test_assign_field(self) -> None:
        """Test assigning an unmapped column to a field."""
        headers = ["Course", "title"]
        mapping = remap(
            {"title": "title"},
            "Course",
            "code",
            headers=headers,
            target_fields=MODULES.field_names,
        )

        assert mapping == {"Course": "code", "title": "title"}
        assert list(mapping) == headers

    def test_unassign_column(self) -> None:
        """Test that None removes a column from the mapping."""
        mapping = remap(
            {"code": "code", "title": "title"},
            "title",
            None,
            headers=["code", "title"],
            target_fields=MODULES.field_names,
        )

        assert mapping == {"code": "code"}

    def test_original_not_modified(self) -> None:
        """Test that remap returns a new mapping."""
        original = {"code": "code"}
        remap(original, "code", "title", headers=["code"], target_fields=MODULES.field_names)

        assert original == {"code": "code"}

    def test_unknown_column(self) -> None:
        """Test that a column not in the upload is rejected."""
        with pytest.raises(ValueError, match="Unknown column"):
            remap({}, "missing", "code", headers=["code"], target_fields=MODULES.field_names)

    def test_unknown_field(self) -> None:
        """Test that a field the entity does not have is rejected."""
        with pytest.raises(ValueError, match="Unknown field"):
            remap({}, "code", "email", headers=["code"], target_fields=MODULES.field_names)
