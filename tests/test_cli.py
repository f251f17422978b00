"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from workload_import import cli
from workload_import.schemas.entities import EntityKind
from workload_import.schemas.samples import SAMPLE_CSV

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring global logging during tests."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def invalid_modules_file(tmp_path: Path, partial_modules_csv: str) -> Path:
    """Write a module file with missing columns."""
    path = tmp_path / "partial.csv"
    path.write_text(partial_modules_csv, encoding="utf-8")
    return path


class TestInfoCommands:
    """Tests for version, fields and sample."""

    def test_version(self) -> None:
        """Test the version command."""
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert "workload-import version" in result.output

    def test_fields(self) -> None:
        """Test listing fields and rules for an entity."""
        result = runner.invoke(cli.app, ["fields", "--entity", "lecturers"])

        assert result.exit_code == 0
        assert "maxTeachingHours" in result.output
        assert "emailShape" in result.output

    def test_fields_overview(self) -> None:
        """Test that fields without an entity lists every importable entity."""
        result = runner.invoke(cli.app, ["fields"])

        assert result.exit_code == 0
        for name in ("modules", "module-iterations", "lecturers"):
            assert name in result.output

    def test_sample(self, tmp_path: Path) -> None:
        """Test writing a sample file into a directory."""
        result = runner.invoke(
            cli.app, ["sample", "--entity", "module-iterations", "--output", str(tmp_path)]
        )

        assert result.exit_code == 0
        written = tmp_path / "module-iterations-sample.csv"
        assert written.read_text(encoding="utf-8") == SAMPLE_CSV[EntityKind.MODULE_ITERATIONS]

    def test_unknown_entity(self, modules_file: Path) -> None:
        """Test that an unknown entity name is a usage error."""
        result = runner.invoke(cli.app, ["validate", str(modules_file), "--entity", "students"])

        assert result.exit_code != 0


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self, modules_file: Path) -> None:
        """Test that a valid file exits cleanly."""
        result = runner.invoke(cli.app, ["validate", str(modules_file), "--entity", "modules"])

        assert result.exit_code == 0
        assert "ready to import" in result.output

    def test_invalid_file(self, invalid_modules_file: Path) -> None:
        """Test that violations give exit code 1."""
        result = runner.invoke(
            cli.app, ["validate", str(invalid_modules_file), "--entity", "modules"]
        )

        assert result.exit_code == 1
        assert "level is required" in result.output

    def test_wrong_file_type(self, tmp_path: Path, modules_csv: str) -> None:
        """Test that a non-CSV file is rejected."""
        path = tmp_path / "modules.pdf"
        path.write_text(modules_csv, encoding="utf-8")

        result = runner.invoke(cli.app, ["validate", str(path), "--entity", "modules"])

        assert result.exit_code == 1
        assert "Please select a valid CSV file" in result.output

    def test_mapping_override(self, tmp_path: Path) -> None:
        """Test that --map fixes an unrecognized header."""
        path = tmp_path / "courses.csv"
        path.write_text(
            "Course,title,credits,level,moduleLeader,defaultTeachingHours,defaultMarkingHours\n"
            "CS101,Intro,20,4,Dr. Smith,40,10\n",
            encoding="utf-8",
        )

        without = runner.invoke(cli.app, ["validate", str(path), "--entity", "modules"])
        with_map = runner.invoke(
            cli.app, ["validate", str(path), "--entity", "modules", "--map", "Course=code"]
        )

        assert without.exit_code == 1
        assert with_map.exit_code == 0

    def test_bad_mapping_syntax(self, modules_file: Path) -> None:
        """Test that a --map value without '=' is a usage error."""
        result = runner.invoke(
            cli.app, ["validate", str(modules_file), "--entity", "modules", "--map", "code"]
        )

        assert result.exit_code == 2

    def test_unknown_mapping_column(self, modules_file: Path) -> None:
        """Test that mapping a missing column fails."""
        result = runner.invoke(
            cli.app,
            ["validate", str(modules_file), "--entity", "modules", "--map", "Campus=code"],
        )

        assert result.exit_code == 1
        assert "Unknown column" in result.output


class TestImportCommand:
    """Tests for the import command."""

    def test_import(self, modules_file: Path, tmp_path: Path) -> None:
        """Test a full import into the JSON store."""
        store = tmp_path / "store.json"

        result = runner.invoke(
            cli.app,
            ["import", str(modules_file), "--entity", "modules", "--store", str(store), "--yes"],
        )

        assert result.exit_code == 0
        assert "Successfully imported 2 modules" in result.output
        document = json.loads(store.read_text(encoding="utf-8"))
        assert [r["code"] for r in document["modules"]] == ["CS101", "CS102"]
        assert document["modules"][0]["credits"] == 20

    def test_import_with_violations(self, invalid_modules_file: Path, tmp_path: Path) -> None:
        """Test that nothing is written when the file has violations."""
        store = tmp_path / "store.json"

        result = runner.invoke(
            cli.app,
            [
                "import",
                str(invalid_modules_file),
                "--entity",
                "modules",
                "--store",
                str(store),
                "--yes",
            ],
        )

        assert result.exit_code == 1
        assert "Please fix validation errors before importing" in result.output
        assert not store.exists()

    def test_import_cancelled(self, modules_file: Path, tmp_path: Path) -> None:
        """Test that declining the mapping prompt writes nothing."""
        store = tmp_path / "store.json"

        result = runner.invoke(
            cli.app,
            ["import", str(modules_file), "--entity", "modules", "--store", str(store)],
            input="n\n",
        )

        assert result.exit_code == 1
        assert "Import cancelled" in result.output
        assert not store.exists()

    def test_import_confirmed_at_prompt(self, modules_file: Path, tmp_path: Path) -> None:
        """Test that accepting the prompt runs the import."""
        store = tmp_path / "store.json"

        result = runner.invoke(
            cli.app,
            ["import", str(modules_file), "--entity", "modules", "--store", str(store)],
            input="y\n",
        )

        assert result.exit_code == 0
        assert store.exists()

    def test_import_stamps_configured_identity(
        self, modules_file: Path, tmp_path: Path
    ) -> None:
        """Test that store.imported_by from config reaches the store."""
        store = tmp_path / "store.json"
        config = tmp_path / "import.yaml"
        config.write_text(
            f"store:\n  path: {store}\n  imported_by: registry-admin\n", encoding="utf-8"
        )

        result = runner.invoke(
            cli.app,
            ["import", str(modules_file), "--entity", "modules", "--config", str(config), "-y"],
        )

        assert result.exit_code == 0
        document = json.loads(store.read_text(encoding="utf-8"))
        assert document["modules"][0]["importedBy"] == "registry-admin"
