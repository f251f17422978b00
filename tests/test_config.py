"""Tests for configuration system."""

from pathlib import Path

import pytest
import yaml

from workload_import.config import (
    ImportConfig,
    LoggingConfig,
    StoreConfig,
    UploadConfig,
    load_config,
)


def _write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestUploadConfig:
    """Tests for UploadConfig."""

    def test_defaults(self) -> None:
        """Test default upload settings."""
        config = UploadConfig()

        assert config.accepted_content_types == ["text/csv"]
        assert config.encoding == "utf-8"
        assert config.preview_rows == 3

    def test_content_types_normalized(self) -> None:
        """Test that content types are trimmed and lower-cased."""
        config = UploadConfig(accepted_content_types=[" Text/CSV "])

        assert config.accepted_content_types == ["text/csv"]

    def test_empty_content_types(self) -> None:
        """Test that at least one content type is required."""
        with pytest.raises(ValueError, match="At least one"):
            UploadConfig(accepted_content_types=[])

    def test_preview_rows_bounds(self) -> None:
        """Test that preview rows must be within range."""
        with pytest.raises(ValueError):
            UploadConfig(preview_rows=-1)

    def test_frozen(self) -> None:
        """Test that configs are immutable."""
        config = UploadConfig()

        with pytest.raises(ValueError):
            config.encoding = "latin-1"  # type: ignore[misc]


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_upper_cased(self) -> None:
        """Test that level names are normalized."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level(self) -> None:
        """Test that unknown levels are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            LoggingConfig(level="verbose")


class TestLoadConfig:
    """Tests for configuration loading."""

    def test_defaults_without_file(self) -> None:
        """Test that no file means default configuration."""
        config = load_config(None)

        assert config == ImportConfig()
        assert config.accepted_content_types == frozenset({"text/csv"})
        assert config.store.path == Path("./output/imports.json")
        assert config.store.imported_by is None

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test loading every section from YAML."""
        path = _write_yaml(
            tmp_path / "import.yaml",
            {
                "upload": {
                    "accepted_content_types": ["text/csv", "application/vnd.ms-excel"],
                    "preview_rows": 5,
                },
                "logging": {"level": "warning", "json_output": True},
                "store": {"path": "data/store.json", "imported_by": "registry-admin"},
            },
        )

        config = load_config(path)

        assert config.accepted_content_types == {"text/csv", "application/vnd.ms-excel"}
        assert config.upload.preview_rows == 5
        assert config.logging.level == "WARNING"
        assert config.logging.json_output is True
        assert config.store == StoreConfig(
            path=Path("data/store.json"), imported_by="registry-admin"
        )

    def test_env_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test ${VAR} and ${VAR:default} substitution."""
        monkeypatch.setenv("IMPORT_STORE", "/srv/imports.json")
        monkeypatch.delenv("IMPORT_USER", raising=False)
        path = _write_yaml(
            tmp_path / "import.yaml",
            {
                "logging": {"json_output": "${IMPORT_JSON_LOGS:false}"},
                "store": {"path": "${IMPORT_STORE}", "imported_by": "${IMPORT_USER}"},
            },
        )

        config = load_config(path)

        assert config.store.path == Path("/srv/imports.json")
        assert config.store.imported_by is None
        assert config.logging.json_output is False

    def test_base_inheritance(self, tmp_path: Path) -> None:
        """Test that base.yaml beside the file is deep-merged underneath."""
        _write_yaml(
            tmp_path / "base.yaml",
            {
                "upload": {"encoding": "latin-1", "preview_rows": 10},
                "logging": {"level": "DEBUG"},
            },
        )
        path = _write_yaml(tmp_path / "prod.yaml", {"upload": {"preview_rows": 2}})

        config = load_config(path)

        assert config.upload.encoding == "latin-1"
        assert config.upload.preview_rows == 2
        assert config.logging.level == "DEBUG"

    def test_explicit_base_path(self, tmp_path: Path) -> None:
        """Test passing the base file explicitly."""
        base = _write_yaml(tmp_path / "shared.yaml", {"store": {"imported_by": "ops"}})
        path = _write_yaml(tmp_path / "local.yaml", {"logging": {"level": "ERROR"}})

        config = load_config(path, base_path=base)

        assert config.store.imported_by == "ops"
        assert config.logging.level == "ERROR"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty YAML file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == ImportConfig()

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Test that invalid values fail validation."""
        path = _write_yaml(tmp_path / "bad.yaml", {"logging": {"level": "LOUD"}})

        with pytest.raises(ValueError, match="Unknown log level"):
            load_config(path)
