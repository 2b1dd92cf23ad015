"""Unit tests for configuration management module."""

from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from depgraph.config import GraphConfig, load_config
from depgraph.graph.dependency_graph import DependencyGraph


@pytest.fixture
def valid_config_dict() -> dict[str, Any]:
    """Fixture providing valid configuration dictionary."""
    return {
        "circular": True,
        "logging_level": "DEBUG",
        "json_logs": True,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, valid_config_dict: dict[str, Any]) -> Path:
    """Fixture providing temporary YAML config file."""
    config_path = tmp_path / "depgraph.yaml"
    with config_path.open("w") as f:
        yaml.safe_dump(valid_config_dict, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration overrides from the environment."""
    for env_var in ("DEPGRAPH_CIRCULAR", "DEPGRAPH_LOGGING_LEVEL", "DEPGRAPH_JSON_LOGS"):
        monkeypatch.delenv(env_var, raising=False)


class TestGraphConfig:
    """Test the GraphConfig model."""

    def test_defaults(self):
        """Test default configuration values."""
        config = GraphConfig()

        assert config.circular is False
        assert config.logging_level == "INFO"
        assert config.json_logs is False

    def test_invalid_logging_level(self):
        """Test that an unknown logging level is rejected."""
        with pytest.raises(ValidationError):
            GraphConfig(logging_level="VERBOSE")

    def test_graph_from_config(self):
        """Test that the circular option reaches the graph."""
        graph = DependencyGraph.from_config(GraphConfig(circular=True))

        assert graph.circular


class TestYamlLoading:
    """Test loading configuration from YAML."""

    def test_from_yaml(self, temp_config_file: Path):
        """Test loading a valid configuration file."""
        config = GraphConfig.from_yaml(temp_config_file)

        assert config.circular is True
        assert config.logging_level == "DEBUG"
        assert config.json_logs is True

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            GraphConfig.from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path):
        """Test that an empty file raises ValueError."""
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(ValueError, match="empty"):
            GraphConfig.from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path: Path):
        """Test that malformed YAML raises ValueError."""
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("circular: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            GraphConfig.from_yaml(config_path)

    def test_non_mapping_yaml(self, tmp_path: Path):
        """Test that a YAML list is rejected."""
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- circular\n")

        with pytest.raises(ValueError, match="mapping"):
            GraphConfig.from_yaml(config_path)


class TestEnvironmentOverrides:
    """Test environment variable overrides."""

    def test_boolean_override(self, monkeypatch, temp_config_file: Path):
        """Test that a boolean variable overrides the file."""
        monkeypatch.setenv("DEPGRAPH_CIRCULAR", "false")

        config = GraphConfig.from_yaml(temp_config_file)

        assert config.circular is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE"])
    def test_truthy_values(self, monkeypatch, value):
        """Test accepted truthy spellings."""
        monkeypatch.setenv("DEPGRAPH_CIRCULAR", value)

        assert GraphConfig.from_env().circular is True

    def test_logging_level_override(self, monkeypatch):
        """Test overriding the logging level."""
        monkeypatch.setenv("DEPGRAPH_LOGGING_LEVEL", "WARNING")

        assert GraphConfig.from_env().logging_level == "WARNING"


class TestLoadConfig:
    """Test the load_config helper."""

    def test_explicit_path(self, temp_config_file: Path):
        """Test loading from an explicit path."""
        assert load_config(temp_config_file).circular is True

    def test_default_file_in_cwd(self, monkeypatch, temp_config_file: Path):
        """Test that depgraph.yaml in the working directory is picked up."""
        monkeypatch.chdir(temp_config_file.parent)

        assert load_config().logging_level == "DEBUG"

    def test_defaults_without_file(self, monkeypatch, tmp_path: Path):
        """Test falling back to defaults when no file exists."""
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config == GraphConfig()
