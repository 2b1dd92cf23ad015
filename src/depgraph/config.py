"""Configuration Management with Pydantic.

This module implements the graph configuration model using Pydantic for
parsing and validation of YAML configuration files with environment variable
overrides.
"""

import os
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field

# Initialize logger
logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILES = ("depgraph.yaml", "depgraph.yml")

# Environment variable overrides: field name -> variable
ENV_OVERRIDES = {
    "circular": "DEPGRAPH_CIRCULAR",
    "logging_level": "DEPGRAPH_LOGGING_LEVEL",
    "json_logs": "DEPGRAPH_JSON_LOGS",
}
BOOLEAN_FIELDS = ("circular", "json_logs")


class GraphConfig(BaseModel):
    """Dependency graph configuration settings.

    Attributes:
        circular: Tolerate cycles in ordering queries instead of raising
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render logs as JSON instead of console output
    """

    circular: bool = Field(
        default=False,
        description="Tolerate dependency cycles",
    )
    logging_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=False,
        description="Use the JSON log renderer",
    )

    model_config = {"str_strip_whitespace": True}

    @classmethod
    def from_yaml(cls, path: str | Path) -> "GraphConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated GraphConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If the file is empty or not valid YAML
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if not config_data:
            msg = "Configuration file is empty"
            raise ValueError(msg)

        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls.from_env(config_data)

        logger.info(
            "configuration_loaded",
            circular=config.circular,
            logging_level=config.logging_level,
        )

        return config

    @classmethod
    def from_env(cls, config_data: dict | None = None) -> "GraphConfig":
        """Build configuration from a base dictionary plus environment overrides.

        Environment variables follow the pattern DEPGRAPH_<FIELD>, e.g.
        DEPGRAPH_CIRCULAR=true. Boolean values accept "true", "1" and "yes".

        Args:
            config_data: Base configuration values, defaults used when None

        Returns:
            Validated GraphConfig instance
        """
        config_data = dict(config_data or {})

        for key, env_var in ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            if key in BOOLEAN_FIELDS:
                config_data[key] = value.strip().lower() in ("true", "1", "yes")
            else:
                config_data[key] = value

            logger.debug("env_override_applied", env_var=env_var, config_path=key)

        return cls(**config_data)


def load_config(config_path: str | Path | None = None) -> GraphConfig:
    """Load configuration from file.

    Args:
        config_path: Path to configuration file. If None, looks for depgraph.yaml
            or depgraph.yml in the current directory and falls back to defaults
            plus environment overrides when neither exists.

    Returns:
        Loaded GraphConfig instance

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If the config file is invalid
    """
    if config_path is None:
        for default_name in DEFAULT_CONFIG_FILES:
            if Path(default_name).exists():
                config_path = default_name
                break
        else:
            logger.debug("no_configuration_file_found", candidates=list(DEFAULT_CONFIG_FILES))
            return GraphConfig.from_env()

    return GraphConfig.from_yaml(config_path)


__all__ = ["GraphConfig", "load_config"]
