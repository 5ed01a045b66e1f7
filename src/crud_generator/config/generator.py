"""Generator configuration loading and validation.

Loads optional YAML configuration for naming conventions, schema
validation and logging.
"""
from __future__ import annotations
import os
import re
import yaml
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path("config/crudgen.yaml")

_IDENTIFIER_FRAGMENT = re.compile(r"^\w*$", re.ASCII)


class NamingConfig(BaseModel):
    """Parameter prefixes and package naming."""
    create_prefix: str = Field("c_", description="Prefix for create parameters")
    update_prefix: str = Field("u_", description="Prefix for update parameters")
    delete_prefix: str = Field("d_", description="Prefix for delete parameters")
    get_by_id_prefix: str = Field("gid_", description="Prefix for get-by-id parameters")
    package_suffix: str = Field("_package", description="Appended to the table name")

    @field_validator(
        "create_prefix", "update_prefix", "delete_prefix",
        "get_by_id_prefix", "package_suffix"
    )
    @classmethod
    def validate_fragment(cls, v: str) -> str:
        """Prefixes end up inside PL/SQL identifiers."""
        if not _IDENTIFIER_FRAGMENT.match(v):
            raise ValueError(f"'{v}' may only contain letters, digits and underscores")
        return v

    def package_name(self, table_name: str) -> str:
        return f"{table_name}{self.package_suffix}"


class ValidationConfig(BaseModel):
    """Schema validation applied before rendering."""
    require_primary_key: bool = Field(
        True,
        description="Reject tables without a .primarykey column"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING", description="Log level")
    format: str = Field(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging format string"
    )


class GeneratorConfig(BaseModel):
    """Complete generator configuration."""
    naming: NamingConfig = Field(default_factory=NamingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GeneratorConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated GeneratorConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls, env_var: str = "CRUDGEN_CONFIG") -> GeneratorConfig:
        """Load configuration from the path in an environment variable.

        Falls back to config/crudgen.yaml, then to built-in defaults.

        Args:
            env_var: Environment variable name (default: CRUDGEN_CONFIG)

        Returns:
            Validated GeneratorConfig instance
        """
        config_path = os.getenv(env_var)

        if not config_path:
            if DEFAULT_CONFIG_PATH.exists():
                return cls.from_yaml(DEFAULT_CONFIG_PATH)
            return cls()

        return cls.from_yaml(config_path)


def load_generator_config(config_path: str | Path | None = None) -> GeneratorConfig:
    """Load generator configuration from file or environment.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Validated GeneratorConfig instance

    Raises:
        FileNotFoundError: If an explicit or configured file is missing
        ValueError: If configuration is invalid
    """
    if config_path:
        return GeneratorConfig.from_yaml(config_path)

    return GeneratorConfig.from_env()
