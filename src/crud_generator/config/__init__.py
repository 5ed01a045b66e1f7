"""Configuration management for the CRUD generator."""
from .generator import (
    GeneratorConfig,
    NamingConfig,
    ValidationConfig,
    LoggingConfig,
    load_generator_config,
)

__all__ = [
    "GeneratorConfig",
    "NamingConfig",
    "ValidationConfig",
    "LoggingConfig",
    "load_generator_config",
]
