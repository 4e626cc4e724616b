"""Shared utilities for the generator."""

from .config import (
    GeneratorConfig,
    add_config_arguments,
    build_conninfo,
    redact_conninfo,
)
from .diagnostics import Diagnostics
from .errors import (
    CatalogQueryError,
    ConfigError,
    DatabaseConnectionError,
    GeneratorError,
)
from .naming import (
    RUST_KEYWORDS,
    sanitize_field_name,
    sanitize_type_name,
    singularize,
    to_pascal_case,
    to_snake_case,
)

__all__ = [
    # Configuration
    "GeneratorConfig",
    "add_config_arguments",
    "build_conninfo",
    "redact_conninfo",
    # Diagnostics
    "Diagnostics",
    # Naming utilities
    "to_pascal_case",
    "to_snake_case",
    "singularize",
    "sanitize_type_name",
    "sanitize_field_name",
    "RUST_KEYWORDS",
    # Errors
    "GeneratorError",
    "ConfigError",
    "DatabaseConnectionError",
    "CatalogQueryError",
]
