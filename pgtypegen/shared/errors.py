"""Custom exceptions for the generator."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for every fatal generation error."""


class ConfigError(GeneratorError):
    """Raised when the command line or environment configuration is invalid."""

    def __init__(self, message: str, option: str | None = None) -> None:
        self.option = option
        if option:
            message = f"Option '{option}': {message}"
        super().__init__(message)


class DatabaseConnectionError(GeneratorError):
    """Raised when the database cannot be reached or rejects the credentials."""


class CatalogQueryError(GeneratorError):
    """Raised when a catalog query fails."""

    def __init__(self, message: str, query_name: str | None = None) -> None:
        self.query_name = query_name
        full_message = message if not query_name else f"[{query_name}] {message}"
        super().__init__(full_message)
