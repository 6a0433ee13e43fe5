"""Error taxonomy for the schema mapper.

All errors derive from `MapperError` so the orchestrator and CLI can tell
expected operational failures apart from programming errors.
"""

from __future__ import annotations

from pathlib import Path


class MapperError(RuntimeError):
    """Base class for all schema mapper failures."""


class SnowflakeConnectionError(MapperError):
    """Raised when a Snowflake session cannot be established."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to connect to Snowflake: {message}")


class QueryError(MapperError):
    """Raised when a statement fails; the message names the statement's intent."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to execute query: {message}")


class ColumnError(MapperError):
    """Raised when one field of a result row cannot be decoded."""

    def __init__(self, column: str, message: str) -> None:
        self.column = column
        self.message = message
        super().__init__(f"Failed to read column {column}: {message}")


class OutputError(MapperError):
    """Raised when an output artifact cannot be written."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write output to {self.path}: {cause}")


class MissingEnvVar(MapperError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required environment variable: {name}")
