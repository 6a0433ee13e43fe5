"""Configuration for Snowflake access and mapping runs.

Connection settings come from environment variables, optionally seeded from
a `.env` file in the working directory. Run options come from the CLI.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from sfmap.core.errors import MissingEnvVar
from sfmap.core.retry import RetryPolicy

DEFAULT_ROLE = "SALES"
DEFAULT_FALLBACK_WAREHOUSE = "COMPUTE_WH"
DEFAULT_TIMEOUT_SECONDS = 30

_UNSAFE_FILE_CHARS = re.compile(r"[\\/\x00]")


def safe_file_stem(name: str) -> str:
    """Return `name` usable as a single file name (no separators, never `.` or `..`)."""
    stem = _UNSAFE_FILE_CHARS.sub("_", name)
    if stem in ("", ".", ".."):
        stem = stem.replace(".", "_") or "_"
    return stem


def _required(environ: Mapping[str, str], name: str) -> str:
    """Return a required variable, treating blank values as missing."""
    value = (environ.get(name) or "").strip()
    if not value:
        raise MissingEnvVar(name)
    return value


def _optional(environ: Mapping[str, str], name: str) -> str | None:
    value = (environ.get(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class SnowflakeConfig:
    """Connection settings for one Snowflake account."""

    account: str
    username: str
    password: str = field(repr=False)
    warehouse: str
    database: str | None = None
    role: str = DEFAULT_ROLE
    timeout: int = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SnowflakeConfig":
        """
        Build a config from environment variables.

        Required: SNOWFLAKE_ACCOUNT, SNOWFLAKE_USERNAME, SNOWFLAKE_PASSWORD,
        SNOWFLAKE_WAREHOUSE. Optional: SNOWFLAKE_DATABASE, SNOWFLAKE_ROLE
        (defaults to SALES).

        Raises:
            MissingEnvVar: If a required variable is unset or blank.
        """
        env = os.environ if environ is None else environ
        return cls(
            account=_required(env, "SNOWFLAKE_ACCOUNT"),
            username=_required(env, "SNOWFLAKE_USERNAME"),
            password=_required(env, "SNOWFLAKE_PASSWORD"),
            warehouse=_required(env, "SNOWFLAKE_WAREHOUSE"),
            database=_optional(env, "SNOWFLAKE_DATABASE"),
            role=_optional(env, "SNOWFLAKE_ROLE") or DEFAULT_ROLE,
        )


def load_config() -> SnowflakeConfig:
    """Load `.env` from the working directory (if any), then read the environment."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        # exported variables win over the .env file
        load_dotenv(dotenv_path, override=False)
    return SnowflakeConfig.from_env()


@dataclass(frozen=True)
class RunOptions:
    """Options controlling one mapping run."""

    output_dir: Path = Path("output")
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    skip_failed: bool = False
    fallback_warehouse: str = DEFAULT_FALLBACK_WAREHOUSE
    write_catalog: bool = False

    def output_path(self, database: str) -> Path:
        """
        Return the artifact path for a database.

        Path separators in the name are replaced with `_` so the file
        always lands directly inside `output_dir`.
        """
        return self.output_dir / f"{safe_file_stem(database)}.json"
