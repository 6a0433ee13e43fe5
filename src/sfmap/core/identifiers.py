"""Snowflake identifier handling.

Names coming from the catalog (`SHOW DATABASES`, `SHOW WAREHOUSES`) are
stored in their exact case and must be quoted verbatim. Names typed by a
user follow Snowflake's unquoted-identifier rule: a plain identifier is
resolved upper-cased, while `"quoted"` input keeps its case.
"""

from __future__ import annotations

import re

_PLAIN_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def normalize_identifier(name: str) -> str:
    """
    Return the stored form of a user-supplied identifier.

    `sales_db` -> `SALES_DB`, `"sales_db"` -> `sales_db`, `my-db` -> `my-db`.
    """
    name = name.strip()
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        return name[1:-1].replace('""', '"')
    if _PLAIN_IDENTIFIER.match(name):
        return name.upper()
    return name


def quote_identifier(name: str) -> str:
    """Quote a stored identifier exactly, doubling embedded quotes."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'
