"""Session start-up: warehouse selection and role activation.

The configured warehouse is validated against `SHOW WAREHOUSES` before it
is activated. A missing warehouse never fails the run; a fallback
warehouse is activated instead.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sfmap.core.models import WarehouseInfo
from sfmap.core.retry import NO_RETRY, RetryPolicy, with_retry

logger = logging.getLogger(__name__)


class WarehouseAdapter(Protocol):
    """Interface for the warehouse and role statements used at start-up."""

    def list_warehouses(self) -> list[WarehouseInfo]:
        """Return all warehouses visible to the current role."""
        ...

    def use_warehouse(self, name: str) -> None:
        """Activate a warehouse for the session."""
        ...

    def use_role(self, name: str) -> None:
        """Activate a role for the session."""
        ...


def select_warehouse(
    adapter: WarehouseAdapter,
    requested: str,
    fallback: str,
    *,
    retry: RetryPolicy = NO_RETRY,
) -> str:
    """
    Activate `requested` if it exists (case-insensitive), else `fallback`.

    Listing the warehouses follows `retry`; a missing warehouse is never
    an error.

    Returns:
        The name of the warehouse that was activated.
    """
    logger.info("Setting warehouse to: %s", requested)
    warehouses = with_retry(
        adapter.list_warehouses, retry, description="list warehouses"
    )
    names = [w.name for w in warehouses]
    logger.info("Available warehouses: %s", ", ".join(names) or "(none)")

    want = requested.casefold()
    if any(n.casefold() == want for n in names):
        target = requested
    else:
        logger.warning(
            "Warehouse '%s' not found, falling back to %s", requested, fallback
        )
        target = fallback

    adapter.use_warehouse(target)
    return target


def prepare_session(
    adapter: WarehouseAdapter,
    *,
    warehouse: str,
    fallback_warehouse: str,
    role: str | None,
    retry: RetryPolicy = NO_RETRY,
) -> str:
    """Select the warehouse, then the role. Returns the active warehouse."""
    active = select_warehouse(adapter, warehouse, fallback_warehouse, retry=retry)
    if role:
        adapter.use_role(role)
    return active
