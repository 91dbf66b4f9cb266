"""Branch snapshot providers backed by Supabase or in-memory data."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Protocol, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import SnapshotUnavailableError
from ..models.domain import Branch
from .snapshot import parse_branches

logger = logging.getLogger(__name__)

BRANCH_COLUMNS = "id, name, zones, is_active, is_delivery_available, opening_time, closing_time"


class SnapshotProvider(Protocol):
    """Supplies the current set of active branches with their zones."""

    def fetch_active_branches(self) -> Sequence[Branch]:
        ...


class StaticSnapshotProvider:
    """Serve a fixed, already parsed snapshot."""

    def __init__(self, branches: Sequence[Branch] = ()) -> None:
        self._branches = tuple(branches)

    def fetch_active_branches(self) -> Sequence[Branch]:
        return self._branches


class SupabaseBranchRepository:
    """Read active branches from the branches table on every call.

    Nothing is cached between calls so admin edits to zones or delivery flags
    are visible on the very next request.
    """

    def __init__(
        self,
        client: Any | None = None,
        table: str | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self.table = table or settings.branches_table
        self.max_retries = max_retries if max_retries is not None else settings.snapshot_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.snapshot_backoff_seconds
        self._sleep = sleep

    def _get_client(self) -> Any:
        client = self._client if self._client is not None else get_supabase_client()
        if client is None:
            raise SnapshotUnavailableError("Supabase is not configured.")
        return client

    def _query(self, client: Any) -> list[dict]:
        response = (
            client.table(self.table)
            .select(BRANCH_COLUMNS)
            .eq("is_active", True)
            .execute()
        )
        data = response.data
        if data is None:
            raise SnapshotUnavailableError(f"Query on '{self.table}' returned no data.")
        return data

    def fetch_active_branches(self) -> Sequence[Branch]:
        client = self._get_client()
        attempt = 0
        while True:
            try:
                rows = self._query(client)
                break
            except Exception as exc:
                attempt += 1
                if attempt > self.max_retries:
                    logger.error(f"Failed to fetch branches from '{self.table}' after {attempt} attempt(s): {exc}")
                    raise SnapshotUnavailableError(f"Failed to fetch branches: {exc}") from exc
                wait_time = self.backoff_seconds * attempt
                logger.debug(
                    f"Branch fetch failed, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {exc}"
                )
                self._sleep(wait_time)

        branches = parse_branches(rows)
        logger.debug(f"Loaded {len(branches)} active branch(es) from '{self.table}'")
        return branches


def get_snapshot_provider() -> SnapshotProvider:
    """FastAPI dependency returning the storage-backed snapshot provider."""
    return SupabaseBranchRepository()
