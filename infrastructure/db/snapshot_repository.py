"""
Supabase implementation of RemoteSnapshotStore.

The whole lifting-log snapshot lives in one row of the ``lifting_logs``
table: ``{id: <fixed string>, data: <snapshot JSON>, updated_at: <ISO-8601>}``.
Every save overwrites that row; there is no partial update.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError
from supabase import Client

from domain.models import Snapshot, parse_snapshot

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "lifting_logs"
DEFAULT_ROW_ID = "main"


class SupabaseSnapshotRepository:
    """
    Supabase implementation of the RemoteSnapshotStore and RemoteRowReader protocols.

    The client is injected via constructor for testability.
    """

    def __init__(
        self,
        client: Client,
        *,
        table: str = DEFAULT_TABLE,
        row_id: str = DEFAULT_ROW_ID,
    ):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Table holding the snapshot row
            row_id: Fixed identifier of the snapshot row
        """
        self._client = client
        self._table = table
        self._row_id = row_id

    @property
    def row_id(self) -> str:
        return self._row_id

    def fetch_row(self) -> Optional[Dict[str, Any]]:
        """
        Read the raw snapshot row. Backend errors propagate.

        Returns:
            ``{"data": ..., "updated_at": ...}`` or None if the row does not exist
        """
        result = (
            self._client.table(self._table)
            .select("data, updated_at")
            .eq("id", self._row_id)
            .limit(1)
            .execute()
        )
        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def load(self) -> Optional[Snapshot]:
        """Fetch and validate the snapshot; None on any failure."""
        try:
            row = self.fetch_row()
        except Exception:
            logger.exception(f"Error loading snapshot row '{self._row_id}'")
            return None

        if not row:
            logger.info(f"No remote snapshot row '{self._row_id}'")
            return None

        data = row.get("data")
        if not isinstance(data, dict):
            logger.warning(f"Remote snapshot row '{self._row_id}' has no usable data field")
            return None

        try:
            return parse_snapshot(data)
        except ValidationError as e:
            logger.warning(
                f"Remote snapshot row '{self._row_id}' failed validation: "
                f"{e.error_count()} error(s)"
            )
            return None

    def save(self, snapshot: Snapshot) -> bool:
        """Upsert the snapshot row; last writer wins."""
        row = {
            "id": self._row_id,
            "data": snapshot.to_document(),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._client.table(self._table).upsert(row, on_conflict="id").execute()
        except Exception:
            logger.exception(f"Error saving snapshot row '{self._row_id}'")
            return False

        logger.info(f"Snapshot row '{self._row_id}' saved")
        return True


class OfflineSnapshotRepository:
    """
    Remote store used when no Supabase credentials are configured.

    Behaves like an unreachable backend: nothing is ever loaded and saves
    are dropped.
    """

    def fetch_row(self) -> Optional[Dict[str, Any]]:
        return None

    def load(self) -> Optional[Snapshot]:
        logger.debug("Remote sync disabled; no snapshot loaded")
        return None

    def save(self, snapshot: Snapshot) -> bool:
        logger.debug("Remote sync disabled; snapshot not pushed")
        return False
