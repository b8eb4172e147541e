"""Supabase implementation of the watchlist repository."""
from datetime import datetime
import logging

from finnolan.domain.interfaces import WatchlistRepository
from finnolan.repository.supabase_client import SupabaseConnection

logger = logging.getLogger(__name__)

TABLE = "watchlist"


class SupabaseWatchlistRepository(WatchlistRepository):
    """Watchlist rows live in the ``watchlist`` table owned by the client app."""

    def __init__(self, connection: SupabaseConnection):
        self._conn = connection

    async def mark_alert_sent(self, watchlist_id: str, sent_at: datetime) -> None:
        await self._conn.update(
            TABLE,
            {"last_alert_sent": sent_at.isoformat()},
            {"id": f"eq.{watchlist_id}"},
        )
        logger.info(f"Recorded alert sent for watchlist entry {watchlist_id}")
