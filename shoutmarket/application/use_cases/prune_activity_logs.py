"""Activity log retention"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ...core.config import settings
from ...db.database import SessionLocal, session_scope
from ...infrastructure.repositories.activity_log_repository_impl import ActivityLogRepositoryImpl

logger = logging.getLogger(__name__)


async def prune_activity_logs(
    session_factory=SessionLocal,
    retention_days: Optional[int] = None,
    max_entries: Optional[int] = None
) -> int:
    """Drop entries older than the retention window, then cap the table size"""
    retention_days = retention_days if retention_days is not None else settings.ACTIVITY_LOG_RETENTION_DAYS
    max_entries = max_entries if max_entries is not None else settings.ACTIVITY_LOG_MAX_ENTRIES
    cutoff = datetime.utcnow() - timedelta(days=retention_days)

    with session_scope(session_factory) as db:
        removed = await ActivityLogRepositoryImpl(db).prune(cutoff, max_entries)

    logger.info("Pruned %d activity log entries", removed)
    return removed
