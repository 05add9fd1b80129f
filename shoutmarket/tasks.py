import asyncio
import logging

from .application.use_cases.prune_activity_logs import prune_activity_logs
from .celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def prune_activity_logs_task(self):
    """Daily activity log retention sweep."""
    try:
        return asyncio.run(prune_activity_logs())
    except Exception as exc:
        logger.error("Error pruning activity logs: %s", exc)
        # Retry the task
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))
