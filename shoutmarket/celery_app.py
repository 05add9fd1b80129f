from celery import Celery
from celery.schedules import crontab

from .core.config import settings

# Create Celery instance
celery_app = Celery(
    "shoutmarket",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["shoutmarket.tasks"]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,  # 1 hour
    task_routes={
        "shoutmarket.tasks.prune_activity_logs_task": {"queue": "maintenance"},
    },
    beat_schedule={
        "prune-activity-logs": {
            "task": "shoutmarket.tasks.prune_activity_logs_task",
            "schedule": crontab(hour=3, minute=0),
        },
    },
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    worker_max_tasks_per_child=1000,
)
