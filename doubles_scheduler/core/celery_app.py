"""
Celery configuration for async schedule generation.
"""

from celery import Celery
import os

# Redis broker and result backend
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

celery_app = Celery(
    "doubles_scheduler",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["doubles_scheduler.tasks.scheduler_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=os.getenv("SCHEDULER_TIMEZONE", "Asia/Taipei"),
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,
    task_soft_time_limit=90,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
    # Schedules are polled once from /api/schedule/status and then discarded
    result_expires=3600,
)
