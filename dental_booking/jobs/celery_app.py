"""Celery application configuration"""

from celery import Celery
from dental_booking.config import settings

# Create Celery app
celery_app = Celery(
    "dental_booking",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "dental_booking.jobs.tasks",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Fail fast when the broker is down; notifications are best-effort
    broker_connection_timeout=2,
    task_publish_retry_policy={
        "max_retries": 1,
        "interval_start": 0,
        "interval_step": 0.2,
        "interval_max": 0.2,
    },
)
