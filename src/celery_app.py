"""Celery application configuration."""

from celery import Celery

from src.config import get_settings

settings = get_settings()

app = Celery(
    "recipe_share",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.csv_import"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=3600,  # large feeds upload one image per row
    task_soft_time_limit=3300,
    worker_prefetch_multiplier=1,
)
