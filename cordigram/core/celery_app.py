from celery import Celery
from celery.schedules import crontab

from .config import get_settings
from .logging import configure_logging

settings = get_settings()
configure_logging()

celery_app = Celery(
    "cordigram",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
)

beat_schedule = {}
if settings.MEMBER_COUNT_RECONCILE_ENABLED:
    # Repairs company member counts that drifted after partial workplace updates
    beat_schedule["reconcile-company-member-counts"] = {
        "task": "cordigram.services.reconciliation.reconcile_member_counts",
        "schedule": crontab(hour=settings.MEMBER_COUNT_RECONCILE_HOUR, minute=0),
    }

celery_app.conf.update(
    task_routes={
        "cordigram.services.reconciliation.reconcile_member_counts": {"queue": "maintenance"},
    },
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    imports=("cordigram.services.reconciliation",),
    beat_schedule=beat_schedule,
)
