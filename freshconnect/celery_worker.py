# freshconnect/celery_worker.py
from celery import Celery

from freshconnect.utils.settings import Settings

celery_app = Celery("freshconnect")

# tasks have to be imported explicitly so the worker registers them
celery_app.conf.imports = ("freshconnect.services.notification_service",)
celery_app.conf.timezone = "UTC"


def configure_celery(settings: Settings) -> Celery:
    """Point the shared Celery app at the broker and backend from settings."""
    celery_app.conf.update(
        broker_url=settings.celery_broker_url,
        result_backend=settings.celery_result_backend,
        task_always_eager=settings.celery_task_always_eager,
    )
    return celery_app


# `celery -A freshconnect.celery_worker worker` has no app factory
configure_celery(Settings.from_env())
