import logging
import os

from celery import Celery
from celery.signals import worker_ready

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "digitomize_project.settings")

logger = logging.getLogger(__name__)

app = Celery("digitomize_project")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


@worker_ready.connect
def _sync_on_startup(sender=None, **kwargs):
    from django.conf import settings

    if not getattr(settings, "SYNC_ON_WORKER_START", True):
        return

    # Beat only fires after the first interval elapses.
    from core.tasks import sync_contests_task, sync_hackathons_task

    sync_contests_task.delay()
    sync_hackathons_task.delay()
    logger.info("Queued startup contest and hackathon sync.")
