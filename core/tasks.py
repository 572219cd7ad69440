import json
import logging
import time

import redis
from celery import shared_task
from django.conf import settings
from django.utils import timezone

from .models import Profile
from .services.refresh import refresh_user_if_stale
from .services.sync import (
    purge_upcoming_contests,
    purge_upcoming_hackathons,
    sync_contests,
    sync_hackathons,
)

logger = logging.getLogger(__name__)

_redis_client = None


def _get_redis_client():
    global _redis_client
    if _redis_client is None:
        url = getattr(settings, "CELERY_BROKER_URL", "redis://localhost:6379/0")
        _redis_client = redis.Redis.from_url(url)
    return _redis_client


def _set_task_health(task_name: str, payload: dict, ttl_seconds: int = 2 * 24 * 3600) -> None:
    data = {
        "task": task_name,
        "at": timezone.now().isoformat(),
        **(payload or {}),
    }
    try:
        _get_redis_client().set(
            f"task_health:{task_name}",
            json.dumps(data, default=str),
            ex=ttl_seconds,
        )
    except Exception:
        logger.exception("Failed to store task health for %s", task_name)


def _report_result(task_name: str, report) -> dict:
    result = {
        "status": "ok" if report.ok else "partial",
        "purged": report.purged,
        "platforms": {
            row.platform: {
                "fetched": row.fetched,
                "inserted": row.inserted,
                "duplicates": row.duplicates,
                "error": row.error,
            }
            for row in report.platforms
        },
        "duration_ms": report.duration_ms,
    }
    _set_task_health(task_name, result)
    return result


@shared_task
def sync_contests_task() -> dict:
    return _report_result("sync_contests", sync_contests())


@shared_task
def sync_hackathons_task() -> dict:
    return _report_result("sync_hackathons", sync_hackathons())


@shared_task
def purge_upcoming_contests_task() -> dict:
    result = {"status": "ok", "deleted": purge_upcoming_contests()}
    _set_task_health("purge_upcoming_contests", result)
    return result


@shared_task
def purge_upcoming_hackathons_task() -> dict:
    result = {"status": "ok", "deleted": purge_upcoming_hackathons()}
    _set_task_health("purge_upcoming_hackathons", result)
    return result


@shared_task
def refresh_profile(profile_id):
    try:
        profile = Profile.objects.select_related("user").get(id=profile_id)
    except Profile.DoesNotExist:
        return f"Profile with ID {profile_id} not found."

    before = profile.digitomize_rating
    refresh_user_if_stale(profile)
    return f"Refreshed {profile.username}: digitomize_rating {before} -> {profile.digitomize_rating}."


@shared_task
def refresh_all_profiles() -> dict:
    started = time.monotonic()
    profile_ids = list(Profile.objects.values_list("id", flat=True))
    for profile_id in profile_ids:
        refresh_profile.delay(profile_id)

    duration_ms = int((time.monotonic() - started) * 1000)
    logger.info("refresh_all_profiles enqueued=%s duration_ms=%s", len(profile_ids), duration_ms)
    result = {"status": "ok", "enqueued": len(profile_ids), "duration_ms": duration_ms}
    _set_task_health("refresh_all_profiles", result)
    return result
