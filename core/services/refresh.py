import enum
import logging
import time

from django.conf import settings
from django.db import transaction

from core.models import PlatformProfile, PROFILE_PLATFORMS
from core.services.errors import NoContestData, PlatformError
from core.services.platforms import PROFILE_ADAPTERS
from core.services.rating import compute_profile_rating

logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = (
    "rating",
    "attended_contests_count",
    "badge",
    "total_questions",
    "easy_questions",
    "medium_questions",
    "hard_questions",
)


class Freshness(enum.Enum):
    FRESH = "fresh"
    STALE = "stale"
    HIDDEN = "hidden"


def ttl_ms() -> int:
    return getattr(settings, "PLATFORM_REFRESH_TTL_HOURS", 12) * 3600 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def classify(platform_profile, now, ttl) -> Freshness:
    """Hidden platforms are never fetched, whatever their age."""
    if not platform_profile.show_on_website:
        return Freshness.HIDDEN
    if now - (platform_profile.fetch_time_ms or 0) < ttl:
        return Freshness.FRESH
    return Freshness.STALE


def _fetch(platform_profile):
    adapter = PROFILE_ADAPTERS[platform_profile.platform]
    handle = platform_profile.username
    try:
        return adapter.fetch_profile(handle)
    except NoContestData as e:
        logger.debug("No contest data for %s on %s: %s", handle, platform_profile.platform, e)
    except PlatformError as e:
        logger.warning(
            "Refresh failed for %s on %s (%s): %s",
            handle, platform_profile.platform, type(e).__name__, e,
        )
    except Exception:
        logger.exception("Unexpected error refreshing %s on %s", handle, platform_profile.platform)
    return None


def _apply_snapshot(platform_profile, snapshot, fetched_at):
    # Question totals only come from some platforms; keep stored ones otherwise
    for field in SNAPSHOT_FIELDS:
        value = getattr(snapshot, field)
        if value is not None or field in ("rating", "attended_contests_count", "badge"):
            setattr(platform_profile, field, value)
    platform_profile.fetch_time_ms = max(platform_profile.fetch_time_ms or 0, fetched_at)


def refresh_user_if_stale(profile, now=None, force=False):
    """
    Refetch every stale, visible platform of ``profile`` and persist the result in
    one batched write. Adapter failures keep the old data and timestamp so the next
    call retries; nothing is raised to the caller.

    ``force`` also refetches fresh platforms. Hidden ones are still skipped.
    """
    now = now if now is not None else now_ms()
    ttl = ttl_ms()

    changed = []
    for platform_profile in profile.platforms.filter(platform__in=PROFILE_PLATFORMS):
        if not platform_profile.username:
            continue
        state = classify(platform_profile, now, ttl)
        if state is Freshness.HIDDEN or (state is Freshness.FRESH and not force):
            continue
        snapshot = _fetch(platform_profile)
        if snapshot is None:
            continue
        _apply_snapshot(platform_profile, snapshot, now)
        changed.append(platform_profile)

    if not changed:
        return profile

    with transaction.atomic():
        PlatformProfile.objects.bulk_update(changed, [*SNAPSHOT_FIELDS, "fetch_time_ms"])
        profile.digitomize_rating = compute_profile_rating(profile)
        profile.save(update_fields=["digitomize_rating", "updated_at"])

    logger.info(
        "Refreshed %s platform(s) for %s, digitomize_rating=%s",
        len(changed), profile.username, profile.digitomize_rating,
    )
    return profile
