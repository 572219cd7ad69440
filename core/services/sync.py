import logging
import time
from dataclasses import asdict, dataclass, field

from django.db import DatabaseError

from core.models import Contest, Hackathon, UpcomingContest, UpcomingHackathon
from core.services.errors import DuplicateKeyConflict
from core.services.platforms import CONTEST_ADAPTERS, HACKATHON_ADAPTERS

logger = logging.getLogger(__name__)


@dataclass
class PlatformSyncResult:
    platform: str
    fetched: int = 0
    inserted: dict = field(default_factory=dict)
    duplicates: dict = field(default_factory=dict)
    error: str | None = None


@dataclass
class SyncReport:
    kind: str
    purged: int = 0
    platforms: list = field(default_factory=list)
    duration_ms: int = 0

    @property
    def ok(self):
        return all(row.error is None for row in self.platforms)

    def as_dict(self):
        return asdict(self)


def insert_unordered(model, entries):
    """
    Insert every entry whose (host, vanity) key is not already stored, the way an
    unordered bulk write does: conflicting rows are skipped, the rest are written,
    and DuplicateKeyConflict is raised afterwards if anything was skipped.

    Returns the number of rows submitted to the insert. A row that a concurrent
    sync writes between the key lookup and the insert is dropped silently by the
    unique constraint and still counted, so the figure is an upper bound.
    """
    label = model.__name__
    keys = [(entry.host, entry.vanity) for entry in entries]
    existing = set(
        model.objects.filter(
            host__in={host for host, _ in keys},
            vanity__in={vanity for _, vanity in keys},
        ).values_list("host", "vanity")
    )

    rows = []
    duplicates = []
    seen = set(existing)
    for key, entry in zip(keys, entries):
        if key in seen:
            duplicates.append(key)
            continue
        seen.add(key)
        rows.append(model(**asdict(entry)))

    model.objects.bulk_create(rows, ignore_conflicts=True)
    inserted = len(rows)

    if duplicates:
        raise DuplicateKeyConflict(label, duplicates, inserted)
    return inserted


def purge_upcoming_contests(now=None) -> int:
    now = int(now if now is not None else time.time())
    try:
        deleted, _ = UpcomingContest.objects.filter(start_time_unix__lt=now).delete()
    except DatabaseError:
        logger.exception("Error while deleting contests that already started")
        return 0
    logger.info("Deleted %s upcoming contest(s) that already started", deleted)
    return deleted


def purge_upcoming_hackathons(now=None) -> int:
    now = int(now if now is not None else time.time())
    try:
        deleted, _ = UpcomingHackathon.objects.filter(registration_end_time_unix__lt=now).delete()
    except DatabaseError:
        logger.exception("Error while deleting hackathons whose registrations have closed")
        return 0
    logger.info("Deleted %s hackathon(s) whose registrations have closed", deleted)
    return deleted


def _store(result, entries, models):
    for model in models:
        try:
            result.inserted[model.__name__] = insert_unordered(model, entries)
        except DuplicateKeyConflict as e:
            result.inserted[model.__name__] = e.inserted
            result.duplicates[model.__name__] = len(e.duplicates)
            logger.info("Some duplicate(s) in %s for %s", e.model_label, result.platform)


def _run(kind, adapters, fetch, sort_key, models, purge):
    started = time.monotonic()
    report = SyncReport(kind=kind, purged=purge())

    for platform, adapter in adapters.items():
        result = PlatformSyncResult(platform=str(platform))
        try:
            entries = sorted(fetch(adapter), key=sort_key)
            result.fetched = len(entries)
            _store(result, entries, models)
        except Exception as e:
            logger.exception("Error adding %s to the database for %s", kind, platform)
            result.error = str(e) or type(e).__name__
        report.platforms.append(result)

    report.duration_ms = int((time.monotonic() - started) * 1000)
    logger.info(
        "sync_%s platforms=%s purged=%s duration_ms=%s",
        kind, len(report.platforms), report.purged, report.duration_ms,
    )
    return report


def sync_contests() -> SyncReport:
    return _run(
        "contests",
        CONTEST_ADAPTERS,
        lambda adapter: adapter.fetch_contests(),
        lambda entry: entry.start_time_unix,
        (UpcomingContest, Contest),
        purge_upcoming_contests,
    )


def sync_hackathons() -> SyncReport:
    return _run(
        "hackathons",
        HACKATHON_ADAPTERS,
        lambda adapter: adapter.fetch_hackathons(),
        lambda entry: entry.registration_start_time_unix,
        (UpcomingHackathon, Hackathon),
        purge_upcoming_hackathons,
    )
