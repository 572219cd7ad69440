import logging
from dataclasses import dataclass

from core.services.errors import ParseError, PlatformError

logger = logging.getLogger(__name__)

# Raised by dict/list access on a payload whose shape changed upstream
SHAPE_ERRORS = (AttributeError, IndexError, KeyError, TypeError, ValueError)


@dataclass
class ProfileSnapshot:
    rating: int | None = None
    attended_contests_count: int | None = None
    badge: str | None = None
    total_questions: int | None = None
    easy_questions: int | None = None
    medium_questions: int | None = None
    hard_questions: int | None = None


@dataclass
class ContestEntry:
    host: str
    name: str
    vanity: str
    url: str
    start_time_unix: int
    duration: int


@dataclass
class HackathonEntry:
    host: str
    name: str
    vanity: str
    url: str
    registration_start_time_unix: int
    registration_end_time_unix: int
    hackathon_start_time_unix: int | None = None
    duration: int | None = None


class PlatformAdapter:
    """
    One external platform. Subclasses override the _load_* hooks they support;
    the public fetch_* methods apply the shared contract around them.
    """

    platform = None

    def fetch_profile(self, handle) -> ProfileSnapshot | None:
        handle = (handle or "").strip()
        if not handle:
            return None
        try:
            return self._load_profile(handle)
        except SHAPE_ERRORS as e:
            raise ParseError(
                f"Unexpected profile payload ({type(e).__name__}: {e})", self.platform, handle
            ) from e

    def fetch_contests(self) -> list[ContestEntry]:
        return self._fetch_list("contest", self._load_contests)

    def fetch_hackathons(self) -> list[HackathonEntry]:
        return self._fetch_list("hackathon", self._load_hackathons)

    def _fetch_list(self, kind, load):
        try:
            return load()
        except PlatformError as e:
            logger.warning("%s %s fetch failed: %s", self.platform, kind, e)
        except SHAPE_ERRORS as e:
            logger.warning(
                "%s %s fetch failed: unexpected payload (%s: %s)",
                self.platform, kind, type(e).__name__, e,
            )
        return []

    def _load_profile(self, handle):
        raise NotImplementedError(f"{self.platform} has no profile source")

    def _load_contests(self):
        return []

    def _load_hackathons(self):
        return []


def minutes_between(start_unix, end_unix):
    if start_unix is None or end_unix is None:
        return None
    return max(0, int((end_unix - start_unix) // 60))


def dict_rows(rows):
    """Drop list items that are not JSON objects."""
    return [row for row in rows or [] if isinstance(row, dict)]
