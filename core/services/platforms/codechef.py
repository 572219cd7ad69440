import json
import re
from datetime import datetime

from bs4 import BeautifulSoup

from core.models import Platform
from core.services.errors import NoContestData, ParseError
from core.services.http import get_json, get_text
from core.services.platforms.base import ContestEntry, PlatformAdapter, ProfileSnapshot, dict_rows

SETTINGS_RE = re.compile(r"jQuery\.extend\(Drupal\.settings,\s*(\{.*?\})\);", re.DOTALL)

# (minimum rating, stars), highest first
STAR_THRESHOLDS = (
    (2500, 7),
    (2200, 6),
    (2000, 5),
    (1800, 4),
    (1600, 3),
    (1400, 2),
)


def stars_for_rating(rating):
    if rating is None:
        return None
    for minimum, stars in STAR_THRESHOLDS:
        if rating >= minimum:
            return f"{stars}★"
    return "1★"


def parse_profile_page(html: str) -> ProfileSnapshot:
    match = SETTINGS_RE.search(html)
    if not match:
        raise ParseError("User info not found on the page", Platform.CODECHEF)
    try:
        page_settings = json.loads(match.group(1))
    except ValueError as e:
        raise ParseError("Malformed Drupal.settings blob", Platform.CODECHEF) from e

    history = (page_settings.get("date_versus_rating") or {}).get("all") or []
    if not history:
        raise NoContestData("User has no contest data", Platform.CODECHEF)

    try:
        rating = int(history[-1]["rating"])
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError("Rating entry without a numeric rating", Platform.CODECHEF) from e

    badge = None
    soup = BeautifulSoup(html, "html.parser")
    star_el = soup.select_one(".rating")
    if star_el is not None:
        badge = star_el.get_text(strip=True) or None

    return ProfileSnapshot(
        rating=rating,
        attended_contests_count=len(history),
        badge=badge or stars_for_rating(rating),
    )


def _iso_to_unix(value):
    if not value:
        return None
    try:
        return int(datetime.fromisoformat(value).timestamp())
    except (TypeError, ValueError):
        return None


class CodeChefAdapter(PlatformAdapter):
    platform = Platform.CODECHEF
    PROFILE_URL = "https://www.codechef.com/users/{handle}"
    CONTESTS_URL = "https://www.codechef.com/api/list/contests/all"
    CONTEST_URL = "https://www.codechef.com/{code}"

    def _load_profile(self, handle):
        html = get_text(self.PROFILE_URL.format(handle=handle))
        try:
            return parse_profile_page(html)
        except ParseError as e:
            e.handle = handle
            raise

    def _load_contests(self):
        payload = get_json(
            self.CONTESTS_URL,
            params={
                "sort_by": "START",
                "sorting_order": "asc",
                "offset": 0,
                "mode": "all",
            },
        )
        future = payload.get("future_contests") if isinstance(payload, dict) else None
        if not isinstance(future, list):
            raise ParseError("future_contests missing", self.platform)

        contests = []
        for contest in dict_rows(future):
            code = str(contest.get("contest_code") or "")
            start = _iso_to_unix(contest.get("contest_start_date_iso"))
            if not code or start is None:
                continue
            try:
                duration = int(contest.get("contest_duration") or 0)
            except (TypeError, ValueError):
                duration = 0
            contests.append(
                ContestEntry(
                    host=self.platform,
                    name=contest.get("contest_name") or code,
                    vanity=code,
                    url=self.CONTEST_URL.format(code=code),
                    start_time_unix=start,
                    duration=duration,
                )
            )
        return contests
