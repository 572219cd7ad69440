from datetime import datetime
from zoneinfo import ZoneInfo

from core.models import Platform
from core.services.errors import ParseError
from core.services.http import get_json
from core.services.platforms.base import ContestEntry, PlatformAdapter, dict_rows, minutes_between

# The events API reports wall-clock times in India Standard Time
IST = ZoneInfo("Asia/Kolkata")


def _ist_to_unix(value):
    if not value:
        return None
    try:
        naive = datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError):
        return None
    return int(naive.replace(tzinfo=IST).timestamp())


class GeeksforGeeksAdapter(PlatformAdapter):
    platform = Platform.GEEKSFORGEEKS
    EVENTS_URL = "https://practiceapi.geeksforgeeks.org/api/vr/events/"
    CONTEST_URL = "https://practice.geeksforgeeks.org/contest/{slug}"

    def _load_contests(self):
        payload = get_json(self.EVENTS_URL, params={"page_number": 1, "sub_type": "upcoming"})
        try:
            upcoming = payload["results"]["upcoming"]
        except (KeyError, TypeError) as e:
            raise ParseError("results.upcoming missing", self.platform) from e

        contests = []
        for event in dict_rows(upcoming):
            slug = event.get("slug")
            start = _ist_to_unix(event.get("start_time"))
            if not slug or start is None:
                continue
            end = _ist_to_unix(event.get("end_time"))
            contests.append(
                ContestEntry(
                    host=self.platform,
                    name=event.get("name") or slug,
                    vanity=slug,
                    url=self.CONTEST_URL.format(slug=slug),
                    start_time_unix=start,
                    duration=minutes_between(start, end) or 0,
                )
            )
        return contests
