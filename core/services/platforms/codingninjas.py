from core.models import Platform
from core.services.errors import ParseError
from core.services.http import get_json
from core.services.platforms.base import ContestEntry, PlatformAdapter, dict_rows, minutes_between


class CodingNinjasAdapter(PlatformAdapter):
    """Coding Ninjas Studio (now Code360) public contest list."""

    platform = Platform.CODINGNINJAS
    CONTESTS_URL = "https://api.codingninjas.com/api/v4/public_section/contest_list"
    CONTEST_URL = "https://www.naukri.com/code360/contests/{slug}"

    def _load_contests(self):
        payload = get_json(self.CONTESTS_URL)
        try:
            events = payload["data"]["events"]
        except (KeyError, TypeError) as e:
            raise ParseError("data.events missing", self.platform) from e
        if not isinstance(events, list):
            raise ParseError("data.events is not a list", self.platform)

        contests = []
        for event in dict_rows(events):
            slug = event.get("slug")
            try:
                start = int(event["event_start_time"])
                end = int(event["event_end_time"]) if event.get("event_end_time") else None
            except (KeyError, TypeError, ValueError):
                continue
            if not slug:
                continue
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
