import re
from datetime import datetime, timezone
from urllib.parse import urlparse

from core.models import Platform
from core.services.errors import ParseError
from core.services.http import get_json, post_json
from core.services.platforms.base import HackathonEntry, PlatformAdapter, dict_rows, minutes_between

# Devpost submission periods: "Oct 01 - Nov 15, 2026", "Nov 01 - 15, 2026",
# "Dec 20, 2026 - Jan 10, 2027"
DEVPOST_FULL_RE = re.compile(r"([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2}),\s+(\d{4})")
DEVPOST_SAME_MONTH_RE = re.compile(r"([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2})\s*-\s*(\d{1,2}),\s+(\d{4})")
DEVPOST_DIFF_MONTH_RE = re.compile(
    r"([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2})\s*-\s*([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2}),\s+(\d{4})"
)
DAY_SECONDS = 24 * 3600


def _iso_to_unix(value):
    if not value:
        return None
    try:
        return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())
    except (AttributeError, TypeError, ValueError):
        return None


def _day_to_unix(month, day, year):
    parsed = datetime.strptime(f"{month.title()} {day} {year}", "%b %d %Y")
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def parse_submission_period(text):
    """
    Returns (start, end) Unix seconds for a Devpost date range, with end at the
    last second of the closing day (UTC), or None when the text does not parse.
    """
    if not isinstance(text, str):
        return None
    text = text.replace("\xa0", " ").strip()
    try:
        match = DEVPOST_SAME_MONTH_RE.search(text)
        if match:
            month, first, last, year = match.groups()
            start, end = _day_to_unix(month, first, year), _day_to_unix(month, last, year)
        else:
            match = DEVPOST_DIFF_MONTH_RE.search(text)
            if match:
                first_month, first, last_month, last, year = match.groups()
                start = _day_to_unix(first_month, first, year)
                end = _day_to_unix(last_month, last, year)
                # "Dec 20 - Jan 10, 2027" opens in the previous year
                if start > end:
                    start = _day_to_unix(first_month, first, int(year) - 1)
            else:
                days = DEVPOST_FULL_RE.findall(text)
                if not days:
                    return None
                start = _day_to_unix(*days[0])
                end = _day_to_unix(*days[-1])
    except ValueError:
        return None
    return start, end + DAY_SECONDS - 1


class DevfolioAdapter(PlatformAdapter):
    platform = Platform.DEVFOLIO
    SEARCH_URL = "https://api.devfolio.co/api/search/hackathons"
    HACKATHON_URL = "https://{slug}.devfolio.co/"

    def _load_hackathons(self):
        payload = post_json(self.SEARCH_URL, {"type": "application_open", "from": 0, "size": 100})
        try:
            hits = payload["hits"]["hits"]
        except (KeyError, TypeError) as e:
            raise ParseError("hits.hits missing", self.platform) from e

        hackathons = []
        for hit in dict_rows(hits):
            source = hit.get("_source")
            if not isinstance(source, dict):
                continue
            slug = source.get("slug")
            hack_settings = source.get("settings")
            if not isinstance(hack_settings, dict):
                hack_settings = {}
            reg_start = _iso_to_unix(hack_settings.get("reg_starts_at"))
            reg_end = _iso_to_unix(hack_settings.get("reg_ends_at"))
            if not slug or reg_start is None or reg_end is None:
                continue
            start = _iso_to_unix(source.get("starts_at"))
            end = _iso_to_unix(source.get("ends_at"))
            hackathons.append(
                HackathonEntry(
                    host=self.platform,
                    name=source.get("name") or slug,
                    vanity=slug,
                    url=self.HACKATHON_URL.format(slug=slug),
                    registration_start_time_unix=reg_start,
                    registration_end_time_unix=reg_end,
                    hackathon_start_time_unix=start,
                    duration=minutes_between(start, end),
                )
            )
        return hackathons


class DevpostAdapter(PlatformAdapter):
    platform = Platform.DEVPOST
    SEARCH_URL = "https://devpost.com/api/hackathons"
    MAX_PAGES = 5

    def _vanity(self, row):
        host = urlparse(str(row.get("url") or "")).hostname or ""
        if host.endswith(".devpost.com"):
            return host[: -len(".devpost.com")]
        return str(row.get("id") or "")

    def _load_hackathons(self):
        rows = []
        for page in range(1, self.MAX_PAGES + 1):
            payload = get_json(
                self.SEARCH_URL,
                params={"status[]": ["upcoming", "open"], "page": page},
            )
            batch = payload.get("hackathons") if isinstance(payload, dict) else None
            if not isinstance(batch, list):
                raise ParseError("hackathons missing", self.platform)
            if not batch:
                break
            rows.extend(dict_rows(batch))

        hackathons = []
        for row in rows:
            vanity = self._vanity(row)
            period = parse_submission_period(row.get("submission_period_dates"))
            url = row.get("url")
            if not vanity or not url or period is None:
                continue
            start, end = period
            hackathons.append(
                HackathonEntry(
                    host=self.platform,
                    name=row.get("title") or vanity,
                    vanity=vanity,
                    url=url,
                    registration_start_time_unix=start,
                    registration_end_time_unix=end,
                    hackathon_start_time_unix=start,
                    duration=minutes_between(start, end),
                )
            )
        return hackathons


class UnstopAdapter(PlatformAdapter):
    platform = Platform.UNSTOP
    SEARCH_URL = "https://unstop.com/api/public/opportunity/search-result"
    HACKATHON_URL = "https://unstop.com/{path}"

    def _load_hackathons(self):
        payload = get_json(
            self.SEARCH_URL,
            params={"opportunity": "hackathons", "per_page": 50, "oppstatus": "open"},
        )
        try:
            rows = payload["data"]["data"]
        except (KeyError, TypeError) as e:
            raise ParseError("data.data missing", self.platform) from e

        hackathons = []
        for row in dict_rows(rows):
            vanity = str(row.get("id") or "")
            regn = row.get("regnRequirements")
            if not isinstance(regn, dict):
                regn = {}
            reg_start = _iso_to_unix(regn.get("start_regn_dt"))
            reg_end = _iso_to_unix(regn.get("end_regn_dt"))
            if not vanity or reg_start is None or reg_end is None:
                continue
            start = _iso_to_unix(row.get("start_date"))
            end = _iso_to_unix(row.get("end_date"))
            public_url = str(row.get("public_url") or "")
            if not public_url.startswith("http"):
                public_url = self.HACKATHON_URL.format(path=public_url.lstrip("/"))
            hackathons.append(
                HackathonEntry(
                    host=self.platform,
                    name=row.get("title") or vanity,
                    vanity=vanity,
                    url=public_url,
                    registration_start_time_unix=reg_start,
                    registration_end_time_unix=reg_end,
                    hackathon_start_time_unix=start,
                    duration=minutes_between(start, end),
                )
            )
        return hackathons
