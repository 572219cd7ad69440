from datetime import datetime

from bs4 import BeautifulSoup

from core.models import Platform
from core.services.errors import ParseError
from core.services.http import get_text
from core.services.platforms.base import ContestEntry, PlatformAdapter

TIME_FORMAT = "%Y-%m-%d %H:%M:%S%z"


def _duration_minutes(text):
    try:
        hours, minutes = text.strip().split(":")
        return int(hours) * 60 + int(minutes)
    except ValueError:
        return 0


def parse_upcoming_table(html: str) -> list[ContestEntry]:
    soup = BeautifulSoup(html, "html.parser")
    table = soup.select_one("#contest-table-upcoming")
    if table is None:
        raise ParseError("Upcoming contest table not found", Platform.ATCODER)

    contests = []
    for row in table.select("tbody tr"):
        cells = row.find_all("td")
        if len(cells) < 3:
            continue
        time_el = cells[0].find("time")
        link = cells[1].find("a", href=True)
        if time_el is None or link is None:
            continue
        try:
            start = datetime.strptime(time_el.get_text(strip=True), TIME_FORMAT)
        except ValueError:
            continue
        vanity = link["href"].rstrip("/").split("/")[-1]
        contests.append(
            ContestEntry(
                host=Platform.ATCODER,
                name=link.get_text(strip=True),
                vanity=vanity,
                url=f"https://atcoder.jp/contests/{vanity}",
                start_time_unix=int(start.timestamp()),
                duration=_duration_minutes(cells[2].get_text()),
            )
        )
    return contests


class AtCoderAdapter(PlatformAdapter):
    platform = Platform.ATCODER
    CONTESTS_URL = "https://atcoder.jp/contests/"

    def _load_contests(self):
        return parse_upcoming_table(get_text(self.CONTESTS_URL, params={"lang": "en"}))
