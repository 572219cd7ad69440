from core.models import Platform
from core.services.errors import NotFound, ParseError
from core.services.http import get_json
from core.services.platforms.base import ContestEntry, PlatformAdapter, ProfileSnapshot, dict_rows


class CodeforcesAdapter(PlatformAdapter):
    platform = Platform.CODEFORCES
    BASE_URL = "https://codeforces.com/api"
    CONTEST_URL = "https://codeforces.com/contests/{id}"

    def _call(self, method, params=None, handle=None):
        # Codeforces answers 400 with a JSON body for unknown handles
        data = get_json(f"{self.BASE_URL}/{method}", params=params, accept_statuses=(400,))
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected {method} payload", self.platform, handle)
        if data.get("status") != "OK":
            comment = str(data.get("comment") or "")
            if "not found" in comment.lower():
                raise NotFound(comment, self.platform, handle)
            raise ParseError(f"Codeforces {method} error: {comment}", self.platform, handle)
        return data.get("result")

    def _load_profile(self, handle):
        result = self._call("user.info", {"handles": handle}, handle)
        if not result:
            raise NotFound(f"Codeforces user {handle} not found", self.platform, handle)
        if not isinstance(result, list) or not isinstance(result[0], dict):
            raise ParseError("user.info result is not a list of users", self.platform, handle)
        info = result[0]
        history = self._call("user.rating", {"handle": handle}, handle)
        if not isinstance(history, list):
            raise ParseError("user.rating result is not a list", self.platform, handle)
        return ProfileSnapshot(
            rating=info.get("rating"),
            badge=info.get("rank"),
            attended_contests_count=len(history),
        )

    def _load_contests(self):
        result = self._call("contest.list", {"gym": "false"})
        if not isinstance(result, list):
            raise ParseError("contest.list result is not a list", self.platform)

        contests = []
        for contest in dict_rows(result):
            if contest.get("phase") != "BEFORE":
                continue
            contest_id = contest.get("id")
            start = contest.get("startTimeSeconds")
            if contest_id is None or start is None:
                continue
            try:
                start = int(start)
                duration = int(contest.get("durationSeconds") or 0) // 60
            except (TypeError, ValueError):
                continue
            contests.append(
                ContestEntry(
                    host=self.platform,
                    name=contest.get("name") or str(contest_id),
                    vanity=str(contest_id),
                    url=self.CONTEST_URL.format(id=contest_id),
                    start_time_unix=start,
                    duration=duration,
                )
            )
        return contests
