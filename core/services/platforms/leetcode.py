from core.models import Platform
from core.services.errors import NotFound, ParseError
from core.services.http import post_json
from core.services.platforms.base import ContestEntry, PlatformAdapter, ProfileSnapshot, dict_rows

PROFILE_QUERY = """
query userProfile($username: String!) {
  matchedUser(username: $username) {
    submitStatsGlobal {
      acSubmissionNum { difficulty count }
    }
  }
  userContestRanking(username: $username) {
    attendedContestsCount
    rating
    badge { name }
  }
}
"""

UPCOMING_QUERY = """
query upcomingContests {
  upcomingContests { title titleSlug startTime duration }
}
"""


class LeetCodeAdapter(PlatformAdapter):
    platform = Platform.LEETCODE
    GRAPHQL_URL = "https://leetcode.com/graphql"
    CONTEST_URL = "https://leetcode.com/contest/{slug}"

    def _query(self, query, variables=None):
        payload = post_json(
            self.GRAPHQL_URL,
            {"query": query, "variables": variables or {}},
            headers={"Referer": "https://leetcode.com"},
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise ParseError("GraphQL response without data", self.platform)
        return payload["data"]

    def _load_profile(self, handle):
        data = self._query(PROFILE_QUERY, {"username": handle})
        user = data.get("matchedUser")
        if user is None:
            raise NotFound(f"LeetCode user {handle} not found", self.platform, handle)

        try:
            counts = {
                row["difficulty"]: row["count"]
                for row in user["submitStatsGlobal"]["acSubmissionNum"]
            }
        except (KeyError, TypeError) as e:
            raise ParseError("acSubmissionNum has an unexpected shape", self.platform, handle) from e

        snapshot = ProfileSnapshot(
            total_questions=counts.get("All"),
            easy_questions=counts.get("Easy"),
            medium_questions=counts.get("Medium"),
            hard_questions=counts.get("Hard"),
        )

        # No ranking means the user never entered a rated contest
        ranking = data.get("userContestRanking")
        if ranking:
            rating = ranking.get("rating")
            snapshot.rating = round(rating) if rating is not None else None
            snapshot.attended_contests_count = ranking.get("attendedContestsCount")
            snapshot.badge = (ranking.get("badge") or {}).get("name")
        return snapshot

    def _load_contests(self):
        data = self._query(UPCOMING_QUERY)
        upcoming = data.get("upcomingContests")
        if not isinstance(upcoming, list):
            raise ParseError("upcomingContests missing", self.platform)

        contests = []
        for contest in dict_rows(upcoming):
            slug = contest.get("titleSlug")
            start = contest.get("startTime")
            if not slug or start is None:
                continue
            contests.append(
                ContestEntry(
                    host=self.platform,
                    name=contest.get("title") or slug,
                    vanity=slug,
                    url=self.CONTEST_URL.format(slug=slug),
                    start_time_unix=int(start),
                    duration=int(contest.get("duration") or 0) // 60,
                )
            )
        return contests
