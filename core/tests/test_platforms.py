from datetime import datetime, timezone
from unittest.mock import patch

import requests
from django.test import SimpleTestCase

from core.models import Platform
from core.services.errors import NoContestData, NotFound, ParseError
from core.services.platforms import (
    CONTEST_ADAPTERS,
    HACKATHON_ADAPTERS,
    PROFILE_ADAPTERS,
    get_adapter,
)
from core.services.platforms.atcoder import AtCoderAdapter, parse_upcoming_table
from core.services.platforms.codechef import CodeChefAdapter, parse_profile_page, stars_for_rating
from core.services.platforms.codeforces import CodeforcesAdapter
from core.services.platforms.codingninjas import CodingNinjasAdapter
from core.services.platforms.geeksforgeeks import GeeksforGeeksAdapter
from core.services.platforms.hackathons import (
    DevfolioAdapter,
    DevpostAdapter,
    UnstopAdapter,
    parse_submission_period,
)
from core.services.platforms.leetcode import LeetCodeAdapter

REQUEST = "core.services.http.requests.request"


class _MockResponse:
    def __init__(self, status_code: int, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def _unix(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


CODECHEF_PAGE = """
<html><body>
<div class="rating-star"><span class="rating">4&#9733;</span></div>
<script>
jQuery.extend(Drupal.settings, {"basePath": "/", "date_versus_rating": {"all": [
  {"code": "START100", "rating": "1650"},
  {"code": "START101", "rating": "1820"}
]}});
</script>
</body></html>
"""

ATCODER_PAGE = """
<div id="contest-table-upcoming"><table><tbody>
<tr>
  <td class="text-center"><a href="http://www.timeanddate.com/"><time class="fixtime fixtime-full">2026-11-01 21:00:00+0900</time></a></td>
  <td><span title="Algorithm">&#9398;</span> <a href="/contests/abc430">AtCoder Beginner Contest 430</a></td>
  <td class="text-center">01:40</td>
  <td class="text-center"> - 1999</td>
</tr>
<tr>
  <td class="text-center"><a href="#"><time class="fixtime fixtime-full">2026-11-08 21:00:00+0900</time></a></td>
  <td><a href="/contests/arc210">AtCoder Regular Contest 210</a></td>
  <td class="text-center">02:00</td>
  <td class="text-center"> - 2799</td>
</tr>
</tbody></table></div>
"""


class AdapterContractTests(SimpleTestCase):
    def test_empty_handle_short_circuits_without_network(self):
        with patch(REQUEST) as request_mock:
            for adapter in PROFILE_ADAPTERS.values():
                self.assertIsNone(adapter.fetch_profile(""))
                self.assertIsNone(adapter.fetch_profile(None))
                self.assertIsNone(adapter.fetch_profile("   "))
        request_mock.assert_not_called()

    def test_list_fetch_failure_returns_empty_list(self):
        with patch(REQUEST, side_effect=requests.ConnectionError("down")), \
                patch("core.services.http.time.sleep"):
            self.assertEqual(CodeforcesAdapter().fetch_contests(), [])
            self.assertEqual(DevfolioAdapter().fetch_hackathons(), [])

    def test_registry_lookup(self):
        self.assertIsInstance(get_adapter("codeforces"), CodeforcesAdapter)
        self.assertIsInstance(get_adapter(Platform.ATCODER), AtCoderAdapter)
        self.assertIsInstance(get_adapter("unstop"), UnstopAdapter)
        self.assertIsInstance(get_adapter("devpost"), DevpostAdapter)
        self.assertIsInstance(get_adapter(Platform.CODINGNINJAS), CodingNinjasAdapter)
        self.assertEqual(set(PROFILE_ADAPTERS), {"codeforces", "codechef", "leetcode"})
        self.assertEqual(len(CONTEST_ADAPTERS), 6)
        self.assertEqual(set(HACKATHON_ADAPTERS), {"devfolio", "devpost", "unstop"})
        with self.assertRaises(KeyError):
            get_adapter("topcoder")


class CodeforcesAdapterTests(SimpleTestCase):
    def test_profile_combines_info_and_rating_history(self):
        responses = [
            _MockResponse(200, {"status": "OK", "result": [{"handle": "tourist", "rating": 3800, "rank": "legendary grandmaster"}]}),
            _MockResponse(200, {"status": "OK", "result": [{"contestId": 1}, {"contestId": 2}, {"contestId": 3}]}),
        ]
        with patch(REQUEST, side_effect=responses) as request_mock:
            snapshot = CodeforcesAdapter().fetch_profile("tourist")

        self.assertEqual(snapshot.rating, 3800)
        self.assertEqual(snapshot.badge, "legendary grandmaster")
        self.assertEqual(snapshot.attended_contests_count, 3)
        self.assertEqual(request_mock.call_args_list[0].args[1], "https://codeforces.com/api/user.info")
        self.assertEqual(request_mock.call_args_list[0].kwargs["params"], {"handles": "tourist"})

    def test_unknown_handle_raises_not_found(self):
        payload = {"status": "FAILED", "comment": "handles: User with handle nobody_here not found"}
        with patch(REQUEST, return_value=_MockResponse(400, payload)):
            with self.assertRaises(NotFound):
                CodeforcesAdapter().fetch_profile("nobody_here")

    def test_contests_keep_only_before_phase(self):
        payload = {
            "status": "OK",
            "result": [
                {"id": 2200, "name": "Codeforces Round 1000 (Div. 2)", "phase": "BEFORE", "startTimeSeconds": 1800000000, "durationSeconds": 7200},
                {"id": 2199, "name": "Educational Round", "phase": "FINISHED", "startTimeSeconds": 1700000000, "durationSeconds": 7200},
            ],
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = CodeforcesAdapter().fetch_contests()

        self.assertEqual(len(contests), 1)
        contest = contests[0]
        self.assertEqual(contest.host, "codeforces")
        self.assertEqual(contest.vanity, "2200")
        self.assertEqual(contest.url, "https://codeforces.com/contests/2200")
        self.assertEqual(contest.start_time_unix, 1800000000)
        self.assertEqual(contest.duration, 120)


class CodeChefAdapterTests(SimpleTestCase):
    def test_parse_profile_page(self):
        snapshot = parse_profile_page(CODECHEF_PAGE)

        self.assertEqual(snapshot.rating, 1820)
        self.assertEqual(snapshot.attended_contests_count, 2)
        self.assertEqual(snapshot.badge, "4★")

    def test_missing_settings_blob(self):
        with self.assertRaisesMessage(ParseError, "User info not found on the page"):
            parse_profile_page("<html><body>No user data here</body></html>")

    def test_empty_history_is_no_contest_data(self):
        html = 'jQuery.extend(Drupal.settings, {"date_versus_rating": {"all": []}});'
        with self.assertRaisesMessage(NoContestData, "User has no contest data"):
            parse_profile_page(html)

    def test_badge_falls_back_to_star_thresholds(self):
        html = 'jQuery.extend(Drupal.settings, {"date_versus_rating": {"all": [{"rating": "2050"}]}});'
        self.assertEqual(parse_profile_page(html).badge, "5★")
        self.assertEqual(stars_for_rating(1399), "1★")
        self.assertEqual(stars_for_rating(1400), "2★")
        self.assertEqual(stars_for_rating(2500), "7★")

    def test_fetch_profile_requests_user_page(self):
        with patch(REQUEST, return_value=_MockResponse(200, text=CODECHEF_PAGE)) as request_mock:
            snapshot = CodeChefAdapter().fetch_profile("chef_one")

        self.assertEqual(snapshot.rating, 1820)
        self.assertEqual(request_mock.call_args.args[1], "https://www.codechef.com/users/chef_one")

    def test_contests_from_future_list(self):
        payload = {
            "status": "success",
            "future_contests": [
                {
                    "contest_code": "START210",
                    "contest_name": "Starters 210",
                    "contest_start_date_iso": "2026-11-05T20:00:00+05:30",
                    "contest_duration": "120",
                },
            ],
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = CodeChefAdapter().fetch_contests()

        self.assertEqual(len(contests), 1)
        self.assertEqual(contests[0].vanity, "START210")
        self.assertEqual(contests[0].url, "https://www.codechef.com/START210")
        self.assertEqual(contests[0].start_time_unix, _unix(2026, 11, 5, 14, 30))
        self.assertEqual(contests[0].duration, 120)


class LeetCodeAdapterTests(SimpleTestCase):
    def _profile_payload(self, ranking):
        return {
            "data": {
                "matchedUser": {
                    "submitStatsGlobal": {
                        "acSubmissionNum": [
                            {"difficulty": "All", "count": 300},
                            {"difficulty": "Easy", "count": 120},
                            {"difficulty": "Medium", "count": 140},
                            {"difficulty": "Hard", "count": 40},
                        ]
                    }
                },
                "userContestRanking": ranking,
            }
        }

    def test_profile_with_contest_ranking(self):
        payload = self._profile_payload(
            {"attendedContestsCount": 12, "rating": 1876.43, "badge": {"name": "Knight"}}
        )
        with patch(REQUEST, return_value=_MockResponse(200, payload)) as request_mock:
            snapshot = LeetCodeAdapter().fetch_profile("leet_user")

        self.assertEqual(snapshot.rating, 1876)
        self.assertEqual(snapshot.attended_contests_count, 12)
        self.assertEqual(snapshot.badge, "Knight")
        self.assertEqual(snapshot.total_questions, 300)
        self.assertEqual(snapshot.easy_questions, 120)
        self.assertEqual(snapshot.medium_questions, 140)
        self.assertEqual(snapshot.hard_questions, 40)
        self.assertEqual(request_mock.call_args.args[0], "POST")
        self.assertEqual(request_mock.call_args.kwargs["json"]["variables"], {"username": "leet_user"})

    def test_missing_ranking_keeps_rating_null(self):
        with patch(REQUEST, return_value=_MockResponse(200, self._profile_payload(None))):
            snapshot = LeetCodeAdapter().fetch_profile("casual")

        self.assertIsNone(snapshot.rating)
        self.assertIsNone(snapshot.badge)
        self.assertEqual(snapshot.total_questions, 300)

    def test_unknown_user(self):
        payload = {"data": {"matchedUser": None, "userContestRanking": None}}
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            with self.assertRaises(NotFound):
                LeetCodeAdapter().fetch_profile("ghost")

    def test_upcoming_contests(self):
        payload = {
            "data": {
                "upcomingContests": [
                    {"title": "Weekly Contest 480", "titleSlug": "weekly-contest-480", "startTime": 1800000000, "duration": 5400},
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = LeetCodeAdapter().fetch_contests()

        self.assertEqual(contests[0].url, "https://leetcode.com/contest/weekly-contest-480")
        self.assertEqual(contests[0].duration, 90)


class ContestOnlyAdapterTests(SimpleTestCase):
    def test_atcoder_upcoming_table(self):
        contests = parse_upcoming_table(ATCODER_PAGE)

        self.assertEqual([c.vanity for c in contests], ["abc430", "arc210"])
        self.assertEqual(contests[0].name, "AtCoder Beginner Contest 430")
        self.assertEqual(contests[0].url, "https://atcoder.jp/contests/abc430")
        self.assertEqual(contests[0].start_time_unix, _unix(2026, 11, 1, 12, 0))
        self.assertEqual(contests[0].duration, 100)
        self.assertEqual(contests[1].duration, 120)

    def test_atcoder_without_table_is_empty_list(self):
        with patch(REQUEST, return_value=_MockResponse(200, text="<html></html>")):
            self.assertEqual(AtCoderAdapter().fetch_contests(), [])

    def test_geeksforgeeks_times_are_ist(self):
        payload = {
            "results": {
                "upcoming": [
                    {
                        "slug": "gfg-weekly-230",
                        "name": "GFG Weekly 230",
                        "start_time": "2026-11-02 19:00:00",
                        "end_time": "2026-11-02 20:30:00",
                    }
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = GeeksforGeeksAdapter().fetch_contests()

        self.assertEqual(contests[0].start_time_unix, _unix(2026, 11, 2, 13, 30))
        self.assertEqual(contests[0].duration, 90)
        self.assertEqual(contests[0].url, "https://practice.geeksforgeeks.org/contest/gfg-weekly-230")


class HackathonAdapterTests(SimpleTestCase):
    def test_devfolio_search_results(self):
        payload = {
            "hits": {
                "hits": [
                    {
                        "_source": {
                            "name": "HackIndia",
                            "slug": "hackindia",
                            "starts_at": "2026-11-10T04:30:00Z",
                            "ends_at": "2026-11-11T04:30:00Z",
                            "settings": {
                                "reg_starts_at": "2026-10-01T00:00:00Z",
                                "reg_ends_at": "2026-11-05T00:00:00Z",
                            },
                        }
                    },
                    {"_source": {"name": "No dates", "slug": "nodates", "settings": {}}},
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)) as request_mock:
            hackathons = DevfolioAdapter().fetch_hackathons()

        self.assertEqual(len(hackathons), 1)
        hackathon = hackathons[0]
        self.assertEqual(hackathon.url, "https://hackindia.devfolio.co/")
        self.assertEqual(hackathon.registration_start_time_unix, _unix(2026, 10, 1))
        self.assertEqual(hackathon.registration_end_time_unix, _unix(2026, 11, 5))
        self.assertEqual(hackathon.duration, 24 * 60)
        self.assertEqual(request_mock.call_args.kwargs["json"]["type"], "application_open")

    def test_unstop_search_results(self):
        payload = {
            "data": {
                "data": [
                    {
                        "id": 998877,
                        "title": "Build for Bharat",
                        "public_url": "hackathons/build-for-bharat-998877",
                        "start_date": "2026-11-20T10:00:00+05:30",
                        "end_date": "2026-11-21T10:00:00+05:30",
                        "regnRequirements": {
                            "start_regn_dt": "2026-10-15T10:00:00+05:30",
                            "end_regn_dt": "2026-11-15T23:59:00+05:30",
                        },
                    }
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            hackathons = UnstopAdapter().fetch_hackathons()

        self.assertEqual(hackathons[0].vanity, "998877")
        self.assertEqual(hackathons[0].url, "https://unstop.com/hackathons/build-for-bharat-998877")
        self.assertEqual(hackathons[0].registration_start_time_unix, _unix(2026, 10, 15, 4, 30))
        self.assertEqual(hackathons[0].duration, 24 * 60)

    def test_unstop_shape_drift_returns_empty(self):
        with patch(REQUEST, return_value=_MockResponse(200, {"data": []})):
            self.assertEqual(UnstopAdapter().fetch_hackathons(), [])

    def test_devpost_submission_periods(self):
        self.assertEqual(
            parse_submission_period("Oct 01 - Nov 15, 2026"),
            (_unix(2026, 10, 1), _unix(2026, 11, 16) - 1),
        )
        self.assertEqual(
            parse_submission_period("Nov 01 - 15, 2026"),
            (_unix(2026, 11, 1), _unix(2026, 11, 16) - 1),
        )
        self.assertEqual(
            parse_submission_period("Dec 20, 2026 - Jan 10, 2027"),
            (_unix(2026, 12, 20), _unix(2027, 1, 11) - 1),
        )
        self.assertEqual(
            parse_submission_period("Dec 20 - Jan 10, 2027"),
            (_unix(2026, 12, 20), _unix(2027, 1, 11) - 1),
        )
        self.assertIsNone(parse_submission_period("Dates to be announced"))
        self.assertIsNone(parse_submission_period(None))

    def test_devpost_pages_until_empty(self):
        first_page = {
            "hackathons": [
                {
                    "id": 24001,
                    "title": "HackMIT 2026",
                    "url": "https://hackmit-2026.devpost.com/",
                    "submission_period_dates": "Oct 01 - Nov 15, 2026",
                },
                {"id": 24002, "title": "No dates", "url": "https://nodates.devpost.com/"},
            ]
        }
        responses = [_MockResponse(200, first_page), _MockResponse(200, {"hackathons": []})]
        with patch(REQUEST, side_effect=responses) as request_mock:
            hackathons = DevpostAdapter().fetch_hackathons()

        self.assertEqual(len(hackathons), 1)
        hackathon = hackathons[0]
        self.assertEqual(hackathon.host, "devpost")
        self.assertEqual(hackathon.vanity, "hackmit-2026")
        self.assertEqual(hackathon.url, "https://hackmit-2026.devpost.com/")
        self.assertEqual(hackathon.registration_start_time_unix, _unix(2026, 10, 1))
        self.assertEqual(hackathon.registration_end_time_unix, _unix(2026, 11, 16) - 1)
        self.assertEqual(request_mock.call_count, 2)
        self.assertEqual(
            request_mock.call_args_list[0].kwargs["params"],
            {"status[]": ["upcoming", "open"], "page": 1},
        )

    def test_devpost_without_hackathons_key_is_empty(self):
        with patch(REQUEST, return_value=_MockResponse(200, {"meta": {}})):
            self.assertEqual(DevpostAdapter().fetch_hackathons(), [])


class CodingNinjasAdapterTests(SimpleTestCase):
    def test_contest_list(self):
        payload = {
            "data": {
                "events": [
                    {
                        "name": "Weekly Contest 150",
                        "slug": "weekly-contest-150",
                        "event_start_time": 1800000000,
                        "event_end_time": 1800005400,
                    },
                    {"name": "Broken", "slug": "broken", "event_start_time": "soon"},
                    "not-an-event",
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = CodingNinjasAdapter().fetch_contests()

        self.assertEqual(len(contests), 1)
        self.assertEqual(contests[0].host, "codingninjas")
        self.assertEqual(contests[0].url, "https://www.naukri.com/code360/contests/weekly-contest-150")
        self.assertEqual(contests[0].start_time_unix, 1800000000)
        self.assertEqual(contests[0].duration, 90)

    def test_missing_events_is_empty(self):
        with patch(REQUEST, return_value=_MockResponse(200, {"data": {}})):
            self.assertEqual(CodingNinjasAdapter().fetch_contests(), [])


class PayloadShapeTests(SimpleTestCase):
    def test_codechef_numeric_start_date_is_skipped(self):
        payload = {
            "future_contests": [
                {"contest_code": "START300", "contest_start_date_iso": 1700000000},
                {"contest_code": "START301", "contest_start_date_iso": "2026-11-05T20:00:00+05:30"},
            ]
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = CodeChefAdapter().fetch_contests()

        self.assertEqual([c.vanity for c in contests], ["START301"])

    def test_codeforces_non_object_contest_rows_are_skipped(self):
        payload = {
            "status": "OK",
            "result": ["oops", {"id": 2300, "name": "Round", "phase": "BEFORE", "startTimeSeconds": 1800000000}],
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            contests = CodeforcesAdapter().fetch_contests()

        self.assertEqual([c.vanity for c in contests], ["2300"])

    def test_codeforces_user_info_object_raises_parse_error(self):
        payload = {"status": "OK", "result": {"handle": "x"}}
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            with self.assertRaises(ParseError):
                CodeforcesAdapter().fetch_profile("x")

    def test_unexpected_profile_shape_raises_parse_error_with_handle(self):
        payload = {
            "data": {
                "matchedUser": {"submitStatsGlobal": {"acSubmissionNum": []}},
                "userContestRanking": "unranked",
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            with self.assertRaises(ParseError) as ctx:
                LeetCodeAdapter().fetch_profile("leet_user")

        self.assertEqual(ctx.exception.handle, "leet_user")
        self.assertEqual(ctx.exception.platform, "leetcode")

    def test_list_fetch_shape_error_is_logged_and_empty(self):
        payload = {"data": {"upcomingContests": [{"titleSlug": "weekly-contest-481", "startTime": "soon"}]}}
        with patch(REQUEST, return_value=_MockResponse(200, payload)), \
                self.assertLogs("core.services.platforms.base", level="WARNING") as logs:
            self.assertEqual(LeetCodeAdapter().fetch_contests(), [])

        self.assertIn("unexpected payload", logs.output[0])

    def test_hackathon_numeric_dates_are_skipped(self):
        payload = {
            "hits": {
                "hits": [
                    {"_source": {"slug": "numeric", "settings": {"reg_starts_at": 1700000000, "reg_ends_at": 1700001000}}},
                    "not-a-hit",
                ]
            }
        }
        with patch(REQUEST, return_value=_MockResponse(200, payload)):
            self.assertEqual(DevfolioAdapter().fetch_hackathons(), [])
