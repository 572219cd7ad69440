from core.models import Platform
from core.services.platforms.atcoder import AtCoderAdapter
from core.services.platforms.base import ContestEntry, HackathonEntry, PlatformAdapter, ProfileSnapshot
from core.services.platforms.codechef import CodeChefAdapter
from core.services.platforms.codeforces import CodeforcesAdapter
from core.services.platforms.codingninjas import CodingNinjasAdapter
from core.services.platforms.geeksforgeeks import GeeksforGeeksAdapter
from core.services.platforms.hackathons import DevfolioAdapter, DevpostAdapter, UnstopAdapter
from core.services.platforms.leetcode import LeetCodeAdapter

PROFILE_ADAPTERS = {
    Platform.CODEFORCES: CodeforcesAdapter(),
    Platform.CODECHEF: CodeChefAdapter(),
    Platform.LEETCODE: LeetCodeAdapter(),
}

CONTEST_ADAPTERS = {
    Platform.CODEFORCES: PROFILE_ADAPTERS[Platform.CODEFORCES],
    Platform.CODECHEF: PROFILE_ADAPTERS[Platform.CODECHEF],
    Platform.LEETCODE: PROFILE_ADAPTERS[Platform.LEETCODE],
    Platform.ATCODER: AtCoderAdapter(),
    Platform.GEEKSFORGEEKS: GeeksforGeeksAdapter(),
    Platform.CODINGNINJAS: CodingNinjasAdapter(),
}

HACKATHON_ADAPTERS = {
    Platform.DEVFOLIO: DevfolioAdapter(),
    Platform.DEVPOST: DevpostAdapter(),
    Platform.UNSTOP: UnstopAdapter(),
}

_ALL = {**PROFILE_ADAPTERS, **CONTEST_ADAPTERS, **HACKATHON_ADAPTERS}


def get_adapter(platform) -> PlatformAdapter:
    """Raises KeyError for platforms without an adapter."""
    return _ALL[platform]


__all__ = [
    "CONTEST_ADAPTERS",
    "ContestEntry",
    "HACKATHON_ADAPTERS",
    "HackathonEntry",
    "PROFILE_ADAPTERS",
    "PlatformAdapter",
    "ProfileSnapshot",
    "get_adapter",
]
