import math
from collections.abc import Mapping

from core.models import Platform

# Codeforces is the reference scale; the other platforms are mapped onto it.
PLATFORM_WEIGHTS = {
    Platform.CODEFORCES: 1.0,
    Platform.CODECHEF: 0.76,
    Platform.LEETCODE: 0.695,
}


def compute_rating(ratings: Mapping[str, int | None]) -> int:
    """
    Best single platform, normalised: max(rating * weight) rounded half up.
    Platforms without a weight or without a rating are ignored; returns 0 when
    nothing is left.
    """
    best = None
    for platform, rating in ratings.items():
        weight = PLATFORM_WEIGHTS.get(platform)
        if weight is None or rating is None:
            continue
        value = rating * weight
        if best is None or value > best:
            best = value
    if best is None:
        return 0
    return int(math.floor(best + 0.5))


def compute_profile_rating(profile) -> int:
    return compute_rating(profile.platform_ratings())
