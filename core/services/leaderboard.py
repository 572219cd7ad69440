import math
from dataclasses import asdict, dataclass, field

from django.conf import settings
from django.db.models import OuterRef, Subquery

from core.models import PlatformProfile, Profile, PROFILE_PLATFORMS

TOP_COUNT = 3


@dataclass
class LeaderboardPage:
    top3: list
    leaderboard: list
    total_users: int
    total_pages: int
    current_page: int
    users_in_page: int
    platform: str | None = None

    def as_dict(self):
        payload = asdict(self)
        payload["platform_rating"] = self.platform
        del payload["platform"]
        return payload


@dataclass
class RankEntry:
    rank: int | None
    ratings: dict = field(default_factory=dict)

    def as_dict(self):
        return {"user_position": self.rank, "ratings": self.ratings}


def page_size() -> int:
    return getattr(settings, "LEADERBOARD_PAGE_SIZE", 5)


def coerce_page(page) -> int:
    try:
        page = int(page)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def _validate_platform(platform):
    if platform and platform not in PROFILE_PLATFORMS:
        raise ValueError(f"Unknown platform filter: {platform}")
    return platform or None


def ranked_queryset(platform=None):
    """
    Profiles in leaderboard order. Ties on the sort key go to the username
    ascending so pages are stable.
    """
    platform = _validate_platform(platform)
    qs = Profile.objects.select_related("user").prefetch_related("platforms")
    if platform is None:
        return qs.filter(digitomize_rating__gt=0).order_by("-digitomize_rating", "user__username")

    rating = PlatformProfile.objects.filter(profile=OuterRef("pk"), platform=platform).values("rating")[:1]
    return (
        qs.annotate(platform_rating=Subquery(rating))
        .filter(platform_rating__isnull=False)
        .order_by("-platform_rating", "user__username")
    )


def _row(profile, platform):
    ratings = {p: None for p in PROFILE_PLATFORMS}
    for pp in profile.platforms.all():
        if pp.platform in ratings:
            ratings[pp.platform] = pp.rating
    return {
        "username": profile.user.username,
        "name": profile.name,
        "picture": profile.picture,
        "digitomize_rating": profile.digitomize_rating,
        **{str(p): value for p, value in ratings.items()},
        "platform_rating": getattr(profile, "platform_rating", None) if platform else None,
    }


def build_leaderboard(platform=None, page=1) -> LeaderboardPage:
    platform = _validate_platform(platform)
    page = coerce_page(page)
    size = page_size()

    qs = ranked_queryset(platform)
    total = qs.count()
    total_pages = max(0, math.ceil((total - TOP_COUNT) / size))

    top3 = [_row(p, platform) for p in qs[:TOP_COUNT]]
    start = TOP_COUNT + (page - 1) * size
    rows = [_row(p, platform) for p in qs[start:start + size]] if start < total else []

    return LeaderboardPage(
        top3=top3,
        leaderboard=rows,
        total_users=total,
        total_pages=total_pages,
        current_page=page,
        users_in_page=len(rows),
        platform=platform,
    )


def _empty_ratings():
    return {
        **{str(p): None for p in PROFILE_PLATFORMS},
        "digitomize_rating": None,
        "platform_rating": None,
    }


def get_user_rank(username, platform=None) -> RankEntry:
    platform = _validate_platform(platform)
    qs = ranked_queryset(platform)

    position = None
    for index, name in enumerate(qs.values_list("user__username", flat=True), start=1):
        if name == username:
            position = index
            break
    if position is None:
        return RankEntry(rank=None, ratings=_empty_ratings())

    profile = qs.get(user__username=username)
    row = _row(profile, platform)
    ratings = {str(p): row[str(p)] for p in PROFILE_PLATFORMS}
    ratings["digitomize_rating"] = row["digitomize_rating"]
    ratings["platform_rating"] = row["platform_rating"]
    return RankEntry(rank=position, ratings=ratings)
