import logging
from urllib.parse import urlparse

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator
from django.db import transaction

from core.models import PlatformProfile, PROFILE_PLATFORMS
from core.services.rating import compute_profile_rating

logger = logging.getLogger(__name__)

RESET_ON_HANDLE_CHANGE = (
    "rating",
    "attended_contests_count",
    "badge",
    "total_questions",
    "easy_questions",
    "medium_questions",
    "hard_questions",
)

# payload key -> model field prefix
DATA_FIELDS = {
    "bio": "bio",
    "phoneNumber": "phone_number",
    "dateOfBirth": "date_of_birth",
    "github": "github",
}

GENERAL_FIELDS = ("name", "picture", "email_show")

SOCIAL_HOSTS = {
    "linkedin": ("linkedin.com",),
    "instagram": ("instagram.com",),
    "twitter": ("twitter.com", "x.com"),
}


def apply_handle_change(platform_profile, username, show_on_website) -> bool:
    """
    Set handle and visibility. A new handle drops everything fetched for the old
    one and zeroes fetch_time_ms so the next refresh picks it up.
    """
    username = (username or "").strip() or None
    changed = username != platform_profile.username
    platform_profile.show_on_website = bool(show_on_website)
    if changed:
        platform_profile.username = username
        for name in RESET_ON_HANDLE_CHANGE:
            setattr(platform_profile, name, None)
        platform_profile.fetch_time_ms = 0
    return changed


def _platform_payload(platform, payload):
    if not isinstance(payload, dict) or payload.get("username") is None or payload.get("showOnWebsite") is None:
        raise ValidationError(
            f"Both 'username' and 'showOnWebsite' properties are required for the '{platform}' platform."
        )
    return payload["username"], payload["showOnWebsite"]


def _data_payload(field, payload):
    if not isinstance(payload, dict) or "data" not in payload or payload.get("showOnWebsite") is None:
        raise ValidationError(
            f"Both 'data' and 'showOnWebsite' properties are required for the '{field}' field."
        )
    return payload["data"], payload["showOnWebsite"]


def _validate_social_url(name, url):
    if not url:
        return None
    try:
        URLValidator(schemes=["http", "https"])(url)
    except ValidationError:
        raise ValidationError(f"Invalid {name} URL") from None
    host = (urlparse(url).hostname or "").lower()
    if not any(host == allowed or host.endswith("." + allowed) for allowed in SOCIAL_HOSTS[name]):
        raise ValidationError(f"Invalid {name} URL")
    return url


def update_platform_data(profile, platform, payload):
    """Returns (platform_profile, handle_changed). The row is not saved."""
    if platform not in PROFILE_PLATFORMS:
        raise ValidationError(f"Unknown platform '{platform}'.")
    username, show = _platform_payload(platform, payload)
    platform_profile = profile.platforms.filter(platform=platform).first()
    if platform_profile is None:
        platform_profile = PlatformProfile(profile=profile, platform=platform)
    changed = apply_handle_change(platform_profile, username, show)
    return platform_profile, changed


def update_data_field(profile, field, payload):
    if field not in DATA_FIELDS:
        raise ValidationError(f"Unknown field '{field}'.")
    data, show = _data_payload(field, payload)
    prefix = DATA_FIELDS[field]
    setattr(profile, f"{prefix}_data", data)
    setattr(profile, f"{prefix}_show", bool(show))


def update_social(profile, payload):
    if not isinstance(payload, dict):
        raise ValidationError("Social links must be an object.")
    cleaned = {
        name: _validate_social_url(name, payload[name])
        for name in SOCIAL_HOSTS
        if name in payload
    }
    for name, url in cleaned.items():
        setattr(profile, f"social_{name}", url)


def _validate(payload):
    for platform in PROFILE_PLATFORMS:
        if platform in payload:
            _platform_payload(platform, payload[platform])
    for field in DATA_FIELDS:
        if field in payload:
            _data_payload(field, payload[field])
    social = payload.get("social")
    if social is not None:
        if not isinstance(social, dict):
            raise ValidationError("Social links must be an object.")
        for name in SOCIAL_HOSTS:
            if name in social:
                _validate_social_url(name, social[name])
    for key in ("skills", "education"):
        if key in payload and not isinstance(payload[key], list):
            raise ValidationError(f"'{key}' must be a list.")


def _snapshot(profile):
    fields = [f.attname for f in profile._meta.concrete_fields if f.attname != "updated_at"]
    return {name: getattr(profile, name) for name in fields}


def apply_profile_update(profile, payload) -> bool:
    """
    Apply a user edit. Everything is validated before anything is written, then
    the profile and its platform rows are saved together. Returns False when the
    payload did not change anything.
    """
    if not payload:
        raise ValidationError("No data provided for update")
    _validate(payload)

    before = _snapshot(profile)
    for name in GENERAL_FIELDS:
        if name in payload:
            setattr(profile, name, payload[name])
    for field in DATA_FIELDS:
        if field in payload:
            update_data_field(profile, field, payload[field])
    if payload.get("social") is not None:
        update_social(profile, payload["social"])
    for key in ("skills", "education"):
        if key in payload:
            setattr(profile, key, payload[key])

    dirty_platforms = []
    handle_changed = False
    for platform in PROFILE_PLATFORMS:
        if platform not in payload:
            continue
        existing = profile.platforms.filter(platform=platform).first()
        previous = (existing.username, existing.show_on_website) if existing else None
        platform_profile, changed = update_platform_data(profile, platform, payload[platform])
        handle_changed = handle_changed or changed
        if changed or previous != (platform_profile.username, platform_profile.show_on_website):
            dirty_platforms.append(platform_profile)

    if not dirty_platforms and _snapshot(profile) == before:
        return False

    with transaction.atomic():
        for platform_profile in dirty_platforms:
            platform_profile.save()
        if handle_changed:
            profile.digitomize_rating = compute_profile_rating(profile)
        profile.save()

    logger.info(
        "Profile %s updated (platforms=%s, handle_changed=%s)",
        profile.username, [p.platform for p in dirty_platforms], handle_changed,
    )
    return True


def _visible(data, show):
    return data if show else None


def _platform_block(platform_profile):
    keys = (
        "username",
        "rating",
        "attendedContestsCount",
        "badge",
        "totalQuestions",
        "easyQuestions",
        "mediumQuestions",
        "hardQuestions",
        "fetchTime",
    )
    if platform_profile is None or not platform_profile.show_on_website:
        return {key: None for key in keys} | {"showOnWebsite": False}
    values = (
        platform_profile.username,
        platform_profile.rating,
        platform_profile.attended_contests_count,
        platform_profile.badge,
        platform_profile.total_questions,
        platform_profile.easy_questions,
        platform_profile.medium_questions,
        platform_profile.hard_questions,
        platform_profile.fetch_time_ms,
    )
    return dict(zip(keys, values)) | {"showOnWebsite": True}


def public_profile_payload(profile) -> dict:
    platforms = profile.platform_map()
    personal = {
        "username": profile.username,
        "name": profile.name,
        "picture": profile.picture,
        "role": profile.role,
        "email": profile.user.email if profile.email_show else None,
        "skills": profile.skills,
        "education": profile.education,
    }
    for key, prefix in DATA_FIELDS.items():
        if key == "github":
            continue
        personal[key] = _visible(getattr(profile, f"{prefix}_data"), getattr(profile, f"{prefix}_show"))

    return {
        "personal_data": personal,
        "github": _visible(profile.github_data, profile.github_show),
        "social": {
            "linkedin": profile.social_linkedin,
            "instagram": profile.social_instagram,
            "twitter": profile.social_twitter,
        },
        "ratings": {
            **{str(p): _platform_block(platforms.get(p)) for p in PROFILE_PLATFORMS},
            "digitomize_rating": profile.digitomize_rating,
        },
    }
