from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET

from .models import Profile, UpcomingContest, UpcomingHackathon
from .services.leaderboard import build_leaderboard, get_user_rank
from .services.profiles import public_profile_payload
from .services.refresh import refresh_user_if_stale


@require_GET
def leaderboard(request):
    platform = request.GET.get('platform') or None
    username = request.GET.get('username')
    try:
        if username:
            return JsonResponse(get_user_rank(username, platform).as_dict())
        page = build_leaderboard(platform, request.GET.get('page', 1))
    except ValueError as e:
        return HttpResponseBadRequest(str(e))
    return JsonResponse(page.as_dict())


@require_GET
def user_profile(request, username):
    profile = get_object_or_404(
        Profile.objects.select_related('user'),
        user__username=username,
    )
    refresh_user_if_stale(profile)
    return JsonResponse(public_profile_payload(profile))


def _contest_row(contest):
    return {
        'host': contest.host,
        'name': contest.name,
        'vanity': contest.vanity,
        'url': contest.url,
        'startTimeUnix': contest.start_time_unix,
        'duration': contest.duration,
    }


def _hackathon_row(hackathon):
    return {
        'host': hackathon.host,
        'name': hackathon.name,
        'vanity': hackathon.vanity,
        'url': hackathon.url,
        'registrationStartTimeUnix': hackathon.registration_start_time_unix,
        'registrationEndTimeUnix': hackathon.registration_end_time_unix,
        'hackathonStartTimeUnix': hackathon.hackathon_start_time_unix,
        'duration': hackathon.duration,
    }


@require_GET
def contests(request):
    qs = UpcomingContest.objects.order_by('start_time_unix')
    host = request.GET.get('host')
    if host:
        qs = qs.filter(host=host)
    rows = [_contest_row(c) for c in qs]
    return JsonResponse({'total': len(rows), 'results': rows})


@require_GET
def hackathons(request):
    qs = UpcomingHackathon.objects.order_by('registration_start_time_unix')
    host = request.GET.get('host')
    if host:
        qs = qs.filter(host=host)
    rows = [_hackathon_row(h) for h in qs]
    return JsonResponse({'total': len(rows), 'results': rows})
