from django.contrib import admin, messages

from .models import (
    Contest,
    Hackathon,
    PlatformProfile,
    Profile,
    UpcomingContest,
    UpcomingHackathon,
)
from .services.refresh import refresh_user_if_stale

admin.site.site_header = "Digitomize Administration"
admin.site.site_title = "Digitomize Admin"
admin.site.index_title = "Admin panel"


class PlatformProfileInline(admin.TabularInline):
    model = PlatformProfile
    extra = 0
    fields = ('platform', 'username', 'show_on_website', 'rating', 'badge', 'attended_contests_count', 'fetch_time_ms')


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'name', 'digitomize_rating', 'role', 'updated_at')
    search_fields = ('user__username', 'user__email', 'name', 'uid')
    list_filter = ('role',)
    ordering = ('-digitomize_rating',)
    readonly_fields = ('digitomize_rating', 'created_at', 'updated_at')
    inlines = [PlatformProfileInline]
    actions = ['force_refresh']

    def force_refresh(self, request, queryset):
        count = 0
        for profile in queryset.prefetch_related('platforms'):
            refresh_user_if_stale(profile, force=True)
            count += 1
        self.message_user(request, f"{count} profile(s) refreshed.", level=messages.SUCCESS)

    force_refresh.short_description = "Refresh platform data now"


@admin.register(PlatformProfile)
class PlatformProfileAdmin(admin.ModelAdmin):
    list_display = ('profile', 'platform', 'username', 'rating', 'badge', 'show_on_website')
    list_filter = ('platform', 'show_on_website')
    search_fields = ('username', 'profile__user__username')


class ContestAdminBase(admin.ModelAdmin):
    list_display = ('name', 'host', 'vanity', 'start_time_unix', 'duration')
    list_filter = ('host',)
    search_fields = ('name', 'vanity')


@admin.register(UpcomingContest)
class UpcomingContestAdmin(ContestAdminBase):
    pass


@admin.register(Contest)
class ContestAdmin(ContestAdminBase):
    pass


class HackathonAdminBase(admin.ModelAdmin):
    list_display = ('name', 'host', 'vanity', 'registration_start_time_unix', 'registration_end_time_unix')
    list_filter = ('host',)
    search_fields = ('name', 'vanity')


@admin.register(UpcomingHackathon)
class UpcomingHackathonAdmin(HackathonAdminBase):
    pass


@admin.register(Hackathon)
class HackathonAdmin(HackathonAdminBase):
    pass
