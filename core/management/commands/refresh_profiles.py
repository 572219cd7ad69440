from django.core.management.base import BaseCommand, CommandError

from core.models import Profile
from core.services.refresh import refresh_user_if_stale


class Command(BaseCommand):
    help = "Refreshes stale platform data for one user or for every user."

    def add_arguments(self, parser):
        parser.add_argument(
            "--username",
            help="Limits the refresh to this user.",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Refetches platforms that are still within the TTL.",
        )

    def handle(self, *args, **options):
        username = options.get("username")
        force = options.get("force")

        qs = Profile.objects.select_related("user")
        if username:
            qs = qs.filter(user__username=username)
            if not qs.exists():
                raise CommandError(f"User {username} not found.")

        total = 0
        for profile in qs.iterator(chunk_size=200):
            refresh_user_if_stale(profile, force=force)
            total += 1
            self.stdout.write(f"{profile.username}: digitomize_rating={profile.digitomize_rating}")

        self.stdout.write(self.style.SUCCESS(f"Refreshed {total} profile(s)."))
