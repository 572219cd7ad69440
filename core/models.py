from django.db import models
from django.contrib.auth.models import User


class Platform(models.TextChoices):
    CODEFORCES = 'codeforces', 'Codeforces'
    CODECHEF = 'codechef', 'CodeChef'
    LEETCODE = 'leetcode', 'LeetCode'
    ATCODER = 'atcoder', 'AtCoder'
    GEEKSFORGEEKS = 'geeksforgeeks', 'GeeksforGeeks'
    CODINGNINJAS = 'codingninjas', 'Coding Ninjas Studio'
    DEVFOLIO = 'devfolio', 'Devfolio'
    DEVPOST = 'devpost', 'Devpost'
    UNSTOP = 'unstop', 'Unstop'


# Platforms whose ratings feed digitomize_rating.
PROFILE_PLATFORMS = (Platform.CODEFORCES, Platform.CODECHEF, Platform.LEETCODE)
CONTEST_PLATFORMS = (
    Platform.CODEFORCES,
    Platform.CODECHEF,
    Platform.LEETCODE,
    Platform.ATCODER,
    Platform.GEEKSFORGEEKS,
    Platform.CODINGNINJAS,
)
HACKATHON_PLATFORMS = (Platform.DEVFOLIO, Platform.DEVPOST, Platform.UNSTOP)


class Profile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    uid = models.CharField(max_length=128, unique=True)
    name = models.CharField(max_length=200, blank=True, default='')
    picture = models.URLField(max_length=500, blank=True, default='')
    role = models.CharField(max_length=20, default='user')
    email_show = models.BooleanField(default=False)

    # Derived from PlatformProfile ratings, see core.services.rating
    digitomize_rating = models.IntegerField(default=0, db_index=True)

    skills = models.JSONField(default=list, blank=True)
    education = models.JSONField(default=list, blank=True)

    # Privacy-flagged fields, exposed as {data, showOnWebsite}
    bio_data = models.TextField(null=True, blank=True)
    bio_show = models.BooleanField(default=True)
    phone_number_data = models.CharField(max_length=30, null=True, blank=True)
    phone_number_show = models.BooleanField(default=False)
    date_of_birth_data = models.CharField(max_length=30, null=True, blank=True)
    date_of_birth_show = models.BooleanField(default=False)
    github_data = models.CharField(max_length=200, null=True, blank=True)
    github_show = models.BooleanField(default=True)

    social_linkedin = models.URLField(max_length=300, null=True, blank=True)
    social_instagram = models.URLField(max_length=300, null=True, blank=True)
    social_twitter = models.URLField(max_length=300, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.username} ({self.digitomize_rating})"

    @property
    def username(self):
        return self.user.username

    def platform_map(self) -> dict[str, "PlatformProfile"]:
        return {row.platform: row for row in self.platforms.all()}

    def platform_ratings(self) -> dict[str, int | None]:
        return dict(self.platforms.values_list("platform", "rating"))


class PlatformProfile(models.Model):
    profile = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='platforms')
    platform = models.CharField(max_length=20, choices=Platform.choices)
    username = models.CharField(max_length=100, null=True, blank=True)
    show_on_website = models.BooleanField(default=True)

    rating = models.IntegerField(null=True, blank=True)
    attended_contests_count = models.IntegerField(null=True, blank=True)
    badge = models.CharField(max_length=50, null=True, blank=True)
    total_questions = models.IntegerField(null=True, blank=True)
    easy_questions = models.IntegerField(null=True, blank=True)
    medium_questions = models.IntegerField(null=True, blank=True)
    hard_questions = models.IntegerField(null=True, blank=True)

    # Unix ms of the last successful fetch; 0 forces a refresh
    fetch_time_ms = models.BigIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['profile', 'platform'],
                name='platform_profile_unique',
            ),
        ]
        indexes = [
            models.Index(fields=['platform', 'rating'], name='platform_profile_rating_idx'),
        ]
        verbose_name = "Platform Profile"
        verbose_name_plural = "Platform Profiles"

    def __str__(self):
        return f"{self.profile.user.username} - {self.platform}:{self.username} ({self.rating})"


class ContestRecord(models.Model):
    host = models.CharField(max_length=20, choices=Platform.choices)
    name = models.CharField(max_length=300)
    vanity = models.CharField(max_length=200)
    url = models.URLField(max_length=500)
    start_time_unix = models.BigIntegerField()
    duration = models.IntegerField(help_text="Minutes")

    class Meta:
        abstract = True
        ordering = ['start_time_unix']

    def __str__(self):
        return f"{self.host} - {self.name}"


class UpcomingContest(ContestRecord):
    class Meta(ContestRecord.Meta):
        constraints = [
            models.UniqueConstraint(fields=['host', 'vanity'], name='upcoming_contest_host_vanity_uniq'),
        ]
        indexes = [
            models.Index(fields=['start_time_unix'], name='upcoming_contest_start_idx'),
        ]
        verbose_name = "Upcoming Contest"
        verbose_name_plural = "Upcoming Contests"


class Contest(ContestRecord):
    class Meta(ContestRecord.Meta):
        constraints = [
            models.UniqueConstraint(fields=['host', 'vanity'], name='contest_host_vanity_uniq'),
        ]
        verbose_name = "Contest"
        verbose_name_plural = "All Contests"


class HackathonRecord(models.Model):
    host = models.CharField(max_length=20, choices=Platform.choices)
    name = models.CharField(max_length=300)
    vanity = models.CharField(max_length=200)
    url = models.URLField(max_length=500)
    registration_start_time_unix = models.BigIntegerField()
    registration_end_time_unix = models.BigIntegerField()
    hackathon_start_time_unix = models.BigIntegerField(null=True, blank=True)
    duration = models.IntegerField(null=True, blank=True, help_text="Minutes")

    class Meta:
        abstract = True
        ordering = ['registration_start_time_unix']

    def __str__(self):
        return f"{self.host} - {self.name}"


class UpcomingHackathon(HackathonRecord):
    class Meta(HackathonRecord.Meta):
        constraints = [
            models.UniqueConstraint(fields=['host', 'vanity'], name='upcoming_hackathon_host_vanity_uniq'),
        ]
        indexes = [
            models.Index(fields=['registration_end_time_unix'], name='upcoming_hackathon_reg_end_idx'),
        ]
        verbose_name = "Upcoming Hackathon"
        verbose_name_plural = "Upcoming Hackathons"


class Hackathon(HackathonRecord):
    class Meta(HackathonRecord.Meta):
        constraints = [
            models.UniqueConstraint(fields=['host', 'vanity'], name='hackathon_host_vanity_uniq'),
        ]
        verbose_name = "Hackathon"
        verbose_name_plural = "All Hackathons"
