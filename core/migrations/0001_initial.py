import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


PLATFORM_CHOICES = [
    ('codeforces', 'Codeforces'),
    ('codechef', 'CodeChef'),
    ('leetcode', 'LeetCode'),
    ('atcoder', 'AtCoder'),
    ('geeksforgeeks', 'GeeksforGeeks'),
    ('devfolio', 'Devfolio'),
    ('unstop', 'Unstop'),
]


def _contest_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('host', models.CharField(choices=PLATFORM_CHOICES, max_length=20)),
        ('name', models.CharField(max_length=300)),
        ('vanity', models.CharField(max_length=200)),
        ('url', models.URLField(max_length=500)),
        ('start_time_unix', models.BigIntegerField()),
        ('duration', models.IntegerField(help_text='Minutes')),
    ]


def _hackathon_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('host', models.CharField(choices=PLATFORM_CHOICES, max_length=20)),
        ('name', models.CharField(max_length=300)),
        ('vanity', models.CharField(max_length=200)),
        ('url', models.URLField(max_length=500)),
        ('registration_start_time_unix', models.BigIntegerField()),
        ('registration_end_time_unix', models.BigIntegerField()),
        ('hackathon_start_time_unix', models.BigIntegerField(blank=True, null=True)),
        ('duration', models.IntegerField(blank=True, help_text='Minutes', null=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uid', models.CharField(max_length=128, unique=True)),
                ('name', models.CharField(blank=True, default='', max_length=200)),
                ('picture', models.URLField(blank=True, default='', max_length=500)),
                ('role', models.CharField(default='user', max_length=20)),
                ('email_show', models.BooleanField(default=False)),
                ('digitomize_rating', models.IntegerField(db_index=True, default=0)),
                ('skills', models.JSONField(blank=True, default=list)),
                ('education', models.JSONField(blank=True, default=list)),
                ('bio_data', models.TextField(blank=True, null=True)),
                ('bio_show', models.BooleanField(default=True)),
                ('phone_number_data', models.CharField(blank=True, max_length=30, null=True)),
                ('phone_number_show', models.BooleanField(default=False)),
                ('date_of_birth_data', models.CharField(blank=True, max_length=30, null=True)),
                ('date_of_birth_show', models.BooleanField(default=False)),
                ('github_data', models.CharField(blank=True, max_length=200, null=True)),
                ('github_show', models.BooleanField(default=True)),
                ('social_linkedin', models.URLField(blank=True, max_length=300, null=True)),
                ('social_instagram', models.URLField(blank=True, max_length=300, null=True)),
                ('social_twitter', models.URLField(blank=True, max_length=300, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='PlatformProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('platform', models.CharField(choices=PLATFORM_CHOICES, max_length=20)),
                ('username', models.CharField(blank=True, max_length=100, null=True)),
                ('show_on_website', models.BooleanField(default=True)),
                ('rating', models.IntegerField(blank=True, null=True)),
                ('attended_contests_count', models.IntegerField(blank=True, null=True)),
                ('badge', models.CharField(blank=True, max_length=50, null=True)),
                ('total_questions', models.IntegerField(blank=True, null=True)),
                ('easy_questions', models.IntegerField(blank=True, null=True)),
                ('medium_questions', models.IntegerField(blank=True, null=True)),
                ('hard_questions', models.IntegerField(blank=True, null=True)),
                ('fetch_time_ms', models.BigIntegerField(default=0)),
                ('profile', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='platforms', to='core.profile')),
            ],
            options={
                'verbose_name': 'Platform Profile',
                'verbose_name_plural': 'Platform Profiles',
                'indexes': [models.Index(fields=['platform', 'rating'], name='platform_profile_rating_idx')],
                'constraints': [models.UniqueConstraint(fields=('profile', 'platform'), name='platform_profile_unique')],
            },
        ),
        migrations.CreateModel(
            name='UpcomingContest',
            fields=_contest_fields(),
            options={
                'verbose_name': 'Upcoming Contest',
                'verbose_name_plural': 'Upcoming Contests',
                'ordering': ['start_time_unix'],
                'abstract': False,
                'indexes': [models.Index(fields=['start_time_unix'], name='upcoming_contest_start_idx')],
                'constraints': [models.UniqueConstraint(fields=('host', 'vanity'), name='upcoming_contest_host_vanity_uniq')],
            },
        ),
        migrations.CreateModel(
            name='Contest',
            fields=_contest_fields(),
            options={
                'verbose_name': 'Contest',
                'verbose_name_plural': 'All Contests',
                'ordering': ['start_time_unix'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('host', 'vanity'), name='contest_host_vanity_uniq')],
            },
        ),
        migrations.CreateModel(
            name='UpcomingHackathon',
            fields=_hackathon_fields(),
            options={
                'verbose_name': 'Upcoming Hackathon',
                'verbose_name_plural': 'Upcoming Hackathons',
                'ordering': ['registration_start_time_unix'],
                'abstract': False,
                'indexes': [models.Index(fields=['registration_end_time_unix'], name='upcoming_hackathon_reg_end_idx')],
                'constraints': [models.UniqueConstraint(fields=('host', 'vanity'), name='upcoming_hackathon_host_vanity_uniq')],
            },
        ),
        migrations.CreateModel(
            name='Hackathon',
            fields=_hackathon_fields(),
            options={
                'verbose_name': 'Hackathon',
                'verbose_name_plural': 'All Hackathons',
                'ordering': ['registration_start_time_unix'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('host', 'vanity'), name='hackathon_host_vanity_uniq')],
            },
        ),
    ]
