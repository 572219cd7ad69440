from django.db import migrations, models


PLATFORM_CHOICES = [
    ('codeforces', 'Codeforces'),
    ('codechef', 'CodeChef'),
    ('leetcode', 'LeetCode'),
    ('atcoder', 'AtCoder'),
    ('geeksforgeeks', 'GeeksforGeeks'),
    ('codingninjas', 'Coding Ninjas Studio'),
    ('devfolio', 'Devfolio'),
    ('devpost', 'Devpost'),
    ('unstop', 'Unstop'),
]


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='platformprofile',
            name='platform',
            field=models.CharField(choices=PLATFORM_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='upcomingcontest',
            name='host',
            field=models.CharField(choices=PLATFORM_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='contest',
            name='host',
            field=models.CharField(choices=PLATFORM_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='upcominghackathon',
            name='host',
            field=models.CharField(choices=PLATFORM_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='hackathon',
            name='host',
            field=models.CharField(choices=PLATFORM_CHOICES, max_length=20),
        ),
    ]
