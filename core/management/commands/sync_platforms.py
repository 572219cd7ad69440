from django.core.management.base import BaseCommand

from core.services.sync import sync_contests, sync_hackathons


class Command(BaseCommand):
    help = "Runs a contest and/or hackathon sync cycle immediately."

    def add_arguments(self, parser):
        parser.add_argument(
            "--only",
            choices=["contests", "hackathons"],
            help="Limits the cycle to one kind of listing.",
        )

    def handle(self, *args, **options):
        only = options.get("only")
        runs = []
        if only in (None, "contests"):
            runs.append(sync_contests())
        if only in (None, "hackathons"):
            runs.append(sync_hackathons())

        for report in runs:
            for row in report.platforms:
                line = (
                    f"{report.kind}/{row.platform}: fetched={row.fetched} "
                    f"inserted={row.inserted} duplicates={row.duplicates}"
                )
                if row.error:
                    self.stdout.write(self.style.ERROR(f"{line} error={row.error}"))
                else:
                    self.stdout.write(line)
            self.stdout.write(
                self.style.SUCCESS(
                    f"{report.kind}: purged={report.purged} duration_ms={report.duration_ms}"
                )
            )
