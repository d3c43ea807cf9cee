import json

from django.core.management.base import BaseCommand

from posts.importer import import_folder

from ._paths import posts_root


class Command(BaseCommand):
    help = "Load the posts folder into the catalog tables (upsert by slug)"

    def add_arguments(self, parser):
        parser.add_argument("--root", default=None, help="Posts folder (default: POSTS_ROOT)")
        parser.add_argument("--dry-run", action="store_true", help="Report what would change without writing")

    def handle(self, *args, **options):
        root = posts_root(options["root"])
        result = import_folder(root, dry_run=options["dry_run"])

        summary = {"root": str(root), "dry_run": options["dry_run"], **result.as_dict()}
        self.stdout.write(json.dumps(summary, indent=2))

        for name, problems in result.skipped.items():
            self.stderr.write(self.style.WARNING(f"skipped {name}: {'; '.join(problems)}"))
