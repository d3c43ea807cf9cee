import json

from django.core.management.base import BaseCommand

from posts.catalog import build_category_index, index_as_dict
from posts.reader import read_posts

from ._paths import posts_root


class Command(BaseCommand):
    help = "Print posts grouped by category"

    def add_arguments(self, parser):
        parser.add_argument("--root", default=None, help="Posts folder (default: POSTS_ROOT)")
        parser.add_argument("--format", choices=["text", "json"], default="text")

    def handle(self, *args, **options):
        index = build_category_index(read_posts(posts_root(options["root"])))

        if options["format"] == "json":
            self.stdout.write(json.dumps(index_as_dict(index), indent=2, ensure_ascii=False))
            return

        for category, posts in index.items():
            self.stdout.write(self.style.MIGRATE_HEADING(f"{category} ({len(posts)})"))
            for p in posts:
                self.stdout.write(f"  {p.date:%Y-%m-%d}  {p.title}")
