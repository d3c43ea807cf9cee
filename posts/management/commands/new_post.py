import yaml
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from posts.frontmatter import parse_date
from posts.naming import post_filename

from ._paths import posts_root

TEMPLATE = """---
{front_matter}---

Summary goes here.

<!--more-->

Body goes here.
"""


class Command(BaseCommand):
    help = "Create a new post file with front matter filled in"

    def add_arguments(self, parser):
        parser.add_argument("title")
        parser.add_argument("--categories", nargs="*", default=[])
        parser.add_argument("--date", default=None, help="YYYY-MM-DD[ HH:MM[:SS]][ +HHMM] (default: now)")
        parser.add_argument("--layout", default=None)
        parser.add_argument("--root", default=None, help="Posts folder (default: POSTS_ROOT)")

    def handle(self, *args, **options):
        root = posts_root(options["root"])
        title = options["title"].strip()
        if not title:
            raise CommandError("title must not be empty")

        if options["date"]:
            when = parse_date(options["date"], timezone.get_default_timezone())
            if when is None:
                raise CommandError(f"cannot parse date: {options['date']!r}")
        else:
            when = timezone.localtime().replace(microsecond=0)

        path = root / post_filename(when.date(), title)
        if path.exists():
            raise CommandError(f"refusing to overwrite existing post: {path}")

        data = {
            "layout": options["layout"] or getattr(settings, "POSTS_DEFAULT_LAYOUT", "post"),
            "title": title,
            "date": when.strftime("%Y-%m-%d %H:%M:%S %z"),
            "categories": " ".join(options["categories"]),
            "excerpt_separator": "<!--more-->",
        }
        front_matter = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
        path.write_text(TEMPLATE.format(front_matter=front_matter), encoding="utf-8")

        self.stdout.write(self.style.SUCCESS(f"created {path}"))
