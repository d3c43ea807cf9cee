import json

from django.core.management.base import BaseCommand, CommandError

from posts.lint import ERROR, WARNING, lint_paths

from ._paths import collect_paths


class Command(BaseCommand):
    help = "Check post files for well-formed names, front matter and code fences"

    def add_arguments(self, parser):
        parser.add_argument("paths", nargs="*", help="Post files or folders (default: POSTS_ROOT)")
        parser.add_argument("--strict", action="store_true", help="Treat warnings as failures")
        parser.add_argument("--format", choices=["text", "json"], default="text")

    def handle(self, *args, **options):
        paths = collect_paths(options["paths"])
        issues = lint_paths(paths)

        if options["format"] == "json":
            self.stdout.write(json.dumps([i.as_dict() for i in issues], indent=2))
        else:
            for issue in issues:
                style = self.style.ERROR if issue.severity == ERROR else self.style.WARNING
                self.stdout.write(style(str(issue)))

        errors = sum(1 for i in issues if i.severity == ERROR)
        warnings = sum(1 for i in issues if i.severity == WARNING)

        if errors or (options["strict"] and warnings):
            raise CommandError(f"{len(paths)} file(s) checked: {errors} error(s), {warnings} warning(s)")

        if options["format"] == "text":
            self.stdout.write(
                self.style.SUCCESS(f"{len(paths)} file(s) checked: {errors} error(s), {warnings} warning(s)")
            )
