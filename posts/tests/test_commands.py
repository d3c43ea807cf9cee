import json
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from posts.lint import lint_path
from posts.models import Category, Post

from .helpers import GOOD_POST, TempPostsMixin, post_text


class CommandTestCase(TempPostsMixin, TestCase):
    def setUp(self):
        super().setUp()
        overrider = override_settings(POSTS_ROOT=self.root, TIME_ZONE="UTC")
        overrider.enable()
        self.addCleanup(overrider.disable)

    def call(self, *args, **kwargs):
        out, err = StringIO(), StringIO()
        call_command(*args, stdout=out, stderr=err, **kwargs)
        return out.getvalue(), err.getvalue()


class LintPostsCommandTests(CommandTestCase):
    def test_clean_folder(self):
        self.write_post("2016-03-20-boolean.md", GOOD_POST)
        out, _ = self.call("lint_posts")
        self.assertIn("1 file(s) checked: 0 error(s), 0 warning(s)", out)

    def test_errors_fail_the_command(self):
        self.write_post("2016-03-20-boolean.md", post_text(title=""))
        with self.assertRaisesMessage(CommandError, "1 error(s)"):
            self.call("lint_posts")

    def test_warnings_pass_unless_strict(self):
        self.write_post("2016-03-20-boolean.md", post_text(date="2016-03-21"))
        out, _ = self.call("lint_posts")
        self.assertIn("date-mismatch", out)
        with self.assertRaisesMessage(CommandError, "1 warning(s)"):
            self.call("lint_posts", "--strict")

    def test_explicit_paths_and_json(self):
        p = self.write_post("2016-03-20-boolean.md", "no front matter\n")
        buf = StringIO()
        with self.assertRaises(CommandError):
            call_command("lint_posts", str(p), "--format", "json", stdout=buf)
        issues = json.loads(buf.getvalue())
        self.assertEqual(issues[0]["code"], "front-matter")
        self.assertEqual(issues[0]["path"], str(p))

    def test_unknown_path(self):
        with self.assertRaisesMessage(CommandError, "no such file or folder"):
            self.call("lint_posts", str(self.root / "missing.md"))


class ImportPostsCommandTests(CommandTestCase):
    def import_summary(self, *args):
        out, _ = self.call("import_posts", *args)
        return json.loads(out)

    def test_insert_update_unchanged_delete(self):
        a = self.write_post("2016-03-20-boolean.md", GOOD_POST)
        self.write_post("2016-05-02-type-lists.md", post_text(title="Type lists", date="2016-05-02"))

        summary = self.import_summary()
        self.assertEqual(sorted(summary["inserted"]), ["boolean", "type-lists"])
        post = Post.objects.get(slug="boolean")
        self.assertEqual(post.version, 0)
        self.assertEqual(post.title, "Simplifying boolean expressions")
        self.assertEqual(sorted(c.name for c in post.categories.all()), ["c++", "logic"])

        summary = self.import_summary()
        self.assertEqual(sorted(summary["unchanged"]), ["boolean", "type-lists"])
        self.assertEqual(Post.objects.get(slug="boolean").version, 0)

        a.write_text(GOOD_POST + "\nOne more paragraph.\n", encoding="utf-8")
        summary = self.import_summary()
        self.assertEqual(summary["updated"], ["boolean"])
        self.assertEqual(Post.objects.get(slug="boolean").version, 1)

        a.unlink()
        summary = self.import_summary()
        self.assertEqual(summary["deleted"], ["boolean"])
        self.assertFalse(Post.objects.filter(slug="boolean").exists())
        self.assertFalse(Category.objects.filter(name="logic").exists())

    def test_dry_run_writes_nothing(self):
        self.write_post("2016-03-20-boolean.md", GOOD_POST)
        summary = self.import_summary("--dry-run")
        self.assertEqual(summary["inserted"], ["boolean"])
        self.assertEqual(Post.objects.count(), 0)

    def test_files_with_errors_are_skipped(self):
        self.write_post("2016-03-20-boolean.md", GOOD_POST)
        self.write_post("2016-03-21-broken.md", "---\ntitle: [oops\n---\n")
        out, err = self.call("import_posts")
        summary = json.loads(out)
        self.assertEqual(summary["inserted"], ["boolean"])
        self.assertIn("2016-03-21-broken.md", summary["skipped"])
        self.assertIn("skipped 2016-03-21-broken.md", err)

    def test_impossible_date_is_skipped(self):
        self.write_post("2016-02-28-leap.md", post_text(date="2016-02-30"))
        summary = self.import_summary()
        self.assertIn("2016-02-28-leap.md", summary["skipped"])
        self.assertEqual(Post.objects.count(), 0)

        out, _ = self.call("list_categories", "--format", "json")
        self.assertEqual(json.loads(out), {})

    def test_broken_file_keeps_its_previous_row(self):
        p = self.write_post("2016-03-20-boolean.md", GOOD_POST)
        self.call("import_posts")
        p.write_text(post_text(title=""), encoding="utf-8")
        summary = self.import_summary()
        self.assertEqual(summary["deleted"], [])
        self.assertTrue(Post.objects.filter(slug="boolean").exists())

    def test_category_slug_collisions(self):
        self.write_post("2016-03-20-langs.md", post_text(categories="c++ c#"))
        self.call("import_posts")
        self.assertEqual(sorted(Category.objects.values_list("slug", flat=True)), ["c", "c-2"])

    def test_missing_root(self):
        with self.assertRaisesMessage(CommandError, "posts folder not found"):
            self.call("import_posts", "--root", str(self.root / "nope"))


class ListCategoriesCommandTests(CommandTestCase):
    def test_json(self):
        self.write_post("2016-03-20-boolean.md", GOOD_POST)
        self.write_post("2016-05-02-type-lists.md", post_text(title="Type lists", date="2016-05-02", categories="c++"))
        out, _ = self.call("list_categories", "--format", "json")
        data = json.loads(out)
        self.assertEqual(list(data), ["c++", "logic"])
        self.assertEqual([p["slug"] for p in data["c++"]], ["type-lists", "boolean"])

    def test_text(self):
        self.write_post("2016-03-20-boolean.md", GOOD_POST)
        out, _ = self.call("list_categories")
        self.assertIn("logic (1)", out)
        self.assertIn("2016-03-20  Simplifying boolean expressions", out)


class NewPostCommandTests(CommandTestCase):
    def test_creates_lint_clean_post(self):
        self.call("new_post", "Compile-time type lists", "--categories", "c++", "templates", "--date", "2016-05-02 09:30")
        path = self.root / "2016-05-02-compile-time-type-lists.md"
        self.assertTrue(path.exists())
        self.assertEqual(lint_path(path), [])

        text = path.read_text(encoding="utf-8")
        self.assertIn("title: Compile-time type lists", text)
        self.assertIn("categories: c++ templates", text)
        self.assertIn("<!--more-->", text)

    def test_refuses_to_overwrite(self):
        self.call("new_post", "Hello", "--date", "2016-05-02")
        with self.assertRaisesMessage(CommandError, "refusing to overwrite"):
            self.call("new_post", "Hello", "--date", "2016-05-02")

    def test_bad_date(self):
        with self.assertRaisesMessage(CommandError, "cannot parse date"):
            self.call("new_post", "Hello", "--date", "someday")

    def test_out_of_range_offset(self):
        with self.assertRaisesMessage(CommandError, "cannot parse date"):
            self.call("new_post", "Hello", "--date", "2016-01-01 10:00 +9999")
