from datetime import date

from django.test import SimpleTestCase

from posts.frontmatter import PostFormatError
from posts.naming import parse_filename, post_filename, slugify


class ParseFilenameTests(SimpleTestCase):
    def test_splits_date_and_slug(self):
        d, slug = parse_filename("2016-03-20-simplifying-boolean-expressions.md")
        self.assertEqual(d, date(2016, 3, 20))
        self.assertEqual(slug, "simplifying-boolean-expressions")

    def test_accepts_markdown_suffix(self):
        _, slug = parse_filename("2016-05-02-type-lists.markdown")
        self.assertEqual(slug, "type-lists")

    def test_rejects_name_without_date(self):
        with self.assertRaises(PostFormatError):
            parse_filename("type-lists.md")

    def test_rejects_impossible_date(self):
        with self.assertRaisesMessage(PostFormatError, "invalid date"):
            parse_filename("2016-02-30-leap.md")

    def test_rejects_other_extensions(self):
        with self.assertRaises(PostFormatError):
            parse_filename("2016-03-20-post.txt")


class SlugifyTests(SimpleTestCase):
    def test_lowercases_and_joins_words(self):
        self.assertEqual(slugify("Compile-time Type Lists!"), "compile-time-type-lists")

    def test_collapses_separators(self):
        self.assertEqual(slugify("  a  --  b__c "), "a-b-c")

    def test_empty_result_falls_back(self):
        self.assertEqual(slugify("???"), "untitled")

    def test_post_filename(self):
        self.assertEqual(
            post_filename(date(2016, 5, 2), "Compile-time type lists"),
            "2016-05-02-compile-time-type-lists.md",
        )
