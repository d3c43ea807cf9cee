from pathlib import Path

from django.test import SimpleTestCase

from posts.catalog import build_category_index, index_as_dict, related_posts
from posts.reader import parse_post

from .helpers import post_text


def make(name, date, categories):
    return parse_post(post_text(title=name, date=date, categories=categories), Path(f"{date[:10]}-{name}.md"))


class CategoryIndexTests(SimpleTestCase):
    def setUp(self):
        self.bool_post = make("boolean", "2016-03-20", "logic c++")
        self.types = make("type-lists", "2016-05-02", "c++ templates")
        self.sfinae = make("sfinae", "2017-01-10", "c++ templates")
        self.posts = [self.bool_post, self.types, self.sfinae]

    def test_groups_by_category_newest_first(self):
        index = build_category_index(self.posts)
        self.assertEqual(list(index), ["c++", "logic", "templates"])
        self.assertEqual([p.slug for p in index["c++"]], ["sfinae", "type-lists", "boolean"])
        self.assertEqual([p.slug for p in index["logic"]], ["boolean"])

    def test_related_posts_ranked_by_shared_categories(self):
        related = related_posts(self.types, self.posts)
        self.assertEqual([p.slug for p in related], ["sfinae", "boolean"])

    def test_related_posts_limit_and_no_self(self):
        related = related_posts(self.sfinae, self.posts, limit=1)
        self.assertEqual([p.slug for p in related], ["type-lists"])

    def test_unrelated(self):
        lone = make("cooking", "2018-01-01", "food")
        self.assertEqual(related_posts(lone, self.posts + [lone]), [])

    def test_index_as_dict(self):
        data = index_as_dict(build_category_index([self.bool_post]))
        self.assertEqual(data["logic"][0]["slug"], "boolean")
        self.assertTrue(data["logic"][0]["date"].startswith("2016-03-20"))
