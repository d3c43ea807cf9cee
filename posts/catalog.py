from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from .reader import PostSource


def _newest_first(posts: Iterable[PostSource]) -> List[PostSource]:
    return sorted(posts, key=lambda p: (p.date, p.slug), reverse=True)


def build_category_index(posts: Iterable[PostSource]) -> Dict[str, List[PostSource]]:
    """Map each category to its posts, categories by name and posts newest first."""
    buckets: Dict[str, List[PostSource]] = defaultdict(list)
    for p in posts:
        for c in p.categories:
            buckets[c].append(p)
    return {c: _newest_first(buckets[c]) for c in sorted(buckets, key=str.lower)}


def related_posts(post: PostSource, posts: Iterable[PostSource], limit: int = 5) -> List[PostSource]:
    """Other posts sharing at least one category, most shared first."""
    mine = set(post.categories)
    scored = []
    for other in posts:
        if other.path == post.path:
            continue
        shared = len(mine.intersection(other.categories))
        if shared:
            scored.append((shared, other))

    scored.sort(key=lambda t: (t[0], t[1].date, t[1].slug), reverse=True)
    return [other for _, other in scored[:limit]]


def index_as_dict(index: Dict[str, List[PostSource]]) -> Dict[str, List[dict]]:
    return {
        c: [{"slug": p.slug, "title": p.title, "date": p.date.isoformat()} for p in ps]
        for c, ps in index.items()
    }
