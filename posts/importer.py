"""
Load a folder of post files into the catalog tables.

Row identity is the slug taken from the filename:
- slug not in the catalog: insert with version 0
- slug present, content_hash changed: update, version += 1
- slug present, content_hash unchanged: metadata only, version unchanged
Rows whose file has disappeared are removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

from django.db import transaction

from .lint import ERROR, Issue, lint_paths
from .models import Category, Post
from .naming import FILENAME_RE, slugify
from .reader import PostSource, iter_post_paths, read_post

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    inserted: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    skipped: Dict[str, List[str]] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "deleted": self.deleted,
            "skipped": self.skipped,
        }


def choose_unique_category_slug(name: str) -> str:
    """
    Categories like "c++" and "c#" both slugify to "c"; add a numeric
    suffix until the slug is free.
    """
    base = slugify(name)
    candidate = base
    i = 2
    while Category.objects.filter(slug=candidate).exists():
        candidate = f"{base}-{i}"
        i += 1
    return candidate


def get_or_create_category(name: str) -> Category:
    existing = Category.objects.filter(name=name).first()
    if existing is not None:
        return existing
    return Category.objects.create(name=name, slug=choose_unique_category_slug(name))


def upsert_post(src: PostSource) -> str:
    """Insert or update one post by slug. Returns 'inserted', 'updated' or 'unchanged'."""
    fields = dict(
        title=src.title,
        layout=src.layout,
        date=src.date,
        excerpt=src.excerpt,
        source_path=str(src.path),
    )

    post = Post.objects.select_for_update().filter(slug=src.slug).first()
    if post is None:
        post = Post.objects.create(
            slug=src.slug,
            body=src.body,
            content_hash=src.content_hash,
            version=0,
            **fields,
        )
        outcome = "inserted"
    elif post.content_hash != src.content_hash:
        for k, v in fields.items():
            setattr(post, k, v)
        post.body = src.body
        post.content_hash = src.content_hash
        post.version += 1
        post.save()
        outcome = "updated"
    else:
        # Content unchanged: refresh metadata only
        for k, v in fields.items():
            setattr(post, k, v)
        post.save()
        outcome = "unchanged"

    post.categories.set([get_or_create_category(c) for c in src.categories])
    return outcome


def _issues_by_path(issues: Iterable[Issue]) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for issue in issues:
        if issue.severity == ERROR:
            out.setdefault(issue.path, []).append(f"[{issue.code}] {issue.message}")
    return out


def import_folder(root: Path, dry_run: bool = False) -> ImportResult:
    paths = list(iter_post_paths(root))
    errors = _issues_by_path(lint_paths(paths))

    result = ImportResult()
    seen = set()

    with transaction.atomic():
        for p in paths:
            if str(p) in errors:
                result.skipped[p.name] = errors[str(p)]
                logger.info("skipping %s: %d lint error(s)", p.name, len(errors[str(p)]))
                continue

            src = read_post(p)
            seen.add(src.slug)
            if dry_run:
                existing = Post.objects.filter(slug=src.slug).values_list("content_hash", flat=True).first()
                if existing is None:
                    result.inserted.append(src.slug)
                elif existing != src.content_hash:
                    result.updated.append(src.slug)
                else:
                    result.unchanged.append(src.slug)
                continue

            outcome = upsert_post(src)
            getattr(result, outcome).append(src.slug)

        # A file that now fails lint keeps its old row; only vanished files are dropped.
        kept = seen | {_slug_of(name) for name in result.skipped}
        stale = Post.objects.exclude(slug__in=kept)
        result.deleted = sorted(stale.values_list("slug", flat=True))
        if not dry_run:
            stale.delete()
            Category.objects.filter(posts__isnull=True).delete()

    return result


def _slug_of(name: str) -> str:
    m = FILENAME_RE.match(name)
    return m.group(4) if m else ""
