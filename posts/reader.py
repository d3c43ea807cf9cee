from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from django.conf import settings
from django.utils import timezone

from .frontmatter import (
    FrontMatter,
    PostFormatError,
    front_matter_from_dict,
    load_front_matter,
    parse_date,
    split_front_matter,
)
from .markdown import split_excerpt
from .naming import POST_SUFFIXES, parse_filename

logger = logging.getLogger(__name__)


@dataclass
class PostSource:
    path: Path
    filename_date: date
    slug: str
    front_matter: FrontMatter
    body: str
    body_line: int
    excerpt: str
    has_excerpt_marker: bool
    content_hash: str
    date: datetime

    @property
    def title(self) -> str:
        return self.front_matter.title or ""

    @property
    def layout(self) -> str:
        return self.front_matter.layout or ""

    @property
    def categories(self) -> List[str]:
        return self.front_matter.categories


def sha256_hex(text: str) -> str:
    h = hashlib.sha256()
    h.update(text.encode("utf-8"))
    return h.hexdigest()


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise PostFormatError(f"{path.name} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise PostFormatError(f"cannot read {path.name}: {exc.strerror or exc}") from exc


def excerpt_separator_for(fm: FrontMatter) -> str:
    if fm.excerpt_separator is not None:
        return fm.excerpt_separator
    return getattr(settings, "POSTS_EXCERPT_SEPARATOR", "\n\n")


def parse_post(text: str, path: Path) -> PostSource:
    """Build a PostSource from file text; path supplies the name and is not read."""
    filename_date, slug = parse_filename(path.name)
    yaml_text, body, body_line = split_front_matter(text)
    fm = front_matter_from_dict(load_front_matter(yaml_text))

    default_tz = timezone.get_default_timezone()
    resolved = parse_date(fm.date, default_tz) if fm.date is not None else None
    if resolved is None:
        resolved = parse_date(filename_date, default_tz)

    excerpt, has_marker = split_excerpt(body, excerpt_separator_for(fm))

    return PostSource(
        path=path,
        filename_date=filename_date,
        slug=slug,
        front_matter=fm,
        body=body,
        body_line=body_line,
        excerpt=excerpt.strip(),
        has_excerpt_marker=has_marker,
        content_hash=sha256_hex(text),
        date=resolved,
    )


def read_post(path: Path) -> PostSource:
    return parse_post(read_text(path), path)


def is_post_file(p: Path, ignore: Optional[Iterable[str]] = None) -> bool:
    ignore = set(ignore or ())
    return (
        p.is_file()
        and not p.name.startswith(".")
        and p.name not in ignore
        and p.suffix.lower() in POST_SUFFIXES
    )


def iter_post_paths(root: Path, ignore: Optional[Iterable[str]] = None) -> Iterator[Path]:
    """Post files directly under root, in name (and so date) order."""
    if ignore is None:
        ignore = getattr(settings, "POSTS_IGNORE", set())
    ignore = set(ignore)
    for p in sorted(root.iterdir(), key=lambda x: x.name):
        if is_post_file(p, ignore):
            yield p


def read_posts(root: Path) -> List[PostSource]:
    """Read every well-formed post under root; malformed ones are logged and skipped."""
    posts: List[PostSource] = []
    for p in iter_post_paths(root):
        try:
            posts.append(read_post(p))
        except PostFormatError as exc:
            logger.warning("skipping %s: %s", p.name, exc)
    return posts
