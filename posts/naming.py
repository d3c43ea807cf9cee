from __future__ import annotations

import re
from datetime import date
from typing import Tuple

from .frontmatter import PostFormatError

POST_SUFFIXES = {".md", ".markdown"}

FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)\.(md|markdown)$")


def parse_filename(name: str) -> Tuple[date, str]:
    """Split ``YYYY-MM-DD-title-slug.md`` into its date and slug."""
    m = FILENAME_RE.match(name)
    if not m:
        raise PostFormatError(f"filename {name!r} does not match YYYY-MM-DD-title-slug.md")

    year, month, day, slug = m.group(1), m.group(2), m.group(3), m.group(4)
    try:
        d = date(int(year), int(month), int(day))
    except ValueError as exc:
        raise PostFormatError(f"filename {name!r} has an invalid date: {exc}") from exc
    return d, slug


def slugify(s: str) -> str:
    s = s.strip().lower()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s_-]+", "-", s)
    s = re.sub(r"^-+|-+$", "", s)
    return s or "untitled"


def post_filename(d: date, title: str, suffix: str = ".md") -> str:
    return f"{d:%Y-%m-%d}-{slugify(title)}{suffix}"
