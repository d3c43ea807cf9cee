"""
Front matter handling for post files.

A post starts with a YAML block fenced by ``---`` lines:

    ---
    layout: post
    title: "Simplifying boolean expressions"
    date: 2016-03-20 12:00:00 +0100
    categories: c++ logic
    ---

Everything after the closing fence is the Markdown body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple

import yaml
from django.utils.dateparse import parse_date as _parse_date_str
from django.utils.dateparse import parse_datetime as _parse_datetime_str

OPEN_FENCE = "---"
CLOSE_FENCES = ("---", "...")

# Jekyll writes offsets as +0100, which YAML leaves as a plain string.
_TZ_SUFFIX_RE = re.compile(r"\s*(Z|[+-]\d{2}(?::?\d{2})?)\s*$")


class PostFormatError(ValueError):
    """A post file does not have the structure the tooling expects."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


@dataclass
class FrontMatter:
    layout: Optional[str] = None
    title: Optional[str] = None
    date: Any = None
    categories: List[str] = field(default_factory=list)
    excerpt_separator: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    # keys as written, so lint can tell "absent" from "empty"
    keys: frozenset = frozenset()

    def has(self, key: str) -> bool:
        return key in self.keys


def split_front_matter(text: str) -> Tuple[str, str, int]:
    """
    Split a post into (yaml_text, body, body_line).

    body_line is the 1-based line number the body starts on.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPEN_FENCE:
        raise PostFormatError("front matter missing: file must start with '---'", line=1)

    for i in range(1, len(lines)):
        if lines[i].rstrip() in CLOSE_FENCES:
            yaml_text = "".join(lines[1:i])
            body = "".join(lines[i + 1:])
            return yaml_text, body, i + 2

    raise PostFormatError("front matter not terminated: no closing '---'", line=1)


def normalize_categories(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split()
    elif isinstance(raw, (list, tuple, set)):
        items = [str(x) for x in raw if x is not None]
    else:
        items = [str(raw)]
    return sorted({s.strip() for s in items if s.strip()})


def load_front_matter(yaml_text: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as exc:
        line = None
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            # +2: the opening fence, and marks are 0-based
            line = mark.line + 2
        raise PostFormatError(f"front matter is not valid YAML: {exc}", line=line) from exc
    except ValueError as exc:
        # PyYAML builds timestamps directly, so 2016-02-30 fails here
        raise PostFormatError(f"front matter has an invalid value: {exc}", line=2) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PostFormatError("front matter must be a mapping of keys to values", line=2)
    return {str(k): v for k, v in data.items()}


def parse_front_matter(text: str) -> FrontMatter:
    yaml_text, _, _ = split_front_matter(text)
    return front_matter_from_dict(load_front_matter(yaml_text))


def front_matter_from_dict(data: Dict[str, Any]) -> FrontMatter:
    known = {"layout", "title", "date", "categories", "category", "excerpt_separator"}

    raw_categories = data.get("categories")
    if "categories" not in data:
        raw_categories = data.get("category")

    layout = data.get("layout")
    title = data.get("title")
    sep = data.get("excerpt_separator")

    keys = set(data)
    if "category" in data:
        keys.add("categories")

    return FrontMatter(
        layout=str(layout) if layout is not None else None,
        title=str(title) if title is not None else None,
        date=data.get("date"),
        categories=normalize_categories(raw_categories),
        excerpt_separator=str(sep) if sep is not None else None,
        extra={k: v for k, v in data.items() if k not in known},
        keys=frozenset(keys),
    )


def _fixed_offset(suffix: str) -> tzinfo:
    if suffix == "Z":
        return timezone.utc
    sign = -1 if suffix[0] == "-" else 1
    digits = suffix[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    if hours > 23 or minutes > 59:
        raise ValueError(f"UTC offset out of range: {suffix}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_date(value: Any, default_tz: tzinfo) -> Optional[datetime]:
    """
    Resolve a front matter date into an aware datetime.

    Accepts what YAML hands back (date or datetime) as well as Jekyll-style
    strings such as ``2016-03-20 12:00:00 +0100``. Returns None when the value
    cannot be read as a date.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        s = value.strip()
        tz: Optional[tzinfo] = None
        m = _TZ_SUFFIX_RE.search(s)
        try:
            if m and len(s) > 10:
                tz = _fixed_offset(m.group(1))
                s = s[: m.start()].strip()
            dt = _parse_datetime_str(s.replace(" ", "T", 1)) if len(s) > 10 else None
            if dt is None:
                d = _parse_date_str(s)
                dt = datetime.combine(d, time.min) if d is not None else None
        except ValueError:
            return None
        if dt is None:
            return None
        if tz is not None:
            dt = dt.replace(tzinfo=tz)
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=default_tz)
    return dt
