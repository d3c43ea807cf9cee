"""
Document-level checks for post files.

Nothing here raises for bad content; every problem is reported as an Issue.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.utils import timezone

from .frontmatter import (
    PostFormatError,
    front_matter_from_dict,
    load_front_matter,
    parse_date,
    split_front_matter,
)
from .markdown import find_code_blocks
from .naming import parse_filename
from .reader import read_text

ERROR = "error"
WARNING = "warning"

DEFAULT_REQUIRED_FIELDS = ("layout", "title", "date", "categories")


@dataclass(frozen=True)
class Issue:
    path: str
    line: Optional[int]
    code: str
    severity: str
    message: str

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.line else self.path
        return f"{where}: {self.severity}: [{self.code}] {self.message}"

    def as_dict(self) -> dict:
        return asdict(self)


def _required_fields() -> tuple:
    return tuple(getattr(settings, "POSTS_REQUIRED_FIELDS", DEFAULT_REQUIRED_FIELDS))


def _find_key_line(yaml_text: str, key: str) -> Optional[int]:
    for i, line in enumerate(yaml_text.splitlines()):
        if line.split(":", 1)[0].strip() == key:
            return i + 2
    return None


def lint_text(text: str, filename: str) -> List[Issue]:
    issues: List[Issue] = []

    def add(code: str, severity: str, message: str, line: Optional[int] = None) -> None:
        issues.append(Issue(path=filename, line=line, code=code, severity=severity, message=message))

    filename_date = None
    try:
        filename_date, _ = parse_filename(Path(filename).name)
    except PostFormatError as exc:
        add("filename", ERROR, str(exc))

    try:
        yaml_text, body, body_line = split_front_matter(text)
    except PostFormatError as exc:
        add("front-matter", ERROR, str(exc), exc.line)
        # Without a fence we cannot tell body from metadata; scan the whole file.
        _check_fences(text, 1, add)
        return issues

    try:
        fm = front_matter_from_dict(load_front_matter(yaml_text))
    except PostFormatError as exc:
        add("front-matter", ERROR, str(exc), exc.line)
        _check_fences(body, body_line, add)
        return issues

    for key in _required_fields():
        if not fm.has(key):
            add("missing-field", ERROR, f"front matter has no '{key}'", 1)

    if fm.has("title") and not (fm.title or "").strip():
        add("empty-title", ERROR, "title is empty", _find_key_line(yaml_text, "title"))

    if fm.has("date"):
        resolved = parse_date(fm.date, timezone.get_default_timezone()) if fm.date is not None else None
        if resolved is None:
            add("bad-date", ERROR, f"date {fm.date!r} cannot be parsed", _find_key_line(yaml_text, "date"))
        elif filename_date is not None and resolved.date() != filename_date:
            add(
                "date-mismatch",
                WARNING,
                f"front matter date {resolved.date()} differs from filename date {filename_date}",
                _find_key_line(yaml_text, "date"),
            )

    if fm.has("categories") and not fm.categories:
        line = _find_key_line(yaml_text, "categories") or _find_key_line(yaml_text, "category")
        add("empty-categories", WARNING, "categories are empty", line)

    _check_fences(body, body_line, add)
    return issues


def _check_fences(body: str, first_line: int, add) -> None:
    for block in find_code_blocks(body, first_line=first_line):
        if not block.closed:
            add("unclosed-fence", ERROR, f"code block opened with {block.fence} is never closed", block.start_line)


def lint_path(path: Path) -> List[Issue]:
    try:
        text = read_text(path)
    except PostFormatError as exc:
        return [Issue(path=str(path), line=None, code="front-matter", severity=ERROR, message=str(exc))]
    return lint_text(text, str(path))


def duplicate_slug_issues(paths: Iterable[Path]) -> List[Issue]:
    by_slug: Dict[str, List[Path]] = defaultdict(list)
    for p in paths:
        try:
            _, slug = parse_filename(p.name)
        except PostFormatError:
            continue
        by_slug[slug].append(p)

    issues: List[Issue] = []
    for slug, group in sorted(by_slug.items()):
        if len(group) < 2:
            continue
        others = ", ".join(g.name for g in group)
        for p in group:
            issues.append(
                Issue(
                    path=str(p),
                    line=None,
                    code="duplicate-slug",
                    severity=ERROR,
                    message=f"slug '{slug}' is shared by: {others}",
                )
            )
    return issues


def lint_paths(paths: Iterable[Path]) -> List[Issue]:
    paths = list(paths)
    issues: List[Issue] = []
    for p in paths:
        issues.extend(lint_path(p))
    issues.extend(duplicate_slug_issues(paths))
    return issues


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(i.severity == ERROR for i in issues)
