from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from django.conf import settings
from django.core.management.base import CommandError

from posts.reader import iter_post_paths


def posts_root(override: str | None = None) -> Path:
    root = Path(override).expanduser() if override else Path(getattr(settings, "POSTS_ROOT", "_posts"))
    if not root.is_dir():
        raise CommandError(f"posts folder not found: {root}")
    return root


def collect_paths(args: Iterable[str]) -> List[Path]:
    """Expand command-line files and folders into post paths; default is POSTS_ROOT."""
    args = list(args)
    if not args:
        return list(iter_post_paths(posts_root()))

    paths: List[Path] = []
    for a in args:
        p = Path(a).expanduser()
        if p.is_dir():
            paths.extend(iter_post_paths(p))
        elif p.is_file():
            paths.append(p)
        else:
            raise CommandError(f"no such file or folder: {p}")
    return paths
