from __future__ import annotations

import tempfile
from pathlib import Path

GOOD_POST = """---
layout: post
title: "Simplifying boolean expressions"
date: 2016-03-20 12:00:00 +0100
categories: logic c++
---

Nested conditionals grow until nobody can read them.

```cpp
bool f(bool a, bool b) { return a || (a && b); }
```
"""


def post_text(
    title: str = "A post",
    date: str = "2016-03-20 12:00:00 +0000",
    categories: str = "c++",
    layout: str = "post",
    body: str = "Intro paragraph.\n\nRest of the post.\n",
) -> str:
    return (
        "---\n"
        f"layout: {layout}\n"
        f'title: "{title}"\n'
        f"date: {date}\n"
        f"categories: {categories}\n"
        "---\n"
        f"{body}"
    )


class TempPostsMixin:
    """Gives each test an empty posts folder at self.root."""

    def setUp(self):
        super().setUp()
        td = tempfile.TemporaryDirectory(prefix="posts_")
        self.addCleanup(td.cleanup)
        self.root = Path(td.name)

    def write_post(self, name: str, text: str) -> Path:
        p = self.root / name
        p.write_text(text, encoding="utf-8")
        return p
