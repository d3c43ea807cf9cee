"""Just enough Markdown structure for linting: fenced code blocks and the excerpt."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")


@dataclass
class CodeBlock:
    start_line: int
    end_line: Optional[int]
    fence: str
    info: str

    @property
    def closed(self) -> bool:
        return self.end_line is not None


def _is_closing(line: str, opener: str) -> bool:
    m = FENCE_RE.match(line.rstrip("\r\n"))
    if not m:
        return False
    fence, rest = m.group(2), m.group(3)
    return fence[0] == opener[0] and len(fence) >= len(opener) and not rest.strip()


def find_code_blocks(body: str, first_line: int = 1) -> List[CodeBlock]:
    """
    Locate fenced code blocks in a Markdown body.

    Line numbers are offset by first_line so they point into the whole file.
    A block still open at end of input gets end_line=None.
    """
    blocks: List[CodeBlock] = []
    current: Optional[CodeBlock] = None

    for offset, line in enumerate(body.splitlines()):
        lineno = first_line + offset
        if current is not None:
            if _is_closing(line, current.fence):
                current.end_line = lineno
                blocks.append(current)
                current = None
            continue

        m = FENCE_RE.match(line)
        if not m:
            continue
        fence, info = m.group(2), m.group(3).strip()
        # backtick fences cannot carry backticks in the info string
        if fence[0] == "`" and "`" in info:
            continue
        current = CodeBlock(start_line=lineno, end_line=None, fence=fence, info=info)

    if current is not None:
        blocks.append(current)
    return blocks


def _code_spans(body: str) -> List[Tuple[int, int]]:
    """Character ranges of the body covered by fenced code blocks."""
    spans: List[Tuple[int, int]] = []
    lines = body.splitlines(keepends=True)
    starts = [0]
    for line in lines:
        starts.append(starts[-1] + len(line))

    for block in find_code_blocks(body):
        start = starts[block.start_line - 1]
        end = starts[block.end_line] if block.end_line is not None else len(body)
        spans.append((start, end))
    return spans


def split_excerpt(body: str, separator: str) -> Tuple[str, bool]:
    """
    Return (excerpt, has_marker).

    The excerpt is the body up to the first separator that sits outside a
    code block. Without a marker the whole body is the excerpt. CRLF line
    endings are folded to LF first, so the excerpt comes back with LF.
    """
    if not separator:
        return body, False

    body = body.replace("\r\n", "\n")
    separator = separator.replace("\r\n", "\n")

    # Leading blank lines would make "\n\n" match before any text.
    lead = len(body) - len(body.lstrip("\n"))
    spans = _code_spans(body)

    pos = body.find(separator, lead)
    while pos != -1:
        inside = next((end for start, end in spans if start <= pos < end), None)
        if inside is None:
            return body[:pos], True
        pos = body.find(separator, inside)
    return body, False
