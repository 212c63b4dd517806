from __future__ import annotations

from dataclasses import dataclass
from typing import List

DEFAULT_LOOKBACK = 300


@dataclass(frozen=True)
class TextBlock:
    """A top-level ``{...}`` span of the source text.

    ``end_index`` is the index of the closing brace (inclusive).
    ``preceding_text`` holds up to ``lookback`` characters before the opening
    brace and is what marker-based scoring looks at.
    """

    content: str
    start_index: int
    end_index: int
    preceding_text: str


def scan_blocks(text: str, lookback: int = DEFAULT_LOOKBACK) -> List[TextBlock]:
    """Return every top-level brace-balanced block, left to right.

    Quote-aware: braces inside single- or double-quoted strings are ignored and
    a backslash always skips the character after it. Nested blocks are part of
    their parent's content. A stray ``}`` at depth 0 is ignored.
    """
    blocks: List[TextBlock] = []
    depth = 0
    start = -1
    quote = ""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
            if depth == 0 and start != -1:
                blocks.append(
                    TextBlock(
                        content=text[start : i + 1],
                        start_index=start,
                        end_index=i,
                        preceding_text=text[max(0, start - lookback) : start],
                    )
                )
                start = -1
        i += 1
    return blocks
