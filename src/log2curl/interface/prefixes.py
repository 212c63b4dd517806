from __future__ import annotations
import re
from typing import List

# Per-line logging-framework preambles. Each pattern is anchored at the start
# of a line and removes only the preamble, never the payload after it.
FLUTTER_PRINT_RE = re.compile(r"^flutter:\s*", re.IGNORECASE)
# Android logcat: I/flutter (12345):  D/OkHttp ( 987):
LOGCAT_RE = re.compile(r"^[IDWEV]/[\w.]+\s*\(\s*\d+\s*\):\s*")
# Laravel / Monolog: [2024-01-15 10:23:45] local.INFO:
BRACKET_TS_LEVEL_RE = re.compile(r"^\[\d{4}[^\]\n]*\]\s*[\w.]*:\s*")
# NestJS: [Nest] 38453  - 01/15/2024, 10:23:45 AM     LOG [RouterExplorer]
NEST_RE = re.compile(
    r"^\[Nest\]\s*\d+\s*-\s*[\d/.\-]+,?\s*[\d:]+\s*(?:[AP]M)?\s*"
    r"(?:LOG|ERROR|WARN|DEBUG|VERBOSE|FATAL)\b\s*(?:\[[\w.\-]+\]\s*)?",
    re.IGNORECASE,
)
ISO_TS_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}[\d.]*(?:Z|[+-]\d{2}:?\d{2})?\s*")
PROMPT_RE = re.compile(r"^>\s*")

PREFIX_PATTERNS: List[re.Pattern] = [
    FLUTTER_PRINT_RE,
    LOGCAT_RE,
    BRACKET_TS_LEVEL_RE,
    ISO_TS_PREFIX_RE,
    NEST_RE,
    PROMPT_RE,
]


def strip_line_prefix(line: str) -> str:
    """Remove stacked preambles from one line until none matches."""
    while True:
        stripped = line
        for pattern in PREFIX_PATTERNS:
            stripped = pattern.sub("", stripped, count=1)
        if stripped == line:
            return line
        line = stripped


def strip_log_prefixes(text: str) -> str:
    """Strip per-line logging noise so downstream regexes see clean text.

    Lines that carry no known prefix pass through unchanged. Stripping is
    repeated per line until a fixed point, so ``strip(strip(x)) == strip(x)``.
    """
    return "\n".join(strip_line_prefix(line) for line in text.split("\n"))
