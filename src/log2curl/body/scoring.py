"""Pick the request body out of a log that may hold several ``{...}`` blobs.

Logs routinely dump the request headers, the client options and the response
next to the payload. Each candidate block is scored by a set of independent
weighted rules that look at the text right before the block (``DATA:`` vs
``HEADERS:``) and at the key names inside it. The highest score wins; ties go
to the block with the fewest header-looking keys, then to scan order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..interface.prefixes import strip_log_prefixes
from ..utils.logging import get_logger
from .blocks import DEFAULT_LOOKBACK, TextBlock, scan_blocks

logger = get_logger(__name__)

EMPTY_BLOCK_SCORE = -100


def _markers(*patterns: str) -> List[re.Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


BODY_MARKERS = _markers(
    r"\bbody\s*[:=]\s*$",
    r"\brequest[-_ ]?body\s*[:=]\s*$",
    r"\bbody\s*/\s*data\s*[:=]\s*$",
    r"\brequest[-_ ]?body\s*/\s*data\s*[:=]\s*$",
    r"\bpayload\s*[:=]\s*$",
    r"\bdata\s*[:=]\s*$",
    r"\bpost[-_ ]?data\s*[:=]\s*$",
    r"\bparams\s*[:=]\s*$",
    r"\bDATA\s+in\s+\w+\s*$",
    r"(?:^|\s)--data(?:-raw|-binary)?\s+['\"]?$",
    r"\brequest\s*[:=]\s*$",
)

HEADER_MARKERS = _markers(
    r"\bheaders?\s*[:=]\s*$",
    r"\brequest[-_ ]?headers?\s*[:=]\s*$",
    r"\bresponse[-_ ]?headers?\s*[:=]\s*$",
    r"\bbaseOptions\.headers\s*[:=]\s*$",
)

META_MARKERS = _markers(
    r"\bconfig\s*[:=]\s*$",
    r"\boptions\s*[:=]\s*$",
    r"\bresponse\s*[:=]\s*$",
    r"\bextra\s*[:=]\s*$",
    r"\bquery[-_ ]?parameters?\s*[:=]\s*$",
)

HEADER_KEYS = frozenset({
    "authorization", "content-type", "accept", "user-agent",
    "cache-control", "x-requested-with", "cookie", "set-cookie",
    "host", "connection", "accept-encoding", "accept-language",
    "content-length", "origin", "referer", "x-csrf-token",
    "x-xsrf-token", "x-forwarded-for", "x-forwarded-proto",
    "pragma", "expires", "etag", "if-none-match", "if-modified-since",
    "access-control-allow-origin", "access-control-allow-methods",
    "access-control-allow-headers", "vary", "transfer-encoding",
})

META_KEYS = frozenset({
    "statuscode", "statusmessage", "responsetype", "extra",
    "connecttimeout", "receivetimeout", "sendtimeout",
    "followredirects", "maxredirects", "baseurl",
    "validatestatus", "httpclientadapter", "listformat",
    "contenttype", "responseheaders", "isredirect",
})

# Rough "key:" finder; it is only used for scoring, not for parsing.
RAW_KEY_RE = re.compile(r"[\"']?(\w[\w\-.]*)[\"']?\s*:")


def extract_raw_keys(content: str) -> List[str]:
    return [m.group(1).lower() for m in RAW_KEY_RE.finditer(content)]


def count_header_keys(keys: Sequence[str]) -> int:
    return sum(1 for k in keys if k in HEADER_KEYS)


def count_meta_keys(keys: Sequence[str]) -> int:
    return sum(1 for k in keys if k in META_KEYS)


@dataclass(frozen=True)
class BlockFeatures:
    """What the rules look at: cleaned preceding context plus key statistics."""

    preceding: str
    keys: Tuple[str, ...]
    header_count: int
    meta_count: int

    @staticmethod
    def of(block: TextBlock) -> "BlockFeatures":
        keys = tuple(extract_raw_keys(block.content))
        return BlockFeatures(
            # "flutter: DATA:" must look like "DATA:" to the marker patterns
            preceding=strip_log_prefixes(block.preceding_text).rstrip(),
            keys=keys,
            header_count=count_header_keys(keys),
            meta_count=count_meta_keys(keys),
        )


# ---- rules: each is an independent predicate over BlockFeatures

def has_body_marker(f: BlockFeatures) -> bool:
    return any(p.search(f.preceding) for p in BODY_MARKERS)


def has_header_marker(f: BlockFeatures) -> bool:
    return any(p.search(f.preceding) for p in HEADER_MARKERS)


def has_meta_marker(f: BlockFeatures) -> bool:
    return any(p.search(f.preceding) for p in META_MARKERS)


def mostly_header_keys(f: BlockFeatures) -> bool:
    return f.header_count / len(f.keys) > 0.5


def no_header_or_meta_keys(f: BlockFeatures) -> bool:
    return f.header_count == 0 and f.meta_count == 0


def significant_meta_keys(f: BlockFeatures) -> bool:
    return f.meta_count / len(f.keys) > 0.3


def many_keys(f: BlockFeatures) -> bool:
    return len(f.keys) >= 3


@dataclass(frozen=True)
class ScoringRule:
    name: str
    weight: int
    applies: Callable[[BlockFeatures], bool]


SCORING_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule("body marker", 50, has_body_marker),
    ScoringRule("header marker", -50, has_header_marker),
    ScoringRule("metadata marker", -30, has_meta_marker),
    ScoringRule("majority header keys", -40, mostly_header_keys),
    ScoringRule("no header/meta keys", 10, no_header_or_meta_keys),
    ScoringRule("significant meta keys", -30, significant_meta_keys),
    ScoringRule("multi-key", 5, many_keys),
)


@dataclass(frozen=True)
class ScoredBlock:
    block: TextBlock
    score: int
    reason: str
    header_count: int = 0


def score_block(block: TextBlock, rules: Sequence[ScoringRule] = SCORING_RULES) -> ScoredBlock:
    features = BlockFeatures.of(block)
    if not features.keys:
        return ScoredBlock(block=block, score=EMPTY_BLOCK_SCORE, reason="empty block")
    score = 0
    reasons: List[str] = []
    for rule in rules:
        if rule.applies(features):
            score += rule.weight
            reasons.append(rule.name)
    return ScoredBlock(
        block=block,
        score=score,
        reason=", ".join(reasons) or "default",
        header_count=features.header_count,
    )


def rank_blocks(blocks: Sequence[TextBlock]) -> List[ScoredBlock]:
    """Score and sort descending; the sort is stable so equal scores keep scan order."""
    scored = [score_block(b) for b in blocks]
    for s in scored:
        logger.debug("block @%d..%d score=%d (%s)", s.block.start_index, s.block.end_index, s.score, s.reason)
    return sorted(scored, key=lambda s: s.score, reverse=True)


# ---- logfmt fast path

_LOGFMT_KEYS = (r"request[-_]?body", r"body", r"payload", r"data", r"post[-_]?data")

LOGFMT_BODY_PATTERNS: List[re.Pattern] = [
    re.compile(rf"\b{key}\s*=\s*{value}", re.IGNORECASE)
    for key in _LOGFMT_KEYS
    for value in (r'"(\{[^"]*\})"', r"'(\{[^']*\})'", r"(\{[^\n]*\})")
]


def extract_logfmt_body(text: str) -> Optional[str]:
    """``request_body="{...}"`` style fields (nginx / reverse-proxy logs).

    The value comes back verbatim; it usually still needs normalizing.
    """
    for pattern in LOGFMT_BODY_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def select_body(text: str, lookback: int = DEFAULT_LOOKBACK) -> Optional[str]:
    """Return the raw text of the most likely request body, or ``None``."""
    kv = extract_logfmt_body(text)
    if kv:
        logger.debug("body: logfmt field")
        return kv

    blocks = scan_blocks(text, lookback=lookback)
    if not blocks:
        return None
    if len(blocks) == 1:
        return blocks[0].content

    ranked = rank_blocks(blocks)
    if ranked[0].score > ranked[1].score:
        return ranked[0].block.content

    top = ranked[0].score
    tied = [s for s in ranked if s.score == top]
    # min() keeps the first of equal header counts, i.e. scan order
    best = min(tied, key=lambda s: s.header_count)
    return best.block.content
