from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from .components import CustomHeader
from .prefixes import strip_line_prefix

logger = get_logger(__name__)

HTTP_VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
_VERB = "|".join(HTTP_VERBS)

# ---------------------------------------------------------------- URL

_TRAILING_PUNCT_RE = re.compile(r"[,;'\")\]}>]+$")
_TRAILING_PUNCT_SLASH_RE = re.compile(r"[,;'\")\]}>/]+$")

LABELED_URL_RE = re.compile(r"\b(?:FULL\s+URL|REQUEST\s+URL|ENDPOINT)\s*:\s*(https?://\S+)", re.IGNORECASE)
BASE_URL_RE = re.compile(r"\bBASE\s+URL\s*:\s*(https?://\S+)", re.IGNORECASE)
PATH_LABEL_RE = re.compile(r"\bPATH\s*:\s*(/\S*)", re.IGNORECASE)
RAW_URL_RE = re.compile(r"https?://[a-zA-Z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
REQUEST_LINE_PATH_RE = re.compile(rf"\b(?:{_VERB})\s+(/\S+)\s+HTTP", re.IGNORECASE)
HOST_FIELD_RE = re.compile(r"\b(?:host|server_name|server)\s*[:=]\s*\"?([a-zA-Z0-9\-._]+(?::\d+)?)\"?", re.IGNORECASE)


def _trim(url: str, *, slash: bool = False) -> str:
    return (_TRAILING_PUNCT_SLASH_RE if slash else _TRAILING_PUNCT_RE).sub("", url)


def extract_url(text: str) -> Optional[str]:
    """Recover the request URL, trying labelled forms before guessing.

    Priority:
      1. ``FULL URL:`` / ``REQUEST URL:`` / ``ENDPOINT:`` label.
      2. ``BASE URL:`` label, plus ``PATH:`` when present.
      3. First raw http(s) URL anywhere.
      4. Rebuilt from a ``METHOD /path HTTP`` request line and a host field.
    """
    m = LABELED_URL_RE.search(text)
    if m:
        logger.debug("url: labelled")
        return _trim(m.group(1))

    m = BASE_URL_RE.search(text)
    if m:
        base = _trim(m.group(1), slash=True)
        pm = PATH_LABEL_RE.search(text)
        path = _trim(pm.group(1)) if pm else ""
        logger.debug("url: base url%s", " + path" if path else "")
        return f"{base}{path}"

    m = RAW_URL_RE.search(text)
    if m:
        logger.debug("url: first raw url")
        return _trim(m.group(0))

    pm = REQUEST_LINE_PATH_RE.search(text)
    hm = HOST_FIELD_RE.search(text)
    if hm is None:
        return None
    host = hm.group(1)
    if pm is None:
        logger.debug("url: host field only")
        return f"https://{host}"
    scheme = "http" if host.endswith(":80") else "https"
    logger.debug("url: rebuilt from request line and host")
    return f"{scheme}://{host}{pm.group(1)}"


# ---------------------------------------------------------------- Method

EXPLICIT_METHOD_PATTERNS: List[re.Pattern] = [
    re.compile(rf"\bmethod\s*[:=]\s*[\"']?({_VERB})[\"']?\b", re.IGNORECASE),
    re.compile(rf"\b({_VERB})\s+/\S+\s+HTTP", re.IGNORECASE),
    re.compile(rf"^\s*({_VERB})\s+https?://", re.IGNORECASE | re.MULTILINE),
    # "POST REQUEST DETAILS", "DELETE REQUEST SENT"
    re.compile(rf"\b({_VERB})\s+REQUEST\b", re.IGNORECASE),
]


def _hints(templates: Sequence[str], verbs: Sequence[str]) -> List[Tuple[re.Pattern, str]]:
    return [
        (re.compile(tpl.format(verb=verb.lower()), re.IGNORECASE), verb)
        for tpl in templates
        for verb in verbs
    ]


_ALL_VERBS = ("POST", "PUT", "PATCH", "DELETE", "GET")
_WRITE_VERBS = ("POST", "PUT", "PATCH", "DELETE")

FRAMEWORK_HINTS: List[Tuple[re.Pattern, str]] = (
    # Dart/Flutter style postRequest, put_request, delete-request
    _hints([r"\b{verb}[-_]?request\b"], _ALL_VERBS)
    # Dart http package, axios, Laravel Http facade
    + _hints([r"\bhttp\.{verb}\b", r"\baxios\.{verb}\b"], _ALL_VERBS)
    # fetch(url, { method: 'POST' })
    + _hints([r"\bmethod\s*:\s*['\"]{verb}['\"]"], _WRITE_VERBS)
    + _hints([r"\bHttp::{verb}\b"], _ALL_VERBS)
    # Dio interceptors: "DATA in postRequest"
    + _hints([r"\bDATA\s+in\s+{verb}"], _WRITE_VERBS)
)


def extract_method(text: str) -> Optional[str]:
    """Infer the HTTP verb; ``None`` means the caller has to ask."""
    for pattern in EXPLICIT_METHOD_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1).upper()
    for pattern, verb in FRAMEWORK_HINTS:
        if pattern.search(text):
            return verb
    return None


# ---------------------------------------------------------------- Token

_TOKEN_CHARS = r"[a-zA-Z0-9|._\-/+=]"

TOKEN_PATTERNS: List[re.Pattern] = [
    # Authorization: Bearer xxx  |  authorization="Bearer xxx"
    re.compile(r"authorization\s*[:=]\s*['\"]?bearer\s+([^\s,;'\"}\]]+)", re.IGNORECASE),
    re.compile(r"\buser\s+token\s+([^\s,;'\"}\]]+)", re.IGNORECASE),
    # 10 char floor keeps incidental words like "token: none" out
    re.compile(rf"\btoken\s*[:=]\s*['\"]?({_TOKEN_CHARS}{{10,}})['\"]?", re.IGNORECASE),
    re.compile(rf"\baccess[-_]?token\s*[:=]\s*['\"]?({_TOKEN_CHARS}{{10,}})['\"]?", re.IGNORECASE),
    re.compile(rf"\bBearer\s+({_TOKEN_CHARS}{{10,}})"),
]


def extract_token(text: str) -> Optional[str]:
    for pattern in TOKEN_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


# ---------------------------------------------------------------- Headers

HEADERS_SECTION_RE = re.compile(r"HEADERS?\s*:\s*$", re.IGNORECASE)
# box drawing (U+2500-U+257F), dashes, equals, asterisks, underscores, tildes
SEPARATOR_LINE_RE = re.compile(r"^[\u2500-\u257F\-=*_~+\s]+$")
HEADER_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def is_separator_line(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return True
    return SEPARATOR_LINE_RE.match(stripped) is not None


def extract_custom_headers(text: str) -> List[CustomHeader]:
    """Read ``Key: Value`` lines from a labelled ``HEADERS:`` section.

    Only the first section counts. Reading stops at a separator or blank line,
    a line without a usable colon, or a section label such as
    ``REQUEST BODY:`` (a key with whitespace in it).
    """
    lines = [strip_line_prefix(line).strip() for line in text.split("\n")]
    start = next((i + 1 for i, line in enumerate(lines) if HEADERS_SECTION_RE.search(line)), None)
    if start is None:
        return []

    headers: List[CustomHeader] = []
    for line in lines[start:]:
        if is_separator_line(line):
            break
        idx = line.find(":")
        if idx <= 0:
            break
        key, value = line[:idx].strip(), line[idx + 1:].strip()
        if HEADER_KEY_RE.match(key) is None:
            break
        headers.append(CustomHeader(key=key, value=value))
    return headers
