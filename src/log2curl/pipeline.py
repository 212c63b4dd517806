"""End-to-end conversion: raw log text -> :class:`CurlComponents` -> command."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Sequence

from .body.blocks import scan_blocks
from .body.normalizer import BodyParseError, normalize_value
from .body.scoring import extract_logfmt_body, rank_blocks, select_body
from .body.unwrap import unwrap_body
from .config import ConverterConfig
from .errors import BodyNormalizationFailed, ConversionAborted, NoMethodFound, NoUrlFound
from .interface.components import CurlComponents
from .interface.curl_builder import build_curl
from .interface.fields import extract_custom_headers, extract_method, extract_token, extract_url
from .interface.prefixes import strip_log_prefixes
from .utils.logging import get_logger

logger = get_logger(__name__)

MethodChooser = Callable[[Sequence[str]], Optional[str]]
Confirm = Callable[[str], bool]


def _prepare(text: str, cfg: ConverterConfig) -> str:
    if cfg.max_input_chars is not None and len(text) > cfg.max_input_chars:
        logger.warning("input truncated from %d to %d chars", len(text), cfg.max_input_chars)
        text = text[: cfg.max_input_chars]
    return strip_log_prefixes(text)


def _resolve_method(
    stripped: str,
    cfg: ConverterConfig,
    method: Optional[str],
    choose_method: Optional[MethodChooser],
) -> str:
    if method:
        return method.upper()
    inferred = extract_method(stripped)
    if inferred:
        return inferred
    choices = tuple(cfg.method_choices)
    picked = choose_method(choices) if choose_method is not None else None
    if not picked:
        raise NoMethodFound(choices)
    return picked.upper()


def render_body(raw: str, cfg: ConverterConfig) -> str:
    """Normalize and unwrap a selected body candidate into indented JSON text.

    Raises :class:`BodyParseError` when the candidate is not JSON-like.
    """
    # body blocks can carry their own per-line log prefixes
    value = unwrap_body(normalize_value(strip_log_prefixes(raw)))
    try:
        return json.dumps(value, indent=cfg.json_indent, ensure_ascii=False)
    except RecursionError:
        raise BodyParseError("Body nesting too deep to serialize") from None


def convert(
    text: str,
    *,
    config: Optional[ConverterConfig] = None,
    method: Optional[str] = None,
    choose_method: Optional[MethodChooser] = None,
    allow_body_failure: bool = False,
    confirm_without_body: Optional[Confirm] = None,
) -> CurlComponents:
    """Extract URL, method, token, headers and body from a pasted log.

    ``method`` skips inference. ``choose_method`` is asked for a verb when none
    can be inferred. A body that cannot be normalized raises
    :class:`BodyNormalizationFailed` unless ``allow_body_failure`` is set or
    ``confirm_without_body`` agrees to go on without it; the same hook is
    asked when a body-carrying method has no body at all.
    """
    cfg = config or ConverterConfig()
    stripped = _prepare(text, cfg)

    url = extract_url(stripped)
    if url is None:
        raise NoUrlFound()
    verb = _resolve_method(stripped, cfg, method, choose_method)
    token = extract_token(stripped)
    headers = tuple(extract_custom_headers(stripped))

    body: Optional[str] = None
    raw = select_body(stripped, lookback=cfg.lookback_chars)
    try:
        body = render_body(raw, cfg) if raw is not None else None
    except BodyParseError as e:
        logger.debug("body normalization failed: %s", e)
        if not allow_body_failure and not (
            confirm_without_body is not None
            and confirm_without_body("Could not parse the request body. Generate cURL without body?")
        ):
            raise BodyNormalizationFailed(e, raw_body=raw) from e
        logger.warning("request body dropped: %s", e)
    else:
        if raw is None and verb in cfg.body_expected_methods:
            logger.warning("no request body found for %s", verb)
            prompt = f"No request body found for {verb}. Generate cURL without body?"
            if confirm_without_body is not None and not confirm_without_body(prompt):
                raise ConversionAborted(prompt)

    return CurlComponents(url=url, method=verb, token=token, body=body, custom_headers=headers)


def to_curl(text: str, *, config: Optional[ConverterConfig] = None, **kwargs: Any) -> str:
    cfg = config or ConverterConfig()
    components = convert(text, config=cfg, **kwargs)
    return build_curl(
        components,
        default_accept=cfg.default_accept,
        default_content_type=cfg.default_content_type,
    )


def explain(text: str, config: Optional[ConverterConfig] = None) -> Dict[str, Any]:
    """Debug view of every extractor and every scored body candidate."""
    cfg = config or ConverterConfig()
    stripped = _prepare(text, cfg)
    blocks = scan_blocks(stripped, lookback=cfg.lookback_chars)
    return {
        "url": extract_url(stripped),
        "method": extract_method(stripped),
        "token": extract_token(stripped),
        "customHeaders": [{"key": h.key, "value": h.value} for h in extract_custom_headers(stripped)],
        "logfmtBody": extract_logfmt_body(stripped),
        "blocks": [
            {
                "start": s.block.start_index,
                "end": s.block.end_index,
                "score": s.score,
                "reason": s.reason,
                "preview": s.block.content[:80],
            }
            for s in rank_blocks(blocks)
        ],
        "selectedBody": select_body(stripped, lookback=cfg.lookback_chars),
    }
