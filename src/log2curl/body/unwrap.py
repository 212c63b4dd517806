from __future__ import annotations

from typing import Any

from ..utils.logging import get_logger

logger = get_logger(__name__)

# Keys that mark an object as a request descriptor rather than a payload.
CONFIG_INDICATORS = ("method", "url", "baseurl", "headers", "timeout", "responsetype")
BODY_KEYS = ("body", "data", "payload", "requestbody", "request_body")


def looks_like_request_config(obj: dict) -> bool:
    lower = {str(k).lower() for k in obj}
    return sum(1 for key in CONFIG_INDICATORS if key in lower) >= 2


def unwrap_body(value: Any) -> Any:
    """Return the nested payload when ``value`` is a request-config wrapper.

    ``{"method": "POST", "url": ..., "data": {...}}`` yields the ``data``
    object. Anything else, including wrappers whose body is not an object,
    comes back unchanged.
    """
    if not isinstance(value, dict) or not looks_like_request_config(value):
        return value
    for body_key in BODY_KEYS:
        for key, nested in value.items():
            if str(key).lower() == body_key and isinstance(nested, dict):
                logger.debug("body unwrapped from request config key %r", key)
                return nested
    return value
