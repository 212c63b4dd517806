from __future__ import annotations

from typing import List

from .components import CurlComponents, CustomHeader

DEFAULT_ACCEPT = "application/json"
DEFAULT_CONTENT_TYPE = "application/json"


def collect_headers(
    c: CurlComponents,
    *,
    default_accept: str = DEFAULT_ACCEPT,
    default_content_type: str = DEFAULT_CONTENT_TYPE,
) -> List[CustomHeader]:
    """Headers in emission order: defaults, log headers, then the bearer token.

    A default or the token is skipped when the log already supplies that header.
    """
    present = c.header_names()
    headers: List[CustomHeader] = []
    if "accept" not in present:
        headers.append(CustomHeader("Accept", default_accept))
    if "content-type" not in present:
        headers.append(CustomHeader("Content-Type", default_content_type))
    headers.extend(c.custom_headers)
    if c.token and "authorization" not in present:
        headers.append(CustomHeader("Authorization", f"Bearer {c.token}"))
    return headers


def build_curl(
    c: CurlComponents,
    *,
    default_accept: str = DEFAULT_ACCEPT,
    default_content_type: str = DEFAULT_CONTENT_TYPE,
) -> str:
    """Render a multi-line ``curl`` command; every line but the last ends in ``\\``."""
    lines = [f'curl --location "{c.url}"', f"  --request {c.method}"]
    for h in collect_headers(c, default_accept=default_accept, default_content_type=default_content_type):
        lines.append(f'  --header "{h.key}: {h.value}"')
    if c.body:
        lines.append(f"  --data '{c.body}'")
    return " \\\n".join(lines)
