from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class CustomHeader:
    key: str
    value: str


@dataclass(frozen=True)
class CurlComponents:
    """Everything the command assembler needs, already normalized.

    ``body`` is pretty-printed JSON text or ``None`` when the request carries
    no body. ``custom_headers`` keeps the order of the log's HEADERS section.
    """

    url: str
    method: str
    token: Optional[str] = None
    body: Optional[str] = None
    custom_headers: Tuple[CustomHeader, ...] = field(default_factory=tuple)

    def header_names(self) -> set[str]:
        return {h.key.lower() for h in self.custom_headers}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "method": self.method,
            "token": self.token,
            "body": self.body,
            "customHeaders": [{"key": h.key, "value": h.value} for h in self.custom_headers],
        }
